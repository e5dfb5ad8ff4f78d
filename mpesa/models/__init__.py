from mpesa.models.payment import (
    TransactionType,
    PaymentRequest,
    PaymentAck,
    MetadataItem,
    PaymentCallback,
)
from mpesa.models.result import Result

__all__ = [
    'TransactionType',
    'PaymentRequest',
    'PaymentAck',
    'MetadataItem',
    'PaymentCallback',
    'Result',
]
