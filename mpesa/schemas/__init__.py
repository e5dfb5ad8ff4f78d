"""
Schemas Package
Marshmallow schemas for Daraja request/response bodies
"""

from mpesa.schemas.payment_schema import (
    TokenResponseSchema,
    ApiErrorSchema,
    PaymentRequestSchema,
    PaymentAckSchema
)
from mpesa.schemas.callback_schema import (
    MPesaCallbackSchema
)

__all__ = [
    'TokenResponseSchema',
    'ApiErrorSchema',
    'PaymentRequestSchema',
    'PaymentAckSchema',
    'MPesaCallbackSchema'
]
