from mpesa.errors.codes import ErrorCode, STKResultCode
from mpesa.errors.exceptions import (
    MPesaError,
    ConfigError,
    ResultAccessError,
    TransportError,
    TransportFailure,
)

__all__ = [
    'ErrorCode',
    'STKResultCode',
    'MPesaError',
    'ConfigError',
    'ResultAccessError',
    'TransportError',
    'TransportFailure',
]
