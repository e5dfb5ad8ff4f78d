from enum import Enum

from mpesa.errors.codes import ErrorCode


class MPesaError(Exception):
    code = ErrorCode.INTERNAL_ERROR
    error = "M-Pesa client error"

    def __init__(self, message, code=None):
        super().__init__(message)
        if code is not None:
            self.code = code
        self.message = message


class ConfigError(MPesaError):
    code = ErrorCode.CONFIG_ERROR
    error = "Configuration error"


class ResultAccessError(MPesaError):
    """Raised when reading the value of a failed result, or the error of a successful one"""
    code = ErrorCode.INTERNAL_ERROR
    error = "Invalid result access"


class TransportFailure(str, Enum):
    DNS = 'dns'
    CONNECT = 'connect'
    TIMEOUT = 'timeout'
    TLS = 'tls'
    INIT = 'init'
    OTHER = 'other'


class TransportError(MPesaError):
    """Raised by a Transport when no HTTP response could be obtained"""
    code = ErrorCode.NETWORK_ERROR
    error = "Transport error"

    def __init__(self, message, kind=TransportFailure.OTHER):
        super().__init__(message)
        self.kind = kind
