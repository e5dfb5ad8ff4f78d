from typing import Any, Dict

from mpesa.errors.codes import ErrorCode
from mpesa.errors.exceptions import TransportFailure

_TRANSPORT_ERROR_MAP: Dict[TransportFailure, ErrorCode] = {
    TransportFailure.DNS: ErrorCode.DNS_ERROR,
    TransportFailure.CONNECT: ErrorCode.CONNECTION_ERROR,
    TransportFailure.TIMEOUT: ErrorCode.TIMEOUT_ERROR,
    TransportFailure.TLS: ErrorCode.SSL_ERROR,
    TransportFailure.INIT: ErrorCode.INITIALIZATION_ERROR,
}

# Daraja errorCode -> taxonomy
_API_ERROR_MAP: Dict[str, ErrorCode] = {
    '400.008.02': ErrorCode.INVALID_GRANT_TYPE,    # Invalid grant type passed
    '400.008.01': ErrorCode.INVALID_AUTH_TYPE,     # Authentication type is not Basic
    '401.002.01': ErrorCode.INVALID_CREDENTIALS,   # Invalid consumer key / secret
    '404.001.03': ErrorCode.TOKEN_EXPIRED,         # Invalid access token
    '500.001.1001': ErrorCode.SERVER_ERROR,        # Server error
}


def map_transport_error(kind: Any) -> ErrorCode:
    return _TRANSPORT_ERROR_MAP.get(kind, ErrorCode.NETWORK_ERROR)


def map_api_error(error_code: Any) -> ErrorCode:
    """Unknown codes map to API_ERROR, never to SUCCESS"""
    if error_code is None:
        return ErrorCode.API_ERROR
    return _API_ERROR_MAP.get(str(error_code).strip(), ErrorCode.API_ERROR)
