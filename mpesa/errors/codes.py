"""
Error Codes
Error taxonomy shared by the token manager and the STK Push client, and the
result codes M-Pesa reports in STK Push callbacks.
"""

from enum import IntEnum


class ErrorCode(IntEnum):
    """Closed error taxonomy, partitioned into numeric bands"""

    SUCCESS = 0

    # Network and connection errors (100-199)
    NETWORK_ERROR = 100
    DNS_ERROR = 101
    CONNECTION_ERROR = 102
    TIMEOUT_ERROR = 103
    SSL_ERROR = 104

    # Authentication / protocol errors (200-299)
    INVALID_CREDENTIALS = 200   # 401.002.01
    INVALID_GRANT_TYPE = 201    # 400.008.02
    INVALID_AUTH_TYPE = 202     # 400.008.01
    TOKEN_EXPIRED = 203

    # Server errors (300-399)
    SERVER_ERROR = 300          # 500.001.1001
    HTTP_ERROR = 301
    API_ERROR = 302             # unrecognised M-Pesa error code

    # Client errors (400-499)
    INITIALIZATION_ERROR = 400
    CONFIG_ERROR = 401
    PARSE_ERROR = 402
    VALIDATION_ERROR = 403

    # System errors (500-599)
    INTERNAL_ERROR = 500

    @property
    def band(self) -> str:
        if self is ErrorCode.SUCCESS:
            return 'success'
        return _BANDS.get(self.value // 100, 'internal')


_BANDS = {
    1: 'network',
    2: 'authentication',
    3: 'server',
    4: 'client',
    5: 'internal',
}


class STKResultCode(IntEnum):
    """ResultCode values delivered in an STK Push callback"""

    SUCCESS = 0
    INSUFFICIENT_BALANCE = 1
    SUBSCRIBER_LOCKED = 1001
    TRANSACTION_EXPIRED = 1019
    PUSH_REQUEST_ERROR = 1025
    USER_CANCELED = 1032
    DS_TIMEOUT = 1037
    INVALID_INITIATOR = 2001
    SYSTEM_ERROR = 9999
    UNKNOWN = -1

    @classmethod
    def from_code(cls, code: int) -> 'STKResultCode':
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN

    def describe(self) -> str:
        return _STK_DESCRIPTIONS.get(self, 'Unknown error occurred.')


_STK_DESCRIPTIONS = {
    STKResultCode.SUCCESS: 'The service request is processed successfully.',
    STKResultCode.INSUFFICIENT_BALANCE: 'The balance is insufficient for the transaction.',
    STKResultCode.SUBSCRIBER_LOCKED: 'Unable to lock subscriber, a transaction is already in process.',
    STKResultCode.TRANSACTION_EXPIRED: 'Transaction has expired.',
    STKResultCode.PUSH_REQUEST_ERROR: 'An error occurred while sending a push request.',
    STKResultCode.USER_CANCELED: 'The request was canceled by the user.',
    STKResultCode.DS_TIMEOUT: 'DS timeout, user cannot be reached.',
    STKResultCode.INVALID_INITIATOR: 'The initiator information is invalid.',
    STKResultCode.SYSTEM_ERROR: 'A system error occurred.',
}
