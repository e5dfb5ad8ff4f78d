"""
Pytest Configuration and Fixtures
"""
import json
from unittest.mock import Mock

import pytest

from mpesa.config import AuthConfig, Environment
from mpesa.models.payment import PaymentRequest, TransactionType
from mpesa.providers.transport import Transport, TransportResponse
from mpesa.services.auth_service import TokenManager

TIMESTAMP = '20240115103000'


def transport_response(json_data, status_code: int = 200) -> TransportResponse:
    """Return a TransportResponse whose body is json_data serialised"""
    body = json_data if isinstance(json_data, str) else json.dumps(json_data)
    return TransportResponse(status_code=status_code, body=body)


def token_response(token: str = 'daraja_tok_abc', expires_in: str = '3599') -> TransportResponse:
    """Valid Daraja OAuth token response"""
    return transport_response({'access_token': token, 'expires_in': expires_in})


def ack_response(**overrides) -> TransportResponse:
    body = {
        'MerchantRequestID': '29115-34620561-1',
        'CheckoutRequestID': 'ws_CO_191220191020363925',
        'ResponseCode': '0',
        'ResponseDescription': 'Success. Request accepted for processing',
        'CustomerMessage': 'Success. Request accepted for processing',
    }
    body.update(overrides)
    return transport_response(body)


class FakeClock:
    """Manually advanced replacement for time.time"""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def auth_config():
    return AuthConfig(
        consumer_key='test_consumer_key',
        consumer_secret='test_consumer_secret',
        passkey='bfb279f9aa9bdbcf158e97dd71a467cd2e0c893059b10f78e6b72ada1ed2c919',
        environment=Environment.SANDBOX,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def auth_transport():
    """Transport used by the token manager; returns a valid token by default"""
    transport = Mock(spec=Transport)
    transport.request.return_value = token_response()
    return transport


@pytest.fixture
def token_manager(auth_config, auth_transport, clock):
    return TokenManager(auth_config, transport=auth_transport, clock=clock)


@pytest.fixture
def stk_transport():
    """Transport used by the STK Push client; returns a success ack by default"""
    transport = Mock(spec=Transport)
    transport.request.return_value = ack_response()
    return transport


@pytest.fixture
def payment_request():
    return PaymentRequest(
        business_short_code='174379',
        amount='1',
        party_a='254708374149',
        party_b='174379',
        phone_number='254708374149',
        callback_url='https://mydomain.com/path',
        account_reference='CompanyXLTD',
        transaction_desc='Payment of X',
        transaction_type=TransactionType.CUSTOMER_PAYBILL_ONLINE,
    )


@pytest.fixture
def success_callback_body():
    return {
        'Body': {
            'stkCallback': {
                'MerchantRequestID': '29115-34620561-1',
                'CheckoutRequestID': 'ws_CO_191220191020363925',
                'ResultCode': 0,
                'ResultDesc': 'The service request is processed successfully.',
                'CallbackMetadata': {
                    'Item': [
                        {'Name': 'Amount', 'Value': 10.0},
                        {'Name': 'MpesaReceiptNumber', 'Value': 'NLJ7RT61SV'},
                        {'Name': 'TransactionDate', 'Value': 20191219102115},
                        {'Name': 'PhoneNumber', 'Value': 254708374149},
                    ]
                }
            }
        }
    }


@pytest.fixture
def cancelled_callback_body():
    return {
        'Body': {
            'stkCallback': {
                'MerchantRequestID': '29115-34620561-1',
                'CheckoutRequestID': 'ws_CO_191220191020363925',
                'ResultCode': 1032,
                'ResultDesc': 'Request cancelled by user.',
            }
        }
    }
