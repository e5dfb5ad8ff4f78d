"""
Unit Tests for the requests-based Transport
"""

import socket
from unittest.mock import Mock, patch

import pytest
import requests

from mpesa.errors.exceptions import TransportError, TransportFailure
from mpesa.providers.transport import RequestsTransport, TransportResponse

URL = 'https://sandbox.safaricom.co.ke/oauth/v1/generate?grant_type=client_credentials'


@pytest.fixture
def transport():
    return RequestsTransport(connect_timeout=2, read_timeout=5)


def _mock_response(status_code=200, text='{}', headers=None):
    resp = Mock()
    resp.status_code = status_code
    resp.text = text
    resp.headers = headers or {'Content-Type': 'application/json'}
    return resp


class TestRequestsTransport:

    @patch.object(requests.Session, 'request')
    def test_successful_exchange(self, mock_request, transport):
        mock_request.return_value = _mock_response(200, '{"access_token": "t"}')

        response = transport.request('GET', URL, headers={'Authorization': 'Basic abc'})

        assert response == TransportResponse(
            status_code=200,
            body='{"access_token": "t"}',
            headers={'Content-Type': 'application/json'},
        )
        assert response.ok
        args, kwargs = mock_request.call_args
        assert args == ('GET', URL)
        assert kwargs['timeout'] == (2, 5)
        assert kwargs['data'] is None
        assert kwargs['verify'] is True

    @patch.object(requests.Session, 'request')
    def test_body_sent_as_utf8(self, mock_request, transport):
        mock_request.return_value = _mock_response()

        transport.request('POST', URL, body='{"Amount": "1"}')

        assert mock_request.call_args[1]['data'] == b'{"Amount": "1"}'

    @patch.object(requests.Session, 'request')
    def test_error_status_is_returned_not_raised(self, mock_request, transport):
        mock_request.return_value = _mock_response(500, 'boom')

        response = transport.request('GET', URL)

        assert response.status_code == 500
        assert not response.ok

    @pytest.mark.parametrize('exc, kind', [
        (requests.exceptions.SSLError('certificate verify failed'), TransportFailure.TLS),
        (requests.exceptions.ReadTimeout('read timed out'), TransportFailure.TIMEOUT),
        (requests.exceptions.ConnectTimeout('connect timed out'), TransportFailure.TIMEOUT),
        (requests.exceptions.ConnectionError(
            "Failed to resolve 'sandbox.safaricom.co.ke'"), TransportFailure.DNS),
        (requests.exceptions.ConnectionError(
            socket.gaierror(-2, 'Name or service not known')), TransportFailure.DNS),
        (requests.exceptions.ConnectionError('Connection refused'), TransportFailure.CONNECT),
        (requests.exceptions.TooManyRedirects('loop'), TransportFailure.OTHER),
    ])
    def test_failures_are_classified(self, transport, exc, kind):
        with patch.object(requests.Session, 'request', side_effect=exc):
            with pytest.raises(TransportError) as exc_info:
                transport.request('GET', URL)

        assert exc_info.value.kind is kind
        assert exc_info.value.__cause__ is exc

    @patch.object(requests.Session, 'close')
    @patch.object(requests.Session, 'request')
    def test_session_closed_after_each_call(self, mock_request, mock_close, transport):
        mock_request.return_value = _mock_response()

        transport.request('GET', URL)
        transport.request('GET', URL)

        assert mock_close.call_count == 2

    @patch.object(requests.Session, 'request')
    def test_closed_transport_refuses_requests(self, mock_request, transport):
        with transport:
            pass

        assert transport.closed
        with pytest.raises(TransportError) as exc_info:
            transport.request('GET', URL)

        assert exc_info.value.kind is TransportFailure.INIT
        mock_request.assert_not_called()
