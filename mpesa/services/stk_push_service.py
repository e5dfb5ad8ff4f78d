"""
STK Push Service
Lipa na M-Pesa Online payment initiation.

POST /mpesa/stkpush/v1/processrequest (Bearer auth)

Each call to initiate_stk_push() runs on its own thread and returns a
Future resolving to Result[PaymentAck]. The caller decides how long to
wait; a dispatch cannot be cancelled once issued.
"""

import json
import logging
import threading
from concurrent.futures import Future
from typing import Optional

from marshmallow import ValidationError

from mpesa.errors.codes import ErrorCode
from mpesa.errors.exceptions import TransportError
from mpesa.models.payment import PaymentAck, PaymentRequest
from mpesa.models.result import Result
from mpesa.providers.transport import RequestsTransport, Transport
from mpesa.schemas.payment_schema import ApiErrorSchema, PaymentAckSchema, PaymentRequestSchema
from mpesa.services.auth_service import TokenManager
from mpesa.services.error_classifier import map_api_error, map_transport_error
from mpesa.utils import encryption
from mpesa.utils.timestamp import generate_timestamp
from mpesa.utils.validators import validate_stk_push_request

logger = logging.getLogger(__name__)


class AtomicCounter:
    def __init__(self, initial: int = 0):
        self._value = initial
        self._lock = threading.Lock()

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        return self._value


class STKPushClient:
    """
    STK Push client.

    The timestamp, and so the password, is generated once when the client
    is created and reused for every request it sends. Create a new client
    for requests sent long after the first.
    """

    STK_PUSH_ENDPOINT = '/mpesa/stkpush/v1/processrequest'

    def __init__(
            self,
            auth: TokenManager,
            transport: Optional[Transport] = None,
            timestamp: Optional[str] = None
    ):
        self._auth = auth
        self._owns_transport = transport is None
        self._transport = transport or RequestsTransport()
        self._timestamp = timestamp or generate_timestamp()

        self._success_count = AtomicCounter()
        self._failure_count = AtomicCounter()

    @property
    def timestamp(self) -> str:
        return self._timestamp

    @property
    def success_count(self) -> int:
        return self._success_count.value

    @property
    def failure_count(self) -> int:
        return self._failure_count.value

    @staticmethod
    def generate_password(business_short_code: str, passkey: str, timestamp: str) -> str:
        return encryption.generate_password(business_short_code, passkey, timestamp)

    def initiate_stk_push(self, request: PaymentRequest) -> 'Future[Result[PaymentAck]]':
        """
        Dispatch an STK Push request

        The request's password and timestamp are set in place on the
        dispatch thread, before validation.

        Args:
            request: Request parameters; consumed by this call

        Returns:
            Future resolving to Result[PaymentAck]
        """
        future: Future = Future()
        # Marked running up front so cancel() always returns False
        future.set_running_or_notify_cancel()

        worker = threading.Thread(
            target=self._run,
            args=(request, future),
            name=f'stk-push-{request.account_reference}',
            daemon=True,
        )
        worker.start()
        return future

    def _run(self, request: PaymentRequest, future: Future) -> None:
        try:
            result = self._dispatch(request)
        except Exception as exc:
            logger.exception("STK Push dispatch failed unexpectedly")
            self._failure_count.increment()
            result = Result.failure(f"Request error: {exc}", ErrorCode.INTERNAL_ERROR)
        future.set_result(result)

    def _dispatch(self, request: PaymentRequest) -> Result[PaymentAck]:
        request.timestamp = self._timestamp
        request.password = self.generate_password(
            request.business_short_code,
            self._auth.config.passkey,
            self._timestamp,
        )

        is_valid, error = validate_stk_push_request(request)
        if not is_valid:
            return self._fail(error, ErrorCode.VALIDATION_ERROR)

        token = self._auth.get_token()
        if not token.success:
            return self._fail(f"Failed to get access token: {token.error}", token.code)

        url = f"{self._auth.base_url}{self.STK_PUSH_ENDPOINT}"
        headers = {
            'Authorization': f'Bearer {token.value}',
            'Content-Type': 'application/json',
        }
        payload = json.dumps(PaymentRequestSchema().dump(request))

        try:
            resp = self._transport.request('POST', url, headers=headers, body=payload)
        except TransportError as exc:
            return self._fail(f"Transport error: {exc.message}", map_transport_error(exc.kind))

        if resp.status_code >= 400:
            return self._fail(*self._classify_error_body(resp.body, resp.status_code))

        try:
            data = json.loads(resp.body)
        except ValueError as exc:
            return self._fail(f"JSON parse error: {exc}", ErrorCode.PARSE_ERROR)

        # Daraja sometimes returns 200 with an error in the body
        if isinstance(data, dict) and data.get('errorCode'):
            return self._fail(*self._classify_error_body(resp.body, resp.status_code))

        try:
            ack = PaymentAckSchema().load(data)
        except ValidationError as exc:
            return self._fail(f"JSON parse error: {exc.messages}", ErrorCode.PARSE_ERROR)

        self._success_count.increment()
        logger.info(
            "STK Push accepted: CheckoutRequestID=%s ResponseCode=%s",
            ack.checkout_request_id, ack.response_code,
        )
        return Result.ok(ack)

    @staticmethod
    def _classify_error_body(body: str, status_code: int):
        try:
            api_error = ApiErrorSchema().loads(body)
        except (ValueError, ValidationError):
            return f"HTTP error: {status_code}", ErrorCode.HTTP_ERROR
        return (
            f"API Error: {api_error['error_message']} (Code: {api_error['error_code']})",
            map_api_error(api_error['error_code']),
        )

    def _fail(self, message: str, code: ErrorCode) -> Result[PaymentAck]:
        self._failure_count.increment()
        logger.warning("STK Push failed: %s [%s]", message, code.name)
        return Result.failure(message, code)

    def close(self) -> None:
        if self._owns_transport:
            self._transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
