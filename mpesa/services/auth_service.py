"""
Auth Service
OAuth access-token lifecycle for the Daraja API.

GET /oauth/v1/generate?grant_type=client_credentials (Basic auth)
Tokens are cached in memory and refreshed on expiry.
"""

import json
import logging
import threading
import time
from enum import Enum
from typing import Callable, Optional

from marshmallow import ValidationError

from mpesa.config import AuthConfig
from mpesa.errors.codes import ErrorCode
from mpesa.errors.exceptions import TransportError
from mpesa.models.result import Result
from mpesa.providers.transport import RequestsTransport, Transport
from mpesa.schemas.payment_schema import TokenResponseSchema
from mpesa.services.error_classifier import map_api_error, map_transport_error
from mpesa.utils.encryption import basic_auth_header
from mpesa.utils.logger import mask_secret

logger = logging.getLogger(__name__)


class TokenState(str, Enum):
    UNSET = 'unset'
    VALID = 'valid'
    EXPIRED = 'expired'


class TokenManager:
    """
    Thread-safe cache for the Daraja access token.

    A single lock covers the whole of get_token(), so concurrent callers
    that find the token missing or expired refresh one after another; a
    caller that waited behind a refresh reuses its token while it is still
    valid. A slow refresh therefore blocks every other token request.
    """

    AUTH_ENDPOINT = '/oauth/v1/generate'

    def __init__(
            self,
            config: AuthConfig,
            transport: Optional[Transport] = None,
            clock: Callable[[], float] = time.time
    ):
        self.config = config
        self._transport = transport or RequestsTransport()
        self._clock = clock

        self._token: Optional[str] = None
        self._expiry: float = 0.0
        self._last_error = ErrorCode.SUCCESS
        self._lock = threading.Lock()

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def last_error(self) -> ErrorCode:
        return self._last_error

    @property
    def state(self) -> TokenState:
        if self._token is None:
            return TokenState.UNSET
        return TokenState.VALID if self.is_token_valid() else TokenState.EXPIRED

    def is_token_valid(self) -> bool:
        """Advisory check; get_token() re-checks under the lock"""
        return self._clock() < self._expiry

    def get_token(self) -> Result[str]:
        """Return the cached token, refreshing it first if missing or expired"""
        with self._lock:
            if self._token is not None and self.is_token_valid():
                return Result.ok(self._token)
            return self._refresh()

    def refresh_token(self) -> Result[str]:
        """Fetch a new token regardless of the cached one"""
        with self._lock:
            return self._refresh()

    def _refresh(self) -> Result[str]:
        url = f"{self.base_url}{self.AUTH_ENDPOINT}?grant_type=client_credentials"
        headers = {
            'Authorization': basic_auth_header(self.config.consumer_key, self.config.consumer_secret),
        }

        try:
            resp = self._transport.request('GET', url, headers=headers)
        except TransportError as exc:
            return self._fail(f"Failed to obtain access token: {exc.message}", map_transport_error(exc.kind))

        if resp.status_code >= 400:
            return self._fail(
                f"Failed to obtain access token: HTTP {resp.status_code}",
                ErrorCode.HTTP_ERROR,
            )

        try:
            data = json.loads(resp.body)
        except ValueError as exc:
            return self._fail(f"Failed to parse token response: {exc}", ErrorCode.PARSE_ERROR)

        if not isinstance(data, dict):
            return self._fail("Failed to parse token response: expected a JSON object", ErrorCode.PARSE_ERROR)

        if data.get('errorCode'):
            return self._fail(
                f"Daraja error {data['errorCode']}: {data.get('errorMessage', '')}",
                map_api_error(data['errorCode']),
            )

        try:
            token = TokenResponseSchema().load(data)
        except ValidationError as exc:
            return self._fail(f"Failed to parse token response: {exc.messages}", ErrorCode.PARSE_ERROR)

        self._token = token['access_token']
        self._expiry = self._clock() + token['expires_in']
        self._last_error = ErrorCode.SUCCESS

        logger.debug(
            "Access token %s refreshed (expires in %ds)",
            mask_secret(self._token), token['expires_in'],
        )
        return Result.ok(self._token)

    def _fail(self, message: str, code: ErrorCode) -> Result[str]:
        self._last_error = code
        logger.warning("%s [%s]", message, code.name)
        return Result.failure(message, code)
