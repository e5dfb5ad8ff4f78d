"""
HTTP Transport
A single blocking request/response exchange. The token manager and the
STK Push client only depend on the Transport interface; RequestsTransport
is the default implementation.
"""

import logging
import socket
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional

import requests

from mpesa.config import Config
from mpesa.errors.exceptions import TransportError, TransportFailure

logger = logging.getLogger(__name__)

# Fragments of resolver errors as surfaced through urllib3 on common platforms
_DNS_MARKERS = (
    'Name or service not known',
    'nodename nor servname provided',
    'getaddrinfo failed',
    'Temporary failure in name resolution',
    'Failed to resolve',
    'NameResolutionError',
)


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: str
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status_code < 400


class Transport(ABC):
    """Abstract base class for HTTP transports"""

    @abstractmethod
    def request(
            self,
            method: str,
            url: str,
            headers: Optional[Dict[str, str]] = None,
            body: Optional[str] = None
    ) -> TransportResponse:
        """
        Perform one HTTP exchange

        Args:
            method: HTTP method ('GET', 'POST')
            url: Absolute URL
            headers: Request headers
            body: Request body, already serialised

        Returns:
            TransportResponse with the status code and body text

        Raises:
            TransportError: If no HTTP response could be obtained
        """
        pass

    def close(self) -> None:
        """Release resources owned by the transport"""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class RequestsTransport(Transport):
    """Transport built on requests; one Session per call"""

    def __init__(
            self,
            connect_timeout: float = Config.CONNECT_TIMEOUT,
            read_timeout: float = Config.REQUEST_TIMEOUT,
            verify: bool = True
    ):
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.verify = verify
        self._closed = False

    def request(self, method, url, headers=None, body=None):
        if self._closed:
            raise TransportError('Transport has been closed', TransportFailure.INIT)

        with requests.Session() as session:
            try:
                resp = session.request(
                    method,
                    url,
                    headers=headers,
                    data=body.encode('utf-8') if body is not None else None,
                    timeout=(self.connect_timeout, self.read_timeout),
                    verify=self.verify,
                )
            except requests.exceptions.SSLError as exc:
                raise TransportError(f'TLS error: {exc}', TransportFailure.TLS) from exc
            except requests.exceptions.Timeout as exc:
                raise TransportError(f'Request timed out: {exc}', TransportFailure.TIMEOUT) from exc
            except requests.exceptions.ConnectionError as exc:
                if _is_dns_failure(exc):
                    raise TransportError(f'DNS resolution failed: {exc}', TransportFailure.DNS) from exc
                raise TransportError(f'Connection failed: {exc}', TransportFailure.CONNECT) from exc
            except requests.exceptions.RequestException as exc:
                raise TransportError(f'Network error: {exc}', TransportFailure.OTHER) from exc

            logger.debug("%s %s -> HTTP %s", method, url.split('?')[0], resp.status_code)
            return TransportResponse(
                status_code=resp.status_code,
                body=resp.text,
                headers=dict(resp.headers),
            )

    def close(self):
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed


def _is_dns_failure(exc: BaseException) -> bool:
    seen = set()
    current = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, socket.gaierror):
            return True
        if any(marker in str(current) for marker in _DNS_MARKERS):
            return True
        nested = current.args[0] if current.args and isinstance(current.args[0], BaseException) else None
        current = nested or current.__cause__ or current.__context__
    return False
