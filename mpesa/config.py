import json
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from dotenv import load_dotenv
from marshmallow import ValidationError

from mpesa.errors.codes import ErrorCode
from mpesa.errors.exceptions import ConfigError
from mpesa.models.payment import PaymentRequest
from mpesa.models.result import Result
from mpesa.schemas.payment_schema import PaymentRequestSchema
from mpesa.utils.validators import normalise_phone

logger = logging.getLogger(__name__)


class Environment(str, Enum):
    SANDBOX = 'sandbox'
    PRODUCTION = 'production'


# Daraja base URLs
BASE_URLS = {
    Environment.SANDBOX: 'https://sandbox.safaricom.co.ke',
    Environment.PRODUCTION: 'https://api.safaricom.co.ke',
}


class Config:
    """Client defaults, overridable through the environment"""
    CONNECT_TIMEOUT = float(os.getenv('MPESA_CONNECT_TIMEOUT', '10'))
    REQUEST_TIMEOUT = float(os.getenv('MPESA_REQUEST_TIMEOUT', '30'))


@dataclass(frozen=True)
class AuthConfig:
    """Daraja app credentials and target environment"""
    consumer_key: str = field(repr=False)
    consumer_secret: str = field(repr=False)
    passkey: str = field(default='', repr=False)
    environment: Environment = Environment.SANDBOX

    @property
    def sandbox(self) -> bool:
        return self.environment is Environment.SANDBOX

    @property
    def base_url(self) -> str:
        return BASE_URLS[self.environment]

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> 'AuthConfig':
        """
        Load credentials from MPESA_* environment variables

        A .env file is read first (without overriding variables already set).

        Raises:
            ConfigError: If the consumer key or secret is missing
        """
        load_dotenv(dotenv_path)

        consumer_key = os.getenv('MPESA_CONSUMER_KEY')
        consumer_secret = os.getenv('MPESA_CONSUMER_SECRET')
        if not consumer_key or not consumer_secret:
            raise ConfigError(
                'Missing required environment variables. '
                'Please set MPESA_CONSUMER_KEY and MPESA_CONSUMER_SECRET'
            )

        env = os.getenv('MPESA_ENVIRONMENT', '')
        environment = Environment.PRODUCTION if env.lower() == 'production' else Environment.SANDBOX

        return cls(
            consumer_key=consumer_key,
            consumer_secret=consumer_secret,
            passkey=os.getenv('MPESA_PASSKEY', ''),
            environment=environment,
        )

    @classmethod
    def from_file(cls, path: str) -> 'AuthConfig':
        """
        Load credentials from a JSON file

        Expected keys: consumer_key, consumer_secret, and optionally
        passkey, sandbox (bool) or environment ("sandbox" | "production").

        Raises:
            ConfigError: CONFIG_ERROR for a missing file or key,
                PARSE_ERROR for malformed JSON
        """
        if not os.path.isfile(path):
            raise ConfigError(f'Configuration file not found: {path}')

        try:
            with open(path, encoding='utf-8') as fh:
                data = json.load(fh)
        except json.JSONDecodeError as exc:
            raise ConfigError(f'Failed to parse JSON: {exc}', ErrorCode.PARSE_ERROR) from exc
        except OSError as exc:
            raise ConfigError(f'Unable to open configuration file: {path}') from exc

        if not isinstance(data, dict):
            raise ConfigError('Configuration file must contain a JSON object', ErrorCode.PARSE_ERROR)

        for key in ('consumer_key', 'consumer_secret'):
            if not data.get(key):
                raise ConfigError(f"Missing '{key}' in config file")

        if 'environment' in data:
            try:
                environment = Environment(str(data['environment']).lower())
            except ValueError as exc:
                raise ConfigError(
                    f"environment must be 'sandbox' or 'production', got '{data['environment']}'"
                ) from exc
        else:
            environment = Environment.SANDBOX if data.get('sandbox', True) else Environment.PRODUCTION

        return cls(
            consumer_key=data['consumer_key'],
            consumer_secret=data['consumer_secret'],
            passkey=data.get('passkey', ''),
            environment=environment,
        )


def load_request_from_file(path: str) -> Result[PaymentRequest]:
    """
    Load an STK Push request from a JSON file using Daraja field names

    Example file:
        {
          "BusinessShortCode": "174379",
          "Amount": "1",
          "PartyA": "0712345678",
          "PartyB": "174379",
          "PhoneNumber": "0712345678",
          "CallBackURL": "https://example.com/callback",
          "AccountReference": "Test",
          "TransactionDesc": "Test Payment",
          "TransactionType": "CustomerPayBillOnline"
        }

    Password and Timestamp are ignored; they are derived at dispatch.
    Both phone fields are normalised to 254XXXXXXXXX.
    """
    try:
        with open(path, encoding='utf-8') as fh:
            raw = fh.read()
    except OSError as exc:
        return Result.failure(f'Could not open file: {path} ({exc})', ErrorCode.CONFIG_ERROR)

    try:
        request = PaymentRequestSchema().loads(raw)
    except json.JSONDecodeError as exc:
        return Result.failure(f'JSON parse error: {exc}', ErrorCode.PARSE_ERROR)
    except ValidationError as exc:
        return Result.failure(f'Failed to load request: {exc.messages}', ErrorCode.PARSE_ERROR)

    for attr in ('party_a', 'phone_number'):
        phone = normalise_phone(getattr(request, attr))
        if not phone.success:
            return Result.failure(phone.error, phone.code)
        setattr(request, attr, phone.value)

    logger.debug("Loaded STK Push request from %s", path)
    return Result.ok(request)
