"""
Utils Package
Utility functions and helpers
"""

from mpesa.utils.encryption import base64_encode, basic_auth_header, generate_password
from mpesa.utils.logger import get_logger, configure_logging, mask_secret
from mpesa.utils.timestamp import generate_timestamp, is_valid_timestamp
from mpesa.utils.validators import (
    normalise_phone,
    validate_phone_number,
    validate_amount,
    validate_short_code,
    validate_callback_url,
    validate_stk_push_request
)

__all__ = [
    'base64_encode',
    'basic_auth_header',
    'generate_password',
    'get_logger',
    'configure_logging',
    'mask_secret',
    'generate_timestamp',
    'is_valid_timestamp',
    'normalise_phone',
    'validate_phone_number',
    'validate_amount',
    'validate_short_code',
    'validate_callback_url',
    'validate_stk_push_request'
]
