"""
Custom Validators
Validation functions for STK Push request fields
"""

import re
from typing import Optional

from mpesa.errors.codes import ErrorCode
from mpesa.models.payment import PaymentRequest, TransactionType
from mpesa.models.result import Result
from mpesa.utils.timestamp import is_valid_timestamp

SHORT_CODE_RE = re.compile(r'[0-9]{5,6}')
PHONE_RE = re.compile(r'254[0-9]{9}')
AMOUNT_RE = re.compile(r'[1-9][0-9]*')
CALLBACK_URL_RE = re.compile(
    r'https://'
    r'([a-zA-Z0-9]([a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,63}'
    r'(:[0-9]{1,5})?'
    r"/[a-zA-Z0-9\-._~:/?#\[\]@!$&'()*+,;=%]*"
)

MAX_ACCOUNT_REFERENCE_LENGTH = 12
MAX_TRANSACTION_DESC_LENGTH = 13


def normalise_phone(phone: str) -> Result[str]:
    """
    Normalise a Kenyan phone number to 254XXXXXXXXX.

    Accepts: +254712345678, 0712345678, 254712345678, 712345678
    """
    digits = re.sub(r'[^0-9]', '', phone or '')

    if digits.startswith('254'):
        pass
    elif digits.startswith('0'):
        digits = '254' + digits[1:]
    elif len(digits) == 9:
        digits = '254' + digits
    else:
        return Result.failure(
            'Invalid phone number format. Expected format: 254XXXXXXXXX',
            ErrorCode.VALIDATION_ERROR,
        )

    if len(digits) != 12:
        return Result.failure(
            'Invalid phone number length. Must be 12 digits in format 254XXXXXXXXX',
            ErrorCode.VALIDATION_ERROR,
        )

    return Result.ok(digits)


def validate_short_code(short_code: str) -> tuple[bool, Optional[str]]:
    if not isinstance(short_code, str) or not SHORT_CODE_RE.fullmatch(short_code):
        return False, "Invalid BusinessShortCode format - must be 5-6 digits"
    return True, None


def validate_phone_number(phone: str, field: str = 'PhoneNumber') -> tuple[bool, Optional[str]]:
    if not isinstance(phone, str) or not PHONE_RE.fullmatch(phone):
        return False, f"Invalid {field} phone number - must be format: 254XXXXXXXXX"
    return True, None


def validate_callback_url(url: str) -> tuple[bool, Optional[str]]:
    if not isinstance(url, str) or not CALLBACK_URL_RE.fullmatch(url):
        return False, "Invalid CallBackURL - must be an https URL with a valid host and path"
    return True, None


def validate_amount(amount: str) -> tuple[bool, Optional[str]]:
    if not isinstance(amount, str) or not AMOUNT_RE.fullmatch(amount):
        return False, "Invalid amount format - must be positive integer"
    return True, None


def validate_account_reference(reference: str) -> tuple[bool, Optional[str]]:
    if not reference or len(reference) > MAX_ACCOUNT_REFERENCE_LENGTH:
        return False, (
            f"AccountReference must be 1-{MAX_ACCOUNT_REFERENCE_LENGTH} characters"
        )
    return True, None


def validate_transaction_desc(desc: str) -> tuple[bool, Optional[str]]:
    if not desc or len(desc) > MAX_TRANSACTION_DESC_LENGTH:
        return False, (
            f"TransactionDesc must be 1-{MAX_TRANSACTION_DESC_LENGTH} characters"
        )
    return True, None


def validate_party_b(request: PaymentRequest) -> tuple[bool, Optional[str]]:
    """
    PayBill payments go to the business short code itself. Buy Goods
    payments go to a till number, which only has to be well formed.
    """
    if request.transaction_type == TransactionType.CUSTOMER_BUY_GOODS_ONLINE:
        if not isinstance(request.party_b, str) or not SHORT_CODE_RE.fullmatch(request.party_b):
            return False, "Invalid PartyB format - till number must be 5-6 digits"
        return True, None

    if request.party_b != request.business_short_code:
        return False, "Invalid PartyB - must match BusinessShortCode"
    return True, None


def validate_stk_push_request(request: PaymentRequest) -> tuple[bool, Optional[str]]:
    """
    Validate an STK Push request against the Daraja field rules

    Checks run in a fixed order and stop at the first violation.

    Args:
        request: Request with password and timestamp already derived

    Returns:
        Tuple of (is_valid, error_message)
    """
    is_valid, error = validate_short_code(request.business_short_code)
    if not is_valid:
        return is_valid, error

    if not request.password:
        return False, "Password is required"

    if not is_valid_timestamp(request.timestamp):
        return False, "Invalid Timestamp - must be YYYYMMDDHHMMSS"

    checks = (
        lambda: validate_phone_number(request.party_a, 'PartyA'),
        lambda: validate_phone_number(request.phone_number, 'PhoneNumber'),
        lambda: validate_party_b(request),
        lambda: validate_callback_url(request.callback_url),
        lambda: validate_amount(request.amount),
        lambda: validate_account_reference(request.account_reference),
        lambda: validate_transaction_desc(request.transaction_desc),
    )
    for check in checks:
        is_valid, error = check()
        if not is_valid:
            return is_valid, error

    return True, None
