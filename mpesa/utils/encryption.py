import base64


def base64_encode(value: str) -> str:
    """Base64-encode a UTF-8 string without line breaks"""
    if not value:
        return ''
    return base64.b64encode(value.encode('utf-8')).decode('ascii')


def basic_auth_header(consumer_key: str, consumer_secret: str) -> str:
    return f'Basic {base64_encode(f"{consumer_key}:{consumer_secret}")}'


def generate_password(business_short_code: str, passkey: str, timestamp: str) -> str:
    """
    Generate the STK Push password.

    Password = Base64(BusinessShortCode + Passkey + Timestamp)
    """
    return base64_encode(f'{business_short_code}{passkey}{timestamp}')
