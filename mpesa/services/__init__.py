from mpesa.services.auth_service import TokenManager, TokenState
from mpesa.services.callback_service import CallbackParser
from mpesa.services.error_classifier import map_api_error, map_transport_error
from mpesa.services.stk_push_service import STKPushClient

__all__ = [
    'TokenManager',
    'TokenState',
    'CallbackParser',
    'STKPushClient',
    'map_api_error',
    'map_transport_error',
]
