# mpesa package
__version__ = "0.1.0"

from .config import AuthConfig, Config, Environment, load_request_from_file
from .errors import (
    ErrorCode,
    STKResultCode,
    MPesaError,
    ConfigError,
    ResultAccessError,
    TransportError,
    TransportFailure,
)
from .models import (
    TransactionType,
    PaymentRequest,
    PaymentAck,
    MetadataItem,
    PaymentCallback,
    Result,
)
from .providers import Transport, TransportResponse, RequestsTransport
from .services import (
    TokenManager,
    TokenState,
    STKPushClient,
    CallbackParser,
)
from .utils import configure_logging, normalise_phone
