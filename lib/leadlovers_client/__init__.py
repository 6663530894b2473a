from .client import LeadloversClient
from .config_types import API_URL, ClientConfig
from .envelope import ResponseEnvelope
from .errors import AuthError, LeadloversError, RemoteApiError, TransportError, ValidationError
from .params import QueryParam

__all__ = [
    "API_URL",
    "AuthError",
    "ClientConfig",
    "LeadloversClient",
    "LeadloversError",
    "QueryParam",
    "RemoteApiError",
    "ResponseEnvelope",
    "TransportError",
    "ValidationError",
]
