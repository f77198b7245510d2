from .client import BackendClient, BackendClientError, BackendConfigError, create_client
from .config import BackendSettings, get_settings

__all__ = [
    "BackendClient",
    "BackendClientError",
    "BackendConfigError",
    "BackendSettings",
    "create_client",
    "get_settings",
]
