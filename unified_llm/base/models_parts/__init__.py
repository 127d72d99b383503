"""Data model records (one class per module)."""

from .parsed_model import ParsedModel
from .provider_config import ProviderConfig
from .proxy_config import ProxyConfig
from .resolution import Resolution

__all__ = ["ParsedModel", "ProviderConfig", "ProxyConfig", "Resolution"]
