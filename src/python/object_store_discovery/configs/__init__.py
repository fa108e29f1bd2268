from .authentication_type import AuthenticationType
from .discovery_config import DiscoveryConfig, load_config

__all__ = [
    "AuthenticationType",
    "DiscoveryConfig",
    "load_config",
]
