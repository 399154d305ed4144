from .env import get_env_bool, get_env_list, get_env_str
from .settings import DiscoverySettings

__all__ = [
    "DiscoverySettings",
    "get_env_bool",
    "get_env_list",
    "get_env_str",
]
