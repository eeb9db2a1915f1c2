"""Environment-based configuration (DAPR_* variables, .env files)."""

from .loader import load_from_env, config_summary
from .validator import DaprSettings

__all__ = [
    "load_from_env",
    "config_summary",
    "DaprSettings",
]
