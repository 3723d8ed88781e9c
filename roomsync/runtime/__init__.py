from .settings import load_settings
from .logging import configure_logging

__all__ = ["configure_logging", "load_settings"]
