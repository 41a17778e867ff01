"""
WeCom edition changelog service.

Records snapshots of the paid edition of corps that installed a WeCom
third-party application.
"""

from .app import create_app
from .core.config.settings import settings

__version__ = settings.version

__all__ = [
    "create_app",
]
