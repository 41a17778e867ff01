"""
Plugins assembled by the AppBuilder.
"""

from .core_plugin import CorePlugin
from .database_plugin import DatabasePlugin

__all__ = ["CorePlugin", "DatabasePlugin"]
