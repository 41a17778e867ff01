from .app_builder import AppBuilder
from .plugin import AppPlugin

__all__ = ["AppBuilder", "AppPlugin"]
