"""Configuration module."""

from .container import Container, get_container
from .settings import Settings, get_settings

__all__ = ["Container", "get_container", "Settings", "get_settings"]
