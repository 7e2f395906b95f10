"""Shared pydantic model bases."""

from .config_base import ConfigModel

__all__ = ["ConfigModel"]
