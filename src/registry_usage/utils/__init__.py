"""Utility functions for the registry usage reporter."""

from .digest import image_key

__all__ = ["image_key"]
