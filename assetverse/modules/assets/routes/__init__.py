"""Inventory subroutes."""
from . import assets

__all__ = ["assets"]
