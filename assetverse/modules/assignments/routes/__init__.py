"""Assignment subroutes."""
from . import assigned_assets

__all__ = ["assigned_assets"]
