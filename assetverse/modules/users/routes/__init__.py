"""Users subroutes."""
from . import users

__all__ = ["users"]
