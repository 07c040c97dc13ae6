"""Request subroutes."""
from . import requests

__all__ = ["requests"]
