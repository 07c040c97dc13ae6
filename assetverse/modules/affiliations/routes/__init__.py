"""Affiliation subroutes."""
from . import affiliations

__all__ = ["affiliations"]
