"""Package and payment subroutes."""
from . import packages, payments

__all__ = ["packages", "payments"]
