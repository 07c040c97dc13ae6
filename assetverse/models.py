"""
Registry of every model module, so Base.metadata knows all tables.
"""


def load_all_models() -> None:
    from assetverse.modules.affiliations import models as _affiliations  # noqa: F401
    from assetverse.modules.assets import models as _assets  # noqa: F401
    from assetverse.modules.assignments import models as _assignments  # noqa: F401
    from assetverse.modules.payments import models as _payments  # noqa: F401
    from assetverse.modules.requests import models as _requests  # noqa: F401
    from assetverse.modules.users import models as _users  # noqa: F401
