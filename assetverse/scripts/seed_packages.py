"""
Replaces the package catalogue with the default Basic/Standard/Premium tiers.

Usage:
    python -m assetverse.scripts.seed_packages
"""
import logging
import sys

from assetverse.core.database import Base, SessionLocal, engine
from assetverse.models import load_all_models
from assetverse.modules.payments.services.payments import seed_default_packages

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> int:
    load_all_models()
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        count = seed_default_packages(db, replace=True)
    except Exception:
        logger.exception("Seeding packages failed")
        return 1
    finally:
        db.close()

    logger.info(f"Packages seeding complete: {count} packages")
    return 0


if __name__ == "__main__":
    sys.exit(main())
