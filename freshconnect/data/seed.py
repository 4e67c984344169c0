# freshconnect/data/seed.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from freshconnect.data.models import TalukModel, ProductCategoryModel, ExpiryTypeModel
from freshconnect.utils.logging import get_logger

logger = get_logger(__name__)

TALUKS = [
    "Lalgudi",
    "Manachanallur",
    "Manapparai",
    "Marungapuri",
    "Musiri",
    "Srirangam",
    "Thiruverumbur",
    "Thottiyam",
    "Thuraiyur",
    "Tiruchirappalli East",
    "Tiruchirappalli West",
]

CATEGORIES = [
    "Vegetables",
    "Fruits",
    "Leafy Greens",
    "Dairy",
    "Grains & Pulses",
    "Spices",
    "Flowers",
]

EXPIRY_TYPES = [
    "Perishable (1-3 days)",
    "Short shelf life (up to a week)",
    "Long shelf life",
]


def _seed_table(db: Session, model, names) -> int:
    # only seed if empty
    if db.execute(select(model).limit(1)).first():
        return 0
    db.add_all([model(name=name) for name in names])
    return len(names)


def seed_lookups(db: Session) -> None:
    added = (
        _seed_table(db, TalukModel, TALUKS)
        + _seed_table(db, ProductCategoryModel, CATEGORIES)
        + _seed_table(db, ExpiryTypeModel, EXPIRY_TYPES)
    )
    db.commit()
    if added:
        logger.info("Seeded lookup tables", rows=added)
