# app/data/seed.py
from decimal import Decimal

from app.data.database import SessionLocal
from app.data.models import ProductModel, UserModel
from app.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTS = [
    {
        "id": "charizard-base-set",
        "name": "Charizard Base Set",
        "manufacturer": "Wizards of the Coast",
        "description": "Holo rare, near mint",
        "price": Decimal("399.99"),
        "quantity": 3,
        "image_url": "charizard.jpg",
    },
    {
        "id": "black-lotus-unlimited",
        "name": "Black Lotus (Unlimited)",
        "manufacturer": "Wizards of the Coast",
        "description": "Graded 7",
        "price": Decimal("14999.00"),
        "quantity": 1,
        "image_url": "black-lotus.jpg",
    },
    {
        "id": "booster-box-sv",
        "name": "Scarlet & Violet Booster Box",
        "manufacturer": "The Pokemon Company",
        "description": "36 packs, sealed",
        "price": Decimal("129.50"),
        "quantity": 40,
        "image_url": "booster-box.jpg",
    },
]

USERS = [
    {"id": "admin", "username": "admin", "email": "admin@example.com", "first_name": "Store", "last_name": "Admin"},
    {"id": "demo", "username": "demo", "email": "demo@example.com", "first_name": "Demo", "last_name": "Customer"},
]


def seed():
    db = SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.query(ProductModel).first():
            logger.info("Products already present, skipping seed")
            return
        db.add_all(ProductModel(**p) for p in PRODUCTS)
        db.add_all(UserModel(**u) for u in USERS)
        db.commit()
        logger.info(f"Seeded {len(PRODUCTS)} products and {len(USERS)} users")
    finally:
        db.close()


if __name__ == "__main__":
    from app.main import init_db

    init_db()
    seed()
