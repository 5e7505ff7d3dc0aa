from app.data.database import Base, SessionLocal, engine
from app.data.models import ProductModel, UserModel
from app.data.seed import PRODUCTS, USERS, seed


def test_seed_only_once():
    Base.metadata.create_all(bind=engine)
    try:
        seed()
        seed()

        db = SessionLocal()
        try:
            assert db.query(ProductModel).count() == len(PRODUCTS)
            assert db.query(UserModel).count() == len(USERS)
        finally:
            db.close()
    finally:
        Base.metadata.drop_all(bind=engine)
