import os

# before any app import: settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"

from decimal import Decimal

import fakeredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.api import create_app
from app.api.deps import get_notification_service
from app.data.database import Base, get_db, make_engine
from app.data.models import OrderModel, OrderItemModel, ProductModel, UserModel
from app.data.redis_client import get_redis
from app.repos.cart_repo import CartRepo
from app.repos.product_repo import ProductRepo
from app.services.cart_service import CartService
from app.services.checkout_service import CheckoutService


class RecordingNotifier:
    def __init__(self):
        self.sent = []

    def send_order_notification(self, user_id, order_id, item_count, order_value):
        self.sent.append(
            {"user_id": user_id, "order_id": order_id, "item_count": item_count, "order_value": order_value}
        )


@pytest.fixture()
def engine():
    engine = make_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def redis_client():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture()
def products(db):
    """A: 10.00 x5, B: 5.00 x1, C: 2.50 x100"""
    db.add_all(
        [
            ProductModel(id="A", name="Product A", manufacturer="Acme", description="a",
                         price=Decimal("10.00"), quantity=5, image_url="a.jpg"),
            ProductModel(id="B", name="Product B", manufacturer="Acme", description="b",
                         price=Decimal("5.00"), quantity=1, image_url="b.jpg"),
            ProductModel(id="C", name="Product C", manufacturer="Globex", description="c",
                         price=Decimal("2.50"), quantity=100, image_url="c.jpg"),
        ]
    )
    db.commit()


@pytest.fixture()
def users(db):
    db.add_all(
        [
            UserModel(id="u1", username="ash", email="ash@example.com", first_name="Ash", last_name="Ketchum"),
            UserModel(id="u2", username="misty", email="misty@example.com"),
        ]
    )
    db.commit()


@pytest.fixture()
def cart_service(db, redis_client):
    return CartService(repo=CartRepo(redis_client), products=ProductRepo(db))


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def checkout_service(db, notifier):
    return CheckoutService(db, notification_service=notifier)


@pytest.fixture()
def client(session_factory, redis_client, notifier):
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis] = lambda: redis_client
    app.dependency_overrides[get_notification_service] = lambda: notifier
    return TestClient(app)


@pytest.fixture()
def stock_snapshot(db):
    def snapshot():
        db.expire_all()
        repo = ProductRepo(db)
        return {pid: repo.get_stock(pid) for (pid,) in db.query(ProductModel.id).all()}
    return snapshot


@pytest.fixture()
def order_counts(db):
    def counts():
        return db.query(OrderModel).count(), db.query(OrderItemModel).count()
    return counts
