# app/data/models/product.py
import uuid

from sqlalchemy import Column, Integer, String, Numeric, Text, CheckConstraint

from app.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False)
    manufacturer = Column(String(200), nullable=False, default="")
    description = Column(Text, nullable=False, default="")

    price = Column(Numeric(10, 2), nullable=False)
    #stock, only decremented by the guarded UPDATE in checkout
    quantity = Column(Integer, nullable=False, default=0)
    image_url = Column(String(500), nullable=False, default="")

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_product_quantity_non_negative"),
        CheckConstraint("price > 0", name="ck_product_price_positive"),
    )
