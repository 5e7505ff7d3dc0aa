# app/repos/product_repo.py
from typing import Dict, Iterable

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_products(self, product_ids: Iterable[str]) -> Dict[str, ProductModel]:
        ids = set(product_ids)
        if not ids:
            return {}
        rows = self.db.execute(
            select(ProductModel).where(ProductModel.id.in_(ids))
        ).scalars().all()
        return {p.id: p for p in rows}

    def get_stock(self, product_id: str) -> int | None:
        return self.db.execute(
            select(ProductModel.quantity).where(ProductModel.id == product_id)
        ).scalar_one_or_none()

    def decrement_stock(self, product_id: str, amount: int) -> bool:
        # condition in WHERE: validation and decrement in one statement
        # UPDATE products SET quantity = quantity - 2 WHERE id = 'a' AND quantity >= 2
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.quantity >= amount)
            .values(quantity=ProductModel.quantity - amount)
        )
        return result.rowcount == 1

