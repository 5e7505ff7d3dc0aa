from sqlalchemy import Column, Integer, ForeignKey, String, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship

from app.data.database import Base


class OrderItemModel(Base):
    __tablename__ = "order_items"

    id = Column(String(36), primary_key=True)
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    #no FK, a deleted product shows up as a placeholder in order history
    product_id = Column(String(36), nullable=False)

    quantity = Column(Integer, nullable=False)
    #position in the cart snapshot, keeps display order
    line_no = Column(Integer, nullable=False, default=0)

    order = relationship("OrderModel", back_populates="items")

    __table_args__ = (
        UniqueConstraint("order_id", "product_id", name="u_order_product"),
        CheckConstraint("quantity > 0", name="ck_order_item_quantity_positive"),
    )
