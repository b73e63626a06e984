from sqlalchemy import Column, Index, String, DateTime, Numeric, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from studio_pos.db.base import Base
from studio_pos.db.models.line_items import LineItem

PAID = "paid"


class Transaction(Base):
    __tablename__ = "transactions"

    """Represents a completed POS sale (receipt header).

    A transaction freezes the bill as it was at commit time: its line items,
    money totals and the customer name/phone exactly as typed at the counter.
    Those copies are not kept in sync with the customer record afterwards.
    """

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # plain reference: deleting a customer must never delete its sales
    customer_id = Column(Uuid, nullable=False, index=True)
    customer_name = Column(String, nullable=False)
    customer_phone = Column(String, nullable=False)

    status = Column(String, nullable=False, default=PAID)

    subtotal = Column(Numeric(18, 2), nullable=False, default=0)
    discount_percent = Column(Numeric(5, 2), nullable=False, default=0)
    discount_amount = Column(Numeric(18, 2), nullable=False, default=0)
    grand_total = Column(Numeric(18, 2), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=True, server_default=func.now())

    items = relationship(
        LineItem,
        order_by=LineItem.line_number,
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_transactions_created_at", "created_at"),
    )
    # load the server timestamp with the INSERT so a saved sale is complete without a reload
    __mapper_args__ = {"eager_defaults": True}
