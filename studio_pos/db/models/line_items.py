from sqlalchemy import Column, Index, Integer, String, Numeric, ForeignKey, Uuid
import uuid

from studio_pos.db.base import Base


class LineItem(Base):
    __tablename__ = "transaction_items"

    """Represents a single billed line within a transaction.

    The name, rate and quantity are captured at the time of sale so that the
    ledger does not depend on the mutable catalog.
    """

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    transaction_id = Column(Uuid, ForeignKey("transactions.id", ondelete="CASCADE"), nullable=False)
    line_number = Column(Integer, nullable=False)

    name = Column(String, nullable=False)
    qty = Column(Integer, nullable=False, default=1)
    rate = Column(Numeric(18, 2), nullable=False)
    amount = Column(Numeric(18, 2), nullable=False)

    __table_args__ = (
        Index("ix_transaction_items_transaction_line", "transaction_id", "line_number", unique=True),
    )
