# studio_pos/db/models/catalog.py
from sqlalchemy import Column, Integer, Numeric, String, DateTime, Uuid
from sqlalchemy.sql import func
import uuid

from studio_pos.db.base import Base


class PackageItem(Base):
    __tablename__ = "package_items"

    """A studio package as published on the marketing site.

    The price is free text edited by hand in the content editor ("15000",
    "15,000/-"), so it is parsed leniently when the POS catalog is built.
    """

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    price = Column(String, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class PosItem(Base):
    __tablename__ = "pos_items"

    """An ad-hoc item first typed at the counter and remembered for later bills."""

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    rate = Column(Numeric(18, 2), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
