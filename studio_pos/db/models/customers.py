import enum
from sqlalchemy import Column, Enum, Integer, String, DateTime, Text, Uuid
from sqlalchemy.sql import func
import uuid

from studio_pos.db.base import Base


class CustomerSource(str, enum.Enum):
    ONLINE = "online"
    OFFLINE = "offline"
    OFFLINE_POS = "offline_pos"


class Customer(Base):
    __tablename__ = "customers"

    """A studio customer, whether they booked online or walked in.

    The phone number is what the counter uses to recognise returning
    customers, but it is only checked before writes and is not unique at the
    storage level. `source` records where the customer first came from and
    is never changed afterwards.
    """

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=False, index=True)
    email = Column(String, nullable=True)

    total_bookings = Column(Integer, nullable=False, default=0)
    source = Column(
        Enum(
            CustomerSource,
            name="customer_source_enum",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=CustomerSource.OFFLINE,
    )

    baby_details = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    last_service = Column(String, nullable=True)
    last_booking_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
