# studio_pos/domain/customers/schemas.py
from datetime import datetime
from pydantic import BaseModel
from uuid import UUID
from typing import Optional

from studio_pos.db.models.customers import CustomerSource

class CustomerCreate(BaseModel):
    name: str = ""
    phone: str = ""
    email: Optional[str] = None
    baby_details: Optional[str] = None
    notes: Optional[str] = None

class CustomerUpdate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    baby_details: Optional[str] = None
    notes: Optional[str] = None

class CustomerOut(BaseModel):
    id: UUID
    name: str
    phone: str
    email: Optional[str]
    total_bookings: int
    source: CustomerSource
    baby_details: Optional[str]
    notes: Optional[str]
    last_service: Optional[str]
    last_booking_at: Optional[datetime]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True

class CustomerStats(BaseModel):
    total: int
    online: int
    offline: int
