# studio_pos/api/v1/routes_maintenance.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession


from studio_pos.db.base import get_db
from studio_pos.domain.pos.reconcile import audit_booking_counts, repair_booking_counts
from studio_pos.domain.pos.schemas import BookingAuditOut


router = APIRouter(prefix="/api/v1/maintenance", tags=["maintenance"])


@router.get("/booking-audit", response_model=BookingAuditOut)
async def booking_audit_endpoint(db: AsyncSession = Depends(get_db)):
    audit = await audit_booking_counts(db)
    return BookingAuditOut.model_validate(audit)

@router.post("/booking-audit/repair", response_model=BookingAuditOut)
async def booking_repair_endpoint(db: AsyncSession = Depends(get_db)):
    audit = await repair_booking_counts(db)
    return BookingAuditOut.model_validate(audit)
