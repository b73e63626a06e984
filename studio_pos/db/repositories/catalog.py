
from decimal import Decimal
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select

from studio_pos.db.models.catalog import PackageItem, PosItem

async def list_package_items(db: AsyncSession) -> List[PackageItem]:
    result = await db.execute(
        select(PackageItem).order_by(PackageItem.sort_order, PackageItem.created_at)
    )
    return list(result.scalars().all())

async def list_pos_items(db: AsyncSession) -> List[PosItem]:
    result = await db.execute(
        select(PosItem).order_by(PosItem.created_at)
    )
    return list(result.scalars().all())

async def add_pos_item(
    db: AsyncSession,
    name: str,
    rate: Decimal,
) -> PosItem:
    item = PosItem(name=name, rate=rate)
    db.add(item)
    await db.commit()
    await db.refresh(item)
    return item
