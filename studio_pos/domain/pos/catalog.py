# studio_pos/domain/pos/catalog.py
import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Iterable, List

from sqlalchemy.exc import SQLAlchemyError

from studio_pos.db.repositories.catalog import add_pos_item, list_package_items, list_pos_items
from studio_pos.domain.pos.bill import Product

logger = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)")


def parse_price(raw) -> Decimal:
    """Read a hand-typed package price such as "15,000/-"; unreadable means 0."""
    if raw is None:
        return Decimal("0")
    match = _LEADING_NUMBER.match(str(raw).strip().replace(",", ""))
    if match is None:
        return Decimal("0")
    try:
        price = Decimal(match.group(0))
    except InvalidOperation:
        return Decimal("0")
    return price if price > 0 else Decimal("0")


def merge_products(*sources: Iterable[Product]) -> List[Product]:
    # first source to name a product wins
    merged = {}
    for source in sources:
        for product in source:
            if product.name not in merged:
                merged[product.name] = product
    return list(merged.values())


def is_known_product(catalog: Iterable[Product], name: str) -> bool:
    wanted = (name or "").strip().lower()
    return any(p.name.lower() == wanted for p in catalog)


def find_product(catalog: Iterable[Product], name: str):
    for product in catalog:
        if product.name == name:
            return product
    return None


async def _read_packages(session_factory) -> List[Product]:
    async with session_factory() as db:
        rows = await list_package_items(db)
    return [Product(name=row.name, rate=parse_price(row.price)) for row in rows]


async def _read_pos_items(session_factory) -> List[Product]:
    async with session_factory() as db:
        rows = await list_pos_items(db)
    return [Product(name=row.name, rate=Decimal(row.rate or 0)) for row in rows]


async def load_catalog(session_factory) -> List[Product]:
    """Build the billing catalog from studio packages and remembered POS items.

    Each source is read on its own; if one is unavailable the other is still
    returned so billing keeps working.
    """
    packages: List[Product] = []
    pos_items: List[Product] = []
    try:
        packages = await _read_packages(session_factory)
    except SQLAlchemyError:
        logger.exception("Failed to load packages for the POS catalog")
    try:
        pos_items = await _read_pos_items(session_factory)
    except SQLAlchemyError:
        logger.exception("Failed to load POS items for the POS catalog")
    return merge_products(packages, pos_items)


async def save_pos_item(session_factory, name: str, rate: Decimal) -> None:
    async with session_factory() as db:
        item = await add_pos_item(db, name, rate)
    logger.info("Saved new POS item %r (%s) to the catalog", item.name, item.rate)
