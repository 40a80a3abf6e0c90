"""Order creation

An order is created together with one pending progress row per currently
active stage, in stage sequence order, in a single transaction.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from .. import crud
from ..config.settings import settings
from ..database.connection import atomic
from ..models import Order
from ..utils.helpers import generate_uiorn
from . import stage_catalog
from .exceptions import RecordNotFound, ValidationError

logger = logging.getLogger(__name__)


def _unique_uiorn(db: Session) -> str:
    for _ in range(settings.UIORN_MAX_ATTEMPTS):
        candidate = generate_uiorn()
        if not crud.uiorn_exists(db, candidate):
            return candidate
    raise ValidationError([
        f"Could not generate a unique UIORN after {settings.UIORN_MAX_ATTEMPTS} attempts"
    ])


def create_order(db: Session, organization_id: str, order) -> Order:
    """Create an order and seed its progress rows from the active stages"""
    stages = stage_catalog.list_active_stages(db, organization_id)
    if not stages:
        raise ValidationError(["No active workflow stages are configured for this organization"])
    uiorn = _unique_uiorn(db)
    order_data = {
        "order_number": order.order_number,
        "item_code": order.item_code,
        "item_name": order.item_name,
        "order_quantity": order.order_quantity,
        "delivery_date": order.delivery_date,
        "priority_level": order.priority_level,
        "customer_info": order.customer_info or {},
        "specifications": order.specifications or {},
    }
    with atomic(db):
        db_order = crud.add_order(db, organization_id, uiorn, order_data, stages)
    db.refresh(db_order)
    logger.info("Created order %s with %d stages", db_order.uiorn, len(stages))
    return db_order


def get_order(db: Session, organization_id: str, order_id: int) -> Order:
    order = crud.get_order(db, organization_id, order_id)
    if order is None:
        raise RecordNotFound(f"Order {order_id} not found")
    return order


def list_orders(db: Session, organization_id: str, status: Optional[str] = None,
                skip: int = 0, limit: int = 100) -> List[Order]:
    return crud.list_orders(db, organization_id, status=status, skip=skip, limit=limit)
