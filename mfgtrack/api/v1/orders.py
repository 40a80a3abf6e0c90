from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ... import schemas
from ...core import orders, progression
from ...database.connection import get_db

router = APIRouter(prefix="/orgs/{organization_id}/orders", tags=["orders"])


@router.post("/", response_model=schemas.OrderRead, status_code=201)
def create_order_endpoint(organization_id: str, order: schemas.OrderCreate, db: Session = Depends(get_db)):
    """Create an order; one pending progress row is seeded per active stage"""
    return orders.create_order(db, organization_id, order)


@router.get("/", response_model=List[schemas.OrderRead])
def list_orders_endpoint(
    organization_id: str,
    status: Optional[str] = Query(None, description="filter by order status"),
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    return orders.list_orders(db, organization_id, status=status, skip=skip, limit=limit)


@router.get("/{order_id}", response_model=schemas.OrderRead)
def get_order_endpoint(organization_id: str, order_id: int, db: Session = Depends(get_db)):
    return orders.get_order(db, organization_id, order_id)


@router.get("/{order_id}/progress", response_model=List[schemas.ProgressRead])
def get_order_progress(organization_id: str, order_id: int, db: Session = Depends(get_db)):
    """Progress rows of the order in stage sequence order"""
    return progression.order_progress(db, organization_id, order_id)


@router.get("/{order_id}/summary", response_model=schemas.OrderSummary)
def get_order_summary(organization_id: str, order_id: int, db: Session = Depends(get_db)):
    return progression.order_summary(db, organization_id, order_id)


@router.post("/{order_id}/advance", response_model=schemas.AdvanceResponse)
def advance_order(organization_id: str, order_id: int, db: Session = Depends(get_db)):
    """Start the next pending stage or complete a finished running stage"""
    result = progression.advance_to_next_stage(db, organization_id, order_id)
    return schemas.AdvanceResponse(
        order_id=result.order_id,
        stage_name=result.stage_name,
        status=result.status,
        action=result.action,
        overall_percentage=result.overall_percentage,
    )
