"""Order and progress data access

- add_order stages the order together with one progress row per stage
- get_order_progress returns the order's progress rows in stage sequence order
"""

from sqlalchemy.orm import Session, joinedload
from ..models import Order, Stage, WorkflowProgress


def get_order(db: Session, organization_id: str, order_id: int):
    """Get an order by id within an organization"""
    return db.query(Order).filter(
        Order.organization_id == organization_id,
        Order.id == order_id,
    ).first()


def list_orders(db: Session, organization_id: str, status: str = None, skip: int = 0, limit: int = 100):
    """List orders, newest first"""
    query = db.query(Order).filter(Order.organization_id == organization_id)
    if status:
        query = query.filter(Order.status == status)
    return query.order_by(Order.created_at.desc(), Order.id.desc()).offset(skip).limit(limit).all()


def uiorn_exists(db: Session, uiorn: str) -> bool:
    return db.query(Order.id).filter(Order.uiorn == uiorn).first() is not None


def add_order(db: Session, organization_id: str, uiorn: str, order_data: dict, stages):
    """Stage an order and its progress rows (all pending) in the session

    `stages` must already be in sequence order; the caller commits.
    """
    db_order = Order(organization_id=organization_id, uiorn=uiorn, status="draft", **order_data)
    db.add(db_order)
    db.flush()
    for stage in stages:
        db.add(WorkflowProgress(
            organization_id=organization_id,
            order_id=db_order.id,
            stage_id=stage.id,
            status="pending",
            progress_percentage=0.0,
            stage_data={},
            quality_status="pending",
        ))
    db.flush()
    return db_order


def get_order_progress(db: Session, organization_id: str, order_id: int):
    """Progress rows of an order, in stage sequence order"""
    return (
        db.query(WorkflowProgress)
        .join(Stage, WorkflowProgress.stage_id == Stage.id)
        .options(joinedload(WorkflowProgress.stage))
        .filter(
            WorkflowProgress.organization_id == organization_id,
            WorkflowProgress.order_id == order_id,
        )
        .order_by(Stage.sequence_order, Stage.id)
        .all()
    )


def get_progress(db: Session, organization_id: str, progress_id: int):
    """Get a progress row by id within an organization"""
    return db.query(WorkflowProgress).filter(
        WorkflowProgress.organization_id == organization_id,
        WorkflowProgress.id == progress_id,
    ).first()


def update_progress_if_status(db: Session, progress_id: int, expected_status: str, values: dict) -> int:
    """Conditional update keyed on the expected prior status

    Returns the number of rows changed (0 when another request moved it first).
    """
    return (
        db.query(WorkflowProgress)
        .filter(WorkflowProgress.id == progress_id, WorkflowProgress.status == expected_status)
        .update(values, synchronize_session=False)
    )
