"""Auto-progression

Works out which stage of an order needs attention next, how far the order
has progressed overall, and advances the order by one step.

Current stage: the first in_progress record in stage sequence order, else
the first pending one, else none (the order is fully progressed).

Overall percentage: completed / total x 100, plus each running stage's own
percentage / total, capped at 100. The total is the number of records of
active stages, cancelled ones included; records of deactivated stages are
not counted.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.orm import Session

from .. import crud
from ..config.settings import settings
from . import workflow
from .exceptions import NoEligibleStage
from .orders import get_order

logger = logging.getLogger(__name__)

COMPLETED_LABEL = "Completed"


@dataclass
class AdvanceResult:
    order_id: int
    stage_name: str
    status: str
    action: str  # "started" or "completed"
    overall_percentage: float


def counted_records(records):
    """Records of active stages; cancelled ones stay in the total"""
    return workflow.tracked_records(records)


def current_stage(records) -> Optional[object]:
    """First running record, else first pending record, else None"""
    records = workflow.tracked_records(records)
    for wanted in (workflow.IN_PROGRESS, workflow.PENDING):
        for record in records:
            if record.status == wanted:
                return record
    return None


def overall_percentage(records) -> float:
    records = counted_records(records)
    total = len(records)
    if total == 0:
        return 0.0
    completed = sum(1 for r in records if r.status == workflow.COMPLETED)
    progress = completed / total * 100
    for r in records:
        if r.status == workflow.IN_PROGRESS:
            progress += (r.progress_percentage or 0.0) / total
    return round(min(progress, 100.0), 4)


def order_progress(db: Session, organization_id: str, order_id: int) -> List:
    get_order(db, organization_id, order_id)
    return crud.get_order_progress(db, organization_id, order_id)


def order_summary(db: Session, organization_id: str, order_id: int) -> dict:
    """Current stage, overall percentage and a per-stage snapshot"""
    order = get_order(db, organization_id, order_id)
    records = crud.get_order_progress(db, organization_id, order_id)
    current = current_stage(records)
    return {
        "order_id": order.id,
        "uiorn": order.uiorn,
        "status": order.status,
        "current_stage": current.stage.stage_name if current else COMPLETED_LABEL,
        "overall_percentage": overall_percentage(records),
        "stages": [
            {
                "progress_id": r.id,
                "stage_id": r.stage_id,
                "stage_name": r.stage.stage_name,
                "sequence_order": r.stage.sequence_order,
                "status": r.status,
                "progress_percentage": r.progress_percentage,
                "quality_status": r.quality_status,
                "started_at": r.started_at,
                "completed_at": r.completed_at,
            }
            for r in workflow.tracked_records(records)
        ],
    }


def advance_to_next_stage(db: Session, organization_id: str, order_id: int,
                          material_check: Optional[workflow.MaterialCheck] = None) -> AdvanceResult:
    """Advance an order by one step.

    A pending current stage is started (quality gate applies); a running
    stage whose percentage has reached the completion threshold is
    completed. Raises NoEligibleStage when there is nothing to advance.
    """
    records = order_progress(db, organization_id, order_id)
    current = current_stage(records)
    if current is None:
        held = [r for r in workflow.tracked_records(records) if r.status == workflow.ON_HOLD]
        if held:
            raise NoEligibleStage(f"Stage {held[0].stage.stage_name} is on hold; resume it to continue")
        raise NoEligibleStage(f"Order {order_id} has no remaining stages to progress")

    stage_name = current.stage.stage_name
    if current.status == workflow.PENDING:
        progress = workflow.start_stage(db, organization_id, current.id, material_check=material_check)
        action = "started"
    elif (current.progress_percentage or 0.0) >= settings.COMPLETION_THRESHOLD:
        progress = workflow.complete_stage(db, organization_id, current.id)
        action = "completed"
    else:
        raise NoEligibleStage(
            f"Stage {stage_name} is still in progress at {current.progress_percentage:g}%"
        )

    records = crud.get_order_progress(db, organization_id, order_id)
    result = AdvanceResult(
        order_id=order_id,
        stage_name=stage_name,
        status=progress.status,
        action=action,
        overall_percentage=overall_percentage(records),
    )
    logger.info("Order %s advanced: %s %s", order_id, stage_name, action)
    return result
