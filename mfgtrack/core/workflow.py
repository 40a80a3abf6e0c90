"""Workflow progress state machine.

    pending -> in_progress -> completed
    in_progress <-> on_hold
    pending | on_hold -> cancelled

``completed`` and ``cancelled`` are terminal. Every status write is a
conditional update keyed on the status read at the start of the request,
so two racing requests cannot both apply the same transition (and a stage
completion produces exactly one post-stage checkpoint).
"""

import logging
from typing import Callable, Dict, FrozenSet, List, Optional

from sqlalchemy.orm import Session

from .. import crud
from ..database.connection import atomic
from ..models import CheckType, OrderStatus, ProgressStatus, WorkflowProgress
from ..utils.helpers import utcnow
from . import quality_gate
from .exceptions import (
    InvalidTransition,
    QualityCheckpointRequired,
    RecordNotFound,
    ValidationError,
)

logger = logging.getLogger(__name__)

PENDING = ProgressStatus.pending.value
IN_PROGRESS = ProgressStatus.in_progress.value
ON_HOLD = ProgressStatus.on_hold.value
COMPLETED = ProgressStatus.completed.value
CANCELLED = ProgressStatus.cancelled.value

ALLOWED_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    PENDING: frozenset({IN_PROGRESS, CANCELLED}),
    IN_PROGRESS: frozenset({COMPLETED, ON_HOLD}),
    ON_HOLD: frozenset({IN_PROGRESS, CANCELLED}),
    COMPLETED: frozenset(),
    CANCELLED: frozenset(),
}

# stage states that put an order into production
WORKED_STATUSES = frozenset({IN_PROGRESS, ON_HOLD, COMPLETED})

# Optional hook run before a stage starts, e.g. a stock availability check.
# Any exception it raises (InsufficientStock included) reaches the caller as is.
MaterialCheck = Callable[[Session, WorkflowProgress], None]


def can_transition(current: str, target: str) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def tracked_records(records: List[WorkflowProgress]) -> List[WorkflowProgress]:
    """Progress rows whose stage is still active"""
    return [r for r in records if r.stage is None or r.stage.is_active]


def get_progress(db: Session, organization_id: str, progress_id: int) -> WorkflowProgress:
    progress = crud.get_progress(db, organization_id, progress_id)
    if progress is None:
        raise RecordNotFound(f"Progress record {progress_id} not found")
    return progress


def _require_transition(progress: WorkflowProgress, target: str, reason: str = ""):
    if not can_transition(progress.status, target):
        logger.warning("Rejected %s -> %s on progress %s", progress.status, target, progress.id)
        raise InvalidTransition(progress.status, target, reason)


def _require_notes(notes: Optional[str], action: str) -> str:
    if not notes or not notes.strip():
        raise ValidationError([f"A reason is required to {action} a stage"])
    return notes.strip()


def _apply(db: Session, progress: WorkflowProgress, target: str, values: dict):
    """Conditional status write; fails if another request changed the row first"""
    expected = progress.status
    values = dict(values, status=target, updated_at=utcnow())
    changed = crud.update_progress_if_status(db, progress.id, expected, values)
    if changed != 1:
        raise InvalidTransition(expected, target, "stage was changed by another request")
    db.refresh(progress)


def _sync_order_status(db: Session, organization_id: str, order_id: int):
    """Roll stage state up to the order.

    draft -> in_production once a stage has been worked on, then completed
    when every stage is finished, or cancelled when every stage is cancelled.
    """
    order = crud.get_order(db, organization_id, order_id)
    if order is None or order.status not in (OrderStatus.draft.value, OrderStatus.in_production.value):
        return
    records = tracked_records(crud.get_order_progress(db, organization_id, order_id))
    statuses = [r.status for r in records]
    if not statuses:
        return
    if all(s == CANCELLED for s in statuses):
        new_status = OrderStatus.cancelled.value
    elif all(s in (COMPLETED, CANCELLED) for s in statuses):
        new_status = OrderStatus.completed.value
    elif any(s in WORKED_STATUSES for s in statuses):
        new_status = OrderStatus.in_production.value
    else:
        return
    if order.status != new_status:
        logger.info("Order %s status %s -> %s", order.uiorn, order.status, new_status)
        order.status = new_status


def start_stage(db: Session, organization_id: str, progress_id: int,
                material_check: Optional[MaterialCheck] = None) -> WorkflowProgress:
    """pending -> in_progress, gated by the pre-stage quality check.

    Raises QualityCheckpointRequired without touching the row when a
    pre-stage checkpoint blocks the start.
    """
    progress = get_progress(db, organization_id, progress_id)
    if progress.status == ON_HOLD:
        raise InvalidTransition(ON_HOLD, IN_PROGRESS, "resume a held stage instead")
    _require_transition(progress, IN_PROGRESS)
    if material_check is not None:
        material_check(db, progress)

    blocking, why = quality_gate.precheck_status(db, organization_id, progress.order_id, progress.stage_id)
    if blocking:
        logger.warning("Start of progress %s blocked: %s", progress.id, why)
        raise QualityCheckpointRequired(CheckType.pre_stage.value, why)

    with atomic(db):
        values = {}
        if progress.started_at is None:
            values["started_at"] = utcnow()
        _apply(db, progress, IN_PROGRESS, values)
        _sync_order_status(db, organization_id, progress.order_id)
    db.refresh(progress)
    logger.info("Progress %s started", progress.id)
    return progress


def complete_stage(db: Session, organization_id: str, progress_id: int,
                   notes: Optional[str] = None) -> WorkflowProgress:
    """in_progress -> completed.

    Always records a pending post-stage checkpoint; completion is not held
    back by its outcome.
    """
    progress = get_progress(db, organization_id, progress_id)
    _require_transition(progress, COMPLETED)
    with atomic(db):
        values = {"progress_percentage": 100.0}
        if progress.completed_at is None:
            values["completed_at"] = utcnow()
        if notes:
            values["notes"] = notes
        _apply(db, progress, COMPLETED, values)
        quality_gate.add_checkpoint(
            db, organization_id, progress.order_id, progress.stage_id, CheckType.post_stage.value
        )
        _sync_order_status(db, organization_id, progress.order_id)
    db.refresh(progress)
    logger.info("Progress %s completed", progress.id)
    return progress


def hold_stage(db: Session, organization_id: str, progress_id: int, notes: str) -> WorkflowProgress:
    """in_progress -> on_hold; percentage and timestamps are kept"""
    progress = get_progress(db, organization_id, progress_id)
    _require_transition(progress, ON_HOLD)
    notes = _require_notes(notes, "hold")
    with atomic(db):
        _apply(db, progress, ON_HOLD, {"notes": notes})
    logger.info("Progress %s put on hold: %s", progress.id, notes)
    return progress


def resume_stage(db: Session, organization_id: str, progress_id: int, notes: str) -> WorkflowProgress:
    """on_hold -> in_progress; percentage and timestamps are kept"""
    progress = get_progress(db, organization_id, progress_id)
    if progress.status != ON_HOLD:
        raise InvalidTransition(progress.status, IN_PROGRESS, "only held stages can be resumed")
    notes = _require_notes(notes, "resume")
    with atomic(db):
        _apply(db, progress, IN_PROGRESS, {"notes": notes})
    logger.info("Progress %s resumed", progress.id)
    return progress


def cancel_stage(db: Session, organization_id: str, progress_id: int,
                 notes: Optional[str] = None) -> WorkflowProgress:
    """pending | on_hold -> cancelled; a running stage must be held first"""
    progress = get_progress(db, organization_id, progress_id)
    reason = "put the stage on hold first" if progress.status == IN_PROGRESS else ""
    _require_transition(progress, CANCELLED, reason)
    with atomic(db):
        values = {"notes": notes} if notes else {}
        _apply(db, progress, CANCELLED, values)
        _sync_order_status(db, organization_id, progress.order_id)
    db.refresh(progress)
    logger.info("Progress %s cancelled", progress.id)
    return progress


def update_progress(db: Session, organization_id: str, progress_id: int, percentage: float,
                    stage_data: Optional[dict] = None, notes: Optional[str] = None) -> WorkflowProgress:
    """Report completion percentage of a running stage.

    The percentage must stay within 0-100 and may not go down.
    """
    progress = get_progress(db, organization_id, progress_id)
    if progress.status != IN_PROGRESS:
        raise InvalidTransition(progress.status, progress.status, "progress can only be reported on a running stage")
    errors = []
    if percentage is None or not (0 <= percentage <= 100):
        errors.append("Progress percentage must be between 0 and 100")
    elif percentage < (progress.progress_percentage or 0):
        errors.append(
            f"Progress percentage cannot decrease (currently {progress.progress_percentage}%)"
        )
    if errors:
        raise ValidationError(errors)

    values = {"progress_percentage": float(percentage)}
    if stage_data:
        merged = dict(progress.stage_data or {})
        merged.update(stage_data)
        values["stage_data"] = merged
    if notes:
        values["notes"] = notes
    with atomic(db):
        changed = crud.update_progress_if_status(
            db, progress.id, IN_PROGRESS, dict(values, updated_at=utcnow())
        )
        if changed != 1:
            raise InvalidTransition(IN_PROGRESS, IN_PROGRESS, "stage was changed by another request")
    db.refresh(progress)
    return progress


def transition(db: Session, organization_id: str, progress_id: int, target_status: str,
               notes: Optional[str] = None,
               material_check: Optional[MaterialCheck] = None) -> WorkflowProgress:
    """Move a progress record to `target_status` following the state machine"""
    if target_status not in ALLOWED_TRANSITIONS:
        raise ValidationError([
            f"Status {target_status!r} is not one of: {', '.join(ALLOWED_TRANSITIONS)}"
        ])
    if target_status == IN_PROGRESS:
        progress = get_progress(db, organization_id, progress_id)
        if progress.status == ON_HOLD:
            return resume_stage(db, organization_id, progress_id, notes)
        return start_stage(db, organization_id, progress_id, material_check=material_check)
    if target_status == COMPLETED:
        return complete_stage(db, organization_id, progress_id, notes)
    if target_status == ON_HOLD:
        return hold_stage(db, organization_id, progress_id, notes)
    if target_status == CANCELLED:
        return cancel_stage(db, organization_id, progress_id, notes)
    progress = get_progress(db, organization_id, progress_id)
    raise InvalidTransition(progress.status, target_status)
