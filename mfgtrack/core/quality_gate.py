"""Quality gate

Decides whether a stage may start based on its pre-stage checkpoints, and
records checkpoint outcomes. The latest pre-stage checkpoint blocks a start
while it is pending, in review or failed. In strict mode
(``REQUIRE_PRE_STAGE_CHECKPOINT``) a stage with no passed pre-stage
checkpoint is blocked as well.
"""

import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from .. import crud
from ..config.settings import settings
from ..database.connection import atomic
from ..models import CheckResult, CheckType, QualityCheckpoint, WorkflowProgress
from .exceptions import RecordNotFound, ValidationError

logger = logging.getLogger(__name__)

CHECK_TYPES = tuple(t.value for t in CheckType)
VERDICTS = (CheckResult.passed.value, CheckResult.failed.value, CheckResult.in_review.value)


def precheck_status(db: Session, organization_id: str, order_id: int, stage_id: int) -> Tuple[bool, str]:
    """(blocking, reason) for starting the stage of an order"""
    checks = crud.list_checkpoints(db, organization_id, order_id, stage_id, CheckType.pre_stage.value)
    if not checks:
        if settings.REQUIRE_PRE_STAGE_CHECKPOINT:
            return True, "No pre-stage quality checkpoint exists for this stage"
        return False, "No pre-stage checkpoint required"
    latest = checks[0]
    if latest.result == CheckResult.pending.value:
        return True, "Pre-stage quality inspection is pending"
    if latest.result == CheckResult.in_review.value:
        return True, "Pre-stage quality inspection is in review"
    if latest.result == CheckResult.failed.value:
        return True, "Pre-stage quality inspection failed"
    return False, "Pre-stage quality inspection passed"


def has_blocking_precheck(db: Session, organization_id: str, order_id: int, stage_id: int) -> bool:
    blocking, _ = precheck_status(db, organization_id, order_id, stage_id)
    return blocking


def _validate_check_type(check_type: str):
    if check_type not in CHECK_TYPES:
        raise ValidationError([f"Check type {check_type!r} is not one of: {', '.join(CHECK_TYPES)}"])


def add_checkpoint(db: Session, organization_id: str, order_id: int, stage_id: int,
                   check_type: str) -> QualityCheckpoint:
    """Stage a pending checkpoint in the caller's transaction"""
    _validate_check_type(check_type)
    cp = crud.add_checkpoint(
        db, organization_id, order_id, stage_id, check_type,
        remarks=f"{check_type} quality checkpoint created automatically",
    )
    logger.info("Created %s checkpoint %s for order %s stage %s", check_type, cp.id, order_id, stage_id)
    return cp


def create_checkpoint(db: Session, organization_id: str, order_id: int, stage_id: int,
                      check_type: str = CheckType.pre_stage.value) -> QualityCheckpoint:
    """Create a pending checkpoint for an order stage"""
    _validate_check_type(check_type)
    if crud.get_order(db, organization_id, order_id) is None:
        raise RecordNotFound(f"Order {order_id} not found")
    if crud.get_stage(db, organization_id, stage_id) is None:
        raise RecordNotFound(f"Stage {stage_id} not found")
    with atomic(db):
        cp = add_checkpoint(db, organization_id, order_id, stage_id, check_type)
    db.refresh(cp)
    return cp


def record_result(
    db: Session,
    organization_id: str,
    checkpoint_id: int,
    result: str,
    inspection_results: Optional[dict] = None,
    defects_found: Optional[list] = None,
    corrective_actions: Optional[list] = None,
    remarks: Optional[str] = None,
) -> QualityCheckpoint:
    """Record an inspector verdict and mirror it on the stage progress row"""
    if result not in VERDICTS:
        raise ValidationError([f"Result {result!r} is not one of: {', '.join(VERDICTS)}"])
    cp = crud.get_checkpoint(db, organization_id, checkpoint_id)
    if cp is None:
        raise RecordNotFound(f"Quality checkpoint {checkpoint_id} not found")
    with atomic(db):
        cp.result = result
        cp.inspection_results = inspection_results or {}
        cp.defects_found = defects_found or []
        cp.corrective_actions = corrective_actions or []
        if remarks is not None:
            cp.remarks = remarks
        (
            db.query(WorkflowProgress)
            .filter(
                WorkflowProgress.organization_id == organization_id,
                WorkflowProgress.order_id == cp.order_id,
                WorkflowProgress.stage_id == cp.stage_id,
            )
            .update({"quality_status": result}, synchronize_session=False)
        )
    db.refresh(cp)
    logger.info("Checkpoint %s marked %s", cp.id, result)
    return cp


def evaluate_release(db: Session, organization_id: str, order_id: int, stage_id: int) -> Tuple[bool, str]:
    """Whether a stage's output may move downstream.

    Requires at least one passed inspection and no pending one.
    """
    checks = crud.list_checkpoints(db, organization_id, order_id, stage_id)
    has_passed = any(c.result == CheckResult.passed.value for c in checks)
    has_pending = any(c.result == CheckResult.pending.value for c in checks)
    if not has_passed:
        return False, "No passed quality inspection"
    if has_pending:
        return False, "Pending quality inspection exists"
    return True, "Transition allowed"
