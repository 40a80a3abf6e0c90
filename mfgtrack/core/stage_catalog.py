"""Stage catalog

Ordered, typed production stages per organization. Sequence orders are unique
among an organization's active stages; stages are deactivated, never deleted,
so historical progress rows keep a valid reference.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from .. import crud
from ..database.connection import atomic
from ..models import Stage, StageType
from .exceptions import DuplicateSequenceError, RecordNotFound, ValidationError

logger = logging.getLogger(__name__)

STAGE_TYPES = tuple(t.value for t in StageType)

DEFAULT_MATERIAL_CATEGORIES: Dict[str, List[str]] = {
    StageType.punching.value: ["substrate", "tooling", "consumables"],
    StageType.printing.value: ["substrate", "inks", "solvents", "plates", "chemicals", "cleaning_agents"],
    StageType.lamination.value: ["substrate", "adhesives", "primers", "release_agents", "catalysts"],
    StageType.coating.value: ["substrate", "specialized_adhesives", "activators", "coating_chemicals"],
    StageType.slitting_packaging.value: ["substrate", "cores", "stretch_wrap", "packaging_materials", "labels"],
    StageType.rework.value: ["substrate", "consumables"],
}

# The five core stages every plant runs, in pipeline order
DEFAULT_PIPELINE = [
    ("Order Punching", StageType.punching.value),
    ("Gravure Printing", StageType.printing.value),
    ("Lamination Coating", StageType.lamination.value),
    ("Adhesive Coating", StageType.coating.value),
    ("Slitting Packaging", StageType.slitting_packaging.value),
]


def default_material_categories(stage_type: str) -> List[str]:
    return list(DEFAULT_MATERIAL_CATEGORIES.get(stage_type, ["substrate", "consumables"]))


def list_active_stages(db: Session, organization_id: str) -> List[Stage]:
    """Active stages of an organization ordered by sequence order"""
    return crud.list_stages(db, organization_id, active_only=True)


def list_stages(db: Session, organization_id: str, include_inactive: bool = True) -> List[Stage]:
    return crud.list_stages(db, organization_id, active_only=not include_inactive)


def get_stage(db: Session, organization_id: str, stage_id: int) -> Stage:
    stage = crud.get_stage(db, organization_id, stage_id)
    if stage is None:
        raise RecordNotFound(f"Stage {stage_id} not found")
    return stage


def _ensure_sequence_free(db: Session, organization_id: str, sequence_order: int, exclude_id: int = None):
    clash = crud.find_active_by_sequence(db, organization_id, sequence_order, exclude_id=exclude_id)
    if clash is not None:
        logger.warning(
            "Sequence %s already taken by stage %s in org %s", sequence_order, clash.id, organization_id
        )
        raise DuplicateSequenceError(organization_id, sequence_order, clash.stage_name)


def create_stage(
    db: Session,
    organization_id: str,
    stage_name: str,
    stage_type: str,
    sequence_order: int,
    stage_config: Optional[dict] = None,
) -> Stage:
    """Create an active stage.

    Raises ValidationError for an unknown type, a blank name or a
    non-positive sequence order, and DuplicateSequenceError when the
    sequence order is held by another active stage. Collisions are
    rejected, never resolved by shifting other stages.
    """
    errors = []
    if not stage_name or not stage_name.strip():
        errors.append("Stage name is required")
    if stage_type not in STAGE_TYPES:
        errors.append(f"Stage type {stage_type!r} is not one of: {', '.join(STAGE_TYPES)}")
    if not isinstance(sequence_order, int) or sequence_order < 1:
        errors.append("Sequence order must be a positive integer")
    if errors:
        raise ValidationError(errors)

    _ensure_sequence_free(db, organization_id, sequence_order)

    config = dict(stage_config or {})
    config.setdefault("material_categories", default_material_categories(stage_type))

    with atomic(db):
        stage = crud.add_stage(db, organization_id, stage_name.strip(), stage_type, sequence_order, config)
    db.refresh(stage)
    logger.info("Created stage %s (%s) at position %s for org %s",
                stage.id, stage_type, sequence_order, organization_id)
    return stage


def reorder_stage(db: Session, organization_id: str, stage_id: int, new_sequence_order: int) -> Stage:
    """Move a stage to a new position, clamped to 1.

    Neighbouring stages are left untouched; the caller resolves collisions.
    """
    stage = get_stage(db, organization_id, stage_id)
    with atomic(db):
        stage.sequence_order = max(1, int(new_sequence_order))
    db.refresh(stage)
    logger.info("Stage %s moved to position %s", stage.id, stage.sequence_order)
    return stage


def set_stage_active(db: Session, organization_id: str, stage_id: int, active: bool) -> Stage:
    """Activate or deactivate a stage; progress history is never removed"""
    stage = get_stage(db, organization_id, stage_id)
    if active and not stage.is_active:
        _ensure_sequence_free(db, organization_id, stage.sequence_order, exclude_id=stage.id)
    with atomic(db):
        stage.is_active = bool(active)
    db.refresh(stage)
    logger.info("Stage %s active=%s", stage.id, stage.is_active)
    return stage


def seed_default_stages(db: Session, organization_id: str) -> List[Stage]:
    """Create the core pipeline for an organization that has no stages yet"""
    existing = crud.list_stages(db, organization_id)
    if existing:
        return [s for s in existing if s.is_active]
    with atomic(db):
        stages = [
            crud.add_stage(db, organization_id, name, stage_type, position,
                           {"material_categories": default_material_categories(stage_type)})
            for position, (name, stage_type) in enumerate(DEFAULT_PIPELINE, start=1)
        ]
    logger.info("Seeded %d default stages for org %s", len(stages), organization_id)
    return stages
