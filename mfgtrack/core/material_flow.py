"""Stage material flow

Materials consumed (inputs) and produced (outputs) while an order stage runs.
Each row belongs to one progress record and to one of the stage's configured
material categories. Cost is actual quantity x unit cost; an output's yield is
its actual quantity against the planned one.

Stage efficiency: good output (waste excluded) and waste are both expressed
as a percentage of the actual input quantity.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from .. import crud
from ..database.connection import atomic
from ..models import MaterialDirection, MaterialInputType, MaterialOutputType, StageMaterial
from ..utils.helpers import round_pct
from . import stage_catalog, workflow
from .exceptions import ValidationError

logger = logging.getLogger(__name__)

INPUT = MaterialDirection.input.value
OUTPUT = MaterialDirection.output.value
INPUT_TYPES = tuple(t.value for t in MaterialInputType)
OUTPUT_TYPES = tuple(t.value for t in MaterialOutputType)
WASTE = MaterialOutputType.waste_material.value

# materials are booked against stages that have been started
RECORDABLE_STATUSES = (workflow.IN_PROGRESS, workflow.ON_HOLD, workflow.COMPLETED)


def stage_material_categories(db: Session, organization_id: str, stage_id: int) -> List[str]:
    """Material categories a stage accepts, from its config or its type defaults"""
    stage = stage_catalog.get_stage(db, organization_id, stage_id)
    configured = (stage.stage_config or {}).get("material_categories")
    return list(configured) if configured else stage_catalog.default_material_categories(stage.stage_type)


def _record(db: Session, organization_id: str, progress_id: int, direction: str, material) -> StageMaterial:
    progress = workflow.get_progress(db, organization_id, progress_id)
    allowed_types = INPUT_TYPES if direction == INPUT else OUTPUT_TYPES
    categories = stage_material_categories(db, organization_id, progress.stage_id)
    category = (material.material_category or "").strip().lower()
    item_code = (material.item_code or "").strip()

    errors = []
    if progress.status not in RECORDABLE_STATUSES:
        errors.append(f"Materials can only be recorded on a started stage (stage is {progress.status})")
    if material.material_type not in allowed_types:
        errors.append(
            f"Material type {material.material_type!r} is not one of: {', '.join(allowed_types)}"
        )
    if category not in categories:
        errors.append(f"Material category {category!r} is not used by this stage ({', '.join(categories)})")
    if not item_code:
        errors.append("Material item code is required")
    if material.actual_quantity is None or material.actual_quantity < 0:
        errors.append("Actual quantity cannot be negative")
    if direction == OUTPUT and material.material_type == WASTE and not material.waste_category:
        errors.append("Waste output requires a waste category")
    if errors:
        raise ValidationError(errors)

    planned = material.planned_quantity or 0.0
    actual = float(material.actual_quantity)
    values = {
        "direction": direction,
        "material_type": material.material_type,
        "material_category": category,
        "item_code": item_code,
        "planned_quantity": planned,
        "actual_quantity": actual,
        "unit_cost": material.unit_cost or 0.0,
        "total_cost": round(actual * (material.unit_cost or 0.0), 4),
        "yield_percentage": round_pct(actual / planned * 100) if direction == OUTPUT and planned > 0 else None,
        "waste_category": material.waste_category,
        "waste_reason": material.waste_reason,
        "lot_number": material.lot_number,
        "material_properties": material.material_properties or {},
    }
    with atomic(db):
        row = crud.add_material(db, organization_id, progress, values)
    db.refresh(row)
    logger.info("Recorded %s %s of %s on progress %s", direction, actual, item_code, progress.id)
    return row


def record_input(db: Session, organization_id: str, progress_id: int, material) -> StageMaterial:
    return _record(db, organization_id, progress_id, INPUT, material)


def record_output(db: Session, organization_id: str, progress_id: int, material) -> StageMaterial:
    return _record(db, organization_id, progress_id, OUTPUT, material)


def list_materials(db: Session, organization_id: str, progress_id: int,
                   direction: Optional[str] = None) -> List[StageMaterial]:
    workflow.get_progress(db, organization_id, progress_id)
    return crud.list_materials(db, organization_id, progress_id, direction)


def material_flow_summary(db: Session, organization_id: str, progress_id: int) -> dict:
    """Totals, cost and yield/waste percentages of one order stage"""
    rows = list_materials(db, organization_id, progress_id)
    inputs = [r for r in rows if r.direction == INPUT]
    outputs = [r for r in rows if r.direction == OUTPUT]
    input_quantity = sum(r.actual_quantity for r in inputs)
    waste_quantity = sum(r.actual_quantity for r in outputs if r.material_type == WASTE)
    output_quantity = sum(r.actual_quantity for r in outputs if r.material_type != WASTE)

    def share(quantity):
        return round_pct(quantity / input_quantity * 100) if input_quantity > 0 else 0.0

    return {
        "progress_id": progress_id,
        "input_quantity": round(input_quantity, 4),
        "input_cost": round(sum(r.total_cost for r in inputs), 4),
        "output_quantity": round(output_quantity, 4),
        "waste_quantity": round(waste_quantity, 4),
        "output_cost": round(sum(r.total_cost for r in outputs), 4),
        "yield_percentage": share(output_quantity),
        "waste_percentage": share(waste_quantity),
    }
