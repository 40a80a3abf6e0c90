"""BOM composition validation

A BOM is a weight-percentage recipe of raw materials for a finished item.
Before a BOM is accepted every rule is checked and every violation is
reported together:

1. at least one component
2. each weight percentage in (0, 100]
3. weights sum to 100 within the configured tolerance (0.1 by default)
4. no raw-material item code appears twice

Accepted components store ``quantity_ratio`` as a fraction (weight / 100);
``weight_percentage`` keeps the submitted percentage. Do not mix the two.
"""

import logging
from collections import Counter
from typing import Iterable, List, Optional, Sequence

from sqlalchemy.orm import Session

from .. import crud
from ..config.settings import settings
from ..database.connection import atomic
from ..models import BOMMaster, ConsumptionType
from ..utils.helpers import next_bom_version, round_pct
from .exceptions import NoActiveBOM, RecordNotFound, ValidationError

logger = logging.getLogger(__name__)

CONSUMPTION_TYPES = tuple(t.value for t in ConsumptionType)


def _field(component, name, default=None):
    if isinstance(component, dict):
        return component.get(name, default)
    return getattr(component, name, default)


def total_weight(components: Iterable) -> float:
    return round(sum(float(_field(c, "weight_percentage") or 0) for c in components), 6)


def validate_composition(components: Sequence, tolerance: Optional[float] = None) -> List[str]:
    """Return every composition violation; an empty list means valid.

    `components` may be dicts, schema objects or ORM rows exposing
    ``component_item_code`` and ``weight_percentage``.
    """
    tolerance = settings.BOM_SUM_TOLERANCE if tolerance is None else tolerance
    components = list(components or [])
    errors = []

    if not components:
        errors.append("At least one component is required")

    for idx, comp in enumerate(components, start=1):
        weight = _field(comp, "weight_percentage")
        code = (_field(comp, "component_item_code") or "").strip()
        if not code:
            errors.append(f"Component line {idx}: raw material item code is required")
            code = f"line {idx}"
        if weight is None or not (0 < float(weight) <= 100):
            errors.append(f"Component {code}: weight percentage must be greater than 0 and at most 100 (got {weight})")

    if components:
        total = total_weight(components)
        deviation = total - 100.0
        if abs(deviation) > tolerance:
            if deviation < 0:
                errors.append(
                    f"Total weight percentage is {round_pct(total)}%; "
                    f"{round_pct(-deviation)}% remaining to reach 100%"
                )
            else:
                errors.append(
                    f"Total weight percentage is {round_pct(total)}%; "
                    f"exceeds 100% by {round_pct(deviation)}%"
                )

    codes = Counter(
        (_field(c, "component_item_code") or "").strip().upper() for c in components
    )
    for code, count in codes.items():
        if code and count > 1:
            errors.append(f"Raw material {code} appears {count} times; each material may appear only once")

    return errors


def _component_row(comp) -> dict:
    consumption_type = _field(comp, "consumption_type") or ConsumptionType.direct.value
    weight = float(_field(comp, "weight_percentage"))
    return {
        "component_item_code": _field(comp, "component_item_code").strip(),
        "weight_percentage": weight,
        "quantity_ratio": weight / 100.0,
        "stage_id": _field(comp, "stage_id"),
        "consumption_type": consumption_type,
        "is_critical": bool(_field(comp, "is_critical", False)),
        "waste_percentage": float(_field(comp, "waste_percentage", 0.0) or 0.0),
        "uom": _field(comp, "uom") or "KG",
        "component_notes": _field(comp, "component_notes"),
    }


def accept_bom(db: Session, organization_id: str, candidate) -> BOMMaster:
    """Validate a candidate BOM and persist it as the next draft version.

    Raises ValidationError listing every violation. On success the master
    row and all components are written in one transaction.
    """
    components = list(candidate.components or [])
    errors = []
    if not (candidate.item_code or "").strip():
        errors.append("Finished item code is required")
    errors.extend(validate_composition(components))
    for comp in components:
        consumption_type = _field(comp, "consumption_type")
        if consumption_type and consumption_type not in CONSUMPTION_TYPES:
            errors.append(
                f"Component {_field(comp, 'component_item_code')}: consumption type "
                f"{consumption_type!r} is not one of: {', '.join(CONSUMPTION_TYPES)}"
            )
        stage_id = _field(comp, "stage_id")
        if stage_id is not None and crud.get_stage(db, organization_id, stage_id) is None:
            errors.append(f"Component {_field(comp, 'component_item_code')}: stage {stage_id} not found")
    if errors:
        logger.warning("BOM for %s rejected with %d violation(s)", candidate.item_code, len(errors))
        raise ValidationError(errors)

    item_code = candidate.item_code.strip()
    version = next_bom_version(crud.list_versions(db, organization_id, item_code))
    header = {
        "yield_percentage": candidate.yield_percentage,
        "scrap_percentage": candidate.scrap_percentage,
        "bom_notes": candidate.bom_notes,
    }
    with atomic(db):
        bom = crud.add_bom(
            db, organization_id, item_code, version, header,
            [_component_row(c) for c in components],
        )
    db.refresh(bom)
    logger.info("Accepted BOM %s v%s with %d components", bom.item_code, bom.bom_version, len(components))
    return bom


def get_bom(db: Session, organization_id: str, bom_id: int) -> BOMMaster:
    bom = crud.get_bom(db, organization_id, bom_id)
    if bom is None:
        raise RecordNotFound(f"BOM {bom_id} not found")
    return bom


def approve_bom(db: Session, organization_id: str, bom_id: int) -> BOMMaster:
    """Approve a BOM version and make it the only active one for its item"""
    bom = get_bom(db, organization_id, bom_id)
    errors = validate_composition(bom.components)
    if errors:
        raise ValidationError(errors)
    with atomic(db):
        crud.deactivate_other_versions(db, organization_id, bom.item_code, bom.id)
        bom.approval_status = "approved"
        bom.is_active = True
    db.refresh(bom)
    logger.info("Approved BOM %s v%s", bom.item_code, bom.bom_version)
    return bom


def _version_key(bom: BOMMaster):
    try:
        return float(bom.bom_version)
    except ValueError:
        return 0.0


def get_active_bom(db: Session, organization_id: str, item_code: str) -> BOMMaster:
    """Highest approved, active version of an item's BOM"""
    boms = crud.list_active_boms(db, organization_id, item_code)
    if not boms:
        raise NoActiveBOM(f"No active BOM for item {item_code}")
    return max(boms, key=_version_key)


def explode_bom(db: Session, organization_id: str, item_code: str, quantity: float) -> List[dict]:
    """Raw material requirements for producing `quantity` of an item.

    net = quantity x ratio / yield; gross adds the component waste allowance.
    """
    if quantity <= 0:
        raise ValidationError(["Quantity must be greater than 0"])
    bom = get_active_bom(db, organization_id, item_code)
    yield_factor = (bom.yield_percentage or 100.0) / 100.0
    lines = []
    for comp in bom.components:
        net = quantity * comp.quantity_ratio / yield_factor
        gross = net * (1 + (comp.waste_percentage or 0.0) / 100.0)
        lines.append({
            "component_item_code": comp.component_item_code,
            "weight_percentage": comp.weight_percentage,
            "quantity_ratio": comp.quantity_ratio,
            "net_quantity": round(net, 4),
            "waste_percentage": comp.waste_percentage,
            "gross_quantity": round(gross, 4),
            "stage_id": comp.stage_id,
            "consumption_type": comp.consumption_type,
            "is_critical": comp.is_critical,
            "uom": comp.uom,
        })
    return lines
