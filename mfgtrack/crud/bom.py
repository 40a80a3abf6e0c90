"""BOM data access"""

from sqlalchemy.orm import Session, selectinload
from ..models import BOMMaster, BOMComponent


def list_versions(db: Session, organization_id: str, item_code: str):
    """All version strings recorded for an item"""
    rows = db.query(BOMMaster.bom_version).filter(
        BOMMaster.organization_id == organization_id,
        BOMMaster.item_code == item_code,
    ).all()
    return [row[0] for row in rows]


def get_bom(db: Session, organization_id: str, bom_id: int):
    return (
        db.query(BOMMaster)
        .options(selectinload(BOMMaster.components))
        .filter(BOMMaster.organization_id == organization_id, BOMMaster.id == bom_id)
        .first()
    )


def list_active_boms(db: Session, organization_id: str, item_code: str):
    """Approved and active BOMs of an item"""
    return (
        db.query(BOMMaster)
        .options(selectinload(BOMMaster.components))
        .filter(
            BOMMaster.organization_id == organization_id,
            BOMMaster.item_code == item_code,
            BOMMaster.is_active.is_(True),
            BOMMaster.approval_status == "approved",
        )
        .all()
    )


def add_bom(db: Session, organization_id: str, item_code: str, bom_version: str,
            header: dict, components: list):
    """Stage a BOM master with its component rows; the caller commits"""
    db_bom = BOMMaster(
        organization_id=organization_id,
        item_code=item_code,
        bom_version=bom_version,
        approval_status="draft",
        is_active=False,
        **header,
    )
    for line_number, comp in enumerate(components, start=1):
        db_bom.components.append(BOMComponent(organization_id=organization_id, line_number=line_number, **comp))
    db.add(db_bom)
    db.flush()
    return db_bom


def deactivate_other_versions(db: Session, organization_id: str, item_code: str, keep_id: int) -> int:
    return (
        db.query(BOMMaster)
        .filter(
            BOMMaster.organization_id == organization_id,
            BOMMaster.item_code == item_code,
            BOMMaster.id != keep_id,
            BOMMaster.is_active.is_(True),
        )
        .update({"is_active": False}, synchronize_session=False)
    )
