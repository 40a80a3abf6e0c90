from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ... import schemas
from ...core import bom_validator
from ...database.connection import get_db

router = APIRouter(prefix="/orgs/{organization_id}/boms", tags=["boms"])


@router.post("/validate", response_model=schemas.BOMValidationResult)
def validate_bom(organization_id: str, bom: schemas.BOMCreate):
    """Check a candidate composition without saving it"""
    errors = bom_validator.validate_composition(bom.components)
    return schemas.BOMValidationResult(
        valid=not errors,
        total_weight_percentage=bom_validator.total_weight(bom.components),
        errors=errors,
    )


@router.post("/", response_model=schemas.BOMRead, status_code=201)
def create_bom(organization_id: str, bom: schemas.BOMCreate, db: Session = Depends(get_db)):
    """Validate and save a BOM as the item's next draft version"""
    return bom_validator.accept_bom(db, organization_id, bom)


@router.get("/{bom_id}", response_model=schemas.BOMRead)
def get_bom(organization_id: str, bom_id: int, db: Session = Depends(get_db)):
    return bom_validator.get_bom(db, organization_id, bom_id)


@router.post("/{bom_id}/approve", response_model=schemas.BOMRead)
def approve_bom(organization_id: str, bom_id: int, db: Session = Depends(get_db)):
    return bom_validator.approve_bom(db, organization_id, bom_id)


@router.get("/items/{item_code}/active", response_model=schemas.BOMRead)
def get_active_bom(organization_id: str, item_code: str, db: Session = Depends(get_db)):
    return bom_validator.get_active_bom(db, organization_id, item_code)


@router.post("/items/{item_code}/explode", response_model=List[schemas.ExplosionLine])
def explode_bom(organization_id: str, item_code: str, payload: schemas.BOMExplodeRequest,
                db: Session = Depends(get_db)):
    """Raw material requirements for a production quantity"""
    return bom_validator.explode_bom(db, organization_id, item_code, payload.quantity)
