"""Database models

All SQLAlchemy ORM models of the workflow engine.
"""

from ..database.connection import Base
from .enums import (
    StageType,
    OrderStatus,
    ProgressStatus,
    CheckType,
    CheckResult,
    ApprovalStatus,
    ConsumptionType,
    MaterialDirection,
    MaterialInputType,
    MaterialOutputType,
)
from .stage import Stage
from .order import Order
from .progress import WorkflowProgress
from .bom import BOMMaster, BOMComponent
from .quality import QualityCheckpoint
from .material import StageMaterial

__all__ = [
    "Base",
    "StageType",
    "OrderStatus",
    "ProgressStatus",
    "CheckType",
    "CheckResult",
    "ApprovalStatus",
    "ConsumptionType",
    "MaterialDirection",
    "MaterialInputType",
    "MaterialOutputType",
    "Stage",
    "Order",
    "WorkflowProgress",
    "BOMMaster",
    "BOMComponent",
    "QualityCheckpoint",
    "StageMaterial",
]
