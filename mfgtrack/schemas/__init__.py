"""API data models

All Pydantic request/response models.
"""

from .stage import StageCreate, StageRead, StageSequenceUpdate, StageActiveUpdate
from .order import OrderCreate, OrderRead, OrderSummary, StageSnapshot, AdvanceResponse
from .progress import ProgressRead, TransitionRequest, ProgressUpdate
from .bom import (
    BOMComponentCreate,
    BOMCreate,
    BOMComponentRead,
    BOMRead,
    BOMValidationResult,
    BOMExplodeRequest,
    ExplosionLine,
)
from .quality import CheckpointCreate, CheckpointRead, CheckpointResultUpdate, ReleaseDecision
from .material import StageMaterialCreate, StageMaterialRead, MaterialFlowSummary

__all__ = [
    "StageCreate",
    "StageRead",
    "StageSequenceUpdate",
    "StageActiveUpdate",
    "OrderCreate",
    "OrderRead",
    "OrderSummary",
    "StageSnapshot",
    "AdvanceResponse",
    "ProgressRead",
    "TransitionRequest",
    "ProgressUpdate",
    "BOMComponentCreate",
    "BOMCreate",
    "BOMComponentRead",
    "BOMRead",
    "BOMValidationResult",
    "BOMExplodeRequest",
    "ExplosionLine",
    "CheckpointCreate",
    "CheckpointRead",
    "CheckpointResultUpdate",
    "ReleaseDecision",
    "StageMaterialCreate",
    "StageMaterialRead",
    "MaterialFlowSummary",
]
