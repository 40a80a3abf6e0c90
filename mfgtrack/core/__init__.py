"""Workflow engine

Stage catalog, BOM composition validation, quality gate, progress state
machine, auto-progression and stage material flow. Every operation takes
the organization id explicitly and either commits fully or raises with
nothing persisted.
"""

from . import bom_validator, material_flow, orders, progression, quality_gate, stage_catalog, workflow
from .exceptions import (
    WorkflowError,
    ValidationError,
    DuplicateSequenceError,
    QualityCheckpointRequired,
    InvalidTransition,
    NoEligibleStage,
    InsufficientStock,
    RecordNotFound,
    NoActiveBOM,
)

__all__ = [
    "bom_validator",
    "material_flow",
    "orders",
    "progression",
    "quality_gate",
    "stage_catalog",
    "workflow",
    "WorkflowError",
    "ValidationError",
    "DuplicateSequenceError",
    "QualityCheckpointRequired",
    "InvalidTransition",
    "NoEligibleStage",
    "InsufficientStock",
    "RecordNotFound",
    "NoActiveBOM",
]
