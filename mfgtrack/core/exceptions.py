"""Typed errors raised by the workflow engine.

Every rule violation surfaces as one of these; the API layer maps them to
HTTP responses in one place (see ``mfgtrack.main``).
"""

from typing import Any, Dict, List, Optional


class WorkflowError(Exception):
    """Base class for engine errors."""

    code = "workflow_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def extra(self) -> Dict[str, Any]:
        return {}

    def to_dict(self) -> Dict[str, Any]:
        payload = {"error": self.code, "detail": self.message}
        payload.update(self.extra())
        return payload


class ValidationError(WorkflowError):
    """Input violates one or more rules; ``errors`` lists all of them."""

    code = "validation_error"

    def __init__(self, errors: List[str]):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))

    def extra(self):
        return {"errors": self.errors}


class DuplicateSequenceError(WorkflowError):
    code = "duplicate_sequence"

    def __init__(self, organization_id: str, sequence_order: int, existing_stage: Optional[str] = None):
        self.organization_id = organization_id
        self.sequence_order = sequence_order
        msg = f"Sequence order {sequence_order} is already used by an active stage"
        if existing_stage:
            msg += f" ({existing_stage})"
        super().__init__(msg)

    def extra(self):
        return {"sequence_order": self.sequence_order}


class QualityCheckpointRequired(WorkflowError):
    """A stage cannot start until its checkpoint of ``check_type`` has passed."""

    code = "quality_checkpoint_required"

    def __init__(self, check_type: str, reason: str = ""):
        self.check_type = check_type
        super().__init__(reason or f"A passed {check_type} quality checkpoint is required")

    def extra(self):
        return {"check_type": self.check_type}


class InvalidTransition(WorkflowError):
    code = "invalid_transition"

    def __init__(self, current: str, target: str, reason: str = ""):
        self.current = current
        self.target = target
        msg = f"Cannot move stage from {current} to {target}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)

    def extra(self):
        return {"current": self.current, "target": self.target}


class NoEligibleStage(WorkflowError):
    code = "no_eligible_stage"


class InsufficientStock(WorkflowError):
    """Raised by material issuance checks; passed through the engine unchanged."""

    code = "insufficient_stock"

    def __init__(self, item_code: str, required: float, available: float):
        self.item_code = item_code
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient stock for {item_code}: required {required:g}, available {available:g}"
        )

    def extra(self):
        return {"item_code": self.item_code, "required": self.required, "available": self.available}


class RecordNotFound(WorkflowError):
    code = "not_found"


class NoActiveBOM(RecordNotFound):
    code = "no_active_bom"


__all__ = [
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
