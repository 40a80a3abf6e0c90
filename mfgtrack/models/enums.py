"""Enumerations shared by the ORM models, schemas and the workflow engine"""

import enum


class StageType(str, enum.Enum):
    punching = "punching"
    printing = "printing"
    lamination = "lamination"
    coating = "coating"
    slitting_packaging = "slitting_packaging"
    rework = "rework"


class OrderStatus(str, enum.Enum):
    draft = "draft"
    in_production = "in_production"
    completed = "completed"
    on_hold = "on_hold"
    cancelled = "cancelled"


class ProgressStatus(str, enum.Enum):
    pending = "pending"
    in_progress = "in_progress"
    on_hold = "on_hold"
    completed = "completed"
    cancelled = "cancelled"


class CheckType(str, enum.Enum):
    pre_stage = "pre_stage"
    post_stage = "post_stage"


class CheckResult(str, enum.Enum):
    pending = "pending"
    passed = "passed"
    failed = "failed"
    in_review = "in_review"


class ApprovalStatus(str, enum.Enum):
    draft = "draft"
    pending = "pending"
    approved = "approved"


class ConsumptionType(str, enum.Enum):
    direct = "direct"
    indirect = "indirect"
    byproduct = "byproduct"


class MaterialDirection(str, enum.Enum):
    input = "input"
    output = "output"


class MaterialInputType(str, enum.Enum):
    substrate_carryforward = "substrate_carryforward"
    fresh_material = "fresh_material"
    bom_component = "bom_component"


class MaterialOutputType(str, enum.Enum):
    substrate_forward = "substrate_forward"
    waste_material = "waste_material"
    finished_product = "finished_product"
    rework_material = "rework_material"
