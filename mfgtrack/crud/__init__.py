"""Persistence helpers

Every helper takes the organization id explicitly. Write helpers only add and
flush; the engine operation that calls them owns the transaction and commits
once, so a failure leaves nothing half written.
"""

from .stage import (
    get_stage,
    list_stages,
    find_active_by_sequence,
    add_stage,
)

from .order import (
    get_order,
    list_orders,
    uiorn_exists,
    add_order,
    get_order_progress,
    get_progress,
    update_progress_if_status,
)

from .bom import (
    list_versions,
    get_bom,
    list_active_boms,
    add_bom,
    deactivate_other_versions,
)

from .quality import (
    add_checkpoint,
    get_checkpoint,
    list_checkpoints,
)

from .material import (
    add_material,
    list_materials,
)

__all__ = [
    # Stage functions
    "get_stage",
    "list_stages",
    "find_active_by_sequence",
    "add_stage",

    # Order and progress functions
    "get_order",
    "list_orders",
    "uiorn_exists",
    "add_order",
    "get_order_progress",
    "get_progress",
    "update_progress_if_status",

    # BOM functions
    "list_versions",
    "get_bom",
    "list_active_boms",
    "add_bom",
    "deactivate_other_versions",

    # Quality functions
    "add_checkpoint",
    "get_checkpoint",
    "list_checkpoints",

    # Stage material functions
    "add_material",
    "list_materials",
]
