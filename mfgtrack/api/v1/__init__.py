from .stages import router as stages_router
from .orders import router as orders_router
from .progress import router as progress_router
from .boms import router as boms_router
from .quality import router as quality_router
from .materials import router as materials_router

__all__ = ["stages_router", "orders_router", "progress_router", "boms_router", "quality_router", "materials_router"]
