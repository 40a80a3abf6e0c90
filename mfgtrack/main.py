"""FastAPI application entry point

Manufacturing order workflow service: stage catalog, BOM composition,
order progress tracking and quality gating.
- database sessions come from dependency injection
- engine errors are translated to HTTP responses in one place
"""

import logging

from fastapi import FastAPI, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from .api.v1 import (
    stages_router,
    orders_router,
    progress_router,
    boms_router,
    quality_router,
    materials_router,
)
from .config.settings import settings
from .core.exceptions import WorkflowError, ValidationError, RecordNotFound
from .database.connection import get_db

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_TITLE, description=settings.APP_DESCRIPTION, version=settings.APP_VERSION)

app.include_router(stages_router, prefix="/api/v1")
app.include_router(orders_router, prefix="/api/v1")
app.include_router(progress_router, prefix="/api/v1")
app.include_router(boms_router, prefix="/api/v1")
app.include_router(quality_router, prefix="/api/v1")
app.include_router(materials_router, prefix="/api/v1")


def status_for(exc: WorkflowError) -> int:
    if isinstance(exc, ValidationError):
        return 422
    if isinstance(exc, RecordNotFound):
        return 404
    return 409


@app.exception_handler(WorkflowError)
def workflow_error_handler(request: Request, exc: WorkflowError):
    status_code = status_for(exc)
    logger.warning("%s %s rejected with %s: %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Check that the database is reachable"""
    try:
        db.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Database health check failed")
        raise HTTPException(status_code=503, detail="Database connection failed")
    return {"status": "healthy", "database": "reachable"}


@app.get("/")
def read_root():
    return {"service": settings.APP_TITLE, "status": "running"}
