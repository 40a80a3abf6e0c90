import os
import sys
import tempfile
from pathlib import Path

import pytest

# Ensure project root is on sys.path so tests can import the 'mfgtrack' package
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Point the engine at a throwaway SQLite file before any mfgtrack import reads the settings
TEST_DB = Path(tempfile.gettempdir()) / "mfgtrack_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB}"

from fastapi.testclient import TestClient

from mfgtrack import schemas
from mfgtrack.core import orders, stage_catalog
from mfgtrack.db import Base, SessionLocal, engine
from mfgtrack.main import app

ORG = "org-acme"


@pytest.fixture(autouse=True)
def reset_db():
    # Drop all and re-create so every test starts from an empty schema
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def stages(db):
    """The default five-stage pipeline for ORG"""
    return stage_catalog.seed_default_stages(db, ORG)


@pytest.fixture
def order(db, stages):
    payload = schemas.OrderCreate(item_code="LAM-001", item_name="Laminated pouch", order_quantity=1000)
    return orders.create_order(db, ORG, payload)
