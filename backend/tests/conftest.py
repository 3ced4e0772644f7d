import itertools
import os
import tempfile
from datetime import datetime, timedelta, timezone
from decimal import Decimal

# point the app at a throwaway database before anything imports app.config
_tmp = tempfile.gettempdir()
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_tmp, "storefront_test.db")
os.environ["DB_LOCK_PATH"] = os.path.join(_tmp, "storefront_test.lock")
os.environ["ENABLE_SCHEDULER"] = "false"
os.environ["ADMIN_USER_IDS"] = '["admin-1"]'

import pytest
from fastapi.testclient import TestClient

from app.db import Base, SessionLocal, engine, import_models
from app.main import app
from app.repositories.user_repo import UserRepository
from app.services.catalog_service import CatalogService

USER = {"X-User-Id": "user-1"}
OTHER_USER = {"X-User-Id": "user-2"}
ADMIN = {"X-User-Id": "admin-1"}


@pytest.fixture(autouse=True)
def fresh_schema():
    # Recreate DB fresh for every test
    import_models()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user_id(db):
    UserRepository(db).upsert("user-1", email="user1@example.com")
    UserRepository(db).upsert("user-2", email="user2@example.com")
    db.commit()
    return "user-1"


@pytest.fixture
def make_category(db):
    counter = itertools.count(1)

    def _make(**overrides):
        n = next(counter)
        fields = {"name": f"Category {n}", "slug": f"category-{n}"}
        fields.update(overrides)
        return CatalogService(db).create_category(**fields)

    return _make


@pytest.fixture
def make_product(db):
    """Products get strictly increasing created_at so "newest" order is deterministic."""
    counter = itertools.count(1)
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _make(**overrides):
        n = next(counter)
        images = overrides.pop("images", None)
        fields = {
            "name": f"Saree {n}",
            "slug": f"saree-{n}",
            "price": Decimal("1000.00"),
            "stock": 10,
            "created_at": base + timedelta(minutes=n),
        }
        fields.update(overrides)
        return CatalogService(db).create_product(images=images, **fields)

    return _make
