import pytest
from fastapi.testclient import TestClient

from stockroom.core.config import Settings
from stockroom.core.database import Database
from stockroom.main import create_app
from stockroom.services.ledger import TransactionLedger
from stockroom.services.registry import SkuRegistry


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        AUTO_CREATE_TABLES=True,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def database(settings):
    db = Database(settings.DATABASE_URL)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    s = database.session()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def registry(session):
    return SkuRegistry(session)


@pytest.fixture
def ledger(session):
    return TransactionLedger(session)


@pytest.fixture
def make_sku(registry):
    def _make(name="Ceramic Floor Tile", category="Tiles", **kwargs):
        return registry.create(name=name, category=category, **kwargs)

    return _make


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def create_sku(client):
    def _create(**overrides):
        payload = {"name": "Door Handle SS", "category": "Hardware"}
        payload.update(overrides)
        res = client.post("/api/skus", json=payload)
        assert res.status_code == 201, res.text
        return res.json()["data"]

    return _create
