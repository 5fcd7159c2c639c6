"""
API endpoint tests
"""

import pytest
from fastapi.testclient import TestClient
from api.main import app
from api.dependencies import get_db
from api.routes import health
from core.database import create_session_maker
from ingestion.reporting import write_report
from models import Product, SiteContent
from models.base import RunStatus
from schemas.report import MigrationReport


@pytest.fixture
def client(test_engine, test_settings, monkeypatch):
    """Create test client with database and settings overrides"""
    session_maker = create_session_maker(test_engine)

    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    monkeypatch.setattr(health, "settings", test_settings)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def test_root_lists_endpoints(client):
    response = client.get("/")

    assert response.status_code == 200
    assert set(response.json()["endpoints"]) == {"stats", "content"}


def test_health_without_migration_is_degraded(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["database_connected"] is True
    assert data["last_migration"] is None
    assert data["status"] == "degraded"
    assert response.headers["X-Request-ID"].startswith("req_")
    assert "X-API-Latency-ms" in response.headers


def test_health_after_successful_migration(client, test_settings):
    write_report(MigrationReport(status=RunStatus.SUCCEEDED), test_settings)

    data = client.get("/health").json()

    assert data["status"] == "healthy"
    assert data["last_migration"]["status"] == "succeeded"


def test_health_after_failed_migration(client, test_settings):
    write_report(MigrationReport(status=RunStatus.FAILED, error="data_validation: 2 errors"), test_settings)

    data = client.get("/health").json()

    assert data["status"] == "degraded"
    assert data["last_migration"]["error"] == "data_validation: 2 errors"


@pytest.mark.asyncio
async def test_stats_counts_tables(client, db_session):
    db_session.add(Product(name="Grout GP", description="Grout", category_id="construction"))
    db_session.add(Product(name="Curemax WB", description="Curing", category_id="construction"))
    await db_session.commit()

    response = client.get("/stats")

    assert response.status_code == 200
    data = response.json()
    assert data["record_counts"]["products"] == 2
    assert data["record_counts"]["clients"] == 0
    assert data["total_records"] == 2
    assert data["last_migration"] is None


@pytest.mark.asyncio
async def test_content_filters(client, db_session):
    db_session.add(SiteContent(page="home", section="hero", content_key="content", content_value="Welcome"))
    db_session.add(SiteContent(page="home", section="intro", content_key="content", content_value="About us"))
    db_session.add(SiteContent(page="contact", section="address", content_key="content", content_value="Ahmedabad"))
    await db_session.commit()

    all_items = client.get("/content").json()
    home = client.get("/content", params={"page": "home"}).json()
    hero = client.get("/content", params={"page": "home", "section": "hero"}).json()

    assert all_items["total"] == 3
    assert [i["section"] for i in home["items"]] == ["hero", "intro"]
    assert hero["total"] == 1
    assert hero["items"][0]["content_value"] == "Welcome"


def test_caller_request_id_is_echoed(client):
    response = client.get("/", headers={"X-Request-ID": "req_from_caller"})

    assert response.headers["X-Request-ID"] == "req_from_caller"
