"""Health probes — liveness always up, readiness follows the database."""

import storefront.infrastructure.database as db_module


async def test_liveness_returns_healthy(client):
    res = await client.get("/api/v1/health/")

    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_test_database(client):
    res = await client.get("/api/v1/health/ready")

    assert res.status_code == 200
    assert res.json()["checks"] == {"database": "healthy"}
    assert res.json()["database"] == {"dialect": "sqlite"}


async def test_readiness_without_database_returns_503(client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)

    res = await client.get("/api/v1/health/ready")

    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"
