"""Tests for the simulation and catalog endpoints."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

BASE = "/api/v1/simulation"


async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["scheduler"] == "stopped"
    assert data["snapshot_version"] == 0


async def test_initial_snapshot(client: AsyncClient):
    resp = await client.get(f"{BASE}/snapshot")
    assert resp.status_code == 200
    data = resp.json()
    assert data["version"] == 0
    assert data["timestamp"] is None
    assert data["energy"]["battery_level"] == 75
    assert data["energy"]["net_flow"] == pytest.approx(-3.7)
    assert data["labels"]["grid_direction"] == "Import"
    assert data["stats"]["total_savings"] == 0
    assert data["last_breakdown"] is None
    assert data["pricing_band"] is None
    assert data["negotiations"] == []


async def test_manual_tick(client: AsyncClient):
    resp = await client.post(f"{BASE}/tick")
    assert resp.status_code == 200
    data = resp.json()
    assert data["version"] == 1
    assert data["timestamp"].startswith("2024-06-01T18:00")
    assert data["pricing_band"] == "peak"
    assert data["pricing_label"] == "Peak"
    assert 0.18 <= data["energy"]["grid_price"] <= 0.26
    assert data["stats"]["total_savings"] > 0
    assert data["last_breakdown"]["energy_saved"] >= 0.1

    resp = await client.get(f"{BASE}/snapshot")
    assert resp.json()["version"] == 1


async def test_energy_and_stats(client: AsyncClient):
    await client.post(f"{BASE}/tick")
    energy = (await client.get(f"{BASE}/energy")).json()
    assert energy["total_generation"] == pytest.approx(
        energy["solar_generation"] + energy["wind_generation"]
    )
    assert energy["weather_condition"] == "sunny"

    stats = (await client.get(f"{BASE}/stats")).json()
    assert set(stats) == {
        "total_savings",
        "energy_optimized",
        "co2_reduced",
        "social_cost_saved",
        "grid_stability_contributions",
    }


async def test_logs_fill_and_stay_bounded(client: AsyncClient):
    for _ in range(30):
        await client.post(f"{BASE}/tick")

    negotiations = (await client.get(f"{BASE}/logs/negotiations")).json()
    decisions = (await client.get(f"{BASE}/logs/decisions")).json()
    assert 0 < len(negotiations) + len(decisions)
    assert len(negotiations) <= 5
    assert len(decisions) <= 5

    ids = [e["id"] for e in negotiations]
    assert ids == sorted(ids, reverse=True)
    for event in decisions:
        assert event["impact"].endswith("% efficiency")
        assert event["payload"]["implementation_steps"]


async def test_unknown_log(client: AsyncClient):
    resp = await client.get(f"{BASE}/logs/alerts")
    assert resp.status_code == 404


async def test_start_and_stop(client: AsyncClient):
    resp = await client.post(f"{BASE}/start")
    assert resp.status_code == 200
    assert resp.json()["running"] is True

    # Starting twice is a no-op
    resp = await client.post(f"{BASE}/start")
    assert resp.json()["running"] is True

    resp = await client.get(f"{BASE}/status")
    assert resp.json()["period_s"] == pytest.approx(2.0)

    resp = await client.post(f"{BASE}/stop")
    assert resp.json()["running"] is False

    resp = await client.post(f"{BASE}/stop")
    assert resp.status_code == 200


async def test_status_counts_manual_ticks(client: AsyncClient):
    await client.post(f"{BASE}/tick")
    await client.post(f"{BASE}/tick")
    data = (await client.get(f"{BASE}/status")).json()
    assert data["tick_count"] == 2
    assert data["snapshot_version"] == 2
    assert data["running"] is False


async def test_catalogs(client: AsyncClient):
    negotiations = (await client.get("/api/v1/catalogs/negotiations")).json()
    decisions = (await client.get("/api/v1/catalogs/decisions")).json()
    agents = (await client.get("/api/v1/catalogs/agents")).json()
    assert len(negotiations) == 6
    assert len(decisions) == 6
    assert len(agents) == 5
    assert negotiations[0]["participant_count"] == 3
    assert decisions[0]["confidence"] == "94%"
    assert {a["id"] for a in agents} == {"home", "ev", "battery", "solar", "wind"}


async def test_request_id_header(client: AsyncClient):
    resp = await client.get("/health", headers={"X-Request-ID": "abc123"})
    assert resp.headers["X-Request-ID"] == "abc123"

    resp = await client.get("/health")
    assert len(resp.headers["X-Request-ID"]) == 8
