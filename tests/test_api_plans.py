import pytest
from httpx import AsyncClient

from .factories import build_bundle_payload


async def _create_plan(api_client: AsyncClient, **overrides) -> dict:
    body = {"name": "January roster", "inputs": build_bundle_payload(**overrides)}
    response = await api_client.post("/api/plans/", json=body)
    assert response.status_code == 201
    return response.json()


@pytest.mark.anyio("asyncio")
async def test_plan_crud(api_client: AsyncClient) -> None:
    created = await _create_plan(api_client)
    plan_id = created["id"]
    assert created["month"] == 1
    assert created["year"] == 2025

    listing = await api_client.get("/api/plans/")
    assert [plan["id"] for plan in listing.json()] == [plan_id]

    update = await api_client.put(
        f"/api/plans/{plan_id}",
        json={"name": "March roster", "inputs": build_bundle_payload(month=3, year=2026)},
    )
    assert update.status_code == 200
    assert update.json()["name"] == "March roster"
    assert (update.json()["month"], update.json()["year"]) == (3, 2026)

    fetched = await api_client.get(f"/api/plans/{plan_id}")
    assert fetched.json()["inputs"]["month"] == 3

    delete = await api_client.delete(f"/api/plans/{plan_id}")
    assert delete.status_code == 204
    missing = await api_client.get(f"/api/plans/{plan_id}")
    assert missing.status_code == 404


@pytest.mark.anyio("asyncio")
async def test_create_plan_validates_inputs(api_client: AsyncClient) -> None:
    body = {"name": "Broken", "inputs": build_bundle_payload(staff=[])}

    response = await api_client.post("/api/plans/", json=body)

    assert response.status_code == 422


@pytest.mark.anyio("asyncio")
async def test_reassignment_keeps_numbered_runs(api_client: AsyncClient) -> None:
    plan = await _create_plan(api_client)

    first = await api_client.post(f"/api/plans/{plan['id']}/generate", json={"seed": 10})
    second = await api_client.post(f"/api/plans/{plan['id']}/generate", json={})

    assert first.status_code == 201
    assert second.status_code == 201
    assert first.json()["version_label"] == "v1"
    assert first.json()["seed"] == 10
    assert first.json()["result"]["seed"] == 10
    assert second.json()["version_label"] == "v2"
    assert second.json()["seed"] is not None

    runs = await api_client.get(f"/api/plans/{plan['id']}/runs")
    assert [run["version_label"] for run in runs.json()] == ["v2", "v1"]

    latest = await api_client.get(f"/api/plans/{plan['id']}/runs/latest")
    assert latest.json()["id"] == second.json()["id"]


@pytest.mark.anyio("asyncio")
async def test_latest_run_views(api_client: AsyncClient) -> None:
    plan = await _create_plan(api_client)
    await api_client.post(f"/api/plans/{plan['id']}/generate", json={"seed": 3})

    weeks = await api_client.get(f"/api/plans/{plan['id']}/runs/latest/weeks")
    statistics = await api_client.get(f"/api/plans/{plan['id']}/runs/latest/statistics")

    assert weeks.status_code == 200
    assert len(weeks.json()) == 5
    assert weeks.json()[1]["headers"][0] == "Date"
    assert statistics.status_code == 200
    assert {item["name"] for item in statistics.json()} <= {"Kim", "Lee", "Park", "Choi", "Jung"}


@pytest.mark.anyio("asyncio")
async def test_missing_plan_and_run_return_404(api_client: AsyncClient) -> None:
    assert (await api_client.get("/api/plans/999")).status_code == 404
    assert (await api_client.post("/api/plans/999/generate", json={})).status_code == 404
    assert (await api_client.get("/api/plans/999/runs")).status_code == 404

    plan = await _create_plan(api_client)
    latest = await api_client.get(f"/api/plans/{plan['id']}/runs/latest")
    assert latest.status_code == 404
    assert latest.json()["detail"] == "Duty plan has not been generated yet"


@pytest.mark.anyio("asyncio")
async def test_generate_rejects_out_of_range_seed(api_client: AsyncClient) -> None:
    plan = await _create_plan(api_client)

    response = await api_client.post(f"/api/plans/{plan['id']}/generate", json={"seed": -1})

    assert response.status_code == 422
