import pytest
from httpx import AsyncClient


@pytest.mark.anyio("asyncio")
async def test_health_check(api_client: AsyncClient) -> None:
    response = await api_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.anyio("asyncio")
async def test_read_settings(api_client: AsyncClient) -> None:
    response = await api_client.get("/api/system/settings")

    assert response.status_code == 200
    payload = response.json()
    assert payload["project"] == "Duty Roster API"
    assert payload["schedule_year"] == 2025
    assert payload["aversion_cap"] == 2


@pytest.mark.anyio("asyncio")
async def test_list_holidays_for_the_schedule_year(api_client: AsyncClient) -> None:
    response = await api_client.get("/api/system/holidays")

    assert response.status_code == 200
    holidays = response.json()
    assert [item["date"] for item in holidays] == ["2025-01-01", "2025-05-05"]
    assert holidays[1]["localized_name"] == "어린이날"


@pytest.mark.anyio("asyncio")
async def test_list_holidays_for_another_year(api_client: AsyncClient) -> None:
    response = await api_client.get("/api/system/holidays", params={"year": 2026})

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.anyio("asyncio")
async def test_list_holidays_rejects_out_of_range_year(api_client: AsyncClient) -> None:
    response = await api_client.get("/api/system/holidays", params={"year": 0})

    assert response.status_code == 422
