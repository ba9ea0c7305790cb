import httpx
import pytest

from selector_registry.api.services.selector_service import SelectorService, selector_service
from selector_registry.core.config import settings
from selector_registry.infrastructure.openchain.export_client import OpenChainExportClient

TRANSFER_SELECTOR = "0xa9059cbb"


@pytest.mark.anyio
async def test_lookup_returns_all_colliding_signatures(async_client):
    response = await async_client.get(f"/api/v1/selectors/{TRANSFER_SELECTOR}")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["kind"] == "FOUR"
    assert [s["signature"] for s in body["data"]["signatures"]] == [
        "transfer(address,uint256)",
        "many_msg_babbage(bytes1)",
    ]


@pytest.mark.anyio
async def test_lookup_unknown_selector_returns_404(async_client):
    response = await async_client.get("/api/v1/selectors/0xdeadbeef")

    assert response.status_code == 404
    assert response.json()["detail"]["error_code"] == "SELECTOR_NOT_FOUND"


@pytest.mark.anyio
@pytest.mark.parametrize(
    "selector, error_code",
    [("a9059cbb", "MISSING_PREFIX"), ("0xa9059c", "INVALID_LENGTH"), ("0xzz059cbb", "INVALID_DIGIT")],
)
async def test_lookup_malformed_selector_returns_400(async_client, selector, error_code):
    response = await async_client.get(f"/api/v1/selectors/{selector}")

    assert response.status_code == 400
    assert response.json()["detail"]["error_code"] == error_code


@pytest.mark.anyio
async def test_push_appends_signature(async_client):
    response = await async_client.post(
        "/api/v1/selectors/",
        json={"selector": TRANSFER_SELECTOR, "signature": "transfer(address,uint256)"},
    )

    assert response.status_code == 201
    signatures = response.json()["data"]["signatures"]
    assert len(signatures) == 3
    assert signatures[-1]["inputs"] == ["address", "uint256"]


@pytest.mark.anyio
async def test_push_rejects_unparseable_signature(async_client):
    response = await async_client.post(
        "/api/v1/selectors/",
        json={"selector": "0x12345678", "signature": "broken(uint7)"},
    )

    assert response.status_code == 400
    assert response.json()["detail"]["error_code"] == "INVALID_SIGNATURE"


@pytest.mark.anyio
async def test_list_is_paginated(async_client):
    response = await async_client.get("/api/v1/selectors/", params={"page": 2, "page_size": 3})

    assert response.status_code == 200
    body = response.json()
    assert body["pagination"] == {"page": 2, "page_size": 3, "total_count": 4, "total_pages": 2}
    assert len(body["data"]) == 1
    assert body["data"][0]["kind"] == "THIRTY_TWO"


@pytest.mark.anyio
async def test_stats(async_client, configured_export):
    response = await async_client.get("/api/v1/selectors/stats")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data == {
        "selectors": 4,
        "four_byte_selectors": 3,
        "thirty_two_byte_selectors": 1,
        "signatures": 5,
        "skipped_records": 1,
        "source": str(configured_export),
    }


@pytest.mark.anyio
async def test_missing_export_starts_empty(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "SELECTOR_DOWNLOAD_IF_MISSING", False, raising=False)

    registry = await selector_service.load(str(tmp_path / "missing.txt"))

    assert len(registry) == 0
    assert selector_service.source is None


@pytest.mark.anyio
async def test_missing_export_is_downloaded_when_enabled(monkeypatch, tmp_path, sample_export):
    monkeypatch.setattr(settings, "SELECTOR_DOWNLOAD_IF_MISSING", True, raising=False)
    monkeypatch.setattr(settings, "SELECTOR_FETCH_TIMEOUT", 10.0, raising=False)
    client = OpenChainExportClient(
        url="https://export.test/export",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, text=sample_export)),
    )
    path = tmp_path / "data" / "export.txt"

    service = SelectorService(client=client)
    registry = await service.load(str(path))

    assert path.exists()
    assert len(registry) == 4
    assert service.source == str(path)


@pytest.mark.anyio
async def test_health_reports_registry_size(async_client):
    response = await async_client.get("/health")

    assert response.status_code == 200
    assert response.json()["registry"]["selectors"] == 4
