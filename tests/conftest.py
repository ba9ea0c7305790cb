import os
import sys

import pytest
from httpx import ASGITransport, AsyncClient
from asgi_lifespan import LifespanManager

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)
os.environ.setdefault("ANYIO_BACKEND", "asyncio")

from selector_registry.core.config import settings  # noqa: E402
from selector_registry.main import app  # noqa: E402

TRANSFER_SELECTOR = "0xa9059cbb"
TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"

SAMPLE_EXPORT = "\n".join(
    [
        f"{TRANSFER_SELECTOR},transfer(address,uint256)",
        "0x095ea7b3,approve(address,uint256)",
        f"{TRANSFER_SELECTOR},many_msg_babbage(bytes1)",
        "0x18160ddd,totalSupply()",
        "0x12345678,broken(uint7)",
        f"{TRANSFER_TOPIC},Transfer(address,address,uint256)",
        "",
    ]
)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def sample_export() -> str:
    """Small export payload with a collision, an event and one unparseable signature."""
    return SAMPLE_EXPORT


@pytest.fixture
def export_file(tmp_path, sample_export):
    """Export payload written to a temporary file."""
    path = tmp_path / "exports" / "openchain_export.txt"
    path.parent.mkdir(parents=True)
    path.write_text(sample_export, encoding="utf-8")
    return path


@pytest.fixture
def configured_export(monkeypatch, export_file):
    """Point the application at the temporary export file."""
    monkeypatch.setattr(settings, "SELECTOR_EXPORT_PATH", str(export_file), raising=False)
    monkeypatch.setattr(settings, "SELECTOR_LOAD_ON_STARTUP", True, raising=False)
    monkeypatch.setattr(settings, "SELECTOR_DOWNLOAD_IF_MISSING", False, raising=False)
    return export_file


@pytest.fixture
async def async_client(configured_export):
    """Shared HTTPX async client with FastAPI lifespan handling."""
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client
