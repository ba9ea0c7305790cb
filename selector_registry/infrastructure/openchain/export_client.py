"""
Client for the OpenChain signature database export.

Download speed varies a lot, from seconds to an hour or more, so no timeout
is applied unless one is given.
"""

import time
from pathlib import Path
from typing import Optional, Union

import httpx

from selector_registry.core.config import settings
from selector_registry.core.exceptions import NetworkError, RegistryIOError
from selector_registry.core.logging import get_logger, log_export_download

logger = get_logger(__name__)


class OpenChainExportClient:
    """Downloads the raw export text and optionally persists it to disk."""

    def __init__(
        self,
        url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize export client.

        Args:
            url: Export URL (defaults to OPENCHAIN_EXPORT_URL)
            transport: Custom httpx transport, mainly for tests
        """
        self.url = url or settings.OPENCHAIN_EXPORT_URL
        self.transport = transport

    async def fetch(self, timeout: Optional[float] = None) -> str:
        """
        Download the latest export. The result is not persisted.

        Args:
            timeout: Request timeout in seconds, None for no timeout

        Returns:
            Raw export text

        Raises:
            NetworkError: If the request fails or returns a non-success status
        """
        logger.info(f"Downloading signature export from {self.url}")
        started = time.monotonic()

        async with httpx.AsyncClient(transport=self.transport, timeout=timeout) as client:
            try:
                response = await client.get(self.url)
            except httpx.HTTPError as exc:
                raise NetworkError(self.url, details={"reason": str(exc)}) from exc

        if not response.is_success:
            raise NetworkError(self.url, status_code=response.status_code)

        raw = response.text
        log_export_download(
            url=self.url, size=len(raw), duration=time.monotonic() - started
        )
        return raw

    async def fetch_to_file(
        self, path: Union[str, Path], timeout: Optional[float] = None
    ) -> None:
        """
        Download the latest export and write it to ``path``.

        An existing file is overwritten; missing parent directories are created.

        Raises:
            NetworkError: If the download fails
            RegistryIOError: If writing the file fails
        """
        raw = await self.fetch(timeout=timeout)

        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(raw, encoding="utf-8")
        except OSError as exc:
            raise RegistryIOError(str(path), {"reason": str(exc)}) from exc

        logger.info(f"Signature export written to {path}")


# Global export client instance
export_client = OpenChainExportClient()
