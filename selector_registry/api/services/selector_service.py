"""
Selector Service Layer.
Owns the process-wide registry and the lookup logic behind the selector endpoints.
"""

import asyncio
import math
from itertools import islice
from pathlib import Path
from typing import List, Optional, Tuple

from selector_registry.api.dto.selector_dto import (
    RegistryStatsDTO,
    SelectorEntryDTO,
    SignatureDTO,
)
from selector_registry.core.config import settings
from selector_registry.core.exceptions import SelectorNotFoundError
from selector_registry.core.logging import get_logger
from selector_registry.domain.models.selector import Selector, SelectorKind
from selector_registry.domain.models.signature import ParsedSignature, parse_signature
from selector_registry.domain.parsing import parse_selector
from selector_registry.domain.registry import SelectorRegistry
from selector_registry.infrastructure.openchain.export_client import (
    OpenChainExportClient,
    export_client,
)

logger = get_logger(__name__)


class SelectorService:
    """Service class for selector lookups."""

    def __init__(self, client: Optional[OpenChainExportClient] = None):
        """Initialize selector service with an empty registry."""
        self.client = client or export_client
        self.registry = SelectorRegistry()
        self.source: Optional[str] = None

    async def load(self, path: Optional[str] = None) -> SelectorRegistry:
        """
        Load the registry from the export file, downloading it first when
        missing and SELECTOR_DOWNLOAD_IF_MISSING is set.

        Args:
            path: Export file (defaults to SELECTOR_EXPORT_PATH)

        Returns:
            The loaded registry
        """
        export_path = Path(path or settings.SELECTOR_EXPORT_PATH)

        if not export_path.exists():
            if not settings.SELECTOR_DOWNLOAD_IF_MISSING:
                logger.warning(
                    f"Export file {export_path} not found, starting with an empty registry"
                )
                self.registry = SelectorRegistry()
                self.source = None
                return self.registry

            await self.client.fetch_to_file(
                export_path, timeout=settings.SELECTOR_FETCH_TIMEOUT
            )

        self.registry = await asyncio.to_thread(
            SelectorRegistry.from_file,
            export_path,
            settings.STRICT_SIGNATURE_PARSING,
        )
        self.source = str(export_path)
        return self.registry

    def lookup(self, selector_hex: str) -> Tuple[Selector, Tuple[ParsedSignature, ...]]:
        """
        Get every signature known for a selector.

        Raises:
            InvalidHexError, InvalidLengthError: If the selector is malformed
            SelectorNotFoundError: If the selector is unknown
        """
        selector = parse_selector(selector_hex)
        signatures = self.registry.get(selector)
        if signatures is None:
            raise SelectorNotFoundError(selector.hex())
        return selector, signatures

    def push(self, selector_hex: str, signature_text: str) -> Tuple[Selector, Tuple[ParsedSignature, ...]]:
        """
        Add a signature for a selector. Signature text is always parsed strictly.

        Raises:
            InvalidHexError, InvalidLengthError: If the selector is malformed
            InvalidSignatureError: If the signature cannot be parsed
        """
        selector = parse_selector(selector_hex)
        signature = parse_signature(signature_text)
        self.registry.push(selector, signature)
        logger.info(f"Pushed {signature.signature} for {selector.hex()}")
        return selector, self.registry.get(selector)

    def list_entries(self, page: int, page_size: int) -> Tuple[List[SelectorEntryDTO], int]:
        """
        Get one page of registry entries, in insertion order.

        Returns:
            Tuple of (entries, total_count)
        """
        items = self.registry.items()
        start = (page - 1) * page_size
        page_items = islice(items.items(), start, start + page_size)
        entries = [to_entry_dto(selector, signatures) for selector, signatures in page_items]
        return entries, len(items)

    def stats(self) -> RegistryStatsDTO:
        """Get registry size figures."""
        return RegistryStatsDTO(
            selectors=len(self.registry),
            four_byte_selectors=self.registry.kind_count(SelectorKind.FOUR),
            thirty_two_byte_selectors=self.registry.kind_count(SelectorKind.THIRTY_TWO),
            signatures=self.registry.signature_count(),
            skipped_records=self.registry.skipped_records,
            source=self.source,
        )


def to_entry_dto(selector: Selector, signatures) -> SelectorEntryDTO:
    """Convert a registry bucket to its DTO."""
    return SelectorEntryDTO(
        selector=selector.hex(),
        kind=selector.kind.name,
        signatures=[
            SignatureDTO(
                name=signature.name,
                inputs=list(signature.inputs),
                signature=signature.signature,
            )
            for signature in signatures
        ],
    )


def total_pages(total_count: int, page_size: int) -> int:
    return math.ceil(total_count / page_size) if total_count else 0


# Global selector service instance
selector_service = SelectorService()
