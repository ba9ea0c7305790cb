"""
In-memory registry of selectors and the signatures they were derived from.
Data must follow the format of the OpenChain signature database export.
"""

from collections import Counter
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from selector_registry.core.exceptions import RegistryIOError, SelectorRegistryException
from selector_registry.core.logging import get_logger, log_registry_load
from selector_registry.domain.models.selector import Selector, SelectorKind
from selector_registry.domain.models.signature import ParsedSignature, clear_parse_cache
from selector_registry.domain.parsing import ParsedRecord, parse_line

logger = get_logger(__name__)


class SelectorRegistry:
    """
    Mapping from selector to every signature known for it.

    4-byte selectors in particular collide, so a selector can map to several
    signatures. They are kept in the order they were added; no deduplication.
    Not safe for concurrent mutation.
    """

    def __init__(self, records: Iterable[ParsedRecord] = ()):
        self._items: Dict[Selector, Tuple[ParsedSignature, ...]] = {}
        self._kind_counts: Counter = Counter()
        self._signature_count = 0
        self.skipped_records = 0
        for selector, signature in records:
            self._insert(selector, signature)

    @classmethod
    def from_raw(cls, raw: str, strict_signatures: bool = False) -> "SelectorRegistry":
        """
        Create a registry from raw export text.

        Args:
            raw: Export payload, one record per line
            strict_signatures: Raise on unparseable signature text instead of dropping it

        Returns:
            SelectorRegistry with every parsed record

        Raises:
            SelectorRegistryException: On the first malformed record, with its
                1-based ``line_number`` in the details. Nothing is returned.
        """
        lines = raw.split("\n")
        records: List[ParsedRecord] = []
        skipped = 0

        try:
            for line_number, line in enumerate(lines, start=1):
                line = line.removesuffix("\r")
                try:
                    record = parse_line(line, strict_signatures=strict_signatures)
                except SelectorRegistryException as exc:
                    exc.details.setdefault("line_number", line_number)
                    raise
                if record is not None:
                    records.append(record)
                elif line:
                    skipped += 1
        finally:
            clear_parse_cache()

        registry = cls(records)
        logger.debug(
            "Parsed export payload",
            lines=len(lines),
            records=len(records),
            skipped=skipped,
        )
        registry.skipped_records = skipped
        return registry

    @classmethod
    def from_file(
        cls, path: Union[str, Path], strict_signatures: bool = False
    ) -> "SelectorRegistry":
        """
        Create a registry from an export file.

        Raises:
            RegistryIOError: If the file cannot be read or is not valid UTF-8
            SelectorRegistryException: If it contains a malformed record
        """
        path = Path(path)
        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise RegistryIOError(str(path), {"reason": str(exc)}) from exc

        registry = cls.from_raw(raw, strict_signatures=strict_signatures)
        log_registry_load(
            source=str(path),
            lines=raw.count("\n") + 1,
            selectors=len(registry),
            signatures=registry.signature_count(),
            skipped=registry.skipped_records,
        )
        return registry

    def items(self) -> Mapping[Selector, Tuple[ParsedSignature, ...]]:
        """Return a read-only view of all known selectors. Buckets are tuples."""
        return MappingProxyType(self._items)

    def get(self, selector: Selector) -> Optional[Tuple[ParsedSignature, ...]]:
        """
        Return the signatures known for ``selector``, or None.

        Several may be returned on collisions; picking one is up to the caller.
        """
        return self._items.get(selector)

    def push(self, selector: Selector, signature: ParsedSignature) -> None:
        """
        Add a signature for ``selector``.

        Does not check for duplicates. Kept in memory only, never persisted.
        """
        self._insert(selector, signature)

    def signature_count(self) -> int:
        return self._signature_count

    def kind_count(self, kind: SelectorKind) -> int:
        """Number of distinct selectors of the given kind."""
        return self._kind_counts[kind]

    def _insert(self, selector: Selector, signature: ParsedSignature) -> None:
        bucket = self._items.get(selector)
        if bucket is None:
            self._kind_counts[selector.kind] += 1
            bucket = ()
        self._items[selector] = bucket + (signature,)
        self._signature_count += 1

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, selector: object) -> bool:
        return selector in self._items

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SelectorRegistry):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"SelectorRegistry(selectors={len(self)}, signatures={self.signature_count()})"
