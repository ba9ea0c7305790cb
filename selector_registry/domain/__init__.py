"""
Selector registry domain: selectors, parsed signatures and the registry itself.
"""

from selector_registry.domain.models.selector import Selector, SelectorKind
from selector_registry.domain.models.signature import ParsedSignature, parse_signature
from selector_registry.domain.parsing import decode_hex, parse_line, parse_selector
from selector_registry.domain.registry import SelectorRegistry

__all__ = [
    "ParsedSignature",
    "Selector",
    "SelectorKind",
    "SelectorRegistry",
    "decode_hex",
    "parse_line",
    "parse_selector",
    "parse_signature",
]
