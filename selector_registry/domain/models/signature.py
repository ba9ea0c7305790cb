"""
Parsed function and event signatures.

The parameter list is delegated to eth_abi's type grammar, which also
validates each type (e.g. rejects ``uint7``).
"""

import re
from typing import Tuple

from eth_abi.exceptions import ParseError
from eth_abi.grammar import NodeVisitor, TupleType
from pydantic import BaseModel, ConfigDict, Field

from selector_registry.core.exceptions import InvalidSignatureError

_SIGNATURE_PATTERN = re.compile(r"^\s*([A-Za-z_$][A-Za-z0-9_$]*)\s*(\(.*\))\s*$", re.DOTALL)
EMPTY_PARAMETERS = "()"

# Owns its parse cache, see clear_parse_cache
_type_parser = NodeVisitor()


class ParsedSignature(BaseModel):
    """A function-like signature: a name and its canonical parameter types."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Function or event name")
    inputs: Tuple[str, ...] = Field(default=(), description="Canonical ABI parameter types")

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.inputs)})"

    def __str__(self) -> str:
        return self.signature


def parse_signature(text: str) -> ParsedSignature:
    """
    Parse signature text such as ``transfer(address,uint256)``.

    Args:
        text: Signature text from an export record

    Returns:
        ParsedSignature with canonical parameter types

    Raises:
        InvalidSignatureError: If the name or parameter list cannot be parsed
    """
    match = _SIGNATURE_PATTERN.match(text)
    if match is None:
        raise InvalidSignatureError(text)

    name, params = match.groups()
    # eth_abi has no zero-sized tuple type
    if params == EMPTY_PARAMETERS:
        return ParsedSignature(name=name, inputs=())

    try:
        abi_type = _type_parser.parse(params)
        abi_type.validate()
    # eth_abi raises plain ValueError for some malformed input, e.g. "()" components
    except (ParseError, ValueError) as exc:
        raise InvalidSignatureError(text, {"reason": str(exc)}) from exc

    # Trailing array dimensions make this an array type, not a parameter list
    if not isinstance(abi_type, TupleType) or abi_type.is_array:
        raise InvalidSignatureError(text)

    return ParsedSignature(
        name=name,
        inputs=tuple(component.to_type_str() for component in abi_type.components),
    )


def clear_parse_cache() -> None:
    """Release the unbounded cache of parsed parameter lists."""
    _type_parser.parse.cache_clear()
