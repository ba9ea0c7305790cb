"""
Selector value type.

A selector is either:
    - 4 bytes for functions, errors, etc.
    - 32 bytes for events
"""

from enum import IntEnum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from selector_registry.core.exceptions import InvalidLengthError

BytesLike = Union[bytes, bytearray, memoryview]


class SelectorKind(IntEnum):
    """Selector variant, valued by its byte length."""

    FOUR = 4
    THIRTY_TWO = 32


class Selector(BaseModel):
    """Immutable 4-byte or 32-byte selector. Equality and hash are exact-byte."""

    model_config = ConfigDict(frozen=True)

    value: bytes = Field(..., strict=True, description="Raw selector bytes (4 or 32)")

    @field_validator("value")
    @classmethod
    def validate_length(cls, v: bytes) -> bytes:
        """Reject every length other than 4 or 32."""
        if len(v) not in (SelectorKind.FOUR, SelectorKind.THIRTY_TWO):
            raise InvalidLengthError(len(v))
        return v

    @classmethod
    def from_bytes(cls, data: BytesLike) -> "Selector":
        """Build a selector from an arbitrary byte slice."""
        return cls(value=bytes(data))

    @classmethod
    def four(cls, data: BytesLike) -> "Selector":
        """Build a 4-byte selector."""
        if len(data) != SelectorKind.FOUR:
            raise InvalidLengthError(len(data))
        return cls(value=bytes(data))

    @classmethod
    def thirty_two(cls, data: BytesLike) -> "Selector":
        """Build a 32-byte selector."""
        if len(data) != SelectorKind.THIRTY_TWO:
            raise InvalidLengthError(len(data))
        return cls(value=bytes(data))

    @classmethod
    def from_hex(cls, text: str) -> "Selector":
        """Build a selector from 0x-prefixed hex text."""
        from selector_registry.domain.parsing import parse_selector

        return parse_selector(text)

    @property
    def kind(self) -> SelectorKind:
        return SelectorKind(len(self.value))

    def hex(self) -> str:
        """Return the 0x-prefixed lowercase hex form."""
        return "0x" + self.value.hex()

    def __bytes__(self) -> bytes:
        return self.value

    def __len__(self) -> int:
        return len(self.value)

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"Selector({self.kind.name}, {self.hex()})"
