"""
Parsing of OpenChain signature export records.

Each record is ``<selector-hex>,<signature-text>``. Structural problems with
the record or its selector are hard errors; signature text that eth_abi cannot
parse drops the record unless ``strict_signatures`` is set.
"""

import re
from typing import Optional, Tuple

from selector_registry.core.exceptions import (
    InvalidDigitError,
    InvalidSignatureError,
    MalformedRecordError,
    MissingPrefixError,
    OddLengthError,
)
from selector_registry.domain.models.selector import Selector
from selector_registry.domain.models.signature import ParsedSignature, parse_signature

HEX_PREFIX = "0x"
RECORD_SEPARATOR = ","

_HEX_PAIR = re.compile(r"[0-9a-fA-F]{2}")

ParsedRecord = Tuple[Selector, ParsedSignature]


def decode_hex(text: str) -> bytes:
    """
    Decode 0x-prefixed hex text into bytes.

    Raises:
        MissingPrefixError: If the text does not start with 0x
        OddLengthError: If the digits cannot form whole bytes
        InvalidDigitError: If a digit pair is not hexadecimal
    """
    if not text.startswith(HEX_PREFIX):
        raise MissingPrefixError(text)

    digits = text[len(HEX_PREFIX):]
    if len(digits) % 2 != 0:
        raise OddLengthError(digits)

    for index in range(0, len(digits), 2):
        if not _HEX_PAIR.fullmatch(digits, index, index + 2):
            raise InvalidDigitError(digits, index)

    return bytes.fromhex(digits)


def parse_selector(text: str) -> Selector:
    """Decode hex text into a 4-byte or 32-byte selector."""
    return Selector.from_bytes(decode_hex(text))


def parse_line(line: str, strict_signatures: bool = False) -> Optional[ParsedRecord]:
    """
    Parse one export record.

    Args:
        line: A single line without its trailing newline
        strict_signatures: Raise on unparseable signature text instead of dropping the record

    Returns:
        (selector, signature), or None for an empty line or a dropped record

    Raises:
        MalformedRecordError: If a non-empty line has no comma
        InvalidHexError: If the selector half is not valid 0x hex
        InvalidLengthError: If the selector does not decode to 4 or 32 bytes
        InvalidSignatureError: Only when strict_signatures is set
    """
    if not line:
        return None

    raw_selector, separator, raw_signature = line.partition(RECORD_SEPARATOR)
    if not separator:
        raise MalformedRecordError(line)

    selector = parse_selector(raw_selector)

    # eth_abi rejects some signatures found in the export, so those records
    # are dropped rather than failing the whole load.
    try:
        signature = parse_signature(raw_signature)
    except InvalidSignatureError:
        if strict_signatures:
            raise
        return None

    return selector, signature
