import pytest

from selector_registry.core.exceptions import (
    InvalidDigitError,
    InvalidHexError,
    InvalidLengthError,
    InvalidSignatureError,
    MalformedRecordError,
    MissingPrefixError,
    OddLengthError,
)
from selector_registry.domain import SelectorKind, decode_hex, parse_line, parse_signature


def test_decode_hex():
    assert decode_hex("0x00112233") == bytes([0x00, 0x11, 0x22, 0x33])
    assert decode_hex("0x") == b""


def test_decode_hex_requires_prefix():
    with pytest.raises(MissingPrefixError):
        decode_hex("00112233")


def test_decode_hex_rejects_odd_digit_count():
    with pytest.raises(OddLengthError):
        decode_hex("0x001")


def test_decode_hex_reports_invalid_digit_index():
    with pytest.raises(InvalidDigitError) as exc_info:
        decode_hex("0xzz112233")
    assert exc_info.value.index == 0

    with pytest.raises(InvalidDigitError) as exc_info:
        decode_hex("0x0011+233")
    assert exc_info.value.index == 4


def test_empty_line_yields_nothing():
    assert parse_line("") is None


def test_parse_line_yields_selector_and_signature():
    selector, signature = parse_line("0x01020304,transfer(address,uint256)")

    assert selector.kind is SelectorKind.FOUR
    assert bytes(selector) == b"\x01\x02\x03\x04"
    assert signature.name == "transfer"
    assert signature.inputs == ("address", "uint256")


def test_parse_line_splits_on_first_comma_only():
    _, signature = parse_line("0x01020304,swap((address,uint256),bytes,uint8[])")

    assert signature.name == "swap"
    assert signature.inputs == ("(address,uint256)", "bytes", "uint8[]")
    assert signature.signature == "swap((address,uint256),bytes,uint8[])"


def test_parse_line_accepts_event_topics():
    selector, signature = parse_line(
        "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef,"
        "Transfer(address,address,uint256)"
    )

    assert selector.kind is SelectorKind.THIRTY_TWO
    assert signature.name == "Transfer"


def test_parse_line_without_parameters():
    _, signature = parse_line("0x18160ddd,totalSupply()")

    assert signature.inputs == ()
    assert signature.signature == "totalSupply()"


def test_line_without_comma_is_a_hard_error():
    with pytest.raises(MalformedRecordError):
        parse_line("0x01020304 transfer(address,uint256)")


@pytest.mark.parametrize(
    "line, error",
    [
        ("01020304,transfer(address,uint256)", MissingPrefixError),
        ("0x010203,transfer(address,uint256)", InvalidLengthError),
        ("0x0102030,transfer(address,uint256)", OddLengthError),
        ("0x0102030g,transfer(address,uint256)", InvalidDigitError),
    ],
)
def test_malformed_selector_is_a_hard_error(line, error):
    with pytest.raises(error):
        parse_line(line)


def test_hex_errors_share_a_base():
    with pytest.raises(InvalidHexError):
        parse_line("nope,transfer(address,uint256)")


@pytest.mark.parametrize(
    "signature_text",
    [
        "broken(uint7)",
        "missing_paren(address",
        "nested((address)",
        "(address)",
        "",
        "bar((),uint256)",
        "foo(()x)",
        "foo(uint256,()",
        "f(()[)",
    ],
)
def test_unparseable_signature_drops_the_record(signature_text):
    assert parse_line(f"0x01020304,{signature_text}") is None


def test_unparseable_signature_raises_in_strict_mode():
    with pytest.raises(InvalidSignatureError):
        parse_line("0x01020304,broken(uint7)", strict_signatures=True)


def test_selector_errors_win_over_signature_errors():
    with pytest.raises(MissingPrefixError):
        parse_line("01020304,broken(uint7)")


def test_parse_signature_rejects_trailing_text():
    with pytest.raises(InvalidSignatureError):
        parse_signature("transfer(address,uint256) extra")


@pytest.mark.parametrize(
    "signature_text",
    [
        "transfer(address to,uint256 amount)",
        "function transfer(address,uint256)",
        "event Transfer(address,address,uint256)",
        "balanceOf(address) returns (uint256)",
    ],
)
def test_only_canonical_signatures_are_accepted(signature_text):
    with pytest.raises(InvalidSignatureError):
        parse_signature(signature_text)

    assert parse_line(f"0x01020304,{signature_text}") is None


def test_zero_sized_tuple_component_raises_in_strict_mode():
    with pytest.raises(InvalidSignatureError) as exc_info:
        parse_line("0x01020304,bar((),uint256)", strict_signatures=True)

    assert isinstance(exc_info.value.__cause__, ValueError)
