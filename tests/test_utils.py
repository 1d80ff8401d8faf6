import pytest

from rpcgate.utils import (
    HexDecodeError,
    decode_hex_uint64,
    hex_to_uint64,
    normalize_hex,
    remove_duplicates,
    wildcard_match,
)


def test_decode_hex_uint64_round_trip():
    for number in (0, 1, 255, 19_348_504, (1 << 64) - 1):
        assert decode_hex_uint64(hex(number)) == number


def test_decode_hex_uint64_accepts_upper_prefix():
    assert decode_hex_uint64("0XFF") == decode_hex_uint64("0xff")


@pytest.mark.parametrize(
    "text",
    ["", "1273c18", "0x", "0x01", "0x00", "0xzz", "0x" + "1" * 17, "0x-1"],
)
def test_decode_hex_uint64_rejects(text):
    with pytest.raises(HexDecodeError):
        decode_hex_uint64(text)


def test_hex_to_uint64_with_and_without_prefix():
    assert hex_to_uint64("0x1273c18") == hex_to_uint64("1273c18")
    assert hex_to_uint64("0x1273c18") == decode_hex_uint64("0x1273c18")


def test_hex_to_uint64_allows_leading_zeros():
    assert hex_to_uint64("0x000a") == hex_to_uint64("0xa")


@pytest.mark.parametrize("text", ["", "0x", "xyz", "0x12g"])
def test_hex_to_uint64_invalid(text):
    with pytest.raises(ValueError):
        hex_to_uint64(text)


def test_normalize_hex_from_hex_string_is_idempotent():
    first = normalize_hex("0x1273c18")
    assert first == "0x1273c18"
    assert normalize_hex(first) == first


def test_normalize_hex_from_decimal_string():
    result = normalize_hex("19348504")
    assert result.startswith("0x")
    assert hex_to_uint64(result) == 19348504


def test_normalize_hex_from_int_round_trips():
    for number in (1, 16, 4096, 19348504):
        assert hex_to_uint64(normalize_hex(number)) == number


def test_normalize_hex_passes_tags_and_zero_through():
    assert normalize_hex("latest") == "latest"
    assert normalize_hex("finalized") == "finalized"
    assert normalize_hex("0") == "0"


def test_normalize_hex_rejects_padded_hex():
    with pytest.raises(HexDecodeError):
        normalize_hex("0x0001")


@pytest.mark.parametrize("value", [1.5, None, [1], True])
def test_normalize_hex_rejects_other_types(value):
    with pytest.raises(TypeError):
        normalize_hex(value)


def test_wildcard_match_star():
    assert wildcard_match("evm:1:*", "evm:1:latest")
    assert wildcard_match("*", "anything")
    assert wildcard_match("*:block", "evm:1:block")
    assert not wildcard_match("evm:2:*", "evm:1:latest")


def test_wildcard_match_exact_and_empty():
    assert wildcard_match("abc", "abc")
    assert not wildcard_match("abc", "abcd")
    assert wildcard_match("", "")
    assert not wildcard_match("", "a")


def test_wildcard_match_escapes_regex_characters():
    assert wildcard_match("a+b*", "a+bc")
    assert not wildcard_match("a+b*", "aabc")


def test_remove_duplicates_keeps_first_order():
    items = ["b", "a", "b", "c", "a"]
    result = remove_duplicates(items)
    assert result == ["b", "a", "c"]
    assert len(result) == len(set(items))


def test_remove_duplicates_empty():
    assert remove_duplicates([]) == []