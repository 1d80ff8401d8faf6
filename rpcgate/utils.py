"""Helpers for hex block numbers, wildcard matching and list de-duplication."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Any, Iterable

_UINT64_MAX = (1 << 64) - 1
_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")
_DEC_DIGITS = re.compile(r"[0-9]+")
_SIGNED_HEX = re.compile(r"[+-]?[0-9a-fA-F]+")


class HexDecodeError(ValueError):
    """Raised when a 0x-prefixed quantity cannot be decoded."""


def decode_hex_uint64(value: str) -> int:
    """Decode a strict 0x-prefixed hex quantity without leading zeros into a uint64."""
    if value == "":
        raise HexDecodeError("empty hex string")
    if not (value.startswith("0x") or value.startswith("0X")):
        raise HexDecodeError("hex string without 0x prefix")
    digits = value[2:]
    if digits == "":
        raise HexDecodeError('hex string "0x"')
    if len(digits) > 1 and digits[0] == "0":
        raise HexDecodeError("hex number with leading zero digits")
    if not _HEX_DIGITS.fullmatch(digits):
        raise HexDecodeError("invalid hex string")
    number = int(digits, 16)
    if number > _UINT64_MAX:
        raise HexDecodeError("hex number > 64 bits")
    return number


def hex_to_uint64(hex_value: str) -> int:
    """Parse a hex string, with or without a 0x prefix, keeping its low 64 bits."""
    if hex_value.startswith("0x"):
        hex_value = hex_value[2:]
    if not _SIGNED_HEX.fullmatch(hex_value):
        raise ValueError("invalid hexadecimal string")
    return abs(int(hex_value, 16)) & _UINT64_MAX


def normalize_hex(value: Any) -> str:
    """Render a block number as 0x hex without padding; tags pass through unchanged."""
    if isinstance(value, str):
        if value.startswith("0x"):
            return f"0x{decode_hex_uint64(value):x}"
        if _DEC_DIGITS.fullmatch(value):
            number = int(value)
            if 0 < number <= _UINT64_MAX:
                return f"0x{number:x}"
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return f"0x{value:x}"
    raise TypeError(f"value is not a string or number: {value!r}")


@lru_cache(maxsize=256)
def _wildcard_regex(pattern: str) -> "re.Pattern[str]":
    parts = []
    for char in pattern:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".?")
        elif char == ".":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.DOTALL)


def wildcard_match(pattern: str, value: str) -> bool:
    """Match ``value`` against ``pattern``.

    ``*`` matches any run of characters, ``?`` zero or one character and ``.``
    exactly one character. An empty pattern matches only an empty value.
    """
    if pattern == "":
        return value == ""
    if pattern == "*" or pattern == value:
        return True
    return _wildcard_regex(pattern).fullmatch(value) is not None


def remove_duplicates(items: Iterable[str]) -> list[str]:
    """The items in their first-seen order with repeats dropped."""
    return list(dict.fromkeys(items))