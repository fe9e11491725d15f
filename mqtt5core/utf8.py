"""Validation of MQTT UTF-8 encoded strings."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterator, Tuple, Union

MAX_STRING_SIZE = 65535

_MULTI_LEVEL_WILDCARD = ord("#")
_SINGLE_LEVEL_WILDCARD = ord("+")


class ValidationResult(IntEnum):
    """Outcome of validating a character or a string."""

    VALID = 0
    HAS_WILDCARD_CHARACTER = 1
    INVALID = 2


def _as_bytes(value: Union[str, bytes, bytearray]) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8", "surrogatepass")
    return bytes(value)


def iter_code_points(data: Union[str, bytes, bytearray]) -> Iterator[int]:
    """Yield the code points of UTF-8 data.

    A malformed or truncated sequence yields -1 and ends the iteration.
    """
    raw = _as_bytes(data)
    pos = 0
    size = len(raw)
    while pos < size:
        lead = raw[pos]
        n = lead & 0xF0
        remaining = size - pos
        if n & 0x80 == 0:
            yield lead
            pos += 1
        elif n in (0xC0, 0xD0) and remaining > 1:
            yield ((lead & 0x1F) << 6) | (raw[pos + 1] & 0x3F)
            pos += 2
        elif n == 0xE0 and remaining > 2:
            yield (
                ((lead & 0x1F) << 12)
                | ((raw[pos + 1] & 0x3F) << 6)
                | (raw[pos + 2] & 0x3F)
            )
            pos += 3
        elif n == 0xF0 and remaining > 3:
            yield (
                ((lead & 0x1F) << 18)
                | ((raw[pos + 1] & 0x3F) << 12)
                | ((raw[pos + 2] & 0x3F) << 6)
                | (raw[pos + 3] & 0x3F)
            )
            pos += 4
        else:
            yield -1
            return


def validate_mqtt_utf8_char(c: int) -> ValidationResult:
    """Classify a single code point according to the MQTT rules."""
    if c in (_MULTI_LEVEL_WILDCARD, _SINGLE_LEVEL_WILDCARD):
        return ValidationResult.HAS_WILDCARD_CHARACTER

    if (
        c > 0x001F
        and not 0x007F <= c <= 0x009F
        and not 0xD800 <= c <= 0xDFFF
        and not 0xFDD0 <= c <= 0xFDEF
        and (c & 0xFE) != 0xFE
        and (c & 0xFF) != 0xFF
    ):
        return ValidationResult.VALID
    return ValidationResult.INVALID


def is_valid_string_size(size: int) -> bool:
    """Whether a string of ``size`` bytes fits an MQTT string."""
    return size <= MAX_STRING_SIZE


def is_utf8(result: ValidationResult) -> bool:
    """Whether a character result is acceptable in an MQTT UTF-8 string."""
    return result in (ValidationResult.VALID, ValidationResult.HAS_WILDCARD_CHARACTER)


def validate_mqtt_utf8(value: Union[str, bytes, bytearray]) -> ValidationResult:
    """Validate a whole MQTT UTF-8 string; wildcards are allowed."""
    raw = _as_bytes(value)
    if not is_valid_string_size(len(raw)):
        return ValidationResult.INVALID
    for c in iter_code_points(raw):
        result = validate_mqtt_utf8_char(c)
        if not is_utf8(result):
            return result
    return ValidationResult.VALID


def is_valid_string_pair(pair: Tuple[Union[str, bytes], Union[str, bytes]]) -> bool:
    """Whether both strings of a (name, value) pair are valid."""
    name, value = pair
    return (
        validate_mqtt_utf8(name) == ValidationResult.VALID
        and validate_mqtt_utf8(value) == ValidationResult.VALID
    )