"""Encoders for the primitive data types and properties of MQTT v5 packets."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Optional, Sequence, Tuple, Union

MAX_VARIABLE_INT = 0xFFFFFFF

BytesLike = Union[str, bytes, bytearray]


class PropertyKind(Enum):
    """Wire representation of a property value."""

    BYTE = "byte"
    TWO_BYTE_INT = "two_byte_int"
    FOUR_BYTE_INT = "four_byte_int"
    VARIABLE_INT = "variable_int"
    STRING = "string"
    BINARY = "binary"
    STRING_PAIR = "string_pair"


def to_variable_bytes(value: int) -> bytes:
    """Encode ``value`` as a Variable Byte Integer.

    Values above the largest encodable integer produce no bytes.
    """
    if value > MAX_VARIABLE_INT:
        return b""
    out = bytearray()
    while value > 127:
        out.append((value & 0b01111111) | 0b10000000)
        value >>= 7
    out.append(value & 0b01111111)
    return bytes(out)


def variable_length(value: int) -> int:
    """Number of bytes the Variable Byte Integer encoding of ``value`` takes."""
    if value > MAX_VARIABLE_INT:
        return 0
    length = 1
    while value > 127:
        value >>= 7
        length += 1
    return length


def _fixed_int(value: Optional[int], size: int) -> bytes:
    if value is None:
        return b""
    mask = (1 << (8 * size)) - 1
    return (int(value) & mask).to_bytes(size, "big")


def encode_byte(value: Optional[int]) -> bytes:
    """Encode a one byte integer; ``None`` encodes to nothing."""
    return _fixed_int(value, 1)


def encode_int16(value: Optional[int]) -> bytes:
    """Encode a big-endian two byte integer; ``None`` encodes to nothing."""
    return _fixed_int(value, 2)


def encode_int32(value: Optional[int]) -> bytes:
    """Encode a big-endian four byte integer; ``None`` encodes to nothing."""
    return _fixed_int(value, 4)


def encode_varint(value: Optional[int]) -> bytes:
    """Encode a Variable Byte Integer; ``None`` encodes to nothing."""
    if value is None:
        return b""
    return to_variable_bytes(int(value))


def _as_bytes(value: BytesLike) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8", "surrogatepass")
    return bytes(value)


def _encode_array(value: Optional[BytesLike], with_length: bool) -> bytes:
    if value is None:
        return b""
    data = _as_bytes(value)
    if not data and not with_length:
        return b""
    if with_length:
        return (len(data) & 0xFFFF).to_bytes(2, "big") + data
    return data


def encode_utf8(value: Optional[BytesLike]) -> bytes:
    """Encode a length-prefixed UTF-8 string; ``None`` encodes to nothing."""
    return _encode_array(value, with_length=True)


def encode_binary(value: Optional[BytesLike]) -> bytes:
    """Encode length-prefixed binary data; ``None`` encodes to nothing."""
    return _encode_array(value, with_length=True)


def encode_verbatim(value: Optional[BytesLike]) -> bytes:
    """Encode raw bytes without a length prefix."""
    return _encode_array(value, with_length=False)


def _width_for_bits(bits: int) -> int:
    for width in (1, 2, 4, 8):
        if bits <= width * 8:
            return width
    raise ValueError(f"cannot pack {bits} bits into a single integer")


def pack_flags(*args: Tuple[int, Any]) -> bytes:
    """Pack ``(bits, value)`` pairs, most significant first, into a big-endian integer.

    A ``None`` value packs as 0. The result takes the smallest of 1, 2, 4 or
    8 bytes that holds all the bits.
    """
    if not args:
        raise ValueError("at least one flag is required")
    total_bits = 0
    packed = 0
    for bits, value in args:
        if bits <= 0:
            raise ValueError("a flag must have at least one bit")
        flag = 0 if value is None else int(value)
        total_bits += bits
        width = _width_for_bits(total_bits)
        packed = ((packed << bits) | flag) & ((1 << (8 * width)) - 1)
    return packed.to_bytes(_width_for_bits(total_bits), "big")


def encode_property_value(kind: PropertyKind, value: Any) -> bytes:
    """Encode a single property value according to its kind."""
    kind = PropertyKind(kind)
    if kind is PropertyKind.BYTE:
        return encode_byte(value)
    if kind is PropertyKind.TWO_BYTE_INT:
        return encode_int16(value)
    if kind is PropertyKind.FOUR_BYTE_INT:
        return encode_int32(value)
    if kind is PropertyKind.VARIABLE_INT:
        return encode_varint(value)
    if kind is PropertyKind.STRING:
        return encode_utf8(value)
    if kind is PropertyKind.BINARY:
        return encode_binary(value)
    name, val = value
    return encode_utf8(name) + encode_utf8(val)


def encode_property(identifier: int, kind: PropertyKind, value: Any) -> bytes:
    """Encode a property with its identifier.

    ``None`` and empty lists encode to nothing; a list repeats the identifier
    before each of its elements.
    """
    if value is None:
        return b""
    ident = encode_byte(identifier)
    if isinstance(value, list):
        return b"".join(ident + encode_property_value(kind, item) for item in value)
    return ident + encode_property_value(kind, value)


def encode_properties(
    props: Optional[Iterable[Tuple[int, PropertyKind, Any]]],
    may_omit: bool = False,
) -> bytes:
    """Encode a property section: its length followed by every property.

    ``props`` holds ``(identifier, kind, value)`` triples in wire order. When
    ``props`` is ``None``, or ``may_omit`` is set and no property is present,
    the whole section is left out.
    """
    if props is None:
        return b""
    body = b"".join(encode_property(ident, kind, value) for ident, kind, value in props)
    if may_omit and not body:
        return b""
    return encode_varint(len(body)) + body


__all__: Sequence[str] = (
    "PropertyKind",
    "to_variable_bytes",
    "variable_length",
    "encode_byte",
    "encode_int16",
    "encode_int32",
    "encode_varint",
    "encode_utf8",
    "encode_binary",
    "encode_verbatim",
    "pack_flags",
    "encode_property_value",
    "encode_property",
    "encode_properties",
)