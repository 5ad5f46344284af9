"""Typed decoding and encoding of leaf payloads.

Leaves hold text payloads. Integer kinds may carry several
whitespace-separated fields, e.g. ``net.ipv4.tcp_rmem``.
"""

from __future__ import annotations

from typing import Union

from core.constants import TEXT_ENCODING
from core.errors import SysctlEncodingError, SysctlInvalidOperationError, SysctlValueError
from core.types import Kind

SysctlValue = Union[str, int, tuple[int, ...], bytes]

_INTEGER_RANGES: dict[Kind, tuple[int, int]] = {
    Kind.I8: (-(2**7), 2**7 - 1),
    Kind.I16: (-(2**15), 2**15 - 1),
    Kind.I32: (-(2**31), 2**31 - 1),
    Kind.I64: (-(2**63), 2**63 - 1),
    Kind.U8: (0, 2**8 - 1),
    Kind.U16: (0, 2**16 - 1),
    Kind.U32: (0, 2**32 - 1),
    Kind.U64: (0, 2**64 - 1),
}


def decode_value(payload: bytes, kind: Kind) -> SysctlValue:
    """Decode a raw leaf payload according to its kind.

    Args:
        payload: Raw bytes read from the leaf.
        kind: Kind tag for the leaf name.

    Returns:
        Text for strings, int or tuple of ints for integer kinds,
        raw bytes for structs and unknown kinds.

    Raises:
        SysctlInvalidOperationError: If kind is a node.
        SysctlEncodingError: If a string payload is not valid text.
        SysctlValueError: If an integer payload is malformed or out of range.
    """
    if kind is Kind.NODE:
        raise SysctlInvalidOperationError("Cannot decode a value for a container kind.")
    if kind in (Kind.STRUCT, Kind.UNKNOWN):
        return payload
    text = _decode_text(payload)
    if kind is Kind.STRING:
        return text.rstrip("\n")
    fields = text.split()
    if not fields:
        raise SysctlValueError(f"Expected an integer payload for kind {kind.value}, got nothing.")
    numbers = tuple(_parse_integer(field, kind) for field in fields)
    if len(numbers) == 1:
        return numbers[0]
    return numbers


def encode_value(value: object) -> bytes:
    """Encode a Python value as a leaf payload.

    Args:
        value: Bytes, text, integer, or a sequence of integers.

    Returns:
        Payload bytes.

    Raises:
        SysctlValueError: If the value type is not supported.
    """
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return value.encode(TEXT_ENCODING)
    if isinstance(value, bool):
        return b"1" if value else b"0"
    if isinstance(value, int):
        return str(value).encode(TEXT_ENCODING)
    if isinstance(value, (list, tuple)) and all(_is_plain_int(item) for item in value):
        return " ".join(str(item) for item in value).encode(TEXT_ENCODING)
    raise SysctlValueError(
        f"Unsupported value type {type(value).__name__}. "
        "Provide bytes, text, an integer, or a list of integers."
    )


def _decode_text(payload: bytes) -> str:
    try:
        return payload.decode(TEXT_ENCODING)
    except UnicodeDecodeError as error:
        raise SysctlEncodingError(
            f"Leaf payload is not valid {TEXT_ENCODING} text: {error.reason}."
        ) from error


def _parse_integer(field: str, kind: Kind) -> int:
    """Parse one integer field and check it fits the kind width.

    Args:
        field: Text field.
        kind: Integer kind tag.

    Returns:
        Parsed integer.

    Raises:
        SysctlValueError: If field is not an integer or out of range.
    """
    try:
        number = int(field)
    except ValueError as error:
        raise SysctlValueError(
            f"Expected an integer field for kind {kind.value}, got '{field}'."
        ) from error
    low, high = _INTEGER_RANGES[kind]
    if not low <= number <= high:
        raise SysctlValueError(
            f"Value {number} is out of range for kind {kind.value} ({low}..{high})."
        )
    return number


def _is_plain_int(item: object) -> bool:
    return isinstance(item, int) and not isinstance(item, bool)
