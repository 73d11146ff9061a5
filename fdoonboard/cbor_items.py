"""Low-level helpers for walking CBOR item headers without decoding them."""

from __future__ import annotations

import enum
from typing import BinaryIO

MASK_TYPE = 0b1110_0000
MASK_VAL = 0b0001_1111

_LENGTH_SIZES = {24: 1, 25: 2, 26: 4, 27: 8}

_MESSAGES = {
    "invalid_top_level_type": "Invalid top level type encountered: must be array (was {0})",
    "length_parse_failure": "Invalid array length",
    "invalid_major_type": "Invalid major type encountered: {0}",
    "parse_failure": "Parse failure: {0}",
    "unsupported_major_type": "Unsupported major type: {0}",
    "invalid_number_of_elements": (
        "Invalid number of elements encountered: {0} received, {1} expected"
    ),
    "no_data": "No data to be deserialized",
}


class ArrayParseError(Exception):
    """Raised when a CBOR array cannot be split into its top-level items.

    ``kind`` names the failure (for example ``"no_data"`` or
    ``"invalid_number_of_elements"``) and ``details`` holds its values.
    """

    def __init__(self, kind: str, *details: object) -> None:
        if kind not in _MESSAGES:
            raise ValueError(f"unknown array parse error kind: {kind!r}")
        self.kind = kind
        self.details = details
        super().__init__(_MESSAGES[kind].format(*details))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArrayParseError):
            return NotImplemented
        return (self.kind, self.details) == (other.kind, other.details)

    def __hash__(self) -> int:
        return hash((self.kind, self.details))


class MajorType(enum.IntEnum):
    """The eight CBOR major types."""

    UNSIGNED = 0
    NEGATIVE = 1
    BYTE_STRING = 2
    TEXT_STRING = 3
    ARRAY = 4
    MAP = 5
    TAG = 6
    SPECIAL = 7


def major_type_of(byte: int) -> MajorType:
    """Return the major type encoded in the top three bits of an initial byte."""
    value = byte >> 5
    if not 0 <= byte <= 0xFF or value > 7:
        raise ArrayParseError("invalid_major_type", value)
    return MajorType(value)


def encode_item_start(major_type: MajorType, value: int) -> bytes:
    """Encode a single-byte item header; only values up to 24 are supported."""
    if not 0 <= value <= 24:
        raise ValueError(f"item header value {value} does not fit in a single byte")
    return bytes([(int(major_type) << 5) | (value & MASK_VAL)])


def read_len(stream: BinaryIO, header: int) -> tuple[int, bytes]:
    """Read the argument of an item whose initial byte is ``header``.

    Returns the decoded value and the raw bytes consumed from ``stream``.
    """
    minor = header & MASK_VAL
    if minor <= 23:
        return minor, b""
    size = _LENGTH_SIZES.get(minor)
    if size is None:
        raise ArrayParseError("length_parse_failure")
    raw = stream.read(size)
    if raw is None or len(raw) != size:
        raise ArrayParseError("parse_failure", "Truncated item length")
    return int.from_bytes(raw, "big"), bytes(raw)