"""Split a CBOR array into its top-level items, keeping each item's raw bytes.

Only the outer array is parsed; every item is kept exactly as it was encoded,
so an array can be re-serialized byte for byte, and single items can be
replaced or decoded on demand.
"""

from __future__ import annotations

import io
from typing import Any, BinaryIO, Iterable

import cbor2

from .cbor_items import (
    MASK_TYPE,
    MASK_VAL,
    ArrayParseError,
    MajorType,
    encode_item_start,
    major_type_of,
    read_len,
)

__all__ = [
    "ParsedArray",
    "ParsedArrayBuilder",
    "read_array",
    "parse_array",
    "parse_many",
]


def _encode(value: Any) -> bytes:
    if isinstance(value, ParsedArray):
        return value.serialize()
    return cbor2.dumps(value)


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size) if size else b""
    if data is None or len(data) != size:
        raise ArrayParseError("parse_failure", "Unexpected end of data")
    return bytes(data)


class ParsedArray:
    """A CBOR array whose items are held as raw encoded bytes.

    ``size`` is the fixed number of items the array must hold, or ``None`` for
    an array that may hold any number and can grow with :meth:`push`.
    """

    def __init__(
        self,
        contents: Iterable[bytes] = (),
        tag: int | None = None,
        size: int | None = None,
    ) -> None:
        items = [bytes(item) for item in contents]
        if size is not None and len(items) != size:
            raise ValueError(f"expected {size} items, got {len(items)}")
        self._contents = items
        self.tag = tag
        self.size = size

    def __len__(self) -> int:
        return len(self._contents)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParsedArray):
            return NotImplemented
        return (self.tag, self.size, self._contents) == (
            other.tag,
            other.size,
            other._contents,
        )

    def __repr__(self) -> str:
        items = [item.hex() for item in self._contents]
        return f"ParsedArray(tag={self.tag!r}, contents={items!r})"

    def _check_index(self, n: int) -> None:
        if not 0 <= n < len(self._contents):
            raise IndexError(f"item {n} is out of bounds")

    def serialize(self) -> bytes:
        """Encode the array, with its tag if it has one."""
        header = b""
        if self.tag is not None:
            header += encode_item_start(MajorType.TAG, self.tag)
        header += encode_item_start(MajorType.ARRAY, len(self._contents))
        return header + b"".join(self._contents)

    def get(self, n: int) -> Any:
        """Decode and return item ``n``."""
        self._check_index(n)
        return cbor2.loads(self._contents[n])

    def get_raw(self, n: int) -> bytes:
        """Return the encoded bytes of item ``n``."""
        self._check_index(n)
        return self._contents[n]

    def raw_values(self) -> list[bytes]:
        """Return the encoded bytes of every item."""
        return list(self._contents)

    def push(self, item: Any) -> None:
        """Append an item; only arrays without a fixed size can grow."""
        if self.size is not None:
            raise TypeError("cannot push onto an array with a fixed size")
        self._contents.append(_encode(item))

    def set(self, n: int, value: Any) -> None:
        """Replace item ``n``; only arrays with a fixed size allow this."""
        if self.size is None:
            raise TypeError("cannot set items of an array without a fixed size")
        self._check_index(n)
        self._contents[n] = _encode(value)


class ParsedArrayBuilder:
    """Collects the items of a fixed-size array before building it."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError("builder size must be positive")
        self.size = size
        self._contents: list[bytes | None] = [None] * size

    def set(self, n: int, value: Any) -> None:
        """Set item ``n`` to the encoding of ``value``."""
        if not 0 <= n < self.size:
            raise IndexError(f"item {n} is out of bounds")
        self._contents[n] = _encode(value)

    def build(self) -> ParsedArray:
        """Return the array; every item must have been set."""
        if any(item is None for item in self._contents):
            raise ValueError("Not all elements set!")
        return ParsedArray(
            [item for item in self._contents if item is not None], size=self.size
        )


def read_array(stream: BinaryIO, size: int | None = None) -> ParsedArray:
    """Read one (optionally tagged) CBOR array from ``stream``.

    Raises :class:`ArrayParseError` with kind ``"no_data"`` when the stream is
    already at its end.
    """
    first = stream.read(1)
    if not first:
        raise ArrayParseError("no_data")
    byte = first[0]

    tag: int | None = None
    top_type = major_type_of(byte & MASK_TYPE)
    if top_type is MajorType.TAG:
        tag, _ = read_len(stream, byte)
        byte = _read_exact(stream, 1)[0]
    elif top_type is not MajorType.ARRAY:
        raise ArrayParseError("invalid_top_level_type", top_type)

    top_type = major_type_of(byte & MASK_TYPE)
    if top_type is not MajorType.ARRAY:
        raise ArrayParseError("invalid_top_level_type", top_type)

    length, _ = read_len(stream, byte)
    if size is not None:
        if length != size:
            raise ArrayParseError("invalid_number_of_elements", length, size)
    elif length == 0:
        return ParsedArray(tag=tag)

    items: list[bytes] = []
    # Items still to be read at each nesting level; the innermost is last.
    left = [length]
    current = bytearray()
    while left:
        byte = _read_exact(stream, 1)[0]
        current.append(byte)
        major = major_type_of(byte & MASK_TYPE)
        minor = byte & MASK_VAL

        if major is MajorType.TAG:
            _, raw = read_len(stream, minor)
            current += raw
            continue

        if major in (MajorType.UNSIGNED, MajorType.NEGATIVE):
            _, raw = read_len(stream, minor)
            current += raw
        elif major in (MajorType.BYTE_STRING, MajorType.TEXT_STRING):
            count, raw = read_len(stream, minor)
            current += raw
            current += _read_exact(stream, count)
        elif major is MajorType.ARRAY:
            count, raw = read_len(stream, minor)
            current += raw
            if count:
                left.append(count)
        elif major is MajorType.MAP:
            count, raw = read_len(stream, minor)
            current += raw
            if count:
                # A map holds a key and a value per entry.
                left.append(count * 2)
        else:
            raise ArrayParseError("unsupported_major_type", int(major))

        if len(left) == 1:
            items.append(bytes(current))
            current = bytearray()
        if left[-1] == 1:
            left.pop()
        elif left[-1] == 0:
            raise ArrayParseError("parse_failure", "Array parse encountered 0 items left")
        else:
            left[-1] -= 1

    if size is not None and len(items) != size:
        raise ArrayParseError("parse_failure", "Too many items in array")

    return ParsedArray(items, tag=tag, size=size)


def parse_array(data: bytes, size: int | None = None) -> ParsedArray:
    """Parse one CBOR array from ``data``."""
    return read_array(io.BytesIO(data), size)


def parse_many(data: bytes, size: int | None = None) -> list[ParsedArray]:
    """Parse consecutive CBOR arrays from ``data`` until it is exhausted."""
    stream = io.BytesIO(data)
    arrays: list[ParsedArray] = []
    while True:
        try:
            arrays.append(read_array(stream, size))
        except ArrayParseError as err:
            if err.kind == "no_data":
                return arrays
            raise