"""TLV (Type-Length-Value) record views.

A record view wraps one record inside a caller-supplied byte buffer:
    Offset  Size  Field
    0       1     Type (record type identifier)
    1       1     Length (declared length, meaning is protocol-defined)
    2       N     Value (N = data_size)

The view never copies the buffer. How the length byte maps to the record's
on-wire size differs between protocols, so ``total_size`` and ``data_size``
are left to subclasses (see ``tlv_records.variants``).
"""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from enum import Enum
from ipaddress import IPv4Address
from typing import ClassVar

from tlv_records.errors import BorrowedBufferError, NullRecordError

BufferLike = bytes | bytearray | memoryview

HEADER_SIZE = 2
MAX_VALUE_LENGTH = 0xFF


class ByteOrder(Enum):
    """Byte order used for scalar record values (``struct`` prefixes)."""

    NETWORK = "!"
    LITTLE = "<"
    NATIVE = "="


class TlvRecord(ABC):
    """A non-owning view of a single TLV record.

    A view is either null (no buffer, used as the end-of-sequence and
    not-found sentinel) or points at a record header inside ``buffer``.
    Records produced by a builder own their buffer and may be purged;
    views obtained by walking a packet buffer only borrow it.

    Copying a view copies the reference, never the bytes, and the copy
    does not take ownership.
    """

    __slots__ = ("_buffer", "_offset", "_owned")

    #: Byte order for ``value_as``; must match the builder's encoding.
    byte_order: ClassVar[ByteOrder] = ByteOrder.NETWORK
    #: Record types that consist of the type byte only (padding, end-of-list).
    single_byte_types: ClassVar[frozenset[int]] = frozenset()

    def __init__(
        self,
        buffer: BufferLike | None,
        offset: int = 0,
        *,
        owned: bool = False,
    ) -> None:
        if buffer is not None and not 0 <= offset < len(buffer):
            raise ValueError(f"Record offset {offset} outside buffer of {len(buffer)} bytes")
        self._buffer = buffer
        self._offset = offset if buffer is not None else 0
        self._owned = owned and buffer is not None

    @classmethod
    def null(cls) -> TlvRecord:
        """Create the null record sentinel."""
        return cls(None)

    # --- Abstract length policy ---

    @property
    @abstractmethod
    def total_size(self) -> int:
        """Bytes this record occupies in the buffer, header included."""

    @property
    @abstractmethod
    def data_size(self) -> int:
        """Bytes in the value part of the record."""

    # --- Properties ---

    @property
    def is_null(self) -> bool:
        return self._buffer is None

    @property
    def owned(self) -> bool:
        return self._owned

    @property
    def buffer(self) -> BufferLike | None:
        return self._buffer

    @property
    def offset(self) -> int:
        """Index of the record's type byte within ``buffer``."""
        return self._offset

    @property
    def record_type(self) -> int:
        self._require("read the type of")
        return self._buffer[self._offset]

    @property
    def length_field(self) -> int:
        """Raw declared length byte (0 when it lies past the buffer end)."""
        self._require("read the length of")
        return self._header_byte(1)

    @property
    def is_single_byte(self) -> bool:
        return self.record_type in self.single_byte_types

    @property
    def value(self) -> memoryview:
        """Zero-copy view of the value bytes.

        The slice is clamped to the buffer, so it can be shorter than
        ``data_size`` when the record is truncated.
        """
        self._require("read the value of")
        start = self._offset + HEADER_SIZE
        return memoryview(self._buffer)[start : start + max(self.data_size, 0)]

    # --- Typed value accessors ---

    def value_as(self, fmt: str | struct.Struct) -> int | float | bytes:
        """Unpack the start of the value as a fixed-width scalar.

        ``fmt`` is a single ``struct`` format such as ``"B"``, ``"H"`` or
        ``"I"``; the record class's byte order is applied unless the format
        carries its own prefix.

        If the value is shorter than the format, the zero value of that
        format is returned. This is not an error.
        """
        if isinstance(fmt, str):
            if fmt[:1] not in "@=<>!":
                fmt = self.byte_order.value + fmt
            fmt = struct.Struct(fmt)

        raw = self.value
        if len(raw) < fmt.size:
            return fmt.unpack(bytes(fmt.size))[0]
        return fmt.unpack(raw[: fmt.size])[0]

    def value_as_ipv4(self) -> IPv4Address:
        """Interpret the first 4 value bytes as an IPv4 address (0.0.0.0 if short)."""
        raw = self.value
        if len(raw) < 4:
            return IPv4Address(0)
        return IPv4Address(bytes(raw[:4]))

    def value_as_string(self, encoding: str = "utf-8") -> str:
        """Decode the value bytes as text."""
        return bytes(self.value).decode(encoding, errors="replace")

    def to_bytes(self) -> bytes:
        """Copy the whole record (header and value) out of the buffer."""
        self._require("copy")
        return bytes(memoryview(self._buffer)[self._offset : self._offset + self.total_size])

    # --- Ownership ---

    def purge(self) -> None:
        """Release the buffer of a builder-produced record.

        The view becomes null afterwards. Views that borrow a larger
        packet buffer cannot be purged.
        """
        if self.is_null:
            return
        if not self._owned:
            raise BorrowedBufferError(
                f"{type(self).__name__} at offset {self._offset} does not own its buffer"
            )
        self._buffer = None
        self._offset = 0
        self._owned = False

    # --- Internals ---

    def _require(self, operation: str) -> None:
        if self._buffer is None:
            raise NullRecordError(operation)

    def _header_byte(self, index: int) -> int:
        pos = self._offset + index
        if pos >= len(self._buffer):
            return 0
        return self._buffer[pos]

    def __bool__(self) -> bool:
        return self._buffer is not None

    def __copy__(self) -> TlvRecord:
        return type(self)(self._buffer, self._offset)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TlvRecord):
            return NotImplemented
        return (
            type(self) is type(other)
            and self._buffer is other._buffer
            and self._offset == other._offset
        )

    def __hash__(self) -> int:
        return hash((type(self), id(self._buffer), self._offset))

    def __repr__(self) -> str:
        if self.is_null:
            return f"{type(self).__name__}(null)"
        return (
            f"{type(self).__name__}(type={self.record_type}, "
            f"offset={self._offset}, total_size={self.total_size})"
        )


class SimpleTlvRecord(TlvRecord):
    """Record whose length byte counts the value only.

    total_size = 2 + length, data_size = length.
    """

    __slots__ = ()

    @property
    def total_size(self) -> int:
        return HEADER_SIZE + self.length_field

    @property
    def data_size(self) -> int:
        return self.length_field
