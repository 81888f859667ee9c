"""TLV record construction.

A builder holds a record type and an owned copy of the value, and
``build()`` allocates a fresh record buffer:
    Offset  Size  Field
    0       1     Type
    1       1     Length (value length for the generic record)
    2       N     Value

Scalar values are encoded in network byte order, the order
``TlvRecord.value_as`` reads by default.
"""

from __future__ import annotations

import struct
from collections.abc import Iterable
from ipaddress import IPv4Address
from typing import ClassVar

from tlv_records.errors import ValueTooLargeError
from tlv_records.record import (
    HEADER_SIZE,
    MAX_VALUE_LENGTH,
    BufferLike,
    SimpleTlvRecord,
    TlvRecord,
)

_UINT8 = struct.Struct("!B")
_UINT16 = struct.Struct("!H")
_UINT32 = struct.Struct("!I")


def _pack_uint(fmt: struct.Struct, value: int) -> bytes:
    limit = 1 << (8 * fmt.size)
    if not 0 <= value < limit:
        raise ValueError(f"Value {value} does not fit in {fmt.size} unsigned byte(s)")
    return fmt.pack(value)


class TlvRecordBuilder:
    """Builds standalone records of ``record_class``.

    Subclasses adapt the length byte and record size to their protocol by
    overriding ``_length_field`` and ``_record_size``.
    """

    record_class: ClassVar[type[TlvRecord]] = SimpleTlvRecord
    max_value_length: ClassVar[int] = MAX_VALUE_LENGTH

    def __init__(self, record_type: int, value: BufferLike = b"") -> None:
        if not 0 <= record_type <= 0xFF:
            raise ValueError(f"Record type {record_type} is not a single byte")
        value = bytes(value)
        if len(value) > self.max_value_length:
            raise ValueTooLargeError(len(value), self.max_value_length)
        if value and record_type in self.record_class.single_byte_types:
            raise ValueError(f"Record type {record_type} cannot carry a value")
        self._record_type = record_type
        self._value = value

    # --- Convenience constructors ---

    @classmethod
    def from_uint8(cls, record_type: int, value: int) -> TlvRecordBuilder:
        return cls(record_type, _pack_uint(_UINT8, value))

    @classmethod
    def from_uint16(cls, record_type: int, value: int) -> TlvRecordBuilder:
        return cls(record_type, _pack_uint(_UINT16, value))

    @classmethod
    def from_uint32(cls, record_type: int, value: int) -> TlvRecordBuilder:
        return cls(record_type, _pack_uint(_UINT32, value))

    @classmethod
    def from_ipv4(cls, record_type: int, addr: str | IPv4Address) -> TlvRecordBuilder:
        """Create a record holding a 4-byte IPv4 address."""
        return cls(record_type, IPv4Address(addr).packed)

    @classmethod
    def from_string(cls, record_type: int, text: str, encoding: str = "utf-8") -> TlvRecordBuilder:
        """Create a record holding encoded text, without a terminator."""
        return cls(record_type, text.encode(encoding))

    # --- Properties ---

    @property
    def record_type(self) -> int:
        return self._record_type

    @property
    def value(self) -> bytes:
        return self._value

    @property
    def value_length(self) -> int:
        return len(self._value)

    # --- Building ---

    def build(self) -> TlvRecord:
        """Allocate and fill a new record buffer.

        The returned record owns the buffer and may be purged.
        """
        return self.record_class(self._encode(), owned=True)

    def copy(self) -> TlvRecordBuilder:
        dup = type(self).__new__(type(self))
        dup._record_type = self._record_type
        dup._value = bytes(bytearray(self._value))
        return dup

    __copy__ = copy

    def _length_field(self, value_length: int) -> int:
        return value_length

    def _record_size(self, value_length: int) -> int:
        return HEADER_SIZE + value_length

    def _encode(self) -> bytearray:
        if self._record_type in self.record_class.single_byte_types:
            return bytearray((self._record_type,))

        n = len(self._value)
        buf = bytearray(self._record_size(n))
        buf[0] = self._record_type
        buf[1] = self._length_field(n)
        buf[HEADER_SIZE : HEADER_SIZE + n] = self._value
        return buf

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TlvRecordBuilder):
            return NotImplemented
        return (
            type(self) is type(other)
            and self._record_type == other._record_type
            and self._value == other._value
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(record_type={self._record_type}, value={self._value!r})"


def pack_records(records: Iterable[TlvRecord]) -> bytearray:
    """Concatenate records into a contiguous record region."""
    out = bytearray()
    for rec in records:
        out += rec.to_bytes()
    return out
