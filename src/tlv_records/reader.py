"""Traversal, search and counting over packed TLV records.

Records are packed back to back in a buffer owned by the caller (usually a
packet layer), which also supplies the length of the record region. The
reader knows nothing about any protocol: it walks records using only
``total_size`` of the record class it was created with.

Example::

    from tlv_records import DhcpOption, TlvRecordReader

    reader = TlvRecordReader(DhcpOption)
    opt = reader.find(53, options, len(options))
    if opt:
        msg_type = opt.value_as("B")
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Generic, TypeVar

from tlv_records.config import ReaderConfig
from tlv_records.errors import TruncatedSequenceError
from tlv_records.record import BufferLike, TlvRecord

log = logging.getLogger("tlv_records.reader")

R = TypeVar("R", bound=TlvRecord)


class TlvRecordReader(Generic[R]):
    """Walks, searches and counts records of one record class.

    A null record is returned whenever traversal cannot continue: end of
    buffer, a record that would run past the end, or a record that does not
    belong to the buffer. "Not found" and "ended early" look the same unless
    ``ReaderConfig.strict`` is set.

    The record count is cached after the first full scan. The reader cannot
    see changes to the buffer; callers that add or remove records must
    report it with ``adjust_count``.
    """

    def __init__(self, record_class: type[R], config: ReaderConfig | None = None) -> None:
        self._record_class = record_class
        self._config = config or ReaderConfig()
        self._cached_count: int | None = None

    @property
    def record_class(self) -> type[R]:
        return self._record_class

    @property
    def config(self) -> ReaderConfig:
        return self._config

    @property
    def cached_count(self) -> int | None:
        return self._cached_count

    # --- Traversal ---

    def first(self, buffer: BufferLike, length: int, base: int = 0) -> R:
        """Return the record at ``base``, or null when the region is empty.

        The first record's size is not validated here; ``next_record``
        checks it against ``length``.
        """
        if self._clamp(buffer, length, base) <= 0:
            return self._record_class(None)
        return self._record_class(buffer, base)

    def next_record(self, record: R, buffer: BufferLike, length: int, base: int = 0) -> R:
        """Return the record following ``record``, or null.

        A record that ends exactly at ``length`` is the last one: no
        record follows it.
        """
        if record.is_null:
            return self._record_class(None)

        if record.buffer is not buffer:
            log.debug("Record does not view the traversed buffer")
            return self._record_class(None)

        offset = record.offset - base
        if offset < 0:
            log.debug("Record offset %d precedes buffer base %d", record.offset, base)
            return self._record_class(None)

        length = self._clamp(buffer, length, base)
        total_size = record.total_size
        if total_size <= 0:
            log.debug("Zero-size record (type %d) at offset %d", record.record_type, offset)
            return self._record_class(None)

        end = offset + total_size
        if end > length:
            if self._config.strict:
                log.warning(
                    "Record type %d at offset %d needs %d bytes, %d available",
                    record.record_type,
                    offset,
                    total_size,
                    length - offset,
                )
                raise TruncatedSequenceError(offset, total_size, length)
            log.debug("Record at offset %d runs past end of buffer (%d > %d)", offset, end, length)
            return self._record_class(None)
        if end == length:
            return self._record_class(None)

        return self._record_class(buffer, base + end)

    def iter_records(self, buffer: BufferLike, length: int, base: int = 0) -> Iterator[R]:
        """Yield every record from ``first`` through successive ``next_record``."""
        limit = self._config.max_records
        seen = 0
        rec = self.first(buffer, length, base)
        while not rec.is_null:
            if limit is not None and seen >= limit:
                log.debug("Stopping traversal after %d records", limit)
                return
            yield rec
            seen += 1
            rec = self.next_record(rec, buffer, length, base)

    # --- Search and count ---

    def find(self, record_type: int, buffer: BufferLike, length: int, base: int = 0) -> R:
        """Return the first record of ``record_type``, or null if there is none."""
        for rec in self.iter_records(buffer, length, base):
            if rec.record_type == record_type:
                return rec
        return self._record_class(None)

    def count(self, buffer: BufferLike, length: int, base: int = 0) -> int:
        """Return the number of records, scanning only on the first call."""
        if self._cached_count is not None:
            return self._cached_count

        self._cached_count = sum(1 for _ in self.iter_records(buffer, length, base))
        return self._cached_count

    def adjust_count(self, delta: int) -> None:
        """Report records added (positive) or removed (negative) since the last count.

        No-op while no count is cached.
        """
        if self._cached_count is not None:
            self._cached_count += delta

    def reset_count(self) -> None:
        """Forget the cached count so the next ``count`` rescans."""
        self._cached_count = None

    # --- Internals ---

    @staticmethod
    def _clamp(buffer: BufferLike, length: int, base: int) -> int:
        available = len(buffer) - base
        if length > available:
            log.debug("Record region length %d exceeds buffer (%d bytes available)", length, available)
            return available
        return length
