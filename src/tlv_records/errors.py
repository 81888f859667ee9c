"""TLV record error types."""

from __future__ import annotations


class TlvError(Exception):
    """Base exception for all TLV record errors."""


class NullRecordError(TlvError):
    """Header or value access on a null record view."""

    def __init__(self, operation: str = "access") -> None:
        super().__init__(f"Cannot {operation} a null TLV record")
        self.operation = operation


class ValueTooLargeError(TlvError, ValueError):
    """Record value does not fit in the one-byte length field."""

    def __init__(self, length: int, limit: int = 255) -> None:
        super().__init__(f"Record value too large: {length} > {limit} bytes")
        self.length = length
        self.limit = limit


class BorrowedBufferError(TlvError):
    """Attempt to release a buffer the record view does not own."""


class TruncatedSequenceError(TlvError):
    """A record runs past the end of its buffer (strict traversal only)."""

    def __init__(self, offset: int, total_size: int, length: int) -> None:
        super().__init__(
            f"Truncated TLV record at offset {offset}: "
            f"{total_size} bytes needed, {length - offset} available"
        )
        self.offset = offset
        self.total_size = total_size
        self.length = length
