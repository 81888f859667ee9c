"""Configuration classes for TLV record traversal."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ReaderConfig:
    """Configuration for a TlvRecordReader.

    ``strict`` turns a record that overruns the buffer into a
    ``TruncatedSequenceError`` instead of a silent end of sequence.
    ``max_records`` stops traversal after that many records (None = no limit).
    """

    strict: bool = False
    max_records: int | None = None

    def with_strict(self, enabled: bool) -> ReaderConfig:
        self.strict = enabled
        return self

    def with_max_records(self, n: int | None) -> ReaderConfig:
        self.max_records = n
        return self
