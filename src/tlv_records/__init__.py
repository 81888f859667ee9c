"""tlv-records — zero-copy Type-Length-Value record views for packet parsing.

Walk, search and count TLV records packed in a caller-owned buffer, and
build standalone records to splice into one. The length byte is
interpreted by a per-protocol record class (DHCP, TCP, IPv4, IPv6,
RADIUS, NDP, or your own ``TlvRecord`` subclass).

Example usage::

    from tlv_records import DhcpOption, DhcpOptionBuilder, TlvRecordReader

    options = bytearray(b"\\x35\\x01\\x01\\x33\\x04\\x00\\x00\\x0e\\x10\\xff")
    reader = TlvRecordReader(DhcpOption)

    lease = reader.find(51, options, len(options))
    print(lease.value_as("I"))            # 3600
    print(reader.count(options, len(options)))  # 3

    rec = DhcpOptionBuilder.from_string(12, "host-1").build()
    print(rec.to_bytes())
    rec.purge()
"""

from tlv_records.builder import TlvRecordBuilder, pack_records
from tlv_records.config import ReaderConfig
from tlv_records.errors import (
    BorrowedBufferError,
    NullRecordError,
    TlvError,
    TruncatedSequenceError,
    ValueTooLargeError,
)
from tlv_records.reader import TlvRecordReader
from tlv_records.record import (
    HEADER_SIZE,
    MAX_VALUE_LENGTH,
    ByteOrder,
    SimpleTlvRecord,
    TlvRecord,
)
from tlv_records.variants import (
    DhcpOption,
    DhcpOptionBuilder,
    DhcpOptionType,
    IPv4Option,
    IPv4OptionBuilder,
    IPv4OptionType,
    IPv6OptionType,
    IPv6TlvOption,
    IPv6TlvOptionBuilder,
    NdpOption,
    NdpOptionBuilder,
    NdpOptionType,
    RadiusAttribute,
    RadiusAttributeBuilder,
    RadiusAttributeType,
    TcpOption,
    TcpOptionBuilder,
    TcpOptionType,
)

__version__ = "0.1.0"

__all__ = [
    # Records
    "HEADER_SIZE",
    "MAX_VALUE_LENGTH",
    "ByteOrder",
    "TlvRecord",
    "SimpleTlvRecord",
    # Reader
    "TlvRecordReader",
    "ReaderConfig",
    # Builder
    "TlvRecordBuilder",
    "pack_records",
    # Variants
    "DhcpOption",
    "DhcpOptionBuilder",
    "DhcpOptionType",
    "TcpOption",
    "TcpOptionBuilder",
    "TcpOptionType",
    "IPv4Option",
    "IPv4OptionBuilder",
    "IPv4OptionType",
    "IPv6TlvOption",
    "IPv6TlvOptionBuilder",
    "IPv6OptionType",
    "RadiusAttribute",
    "RadiusAttributeBuilder",
    "RadiusAttributeType",
    "NdpOption",
    "NdpOptionBuilder",
    "NdpOptionType",
    # Errors
    "TlvError",
    "NullRecordError",
    "ValueTooLargeError",
    "BorrowedBufferError",
    "TruncatedSequenceError",
]
