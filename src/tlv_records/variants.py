"""Protocol-specific TLV length policies.

Each protocol interprets the length byte differently:

    Record            Length byte counts        total_size      data_size
    DhcpOption        value                     len + 2         len
    IPv6TlvOption     value                     len + 2         len
    TcpOption         header + value            len             len - 2
    IPv4Option        header + value            len             len - 2
    RadiusAttribute   header + value            len             len - 2
    NdpOption         8-octet units, padded     len * 8         len * 8 - 2

Padding and end-of-list types that are a single type byte have
total_size 1 and data_size 0.
"""

from __future__ import annotations

from enum import IntEnum

from tlv_records.builder import TlvRecordBuilder
from tlv_records.record import HEADER_SIZE, MAX_VALUE_LENGTH, TlvRecord

# ---------------------------------------------------------------------------
# Record types
# ---------------------------------------------------------------------------


class DhcpOptionType(IntEnum):
    """Common DHCPv4 option codes (RFC 2132)."""

    PAD = 0
    SUBNET_MASK = 1
    ROUTERS = 3
    DOMAIN_NAME_SERVERS = 6
    HOST_NAME = 12
    DOMAIN_NAME = 15
    REQUESTED_ADDRESS = 50
    LEASE_TIME = 51
    MESSAGE_TYPE = 53
    SERVER_IDENTIFIER = 54
    PARAMETER_REQUEST_LIST = 55
    END = 255


class TcpOptionType(IntEnum):
    """TCP option kinds."""

    EOL = 0
    NOP = 1
    MSS = 2
    WINDOW_SCALE = 3
    SACK_PERMITTED = 4
    SACK = 5
    TIMESTAMP = 8


class IPv4OptionType(IntEnum):
    """IPv4 header option types."""

    EOL = 0
    NOP = 1
    RECORD_ROUTE = 7
    TIMESTAMP = 68
    LOOSE_SOURCE_ROUTE = 131
    STRICT_SOURCE_ROUTE = 137
    ROUTER_ALERT = 148


class IPv6OptionType(IntEnum):
    """Hop-by-hop and destination option types."""

    PAD1 = 0
    PADN = 1
    ROUTER_ALERT = 5
    JUMBO_PAYLOAD = 0xC2


class RadiusAttributeType(IntEnum):
    """Common RADIUS attribute types (RFC 2865)."""

    USER_NAME = 1
    USER_PASSWORD = 2
    NAS_IP_ADDRESS = 4
    NAS_PORT = 5
    SERVICE_TYPE = 6
    FRAMED_IP_ADDRESS = 8
    REPLY_MESSAGE = 18
    STATE = 24
    VENDOR_SPECIFIC = 26
    SESSION_TIMEOUT = 27


class NdpOptionType(IntEnum):
    """IPv6 Neighbor Discovery option types (RFC 4861)."""

    SOURCE_LINK_LAYER_ADDRESS = 1
    TARGET_LINK_LAYER_ADDRESS = 2
    PREFIX_INFORMATION = 3
    REDIRECTED_HEADER = 4
    MTU = 5


# ---------------------------------------------------------------------------
# Length policies
# ---------------------------------------------------------------------------


class _ValueLengthRecord(TlvRecord):
    """Length byte counts the value only."""

    __slots__ = ()

    @property
    def total_size(self) -> int:
        if self.is_single_byte:
            return 1
        return HEADER_SIZE + self.length_field

    @property
    def data_size(self) -> int:
        if self.is_single_byte:
            return 0
        return self.length_field


class _TotalLengthRecord(TlvRecord):
    """Length byte counts header and value."""

    __slots__ = ()

    @property
    def total_size(self) -> int:
        if self.is_single_byte:
            return 1
        return self.length_field

    @property
    def data_size(self) -> int:
        if self.is_single_byte:
            return 0
        return max(self.length_field - HEADER_SIZE, 0)


class DhcpOption(_ValueLengthRecord):
    __slots__ = ()
    single_byte_types = frozenset({DhcpOptionType.PAD, DhcpOptionType.END})


class IPv6TlvOption(_ValueLengthRecord):
    __slots__ = ()
    single_byte_types = frozenset({IPv6OptionType.PAD1})


class TcpOption(_TotalLengthRecord):
    __slots__ = ()
    single_byte_types = frozenset({TcpOptionType.EOL, TcpOptionType.NOP})


class IPv4Option(_TotalLengthRecord):
    __slots__ = ()
    single_byte_types = frozenset({IPv4OptionType.EOL, IPv4OptionType.NOP})


class RadiusAttribute(_TotalLengthRecord):
    __slots__ = ()


class NdpOption(TlvRecord):
    """Neighbor Discovery option; the length byte counts 8-octet units."""

    __slots__ = ()

    @property
    def total_size(self) -> int:
        return self.length_field * 8

    @property
    def data_size(self) -> int:
        return max(self.length_field * 8 - HEADER_SIZE, 0)


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


class _TotalLengthBuilder(TlvRecordBuilder):
    max_value_length = MAX_VALUE_LENGTH - HEADER_SIZE

    def _length_field(self, value_length: int) -> int:
        return value_length + HEADER_SIZE


class DhcpOptionBuilder(TlvRecordBuilder):
    record_class = DhcpOption


class IPv6TlvOptionBuilder(TlvRecordBuilder):
    record_class = IPv6TlvOption


class TcpOptionBuilder(_TotalLengthBuilder):
    record_class = TcpOption


class IPv4OptionBuilder(_TotalLengthBuilder):
    record_class = IPv4Option


class RadiusAttributeBuilder(_TotalLengthBuilder):
    record_class = RadiusAttribute


class NdpOptionBuilder(TlvRecordBuilder):
    """Builds NDP options zero-padded to a multiple of 8 bytes."""

    record_class = NdpOption

    def _length_field(self, value_length: int) -> int:
        return self._record_size(value_length) // 8

    def _record_size(self, value_length: int) -> int:
        return (HEADER_SIZE + value_length + 7) // 8 * 8
