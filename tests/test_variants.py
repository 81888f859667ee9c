"""Tests for protocol-specific length policies and builders."""

from ipaddress import IPv4Address

import pytest

from tlv_records.errors import ValueTooLargeError
from tlv_records.reader import TlvRecordReader
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


class TestDhcpOption:
    """DHCP options: length counts the value; PAD and END are one byte."""

    OPTIONS = bytes(
        [53, 1, 1]  # message type = DISCOVER
        + [0]  # pad
        + [51, 4, 0x00, 0x00, 0x0E, 0x10]  # lease time 3600
        + [54, 4, 192, 168, 0, 1]  # server identifier
        + [255]  # end
    )

    def test_sizes(self):
        rec = DhcpOption(self.OPTIONS, 4)
        assert rec.total_size == 6
        assert rec.data_size == 4

    @pytest.mark.parametrize("opt", [DhcpOptionType.PAD, DhcpOptionType.END])
    def test_single_byte_options(self, opt):
        rec = DhcpOption(bytes([opt]))
        assert rec.total_size == 1
        assert rec.data_size == 0
        assert rec.value == b""

    def test_walk(self):
        reader = TlvRecordReader(DhcpOption)
        types = [r.record_type for r in reader.iter_records(self.OPTIONS, len(self.OPTIONS))]
        assert types == [53, 0, 51, 54, 255]

    def test_find_values(self):
        reader = TlvRecordReader(DhcpOption)
        n = len(self.OPTIONS)
        assert reader.find(DhcpOptionType.MESSAGE_TYPE, self.OPTIONS, n).value_as("B") == 1
        assert reader.find(DhcpOptionType.LEASE_TIME, self.OPTIONS, n).value_as("I") == 3600
        server = reader.find(DhcpOptionType.SERVER_IDENTIFIER, self.OPTIONS, n)
        assert server.value_as_ipv4() == IPv4Address("192.168.0.1")

    def test_build(self):
        rec = DhcpOptionBuilder.from_string(DhcpOptionType.HOST_NAME, "pc1").build()
        assert isinstance(rec, DhcpOption)
        assert rec.to_bytes() == b"\x0c\x03pc1"

    def test_build_end(self):
        rec = DhcpOptionBuilder(DhcpOptionType.END).build()
        assert rec.to_bytes() == b"\xff"
        assert len(rec.buffer) == 1

    def test_end_with_value_rejected(self):
        with pytest.raises(ValueError, match="cannot carry a value"):
            DhcpOptionBuilder(DhcpOptionType.END, b"x")


class TestTcpOption:
    """TCP options: length counts header and value; EOL and NOP are one byte."""

    OPTIONS = bytes(
        [2, 4, 0x05, 0xB4]  # MSS 1460
        + [1]  # NOP
        + [3, 3, 7]  # window scale
        + [1, 1]  # NOP NOP
        + [8, 10, 0, 0, 0, 1, 0, 0, 0, 2]  # timestamps
    )

    def test_sizes(self):
        rec = TcpOption(self.OPTIONS)
        assert rec.total_size == 4
        assert rec.data_size == 2
        assert rec.value_as("H") == 1460

    def test_walk(self):
        reader = TlvRecordReader(TcpOption)
        types = [r.record_type for r in reader.iter_records(self.OPTIONS, len(self.OPTIONS))]
        assert types == [2, 1, 3, 1, 1, 8]

    def test_count(self):
        reader = TlvRecordReader(TcpOption)
        assert reader.count(self.OPTIONS, len(self.OPTIONS)) == 6

    def test_length_below_header(self):
        rec = TcpOption(b"\x08\x01")
        assert rec.total_size == 1
        assert rec.data_size == 0

    def test_zero_length_does_not_loop(self):
        buf = b"\x02\x00\x02\x04"
        reader = TlvRecordReader(TcpOption)
        assert reader.count(buf, len(buf)) == 1
        assert reader.find(TcpOptionType.MSS, buf, len(buf)).offset == 0

    def test_build(self):
        rec = TcpOptionBuilder.from_uint16(TcpOptionType.MSS, 1460).build()
        assert rec.to_bytes() == b"\x02\x04\x05\xb4"
        assert rec.total_size == 4
        assert rec.value_as("H") == 1460

    def test_build_nop(self):
        assert TcpOptionBuilder(TcpOptionType.NOP).build().to_bytes() == b"\x01"

    def test_value_limit(self):
        TcpOptionBuilder(TcpOptionType.SACK, bytes(253))
        with pytest.raises(ValueTooLargeError) as exc_info:
            TcpOptionBuilder(TcpOptionType.SACK, bytes(254))
        assert exc_info.value.limit == 253


class TestIPv4Option:
    """IPv4 options share the TCP length rule."""

    def test_router_alert(self):
        rec = IPv4OptionBuilder.from_uint16(IPv4OptionType.ROUTER_ALERT, 0).build()
        assert isinstance(rec, IPv4Option)
        assert rec.to_bytes() == b"\x94\x04\x00\x00"
        assert rec.total_size == 4

    def test_walk_with_padding(self):
        buf = b"\x94\x04\x00\x00\x01\x00"
        reader = TlvRecordReader(IPv4Option)
        types = [r.record_type for r in reader.iter_records(buf, len(buf))]
        assert types == [IPv4OptionType.ROUTER_ALERT, IPv4OptionType.NOP, IPv4OptionType.EOL]


class TestIPv6TlvOption:
    """IPv6 extension header options: length counts the value; Pad1 is one byte."""

    def test_padn(self):
        rec = IPv6TlvOption(b"\x01\x02\x00\x00")
        assert rec.total_size == 4
        assert rec.data_size == 2

    def test_pad1(self):
        assert IPv6TlvOption(b"\x00").total_size == 1

    def test_build_jumbo(self):
        rec = IPv6TlvOptionBuilder.from_uint32(IPv6OptionType.JUMBO_PAYLOAD, 70000).build()
        assert rec.to_bytes() == b"\xc2\x04\x00\x01\x11\x70"
        assert rec.value_as("I") == 70000


class TestRadiusAttribute:
    """RADIUS attributes: length counts header and value, no single-byte types."""

    def test_type_zero_is_not_single_byte(self):
        rec = RadiusAttribute(b"\x00\x03x")
        assert rec.total_size == 3
        assert rec.data_size == 1

    def test_build_and_find(self):
        region = bytearray()
        region += RadiusAttributeBuilder.from_string(RadiusAttributeType.USER_NAME, "alice").build().to_bytes()
        region += RadiusAttributeBuilder.from_ipv4(RadiusAttributeType.NAS_IP_ADDRESS, "10.0.0.9").build().to_bytes()
        assert region[:2] == b"\x01\x07"

        reader = TlvRecordReader(RadiusAttribute)
        nas = reader.find(RadiusAttributeType.NAS_IP_ADDRESS, region, len(region))
        assert nas.value_as_ipv4() == IPv4Address("10.0.0.9")
        assert reader.find(RadiusAttributeType.USER_NAME, region, len(region)).value_as_string() == "alice"


class TestNdpOption:
    """NDP options: length counts 8-octet units."""

    def test_sizes(self):
        rec = NdpOption(b"\x01\x01" + bytes(6))
        assert rec.total_size == 8
        assert rec.data_size == 6

    def test_build_pads_to_eight(self):
        mac = bytes.fromhex("001122334455")
        rec = NdpOptionBuilder(NdpOptionType.SOURCE_LINK_LAYER_ADDRESS, mac).build()
        assert rec.to_bytes() == b"\x01\x01" + mac
        assert rec.total_size == 8

    def test_build_with_padding(self):
        rec = NdpOptionBuilder.from_uint32(NdpOptionType.MTU, 1500).build()
        assert rec.length_field == 1
        assert len(rec.buffer) == 8
        assert rec.to_bytes() == b"\x05\x01\x00\x00\x05\xdc\x00\x00"
        assert rec.value_as("I") == 1500

    def test_zero_length_stops(self):
        buf = b"\x01\x00" + bytes(6)
        reader = TlvRecordReader(NdpOption)
        assert reader.count(buf, len(buf)) == 1
