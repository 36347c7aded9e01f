import ipaddress

import pytest

from hive_definition.schema.cidr import Cidr, parse_address
from hive_definition.schema.sizes import GB, MB, format_size, try_parse_size


def test_cidr_parse_masks_host_bits():
    cidr = Cidr.parse("10.0.0.7/24")
    assert str(cidr) == "10.0.0.0/24"
    assert cidr == ipaddress.ip_network("10.0.0.0/24")
    assert cidr.address_count == 256


@pytest.mark.parametrize("text", ["10.0.0.0", "10.0.0.0/33", "10.0.0/24", "", "not-a-subnet", "10.0.0.256/24"])
def test_cidr_parse_rejects(text):
    with pytest.raises(ValueError):
        Cidr.parse(text)
    assert Cidr.try_parse(text) is None


def test_cidr_addresses():
    cidr = Cidr.parse("10.0.0.0/24")
    assert cidr.first_usable_address == ipaddress.IPv4Address("10.0.0.1")
    assert cidr.last_address == ipaddress.IPv4Address("10.0.0.255")

    host = Cidr.parse("10.0.0.5/32")
    assert host.first_usable_address == ipaddress.IPv4Address("10.0.0.5")


def test_cidr_contains():
    cidr = Cidr.parse("10.0.0.0/16")
    assert cidr.contains("10.0.3.4")
    assert cidr.contains("10.0.1.0/24")
    assert cidr.contains(Cidr.parse("10.0.0.0/16"))
    assert not cidr.contains("10.1.0.0/24")
    assert not cidr.contains("10.0.0.0/8")
    assert not cidr.contains(ipaddress.IPv4Address("192.168.0.1"))


def test_cidr_next_adjacent_block():
    nodes = Cidr.parse("10.168.0.0/23")
    vpn = nodes.next_adjacent_block(23)
    assert str(vpn) == "10.168.2.0/23"
    assert str(vpn.next_adjacent_block(22)) == "10.168.4.0/22"

    # unaligned end rounds up to the next /22 boundary
    assert str(Cidr.parse("10.0.0.0/24").next_adjacent_block(22)) == "10.0.4.0/22"

    with pytest.raises(ValueError):
        Cidr.parse("255.255.255.0/24").next_adjacent_block(24)


def test_cidr_with_prefixlen_of():
    cloud = Cidr.parse("10.168.0.0/21")
    assert str(cloud.with_prefixlen_of(23)) == "10.168.0.0/23"
    assert str(cloud.with_prefixlen_of(22)) == "10.168.0.0/22"


def test_parse_address():
    assert parse_address("10.0.0.1") == ipaddress.IPv4Address("10.0.0.1")
    assert parse_address(" 10.0.0.1 ") == ipaddress.IPv4Address("10.0.0.1")
    for text in (None, "", "10.0.0", "300.0.0.1", "10.0.0.0/24", "host.example.com"):
        assert parse_address(text) is None


def test_sizes():
    assert try_parse_size("64MB") == 64 * MB
    assert try_parse_size("1.5GB") == 1536 * MB
    assert try_parse_size("2 gib") == 2 * GB
    assert try_parse_size(4096) == 4096
    assert try_parse_size("4096") == 4096
    for text in (None, True, -1, "", "lots", "10XB"):
        assert try_parse_size(text) is None

    assert format_size(1724 * MB) == "1724MB"
    assert format_size(2 * GB) == "2GB"
    assert format_size(100) == "100"
