#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
IPv4 network block type used for hive subnet arithmetic
"""

import ipaddress
import re
from typing import Optional, Union

_CIDR_RE = re.compile(r'^\s*(\d{1,3}(?:\.\d{1,3}){3})/(\d{1,2})\s*$')
_ADDRESS_RE = re.compile(r'^\s*\d{1,3}(?:\.\d{1,3}){3}\s*$')


class Cidr(ipaddress.IPv4Network):
    """ Manage an IPv4 network block: an address plus a prefix length.

    Host bits in the address are masked off so that "10.0.0.7/24" names
    the 10.0.0.0/24 block.
    """

    @classmethod
    def parse(cls, text: str) -> 'Cidr':
        """ Parse ADDRESS/PREFIX text, raising ValueError when malformed
        """
        if not isinstance(text, str):
            raise ValueError(f"expected format ADDRESS/PREFIX, got: {text!r}")

        match = _CIDR_RE.match(text)
        if not match:
            raise ValueError(f"expected format ADDRESS/PREFIX, got: '{text}'")

        prefixlen = int(match.group(2))
        if prefixlen > 32:
            raise ValueError(f"prefix length must be between 0 and 32, got: {prefixlen}")

        return cls(f"{match.group(1)}/{prefixlen}", strict=False)

    @classmethod
    def try_parse(cls, text: Optional[str]) -> Optional['Cidr']:
        """ Parse ADDRESS/PREFIX text, returning None when malformed
        """
        if not text:
            return None
        try:
            return cls.parse(text)
        except ValueError:
            return None

    @property
    def address_count(self) -> int:
        return self.num_addresses

    @property
    def first_usable_address(self) -> ipaddress.IPv4Address:
        """ The first host address. /31 and /32 blocks have no network
        address to skip.
        """
        if self.prefixlen >= 31:
            return self.network_address
        return self.network_address + 1

    @property
    def last_address(self) -> ipaddress.IPv4Address:
        return self.broadcast_address

    def contains(self, other: Union[str, ipaddress.IPv4Address, ipaddress.IPv4Network]) -> bool:
        """ Check whether an address or a whole network lies inside this block
        """
        if isinstance(other, str):
            other = Cidr.parse(other) if '/' in other else ipaddress.IPv4Address(other.strip())

        if isinstance(other, ipaddress.IPv4Network):
            return self.supernet_of(other)
        return other in self

    def next_adjacent_block(self, prefixlen: int) -> 'Cidr':
        """ Return the block of size prefixlen immediately following this one.

        The start is rounded up to a prefixlen boundary when the end of this
        block is not aligned to it.
        """
        if not 0 <= prefixlen <= 32:
            raise ValueError(f"prefix length must be between 0 and 32, got: {prefixlen}")

        block_size = 1 << (32 - prefixlen)
        start = int(self.network_address) + self.num_addresses
        start = -(-start // block_size) * block_size
        if start + block_size > 1 << 32:
            raise ValueError(f"no /{prefixlen} block follows {self}")

        return Cidr((start, prefixlen))

    def with_prefixlen_of(self, prefixlen: int) -> 'Cidr':
        """ Return the block of size prefixlen starting at this block's address
        """
        return Cidr((int(self.network_address), prefixlen), strict=False)


def parse_address(text: Optional[str]) -> Optional[ipaddress.IPv4Address]:
    """ Parse a dotted-quad address, returning None when malformed
    """
    if not text or not isinstance(text, str) or not _ADDRESS_RE.match(text):
        return None
    try:
        return ipaddress.IPv4Address(text.strip())
    except ValueError:
        return None
