#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Subnet partitioning for cloud hosted hives and overlap detection
"""

import dataclasses
import itertools
import logging
from typing import Dict, List, Optional, Tuple

from .schema.cidr import Cidr

logger = logging.getLogger(__name__)

# cloud hives are deployed into exactly one /21 block
CLOUD_PREFIXLEN = 21
CLOUD_VPN_POOL_PREFIXLEN = 22

# on-premise VPN client pools must hold at least a /23
MAX_PREMISE_VPN_POOL_PREFIXLEN = 23

# network, gateway, broadcast and one address held back by the cloud provider
RESERVED_NODE_ADDRESSES = 4


@dataclasses.dataclass(frozen=True)
class CloudSubnets:
    """ The blocks carved out of a cloud hive's top level /21.

    With 10.168.0.0/21 and VPN enabled:

        nodes     10.168.0.0/23  first quarter
        vpn       10.168.2.0/23  second quarter
        vnet      10.168.0.0/22  first half, covering nodes and vpn
        vpn_pool  10.168.4.0/22  block following vpn
    """
    cloud: Cidr
    nodes: Cidr
    vpn: Optional[Cidr] = None
    vnet: Optional[Cidr] = None
    vpn_pool: Optional[Cidr] = None

    def todict(self) -> Dict[str, Optional[str]]:
        return {
            field.name: None if getattr(self, field.name) is None else str(getattr(self, field.name))
            for field in dataclasses.fields(self)
        }


def partition_cloud_subnet(cloud: Cidr, vpn_enabled: bool) -> CloudSubnets:
    """ Split a cloud /21 into the node, VPN server, virtual network and VPN
    client pool blocks. Raises ValueError for any other prefix length.
    """
    if cloud.prefixlen != CLOUD_PREFIXLEN:
        raise ValueError(f"cloud subnet {cloud} must be a /{CLOUD_PREFIXLEN}")

    nodes = cloud.with_prefixlen_of(cloud.prefixlen + 2)
    if not vpn_enabled:
        return CloudSubnets(cloud=cloud, nodes=nodes)

    vpn = nodes.next_adjacent_block(cloud.prefixlen + 2)
    vnet = cloud.with_prefixlen_of(cloud.prefixlen + 1)
    vpn_pool = vpn.next_adjacent_block(CLOUD_VPN_POOL_PREFIXLEN)

    return CloudSubnets(cloud=cloud, nodes=nodes, vpn=vpn, vnet=vnet, vpn_pool=vpn_pool)


def node_capacity(nodes: Cidr) -> int:
    """ Number of node addresses a node subnet can hand out """
    return max(0, nodes.address_count - RESERVED_NODE_ADDRESSES)


def find_overlap(subnets: List[Tuple[str, Cidr]]) -> Optional[Tuple[Tuple[str, Cidr], Tuple[str, Cidr]]]:
    """ Return the first pair of named subnets which intersect, in declaration
    order, or None when all of them are disjoint.
    """
    for first, second in itertools.combinations(subnets, 2):
        if first[1].overlaps(second[1]):
            logger.debug(f"subnet {first[0]}={first[1]} overlaps {second[0]}={second[1]}")
            return first, second
    return None
