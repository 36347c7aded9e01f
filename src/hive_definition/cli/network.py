#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Network commands
"""

import tabulate

from ..errors import field_name
from .base import HiveDefinitionCommand

_SUBNET_FIELDS = (
    "public_subnet",
    "private_subnet",
    "cloud_subnet",
    "cloud_vnet_subnet",
    "cloud_vpn_subnet",
    "premise_subnet",
    "nodes_subnet",
    "vpn_pool_subnet",
    "ingress_subnet",
)


class ShowSubnets(HiveDefinitionCommand):
    """ Show the declared and derived hive subnets
    """
    sub_command = 'subnets'

    def run(self, hive, args):
        net = hive.network
        rows = []
        for field in _SUBNET_FIELDS:
            if field.startswith("cloud_") and not hive.is_cloud:
                continue
            if field == "premise_subnet" and hive.is_cloud:
                continue
            if field == "vpn_pool_subnet" and not hive.vpn_enabled:
                continue
            rows.append([field_name(net, field), getattr(net, field) or ""])
        print(tabulate.tabulate(rows, headers=["option", "subnet"]))
