#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Network options: subnet derivation for cloud hives, containment checks for
on-premise hives and the hive wide subnet overlap check
"""

import logging
from typing import List, Tuple

from ..errors import HiveDefinitionError, field_name
from ..schema.cidr import Cidr, parse_address
from ..schema.models import HiveDefinition, NetworkOptions
from ..subnets import (
    CLOUD_PREFIXLEN,
    MAX_PREMISE_VPN_POOL_PREFIXLEN,
    find_overlap,
    node_capacity,
    partition_cloud_subnet,
)
from .common import address_field, subnet_field

logger = logging.getLogger(__name__)

DEFAULT_CLOUD_SUBNET = "10.168.0.0/21"
DEFAULT_NAMESERVERS = ("8.8.8.8", "8.8.4.4")
MIN_MTU = 256


def _set_derived(net: NetworkOptions, field: str, value: str):
    if getattr(net, field) != value:
        logger.info(f"{field_name(net, field)} set to {value}")
        setattr(net, field, value)


def normalize(hive: HiveDefinition):
    net = hive.network

    if not net.nameservers:
        net.nameservers = list(DEFAULT_NAMESERVERS)

    if hive.is_cloud:
        if not net.cloud_subnet:
            net.cloud_subnet = DEFAULT_CLOUD_SUBNET

        cloud = Cidr.try_parse(net.cloud_subnet)
        if cloud is None or cloud.prefixlen != CLOUD_PREFIXLEN:
            logger.debug(f"not partitioning unusable cloud subnet {net.cloud_subnet}")
            return

        plan = partition_cloud_subnet(cloud, hive.vpn_enabled)
        _set_derived(net, "nodes_subnet", str(plan.nodes))
        if plan.vpn is not None:
            _set_derived(net, "cloud_vpn_subnet", str(plan.vpn))
            _set_derived(net, "cloud_vnet_subnet", str(plan.vnet))
            _set_derived(net, "vpn_pool_subnet", str(plan.vpn_pool))
        return

    premise = Cidr.try_parse(net.premise_subnet)
    if premise is None:
        logger.debug(f"not defaulting gateway/broadcast for unusable premise subnet {net.premise_subnet}")
        return

    if not net.gateway:
        _set_derived(net, "gateway", str(premise.first_usable_address))
    if not net.broadcast:
        _set_derived(net, "broadcast", str(premise.last_address))


def _check_cloud(hive: HiveDefinition, subnets: List[Tuple[str, Cidr]]):
    net = hive.network
    cloud = subnet_field(net, "cloud_subnet")
    if cloud.prefixlen != CLOUD_PREFIXLEN:
        raise HiveDefinitionError.for_field(
            net, "cloud_subnet", net.cloud_subnet,
            f"prefix length is not valid. Only [/{CLOUD_PREFIXLEN}] subnets are supported.")

    plan = partition_cloud_subnet(cloud, hive.vpn_enabled)
    derived = {"nodes_subnet": plan.nodes}
    if plan.vpn is not None:
        derived.update(cloud_vpn_subnet=plan.vpn, cloud_vnet_subnet=plan.vnet, vpn_pool_subnet=plan.vpn_pool)
    for field, cidr in derived.items():
        if getattr(net, field) != str(cidr):
            raise HiveDefinitionError.for_field(
                net, field, getattr(net, field),
                f"must be [{cidr}], derived from [{field_name(net, 'cloud_subnet')}={net.cloud_subnet}].")

    if len(hive.nodes) > node_capacity(plan.nodes):
        raise HiveDefinitionError.for_field(
            net, "nodes_subnet", net.nodes_subnet,
            f"subnet not large enough for the [{len(hive.nodes)}] node addresses.")

    subnets.append(("NodesSubnet", plan.nodes))
    if plan.vpn_pool is not None:
        subnets.append(("VpnPoolSubnet", plan.vpn_pool))


def _check_premise(hive: HiveDefinition, subnets: List[Tuple[str, Cidr]]):
    net = hive.network
    premise = subnet_field(net, "premise_subnet")
    premise_path = f"{field_name(net, 'premise_subnet')}={net.premise_subnet}"

    for field in ("gateway", "broadcast"):
        address = address_field(net, field)
        if address not in premise:
            raise HiveDefinitionError.for_field(
                net, field, getattr(net, field), f"address is not within [{premise_path}].")

    nodes = subnet_field(net, "nodes_subnet")
    if not premise.contains(nodes):
        raise HiveDefinitionError.for_field(
            net, "nodes_subnet", net.nodes_subnet, f"is not within [{premise_path}].")
    subnets.append(("NodesSubnet", nodes))

    if not hive.vpn_enabled:
        return

    if not net.manager_public_address:
        raise HiveDefinitionError.for_missing(
            net, "manager_public_address",
            "is required for on-premise deployments that enable VPN. "
            "Set the public IP address or FQDN of the hive router.")

    pool = subnet_field(net, "vpn_pool_subnet")
    if pool.prefixlen > MAX_PREMISE_VPN_POOL_PREFIXLEN:
        raise HiveDefinitionError.for_field(
            net, "vpn_pool_subnet", net.vpn_pool_subnet,
            f"is too small. The subnet prefix length cannot be longer than [{MAX_PREMISE_VPN_POOL_PREFIXLEN}].")
    if nodes.overlaps(pool):
        raise HiveDefinitionError(
            f"[{field_name(net, 'nodes_subnet')}={net.nodes_subnet}] and "
            f"[{field_name(net, 'vpn_pool_subnet')}={net.vpn_pool_subnet}] overlap.",
            path=field_name(net, "vpn_pool_subnet"), value=net.vpn_pool_subnet)
    if not premise.contains(pool):
        raise HiveDefinitionError.for_field(
            net, "vpn_pool_subnet", net.vpn_pool_subnet, f"is not within [{premise_path}].")
    subnets.append(("VpnPoolSubnet", pool))


def check(hive: HiveDefinition):
    net = hive.network

    public = subnet_field(net, "public_subnet")
    private = subnet_field(net, "private_subnet")
    if public == private:
        raise HiveDefinitionError.for_field(
            net, "public_subnet", net.public_subnet,
            f"cannot be the same as [{field_name(net, 'private_subnet')}].")

    for nameserver in net.nameservers:
        if parse_address(nameserver) is None:
            raise HiveDefinitionError.for_field(net, "nameservers", nameserver, "is not a valid IPv4 address.")

    subnets = [("PublicSubnet", public), ("PrivateSubnet", private)]
    if hive.is_cloud:
        _check_cloud(hive, subnets)
    else:
        _check_premise(hive, subnets)

    ingress = subnet_field(net, "ingress_subnet")
    subnets.append(("IngressSubnet", ingress))

    overlap = find_overlap(subnets)
    if overlap is not None:
        (first_name, first), (second_name, second) = overlap
        raise HiveDefinitionError(
            f"[{NetworkOptions.__name__}.{first_name}={first}] and "
            f"[{NetworkOptions.__name__}.{second_name}={second}] overlap.",
            path=f"{NetworkOptions.__name__}.{second_name}", value=str(second))

    for field in ("mtu", "ingress_mtu"):
        value = getattr(net, field)
        if value < MIN_MTU:
            raise HiveDefinitionError.for_field(net, field, value, f"cannot be less than [{MIN_MTU}].")

    gateway = address_field(net, "ingress_gateway")
    if gateway not in ingress:
        raise HiveDefinitionError.for_field(
            net, "ingress_gateway", net.ingress_gateway,
            f"is not within [{field_name(net, 'ingress_subnet')}={net.ingress_subnet}].")
