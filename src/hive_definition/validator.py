#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Hive definition normalization and validation entry points
"""

import logging
import re

from .errors import HiveDefinitionError, field_name
from .options import CHECKS, NORMALIZERS
from .options.common import is_http_uri
from .schema.cidr import Cidr, parse_address
from .schema.models import (
    DEFAULT_DRIVE_PREFIX,
    DEFAULT_PROVISIONER,
    DEFAULT_TIME_SOURCES,
    MAX_MANAGERS,
    MIN_MANAGERS,
    HiveDefinition,
    NetworkOptions,
    is_valid_name,
)

logger = logging.getLogger(__name__)

_PROXY_SEPARATOR_RE = re.compile(r'[,\s]+')


def _normalize_in_place(hive: HiveDefinition):
    hive.provisioner = hive.provisioner or DEFAULT_PROVISIONER
    hive.drive_prefix = hive.drive_prefix or DEFAULT_DRIVE_PREFIX
    if not hive.time_sources or any(not source.strip() for source in hive.time_sources):
        hive.time_sources = list(DEFAULT_TIME_SOURCES)

    for normalizer in NORMALIZERS:
        normalizer(hive)


def normalize(hive: HiveDefinition) -> HiveDefinition:
    """ Return a deep copy of hive with defaults filled in, derived subnets
    computed and unassigned service roles placed. hive is not modified.
    """
    normalized = hive.model_copy(deep=True)
    _normalize_in_place(normalized)
    return normalized


def _check_root(hive: HiveDefinition):
    if not hive.nodes:
        raise HiveDefinitionError.for_missing(hive, "nodes", "must define at least one hive node.")

    for field in ("name", "datacenter"):
        value = getattr(hive, field)
        if not value:
            raise HiveDefinitionError.for_missing(hive, field, "is required.")
        if not is_valid_name(value):
            raise HiveDefinitionError.for_field(
                hive, field, value,
                "is not valid. Only letters, numbers, periods, dashes, and underscores are allowed.")

    if hive.package_proxy:
        for uri in _PROXY_SEPARATOR_RE.split(hive.package_proxy.strip()):
            if not is_http_uri(uri):
                raise HiveDefinitionError.for_field(
                    hive, "package_proxy", hive.package_proxy, f"includes [{uri}] which is not a valid HTTP URI.")

    managers = len(hive.managers)
    if managers < MIN_MANAGERS:
        raise HiveDefinitionError.for_field(
            hive, "nodes", f"{managers} managers", "hives must have at least one management node.")
    if managers > MAX_MANAGERS:
        raise HiveDefinitionError.for_field(
            hive, "nodes", f"{managers} managers", f"hives may not have more than [{MAX_MANAGERS}] management nodes.")
    if managers % 2 == 0:
        raise HiveDefinitionError.for_field(
            hive, "nodes", f"{managers} managers", "hives must have an odd number of management nodes: [1, 3, or 5].")


def _check_addresses(hive: HiveDefinition):
    """ Private addresses must be unique, inside the node subnet and outside
    the VPN client pool.
    """
    nodes_subnet = Cidr.try_parse(hive.network.nodes_subnet)
    vpn_pool = Cidr.try_parse(hive.network.vpn_pool_subnet) if hive.vpn_enabled else None
    nodes_path = f"{field_name(NetworkOptions, 'nodes_subnet')}={hive.network.nodes_subnet}"
    pool_path = f"{field_name(NetworkOptions, 'vpn_pool_subnet')}={hive.network.vpn_pool_subnet}"

    owners = {}
    for node in hive.sorted_nodes:
        if not node.private_address:
            continue

        address = parse_address(node.private_address)
        if address is None:
            raise HiveDefinitionError.for_field(
                node, "private_address", node.private_address, f"of node [{node.name}] is not a valid IPv4 address.")
        if address in owners:
            raise HiveDefinitionError.for_field(
                node, "private_address", node.private_address,
                f"of node [{node.name}] conflicts with node [{owners[address]}].")
        owners[address] = node.name

        if vpn_pool is not None and address in vpn_pool:
            raise HiveDefinitionError.for_field(
                node, "private_address", node.private_address,
                f"of node [{node.name}] is within [{pool_path}].")
        if nodes_subnet is not None and address not in nodes_subnet:
            raise HiveDefinitionError.for_field(
                node, "private_address", node.private_address,
                f"of node [{node.name}] is not within [{nodes_path}].")


def check(hive: HiveDefinition):
    """ Raise HiveDefinitionError for the first problem found in a normalized
    definition. hive is not modified.
    """
    _check_root(hive)
    for group_check in CHECKS:
        group_check(hive)
    _check_addresses(hive)


def validate(hive: HiveDefinition) -> HiveDefinition:
    """ Normalize hive in place then check it, returning hive.

    Validating the result again leaves it unchanged.
    """
    _normalize_in_place(hive)
    check(hive)
    logger.debug(f"hive [{hive.name}] is valid with {len(hive.nodes)} nodes")
    return hive
