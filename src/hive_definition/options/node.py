#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Per-node checks, including node labels and host groups
"""

import logging

from ..errors import HiveDefinitionError, field_name
from ..groups import HOST_GROUP_RE, is_builtin_group
from ..schema.cidr import parse_address
from ..schema.labels import custom_label_error
from ..schema.models import VIRTUAL_SWARM_MANAGER_NAME, HiveDefinition, NodeDefinition, is_valid_name
from ..schema.sizes import try_parse_size

logger = logging.getLogger(__name__)

RESERVED_NODE_NAME_PREFIX = "neon-"
MIN_CEPH_SIZE_MB = 64


def normalize(hive: HiveDefinition):
    """ Name nodes added after the definition was loaded and key them by
    lowercase name. Colliding keys are left for check to report.
    """
    renamed = {}
    for key, node in hive.nodes.items():
        if not node.name:
            node.name = key.lower()
        renamed.setdefault(key.lower(), node)

    if len(renamed) == len(hive.nodes) and list(renamed) != list(hive.nodes):
        logger.debug("node inventory re-keyed by lowercase node name")
        hive.nodes = renamed


def _check_labels(hive: HiveDefinition, node: NodeDefinition):
    labels = node.labels

    if hive.hivefs.enabled:
        for field in ("ceph_osd_cache_size_mb", "ceph_osd_journal_size_mb", "ceph_mds_cache_size_mb"):
            value = getattr(labels, field)
            if 0 < value < MIN_CEPH_SIZE_MB:
                raise HiveDefinitionError.for_field(
                    labels, field, value, f"on node [{node.name}] cannot be less than [{MIN_CEPH_SIZE_MB}MB].")
        if labels.ceph_osd_drive_size_gb < 0:
            raise HiveDefinitionError.for_field(
                labels, "ceph_osd_drive_size_gb", labels.ceph_osd_drive_size_gb,
                f"on node [{node.name}] cannot be negative.")

    for name, value in labels.custom.items():
        reason = custom_label_error(name, value)
        if reason is not None:
            raise HiveDefinitionError(reason, path=f"{field_name(labels, 'custom')}.{name}", value=value)


def _check_node(hive: HiveDefinition, key: str, node: NodeDefinition):
    hosting = hive.hosting
    name = node.name

    if name != key:
        raise HiveDefinitionError.for_field(node, "name", name, f"does not match its inventory key [{key}].")
    if not is_valid_name(name):
        raise HiveDefinitionError.for_field(
            node, "name", name, "is not valid. Only letters, numbers, periods, dashes, and underscores are allowed.")
    if name == "localhost":
        raise HiveDefinitionError.for_field(node, "name", name, "is reserved.")
    if name.startswith(RESERVED_NODE_NAME_PREFIX):
        raise HiveDefinitionError.for_field(
            node, "name", name, f"is not valid. Names starting with [{RESERVED_NODE_NAME_PREFIX}] are reserved.")
    if name == VIRTUAL_SWARM_MANAGER_NAME:
        raise HiveDefinitionError.for_field(node, "name", name, "is reserved for the swarm manager virtual node.")

    if hosting.is_on_premise:
        if not node.private_address:
            raise HiveDefinitionError.for_missing(
                node, "private_address",
                f"is required for node [{name}] in the [{hosting.environment.value}] hosting environment.")
        if parse_address(node.private_address) is None:
            raise HiveDefinitionError.for_field(
                node, "private_address", node.private_address, f"of node [{name}] is not a valid IPv4 address.")
        if node.is_manager and hive.vpn_enabled and not 0 < node.vpn_frontend_port <= 65535:
            raise HiveDefinitionError.for_field(
                node, "vpn_frontend_port", node.vpn_frontend_port,
                f"of manager [{name}] must be a valid network port when VPN is enabled.")

    if node.public_address and parse_address(node.public_address) is None:
        raise HiveDefinitionError.for_field(
            node, "public_address", node.public_address, f"of node [{name}] is not a valid IPv4 address.")

    for group in node.host_groups:
        if not group or not group.strip():
            raise HiveDefinitionError.for_field(node, "host_groups", group, f"node [{name}] has an empty host group.")
        if is_builtin_group(group):
            raise HiveDefinitionError.for_field(
                node, "host_groups", group, f"node [{name}] cannot join the built-in group [{group}].")
        if not HOST_GROUP_RE.match(group):
            raise HiveDefinitionError.for_field(
                node, "host_groups", group,
                f"node [{name}] host group must start with a lowercase letter and include only "
                f"lowercase letters, digits, dashes and underscores.")

    if hosting.is_remote_hypervisor and not node.vm_host:
        raise HiveDefinitionError.for_missing(
            node, "vm_host", f"is required for node [{name}] in the [{hosting.environment.value}] environment.")

    if node.vm_processors < 0:
        raise HiveDefinitionError.for_field(node, "vm_processors", node.vm_processors, "cannot be negative.")
    for field in ("vm_memory", "vm_minimum_memory", "vm_disk"):
        value = getattr(node, field)
        if value and try_parse_size(value) is None:
            raise HiveDefinitionError.for_field(node, field, value, "cannot be parsed.")

    _check_labels(hive, node)


def check(hive: HiveDefinition):
    for key in sorted(hive.nodes):
        _check_node(hive, key, hive.nodes[key])
