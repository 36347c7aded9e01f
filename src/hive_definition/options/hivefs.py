#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
HiveFS (Ceph) storage options and storage role placement
"""

import logging

from ..errors import HiveDefinitionError, field_name
from ..placer import place_ceph_roles
from ..schema.labels import NodeLabels
from ..schema.models import HiveDefinition, HiveFSOptions, NodeDefinition
from ..schema.sizes import GB, MB, try_parse_size
from .common import size_field

logger = logging.getLogger(__name__)

DEFAULT_SIZES = {
    "osd_drive_size": "16GB",
    "osd_cache_size": "256MB",
    "osd_journal_size": "1GB",
    "osd_object_size_max": "5GB",
    "mds_cache_size": "64MB",
}
MIN_SIZES = {
    "osd_drive_size": GB,
    "osd_cache_size": 64 * MB,
    "osd_journal_size": 64 * MB,
    "osd_object_size_max": 64 * MB,
    "mds_cache_size": 64 * MB,
}
MIN_PLACEMENT_GROUPS = 8
MAX_DEFAULT_REPLICAS = 3

_ROLE_LABELS = (
    ("ceph_mon", "monitor"),
    ("ceph_osd", "OSD"),
    ("ceph_mds", "metadata"),
)


def osd_count(hive: HiveDefinition) -> int:
    return sum(1 for node in hive.nodes.values() if node.labels.ceph_osd)


def normalize(hive: HiveDefinition):
    hivefs = hive.hivefs
    if not hivefs.enabled:
        return

    for field, default in DEFAULT_SIZES.items():
        if not getattr(hivefs, field):
            setattr(hivefs, field, default)

    place_ceph_roles(hive)

    osds = osd_count(hive)
    if hivefs.osd_replica_count == 0 and osds > 0:
        hivefs.osd_replica_count = min(MAX_DEFAULT_REPLICAS, osds)
        logger.info(f"{field_name(hivefs, 'osd_replica_count')} set to {hivefs.osd_replica_count}")

    if hivefs.osd_replica_count_min == 0 and hivefs.osd_replica_count > 0:
        hivefs.osd_replica_count_min = 1 if hivefs.osd_replica_count == 1 else hivefs.osd_replica_count - 1


def check(hive: HiveDefinition):
    hivefs = hive.hivefs
    if not hivefs.enabled:
        return

    for field, minimum in MIN_SIZES.items():
        size_field(hivefs, field, minimum=minimum)

    if hivefs.osd_placement_groups < MIN_PLACEMENT_GROUPS:
        raise HiveDefinitionError.for_field(
            hivefs, "osd_placement_groups", hivefs.osd_placement_groups,
            f"cannot be less than [{MIN_PLACEMENT_GROUPS}].")

    for label, description in _ROLE_LABELS:
        if not any(getattr(node.labels, label) for node in hive.nodes.values()):
            raise HiveDefinitionError.for_field(
                hivefs, "enabled", hivefs.enabled,
                f"requires at least one Ceph {description} node "
                f"([{field_name(NodeLabels, label)}=true]).")

    osds = osd_count(hive)
    if not 1 <= hivefs.osd_replica_count <= osds:
        raise HiveDefinitionError.for_field(
            hivefs, "osd_replica_count", hivefs.osd_replica_count,
            f"must be between [1] and the number of OSD nodes [{osds}].")
    if not 1 <= hivefs.osd_replica_count_min <= hivefs.osd_replica_count:
        raise HiveDefinitionError.for_field(
            hivefs, "osd_replica_count_min", hivefs.osd_replica_count_min,
            f"must be between [1] and [{field_name(hivefs, 'osd_replica_count')}={hivefs.osd_replica_count}].")


def node_osd_drive_size_gb(node: NodeDefinition, hivefs: HiveFSOptions) -> int:
    """ OSD drive size for a node, falling back to the hive default """
    if node.labels.ceph_osd_drive_size_gb > 0:
        return node.labels.ceph_osd_drive_size_gb
    return (try_parse_size(hivefs.osd_drive_size) or 0) // GB


def node_osd_cache_size_mb(node: NodeDefinition, hivefs: HiveFSOptions) -> int:
    if node.labels.ceph_osd_cache_size_mb > 0:
        return node.labels.ceph_osd_cache_size_mb
    return (try_parse_size(hivefs.osd_cache_size) or 0) // MB


def node_osd_journal_size_mb(node: NodeDefinition, hivefs: HiveFSOptions) -> int:
    if node.labels.ceph_osd_journal_size_mb > 0:
        return node.labels.ceph_osd_journal_size_mb
    return (try_parse_size(hivefs.osd_journal_size) or 0) // MB


def node_mds_cache_size_mb(node: NodeDefinition, hivefs: HiveFSOptions) -> int:
    if node.labels.ceph_mds_cache_size_mb > 0:
        return node.labels.ceph_mds_cache_size_mb
    return (try_parse_size(hivefs.mds_cache_size) or 0) // MB
