#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Host groups: named node sets used by deployment playbooks
"""

import re
from typing import Callable, Dict, List

from .schema.models import HiveDefinition, NodeDefinition

HOST_GROUP_RE = re.compile(r'^[a-z][a-z0-9\-_]*$')

# built-in group name -> membership test
BUILTIN_GROUPS: Dict[str, Callable[[NodeDefinition], bool]] = {
    "all": lambda node: True,
    "swarm": lambda node: node.in_swarm,
    "managers": lambda node: node.is_manager,
    "workers": lambda node: node.is_worker,
    "pets": lambda node: node.is_pet,
    "ceph": lambda node: node.labels.ceph_mon or node.labels.ceph_osd or node.labels.ceph_mds,
    "ceph-mon": lambda node: node.labels.ceph_mon,
    "ceph-mds": lambda node: node.labels.ceph_mds,
    "ceph-osd": lambda node: node.labels.ceph_osd,
    "hivemq": lambda node: node.labels.hivemq,
    "hivemq-managers": lambda node: node.labels.hivemq_manager,
}


def is_builtin_group(name: str) -> bool:
    return name.lower() in BUILTIN_GROUPS


def get_host_groups(hive: HiveDefinition, exclude_pets: bool = False) -> Dict[str, List[NodeDefinition]]:
    """ Map each host group name to its member nodes, sorted by name.

    Explicit groups come from the nodes' HostGroups, built-in groups from
    node roles and labels. Empty built-in groups are included.
    """
    nodes = [node for node in hive.sorted_nodes if not (exclude_pets and node.is_pet)]
    groups: Dict[str, List[NodeDefinition]] = {}

    for node in nodes:
        for group in node.host_groups:
            if is_builtin_group(group):
                continue
            groups.setdefault(group.lower(), []).append(node)

    for group, is_member in BUILTIN_GROUPS.items():
        groups[group] = [node for node in nodes if is_member(node)]

    return groups
