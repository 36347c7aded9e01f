#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Ceph storage role placement
"""
from typing import List

from ..schema.models import HiveDefinition, NodeDefinition
from .base import LabelRolePlacer

# below this many workers, OSDs are spread over every swarm node
MIN_DEDICATED_OSD_WORKERS = 3


class CephMonPlacer(LabelRolePlacer):
    """ Ceph monitors default to the managers """
    role = 'ceph-mon'
    label = 'ceph_mon'

    def candidates(self, hive: HiveDefinition) -> List[NodeDefinition]:
        return hive.managers


class CephOsdPlacer(LabelRolePlacer):
    """ Ceph OSDs default to the workers, or to every swarm node for small hives """
    role = 'ceph-osd'
    label = 'ceph_osd'

    def candidates(self, hive: HiveDefinition) -> List[NodeDefinition]:
        workers = hive.workers
        if len(workers) >= MIN_DEDICATED_OSD_WORKERS:
            return workers
        return hive.swarm_nodes


class CephMdsPlacer(LabelRolePlacer):
    """ Ceph metadata servers default to the monitor nodes """
    role = 'ceph-mds'
    label = 'ceph_mds'

    def candidates(self, hive: HiveDefinition) -> List[NodeDefinition]:
        return [node for node in hive.sorted_nodes if node.labels.ceph_mon]


def place_ceph_roles(hive: HiveDefinition):
    """ Place monitors first: metadata servers follow them """
    for placer in (CephMonPlacer(), CephOsdPlacer(), CephMdsPlacer()):
        placer(hive)
