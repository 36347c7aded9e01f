#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Messaging cluster role placement
"""
import logging
from typing import List

from ..schema.models import HiveDefinition, NodeDefinition
from .base import LabelRolePlacer

logger = logging.getLogger(__name__)


class HiveMQPlacer(LabelRolePlacer):
    """ With no messaging nodes selected the managers host the cluster and
    manage it.
    """
    role = 'hivemq'
    label = 'hivemq'

    def candidates(self, hive: HiveDefinition) -> List[NodeDefinition]:
        return hive.managers

    def set_role(self, node: NodeDefinition):
        node.labels.hivemq = True
        node.labels.hivemq_manager = True


class HiveMQManagerPlacer(LabelRolePlacer):
    """ A messaging cluster without a manager gets its first node, by name """
    role = 'hivemq-manager'
    label = 'hivemq_manager'

    def candidates(self, hive: HiveDefinition) -> List[NodeDefinition]:
        members = [node for node in hive.sorted_nodes if node.labels.hivemq]
        return members[:1]


def place_hivemq_roles(hive: HiveDefinition):
    for node in hive.sorted_nodes:
        if node.labels.hivemq_manager and not node.labels.hivemq:
            logger.info(f"{node.name} manages the messaging cluster, adding it as a member")
            node.labels.hivemq = True

    for placer in (HiveMQPlacer(), HiveMQManagerPlacer()):
        placer(hive)
