#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Placer base classes
"""
import logging
from abc import ABCMeta, abstractmethod
from typing import List

from ..schema.models import HiveDefinition, NodeDefinition

logger = logging.getLogger(__name__)


class _BaseRolePlacer(metaclass=ABCMeta):
    """ Assign a role label to a set of nodes when no node carries it yet.

    Operator assignments always win: once any node holds the role the placer
    leaves every node untouched, so running it again is a no-op.
    """
    role = ''

    def __call__(self, hive: HiveDefinition) -> List[NodeDefinition]:
        # pass 1, keep existing assignments
        if self.assigned(hive):
            return []

        # pass 2, assign the role to the default candidates
        placed = self.candidates(hive)
        for node in placed:
            self.set_role(node)

        if placed:
            logger.info(f"placed {self.role} on {', '.join(node.name for node in placed)}")
        else:
            logger.debug(f"no candidate nodes for {self.role}")
        return placed

    def assigned(self, hive: HiveDefinition) -> List[NodeDefinition]:
        """ Nodes already carrying the role, sorted by name """
        return [node for node in hive.sorted_nodes if self.has_role(node)]

    @abstractmethod
    def candidates(self, hive: HiveDefinition) -> List[NodeDefinition]:
        """ Nodes receiving the role when no node carries it
        """

    @abstractmethod
    def has_role(self, node: NodeDefinition) -> bool:
        """ Return True if the node carries the role
        """

    @abstractmethod
    def set_role(self, node: NodeDefinition):
        """ Set the role label on the node
        """


class LabelRolePlacer(_BaseRolePlacer):
    """ Role placer for roles represented by a single boolean node label
    """
    label = ''

    def has_role(self, node: NodeDefinition) -> bool:
        return getattr(node.labels, self.label)

    def set_role(self, node: NodeDefinition):
        setattr(node.labels, self.label, True)
