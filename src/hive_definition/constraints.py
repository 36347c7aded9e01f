#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Docker Swarm style node constraints: "label==value" and "label!=value"
"""

import dataclasses
import logging
from typing import Dict, Iterable, List, Optional

from .errors import ConstraintSyntaxError
from .schema.labels import (
    LABEL_PRIVATE_ADDRESS,
    LABEL_PUBLIC_ADDRESS,
    LABEL_ROLE,
    LABEL_VPN_FRONTEND_PORT,
    RESERVED_LABEL_PREFIX,
    label_value_str,
)
from .schema.models import HiveDefinition, NodeDefinition

logger = logging.getLogger(__name__)

NODE_NAME_LABEL = "node"

# shorthand lookups: "role" finds io.neonhive.node.role
_NODE_LABEL_PREFIX = f"{RESERVED_LABEL_PREFIX}.node."


@dataclasses.dataclass(frozen=True)
class Constraint:
    label: str
    equals: bool
    value: str

    @classmethod
    def parse(cls, text: str) -> 'Constraint':
        operators = text.count("==") + text.count("!=")
        if operators == 0:
            raise ConstraintSyntaxError(text, "One of [==] or [!=] must be present.")
        if operators > 1:
            raise ConstraintSyntaxError(text, "Only one [==] or [!=] may be present.")

        equals = "==" in text
        label, value = text.split("==" if equals else "!=")
        label = label.strip()
        if not label:
            raise ConstraintSyntaxError(text, "No label is specified.")
        return cls(label=label, equals=equals, value=value.strip())

    def matches(self, labels: Dict[str, str]) -> bool:
        actual = lookup_label(labels, self.label)
        return (actual.lower() == self.value.lower()) == self.equals

    def __str__(self):
        return f"{self.label}{'==' if self.equals else '!='}{self.value}"


def node_label_map(node: NodeDefinition) -> Dict[str, str]:
    """ Every label of a node as docker sees it, keyed by lowercase name.

    The "node" key holds the node name.
    """
    labels = {
        LABEL_PUBLIC_ADDRESS: node.public_address,
        LABEL_PRIVATE_ADDRESS: node.private_address,
        LABEL_ROLE: node.role,
        LABEL_VPN_FRONTEND_PORT: node.vpn_frontend_port,
    }
    labels.update(node.labels.standard())
    labels.update(node.labels.custom)

    rv = {name.lower(): label_value_str(value) for name, value in labels.items()}
    rv[NODE_NAME_LABEL] = node.name
    return rv


def lookup_label(labels: Dict[str, str], label: str) -> str:
    """ Case-insensitive label lookup, "" when the node lacks the label """
    key = label.lower()
    if key in labels:
        return labels[key]
    if not key.startswith(RESERVED_LABEL_PREFIX + "."):
        return labels.get(_NODE_LABEL_PREFIX + key, "")
    return ""


def filter_nodes(nodes: Iterable[NodeDefinition], constraints: Optional[Iterable[str]]) -> List[NodeDefinition]:
    """ Return the nodes satisfying every constraint, in input order.

    Constraints are applied one after another, each narrowing the result.
    Blank constraints are ignored and no constraints select every node.
    Raises ConstraintSyntaxError for a malformed constraint.
    """
    candidates = [(node, node_label_map(node)) for node in nodes]

    for text in constraints or ():
        if not text or not text.strip():
            continue

        constraint = Constraint.parse(text)
        candidates = [(node, labels) for node, labels in candidates if constraint.matches(labels)]
        logger.debug(f"{constraint} matched {len(candidates)} nodes")
        if not candidates:
            break

    return [node for node, _ in candidates]


def filter_swarm_nodes(hive: HiveDefinition, constraints: Optional[Iterable[str]]) -> List[NodeDefinition]:
    """ Filter the hive's swarm nodes, sorted by name """
    return filter_nodes(hive.swarm_nodes, constraints)
