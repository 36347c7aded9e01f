#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Hive definition engine: load, normalize, validate, filter and fingerprint
hive cluster definitions
"""

from .constraints import filter_nodes, filter_swarm_nodes
from .document import dump_definition, load_definition, parse_definition, save_definition
from .errors import ConstraintSyntaxError, HiveDefinitionError
from .groups import get_host_groups
from .hasher import compute_hash, update_hash
from .schema import Cidr, HiveDefinition, NodeDefinition, NodeRole
from .validator import check, normalize, validate

__version__ = "0.1.0"
