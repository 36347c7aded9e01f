#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Role placers: assign service roles to nodes the operator left unlabeled
"""

from .base import LabelRolePlacer
from .hivefs import CephMdsPlacer, CephMonPlacer, CephOsdPlacer, place_ceph_roles
from .hivemq import HiveMQManagerPlacer, HiveMQPlacer, place_hivemq_roles
