#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Option group normalizers and checks.

Normalizers fill defaults, derive values and place roles. They never raise
for invalid values; they skip what they cannot derive and the matching
check reports it. Checks never modify the definition.

Both run in a fixed order: later groups rely on earlier groups having been
normalized (storage placement needs the hosting defaults, for example).
"""

from . import dashboard, docker, hive_node, hivefs, hivemq, hosting, log, network, node, proxy

NORMALIZERS = (
    node.normalize,
    network.normalize,
    hosting.normalize,
    docker.normalize,
    hivefs.normalize,
    hivemq.normalize,
    log.normalize,
    dashboard.normalize,
)

CHECKS = (
    network.check,
    hosting.check,
    hive_node.check,
    docker.check,
    hivefs.check,
    proxy.check,
    hivemq.check,
    log.check,
    dashboard.check,
    node.check,
)
