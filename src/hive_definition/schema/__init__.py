#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Hive definition object model
"""

from .cidr import Cidr, parse_address
from .labels import RESERVED_LABEL_PREFIX, STANDARD_LABELS, NodeLabels
from .models import (
    AwsOptions,
    AzureOptions,
    CephRelease,
    DashboardOptions,
    DockerOptions,
    EnvironmentType,
    GoogleOptions,
    HiveDefinition,
    HiveFSOptions,
    HiveMQOptions,
    HiveNodeOptions,
    HostingEnvironment,
    HostingOptions,
    HyperVOptions,
    LocalHyperVOptions,
    LogOptions,
    MachineOptions,
    NetworkOptions,
    NodeDefinition,
    NodeRole,
    PartitionMode,
    ProxyOptions,
    RegistryCredential,
    UpgradeMode,
    VmHost,
    VpnOptions,
    XenServerOptions,
)
from .sizes import format_size, try_parse_size
