#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Node labels: typed standard labels plus free-form custom labels
"""

import re
from typing import Dict, Optional

from pydantic import Field

from .base import OptionsModel

RESERVED_LABEL_PREFIX = "io.neonhive"

LABEL_PUBLIC_ADDRESS = f"{RESERVED_LABEL_PREFIX}.node.public_address"
LABEL_PRIVATE_ADDRESS = f"{RESERVED_LABEL_PREFIX}.node.private_address"
LABEL_ROLE = f"{RESERVED_LABEL_PREFIX}.node.role"
LABEL_VPN_FRONTEND_PORT = f"{RESERVED_LABEL_PREFIX}.node.vpn_frontend_port"

# field name -> docker label name for the labels owned by NodeLabels
STANDARD_LABELS = {
    "storage_capacity_gb": f"{RESERVED_LABEL_PREFIX}.storage.capacity_gb",
    "storage_local": f"{RESERVED_LABEL_PREFIX}.storage.local",
    "storage_ssd": f"{RESERVED_LABEL_PREFIX}.storage.ssd",
    "storage_redundant": f"{RESERVED_LABEL_PREFIX}.storage.redundant",
    "storage_ephemeral": f"{RESERVED_LABEL_PREFIX}.storage.ephemeral",
    "compute_cores": f"{RESERVED_LABEL_PREFIX}.compute.cores",
    "compute_architecture": f"{RESERVED_LABEL_PREFIX}.compute.architecture",
    "compute_ram_mb": f"{RESERVED_LABEL_PREFIX}.compute.ram_mb",
    "compute_swap": f"{RESERVED_LABEL_PREFIX}.compute.swap",
    "physical_location": f"{RESERVED_LABEL_PREFIX}.physical.location",
    "physical_machine": f"{RESERVED_LABEL_PREFIX}.physical.machine",
    "physical_fault_domain": f"{RESERVED_LABEL_PREFIX}.physical.faultdomain",
    "physical_power": f"{RESERVED_LABEL_PREFIX}.physical.power",
    "log_es_data": f"{RESERVED_LABEL_PREFIX}.log.esdata",
    "hivemq": f"{RESERVED_LABEL_PREFIX}.hivemq",
    "hivemq_manager": f"{RESERVED_LABEL_PREFIX}.hivemq.manager",
    "ceph_mon": f"{RESERVED_LABEL_PREFIX}.ceph.mon",
    "ceph_osd": f"{RESERVED_LABEL_PREFIX}.ceph.osd",
    "ceph_osd_device": f"{RESERVED_LABEL_PREFIX}.ceph.osd_device",
    "ceph_mds": f"{RESERVED_LABEL_PREFIX}.ceph.mds",
    "ceph_osd_drive_size_gb": f"{RESERVED_LABEL_PREFIX}.ceph.osd_drivesize_gb",
    "ceph_osd_cache_size_mb": f"{RESERVED_LABEL_PREFIX}.ceph.osd_cachesize_mb",
    "ceph_osd_journal_size_mb": f"{RESERVED_LABEL_PREFIX}.ceph.osd_journalsize_mb",
    "ceph_mds_cache_size_mb": f"{RESERVED_LABEL_PREFIX}.ceph.mds_cachesize_mb",
}
_CUSTOM_LABEL_CHARS_RE = re.compile(r'^[A-Za-z0-9._\-]+$')


class NodeLabels(OptionsModel):
    """ Labels attached to a hive node """

    storage_capacity_gb: int = Field(default=0, alias="StorageCapacityGB")
    storage_local: bool = True
    storage_ssd: bool = Field(default=False, alias="StorageSSD")
    storage_redundant: bool = False
    storage_ephemeral: bool = False

    compute_cores: int = 0
    compute_architecture: str = "x64"
    compute_ram_mb: int = Field(default=0, alias="ComputeRamMB")
    compute_swap: bool = False

    physical_location: str = ""
    physical_machine: str = ""
    physical_fault_domain: str = ""
    physical_power: str = ""

    log_es_data: bool = False

    hivemq: bool = Field(default=False, alias="HiveMQ")
    hivemq_manager: bool = Field(default=False, alias="HiveMQManager")

    ceph_mon: bool = Field(default=False, alias="CephMON")
    ceph_osd: bool = Field(default=False, alias="CephOSD")
    ceph_osd_device: str = Field(default="", alias="CephOSDDevice")
    ceph_mds: bool = Field(default=False, alias="CephMDS")
    ceph_osd_drive_size_gb: int = Field(default=0, alias="CephOSDDriveSizeGB")
    ceph_osd_cache_size_mb: int = Field(default=0, alias="CephOSDCacheSizeMB")
    ceph_osd_journal_size_mb: int = Field(default=0, alias="CephOSDJournalSizeMB")
    ceph_mds_cache_size_mb: int = Field(default=0, alias="CephMDSCacheSizeMB")

    custom: Dict[str, str] = Field(
        default_factory=dict,
        description="Operator defined labels. Names may not use the reserved io.neonhive prefix",
    )

    def standard(self) -> Dict[str, object]:
        """ The standard labels owned by this object, keyed by docker label name """
        return {label: getattr(self, field) for field, label in STANDARD_LABELS.items()}


def label_value_str(value) -> str:
    """ Render a label value the way docker stores it """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(getattr(value, "value", value))


def custom_label_error(name: str, value: Optional[str]) -> Optional[str]:
    """ Return a reason why a custom label is invalid or None when it is valid
    """
    if not name:
        return f"Custom node label for value [{value}] has no label name."
    if name.lower().startswith(RESERVED_LABEL_PREFIX + "."):
        return f"Custom node label [{name}] uses the reserved [{RESERVED_LABEL_PREFIX}] prefix."
    if ".." in name:
        return f"Custom node label [{name}] has consecutive dots."
    if "--" in name:
        return f"Custom node label [{name}] has consecutive dashes."
    if not name[0].isalnum():
        return f"Custom node label [{name}] does not begin with a letter or digit."
    if not name[-1].isalnum():
        return f"Custom node label [{name}] does not end with a letter or digit."
    if not _CUSTOM_LABEL_CHARS_RE.match(name):
        return f"Custom node label [{name}] has an illegal character. Only letters, digits, dashes, underscores and dots are allowed."
    if value is not None and any(ch.isspace() for ch in value):
        return f"Custom node label [{name}] has a value with whitespace."
    return None
