#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Hosting options: provider sub-options and hypervisor VM defaults
"""

import logging
import re

from ..errors import HiveDefinitionError, field_name
from ..schema.models import (
    AzureOptions,
    HiveDefinition,
    HostingOptions,
    HyperVOptions,
    LocalHyperVOptions,
    MachineOptions,
    XenServerOptions,
    is_valid_name,
)
from .common import address_field, size_field

logger = logging.getLogger(__name__)

DEFAULT_VM_MEMORY = "4GB"

_DEFAULT_PROVIDER_OPTIONS = {
    "hyperv": HyperVOptions,
    "hyperv_dev": LocalHyperVOptions,
    "machine": MachineOptions,
    "xenserver": XenServerOptions,
}

_AZURE_REQUIRED = ("subscription_id", "tenant_id", "application_id", "password", "region", "domain_label")
_AZURE_NAME_RE = re.compile(r'^[A-Za-z0-9\-_]+$')
_AZURE_RESOURCE_GROUP_MAX = 64


def clear_secrets(hosting: HostingOptions):
    """ Remove provider credentials and every provider sub-option block """
    for field in ("aws", "azure", "google", "hyperv", "hyperv_dev", "machine", "xenserver"):
        setattr(hosting, field, None)

    hosting.vm_host_username = None
    hosting.vm_host_password = None
    for host in hosting.vm_hosts:
        host.username = None
        host.password = None


def normalize(hive: HiveDefinition):
    hosting = hive.hosting
    provider = hosting.provider_field()

    if getattr(hosting, provider) is None and provider in _DEFAULT_PROVIDER_OPTIONS:
        setattr(hosting, provider, _DEFAULT_PROVIDER_OPTIONS[provider]())

    if hosting.is_cloud and not hive.vpn.enabled:
        logger.info(f"VPN enabled for cloud environment [{hosting.environment.value}]")
        hive.vpn.enabled = True

    if hosting.azure is not None and not hosting.azure.resource_group:
        hosting.azure.resource_group = hive.name

    hosting.vm_memory = hosting.vm_memory or DEFAULT_VM_MEMORY
    hosting.vm_minimum_memory = hosting.vm_minimum_memory or hosting.vm_memory


def _check_required(options, fields):
    for field in fields:
        if not getattr(options, field):
            raise HiveDefinitionError.for_missing(options, field, "cannot be empty.")


def _check_azure(hive: HiveDefinition, azure: AzureOptions):
    if not _AZURE_NAME_RE.match(hive.name):
        raise HiveDefinitionError.for_field(
            hive, "name", hive.name,
            "is not valid for Azure deployment. Only letters, digits, dashes, or underscores are allowed.")

    _check_required(azure, _AZURE_REQUIRED)

    group = azure.resource_group
    if not group:
        raise HiveDefinitionError.for_missing(azure, "resource_group", "cannot be empty.")
    if len(group) > _AZURE_RESOURCE_GROUP_MAX:
        raise HiveDefinitionError.for_field(
            azure, "resource_group", group,
            f"cannot be longer than {_AZURE_RESOURCE_GROUP_MAX} characters.")
    if not group[0].isalpha():
        raise HiveDefinitionError.for_field(azure, "resource_group", group, "must begin with a letter.")
    if group[-1] in "-_":
        raise HiveDefinitionError.for_field(
            azure, "resource_group", group, "must not end with a dash or underscore.")
    if not _AZURE_NAME_RE.match(group):
        raise HiveDefinitionError.for_field(
            azure, "resource_group", group, "may include only letters, digits, dashes or underscores.")

    if not 1 <= azure.fault_domains <= 3:
        raise HiveDefinitionError.for_field(
            azure, "fault_domains", azure.fault_domains, "must be in the range [1...3].")
    if not 1 <= azure.update_domains <= 20:
        raise HiveDefinitionError.for_field(
            azure, "update_domains", azure.update_domains, "must be in the range [1...20].")
    if not 0 < azure.first_reserved_port <= 65535:
        raise HiveDefinitionError.for_field(
            azure, "first_reserved_port", azure.first_reserved_port, "is not a valid network port.")


def _check_hypervisor(hive: HiveDefinition):
    hosting = hive.hosting

    if hosting.vm_processors <= 0:
        raise HiveDefinitionError.for_field(hosting, "vm_processors", hosting.vm_processors, "must be positive.")

    memory = size_field(hosting, "vm_memory")
    minimum_memory = size_field(hosting, "vm_minimum_memory")
    size_field(hosting, "vm_disk")
    if minimum_memory > memory:
        raise HiveDefinitionError.for_field(
            hosting, "vm_minimum_memory", hosting.vm_minimum_memory,
            f"cannot be larger than [{field_name(hosting, 'vm_memory')}={hosting.vm_memory}].")

    names = set()
    addresses = set()
    for host in hosting.vm_hosts:
        if not is_valid_name(host.name):
            raise HiveDefinitionError.for_field(host, "name", host.name, "is not a valid VM host name.")
        if host.name.lower() in names:
            raise HiveDefinitionError.for_field(host, "name", host.name, "is defined more than once.")
        names.add(host.name.lower())

        address = address_field(host, "address")
        if address in addresses:
            raise HiveDefinitionError.for_field(host, "address", host.address, "is assigned to more than one VM host.")
        addresses.add(address)

    if not hosting.is_remote_hypervisor:
        return

    if not hosting.vm_hosts:
        raise HiveDefinitionError.for_missing(
            hosting, "vm_hosts",
            f"must list at least one host for the [{hosting.environment.value}] environment.")

    for node in hive.sorted_nodes:
        if node.vm_host and node.vm_host.lower() not in names:
            raise HiveDefinitionError.for_field(
                node, "vm_host", node.vm_host, f"does not name a host in [{field_name(hosting, 'vm_hosts')}].")


def check(hive: HiveDefinition):
    hosting = hive.hosting
    provider = hosting.provider_field()
    options = getattr(hosting, provider)

    if options is None:
        raise HiveDefinitionError.for_missing(
            hosting, provider,
            f"must be initialized when the hosting environment is [{hosting.environment.value}].")

    if provider == "aws":
        _check_required(options, ("access_key_id", "secret_access_key", "region"))
    elif provider == "azure":
        _check_azure(hive, options)
    elif provider == "google":
        _check_required(options, ("project_id", "region"))

    if hosting.is_cloud and not hive.vpn.enabled:
        raise HiveDefinitionError.for_field(
            hive.vpn, "enabled", hive.vpn.enabled,
            f"must be true for the cloud environment [{hosting.environment.value}].")

    if hosting.vm_name_prefix and hosting.vm_name_prefix.strip() and not is_valid_name(hosting.vm_name_prefix):
        raise HiveDefinitionError.for_field(
            hosting, "vm_name_prefix", hosting.vm_name_prefix,
            "must include only letters, digits, dashes, underscores, or periods.")

    if hosting.environment.is_hypervisor:
        _check_hypervisor(hive)
