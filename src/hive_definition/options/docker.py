#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Docker engine options
"""

import re

from ..errors import HiveDefinitionError
from ..schema.models import DockerOptions, HiveDefinition

DEFAULT_VERSION = "latest"
DEFAULT_LOG_DRIVER = "fluentd"
SPECIAL_VERSIONS = frozenset({"latest", "test", "experimental"})

DNS_HOST_RE = re.compile(
    r'^([a-z0-9]|[a-z0-9][a-z0-9\-_]{0,61}[a-z0-9])(\.([a-z0-9]|[a-z0-9][a-z0-9\-_]{0,61}[a-z0-9_]))*$',
    re.IGNORECASE,
)


def clear_secrets(docker: DockerOptions):
    for credential in docker.registries:
        credential.username = None
        credential.password = None


def normalize(hive: HiveDefinition):
    docker = hive.docker
    docker.version = (docker.version or DEFAULT_VERSION).strip().lower()
    docker.log_driver = docker.log_driver or DEFAULT_LOG_DRIVER
    docker.restart_delay_seconds = max(0, docker.restart_delay_seconds)


def check(hive: HiveDefinition):
    docker = hive.docker

    if docker.version not in SPECIAL_VERSIONS and not docker.version.endswith("-ce"):
        raise HiveDefinitionError.for_field(
            docker, "version", docker.version,
            f"is not valid. Use one of {sorted(SPECIAL_VERSIONS)} or a community edition release like [18.03.0-ce].")

    seen = set()
    for credential in docker.registries:
        if not credential.registry or not DNS_HOST_RE.match(credential.registry):
            raise HiveDefinitionError.for_field(
                credential, "registry", credential.registry, "is not a valid registry hostname.")
        if credential.registry.lower() in seen:
            raise HiveDefinitionError.for_field(
                credential, "registry", credential.registry, "is specified more than once.")
        seen.add(credential.registry.lower())

    if docker.restart_delay_seconds < 0:
        raise HiveDefinitionError.for_field(
            docker, "restart_delay_seconds", docker.restart_delay_seconds, "cannot be negative.")
