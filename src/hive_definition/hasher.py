#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Canonical hive definition fingerprint, used to detect definition changes
"""

import base64
import hashlib
import json

from .errors import HiveDefinitionError
from .options.docker import clear_secrets as clear_docker_secrets
from .options.hosting import clear_secrets as clear_hosting_secrets
from .schema.models import HiveDefinition


def canonical_json(hive: HiveDefinition) -> str:
    """ Serialize hive without its hash or secrets, with the node inventory
    and every mapping in ascending key order.
    """
    clone = hive.model_copy(deep=True)
    clone.hash = None
    clear_hosting_secrets(clone.hosting)
    clear_docker_secrets(clone.docker)
    clone.nodes = {name: clone.nodes[name] for name in sorted(clone.nodes)}

    try:
        doc = clone.model_dump(mode="json", by_alias=True)
        return json.dumps(doc, sort_keys=True, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise HiveDefinitionError(f"hive [{hive.name}] cannot be serialized for hashing: {e}") from e


def compute_hash(hive: HiveDefinition) -> str:
    """ MD5 of the canonical JSON, base64 encoded. hive is not modified. """
    digest = hashlib.md5(canonical_json(hive).encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")


def update_hash(hive: HiveDefinition) -> str:
    hive.hash = compute_hash(hive)
    return hive.hash
