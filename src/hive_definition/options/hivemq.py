#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
HiveMQ (RabbitMQ) messaging options and messaging role placement
"""

import logging
import re
from typing import Optional

from ..errors import HiveDefinitionError, field_name
from ..placer import place_hivemq_roles
from ..schema.labels import NodeLabels
from ..schema.models import HiveDefinition
from ..schema.sizes import GB, MB, format_size, try_parse_size
from .common import size_field

logger = logging.getLogger(__name__)

DEFAULT_RAM_LIMIT = "350MB"
DEFAULT_PRECOMPILED_RAM_LIMIT = "600MB"
DEFAULT_RAM_HIGH_WATERMARK = "0.50"
MIN_RAM_LIMIT = 250 * MB
MIN_PRECOMPILED_RAM_LIMIT = 500 * MB
MIN_DISK_FREE_LIMIT = GB

_PERCENT_RE = re.compile(r'^\s*(\d+(?:\.\d+)?)\s*%\s*$')
_FRACTION_RE = re.compile(r'^\s*\d*\.\d+\s*$')


def format_fraction(value: float) -> str:
    """ Render a fraction with two or three decimals: 0.5 -> "0.50" """
    text = f"{value:.3f}"
    return text[:-1] if text.endswith("0") else text


def percent_to_fraction(text: Optional[str]) -> Optional[str]:
    """ Convert "NN%" to a fraction string, None for anything else """
    match = _PERCENT_RE.match(text or "")
    if not match:
        return None
    percent = float(match.group(1))
    if not 0 < percent <= 100:
        return None
    return format_fraction(percent / 100)


def normalize(hive: HiveDefinition):
    mq = hive.hivemq

    if not mq.ram_limit:
        mq.ram_limit = DEFAULT_PRECOMPILED_RAM_LIMIT if mq.precompile else DEFAULT_RAM_LIMIT

    mq.ram_high_watermark = mq.ram_high_watermark or DEFAULT_RAM_HIGH_WATERMARK
    mq.ram_high_watermark = percent_to_fraction(mq.ram_high_watermark) or mq.ram_high_watermark

    if not mq.disk_free_limit:
        ram_limit = try_parse_size(mq.ram_limit)
        if ram_limit is not None:
            mq.disk_free_limit = format_size(2 * ram_limit + GB)
    else:
        mq.disk_free_limit = percent_to_fraction(mq.disk_free_limit) or mq.disk_free_limit

    place_hivemq_roles(hive)


def _check_limit(owner, field: str, minimum: int):
    """ A limit is either a fraction in (0, 1] or an absolute size """
    value = getattr(owner, field)
    if value and _FRACTION_RE.match(value):
        if not 0 < float(value) <= 1:
            raise HiveDefinitionError.for_field(owner, field, value, "must be a fraction between 0 and 1.")
        return
    if value and "%" in value:
        raise HiveDefinitionError.for_field(owner, field, value, "is not a valid percentage.")
    size_field(owner, field, minimum=minimum)


def check(hive: HiveDefinition):
    mq = hive.hivemq

    size_field(mq, "ram_limit", minimum=MIN_PRECOMPILED_RAM_LIMIT if mq.precompile else MIN_RAM_LIMIT)
    _check_limit(mq, "ram_high_watermark", minimum=1)
    _check_limit(mq, "disk_free_limit", minimum=MIN_DISK_FREE_LIMIT)

    for field in ("admin_user", "app_user", "neon_user"):
        if not getattr(mq, field):
            raise HiveDefinitionError.for_missing(mq, field, "cannot be empty.")

    members = [node for node in hive.sorted_nodes if node.labels.hivemq]
    if not members:
        raise HiveDefinitionError(
            f"At least one node must be labeled with [{field_name(NodeLabels, 'hivemq')}=true].",
            path=field_name(NodeLabels, "hivemq"))
    for node in hive.sorted_nodes:
        if node.labels.hivemq_manager and not node.labels.hivemq:
            raise HiveDefinitionError.for_field(
                node.labels, "hivemq", False,
                f"node [{node.name}] manages the messaging cluster and must also be a member.")
    if not any(node.labels.hivemq_manager for node in members):
        raise HiveDefinitionError(
            f"At least one node must be labeled with [{field_name(NodeLabels, 'hivemq_manager')}=true].",
            path=field_name(NodeLabels, "hivemq_manager"))
