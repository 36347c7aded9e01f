"""
Built-in dashboard toggles
"""

import logging

from ..errors import HiveDefinitionError
from ..schema.models import HiveDefinition

logger = logging.getLogger(__name__)


def normalize(hive: HiveDefinition):
    dashboard = hive.dashboard
    if dashboard.ceph and not hive.hivefs.enabled:
        logger.info("Ceph dashboard disabled because HiveFS is disabled")
        dashboard.ceph = False
    if dashboard.kibana and not hive.log.enabled:
        logger.info("Kibana dashboard disabled because logging is disabled")
        dashboard.kibana = False


def check(hive: HiveDefinition):
    if hive.dashboard.ceph and not hive.hivefs.enabled:
        raise HiveDefinitionError.for_field(
            hive.dashboard, "ceph", hive.dashboard.ceph, "requires HiveFS to be enabled.")
    if hive.dashboard.kibana and not hive.log.enabled:
        raise HiveDefinitionError.for_field(
            hive.dashboard, "kibana", hive.dashboard.kibana, "requires logging to be enabled.")
