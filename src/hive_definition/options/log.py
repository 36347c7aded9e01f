"""
Hive logging options
"""

from ..errors import HiveDefinitionError, field_name
from ..schema.models import HiveDefinition
from ..schema.labels import NodeLabels
from ..schema.sizes import MB
from .common import size_field

DEFAULT_ES_MEMORY = "1.5GB"
MIN_ES_MEMORY = 1536 * MB
MAX_RETENTION_DAYS = 365


def normalize(hive: HiveDefinition):
    hive.log.es_memory = hive.log.es_memory or DEFAULT_ES_MEMORY


def check(hive: HiveDefinition):
    log = hive.log
    if not log.enabled:
        return

    data_nodes = [node for node in hive.sorted_nodes if node.labels.log_es_data]
    if not data_nodes:
        raise HiveDefinitionError(
            f"At least one node must be configured to store log data by setting "
            f"[{field_name(NodeLabels, 'log_es_data')}=true] when hive logging is enabled.",
            path=field_name(NodeLabels, "log_es_data"))

    if log.es_shards < 1:
        raise HiveDefinitionError.for_field(log, "es_shards", log.es_shards, "must be at least [1].")
    if not 1 <= log.es_replication <= len(data_nodes):
        raise HiveDefinitionError.for_field(
            log, "es_replication", log.es_replication,
            f"must be between [1] and the number of log data nodes [{len(data_nodes)}].")
    size_field(log, "es_memory", minimum=MIN_ES_MEMORY)
    if not 1 <= log.retention_days <= MAX_RETENTION_DAYS:
        raise HiveDefinitionError.for_field(
            log, "retention_days", log.retention_days, f"must be in the range [1...{MAX_RETENTION_DAYS}].")
