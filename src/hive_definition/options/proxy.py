"""
Hive proxy port ranges
"""

from ..errors import HiveDefinitionError, field_name
from ..schema.models import HiveDefinition
from .common import port_field


def check(hive: HiveDefinition):
    proxy = hive.proxy
    if not proxy.enabled:
        return

    ranges = []
    for scope in ("public", "private"):
        first_field, last_field = f"first_{scope}_port", f"last_{scope}_port"
        first = port_field(proxy, first_field)
        last = port_field(proxy, last_field)
        if first > last:
            raise HiveDefinitionError.for_field(
                proxy, first_field, first,
                f"cannot be greater than [{field_name(proxy, last_field)}={last}].")
        ranges.append((first, last))

    (public_first, public_last), (private_first, private_last) = ranges
    if public_first <= private_last and private_first <= public_last:
        raise HiveDefinitionError(
            f"[{field_name(proxy, 'first_public_port')}={public_first}..{public_last}] and "
            f"[{field_name(proxy, 'first_private_port')}={private_first}..{private_last}] overlap.",
            path=field_name(proxy, "first_private_port"), value=private_first)
