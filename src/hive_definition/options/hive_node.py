"""
Cluster wide node defaults
"""

from ..errors import HiveDefinitionError
from ..schema.models import HiveDefinition

MIN_PASSWORD_LENGTH = 8


def check(hive: HiveDefinition):
    options = hive.hive_node
    if options.password_length != 0 and options.password_length < MIN_PASSWORD_LENGTH:
        raise HiveDefinitionError.for_field(
            options, "password_length", options.password_length,
            f"must be 0 or at least [{MIN_PASSWORD_LENGTH}].")
