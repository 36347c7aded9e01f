#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Hive definition errors
"""
from typing import Any, Optional


def field_name(owner: Any, field: str) -> str:
    """ Return the external "<TypeName>.<FieldName>" path of a model field.

    owner may be a pydantic model class, a model instance or a plain type
    name string.
    """
    if isinstance(owner, str):
        return f"{owner}.{field}"

    cls = owner if isinstance(owner, type) else type(owner)
    model_fields = getattr(cls, "model_fields", {})
    info = model_fields.get(field)
    alias = info.alias if info is not None and info.alias else field
    return f"{cls.__name__}.{alias}"


class HiveDefinitionError(ValueError):
    """ Raised when a hive definition cannot be loaded or is not valid.

    The message always names the offending field path and value when a
    single field is at fault, for example:

        [NetworkOptions.CloudSubnet=10.168.0.0/20] prefix length must be /21.
    """

    def __init__(self, message: str, path: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.value = value

    def __str__(self):
        return self.message

    @classmethod
    def for_field(cls, owner: Any, field: str, value: Any, reason: str) -> 'HiveDefinitionError':
        """ Build an error for a single field, including its value """
        path = field_name(owner, field)
        return cls(f"[{path}={value}] {reason}", path=path, value=value)

    @classmethod
    def for_missing(cls, owner: Any, field: str, reason: str = "is required.") -> 'HiveDefinitionError':
        """ Build an error for a required field which has no value """
        path = field_name(owner, field)
        return cls(f"[{path}] {reason}", path=path)


class ConstraintSyntaxError(HiveDefinitionError):
    """ Raised for a node constraint expression that cannot be parsed """

    def __init__(self, constraint: str, reason: str):
        super().__init__(f"Illegal constraint [{constraint}]. {reason}", value=constraint)
        self.constraint = constraint
