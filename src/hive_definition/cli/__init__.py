#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Hive definition CLI
"""

from .base import \
    add_definition_arg, \
    SubCommandBase, \
    HiveDefinitionCommand, \
    CLIBase

from .definition import \
    ValidateDefinition, \
    HashDefinition

from .nodes import \
    FilterNodes, \
    ShowHostGroups, \
    ShowNodes

from .network import ShowSubnets


class CLI(CLIBase):
    """ Hive definition CLI
    """
    command_classes = (
        ValidateDefinition,
        HashDefinition,
        FilterNodes,
        ShowHostGroups,
        ShowNodes,
        ShowSubnets,
    )
