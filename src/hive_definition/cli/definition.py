#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Hive definition validation and fingerprint commands
"""

from ..document import save_definition
from ..hasher import compute_hash, update_hash
from .base import HiveDefinitionCommand


class ValidateDefinition(HiveDefinitionCommand):
    """ Validate a hive definition and write the normalized, hashed result
    """
    sub_command = 'validate'

    def add_arguments(self, parser):
        parser.add_argument('-o', '--output',
                            help='Write the normalized definition to this '
                                 'file, "-" for stdout')

        parser.add_argument('--output-format', choices=('yaml', 'json'),
                            help='Format of the normalized definition')

    def run(self, hive, args):
        update_hash(hive)
        if args.output:
            save_definition(hive, args.output, args.output_format)
        else:
            print(f"hive [{hive.name}] is valid: {len(hive.nodes)} nodes, hash {hive.hash}")


class HashDefinition(HiveDefinitionCommand):
    """ Print the canonical hash of a validated hive definition
    """
    sub_command = 'hash'

    def run(self, hive, args):
        print(compute_hash(hive))
