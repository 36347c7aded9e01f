#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

"""
Hive definition tool

Validate hive definitions and inspect derived subnets, placed roles and
host groups
"""

import argparse
import logging
import sys

from . import cli
from .errors import HiveDefinitionError

logger = logging.getLogger(__name__)


def _main(argv):
    running_cli = cli.CLI()

    parser = argparse.ArgumentParser(prog="hive-definition", description=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log debug messages')

    running_cli.build_parser(parser)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)-8s %(message)s",
    )

    try:
        rv = running_cli(args)
    except HiveDefinitionError as e:
        logger.error(str(e))
        return 1

    if rv is None:
        return 0
    elif isinstance(rv, int):
        return rv
    return 0


def main():
    sys.exit(_main(sys.argv[1:]))


if __name__ == "__main__":
    main()
