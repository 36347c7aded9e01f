#!/usr/bin/env python

# Copyright 2022, Cerebras Systems, Inc. All rights reserved.

""" Base CLI classes and methods
"""

from abc import ABCMeta, abstractmethod

from ..document import load_definition
from ..schema.models import HiveDefinition
from ..validator import validate


def add_definition_arg(parser):
    """ Add hive definition file common arguments
    """
    parser.add_argument('-c', '--config', required=True,
                        help='Hive definition file, "-" for stdin')

    parser.add_argument('-f', '--format', choices=('yaml', 'json'),
                        help='Hive definition format, guessed from the file '
                             'extension by default')


class SubCommandBase(metaclass=ABCMeta):
    """ Base class for sub commands
    """
    sub_command = ''

    @abstractmethod
    def build_parser(self, parser):
        """ Add arguments to the parser for this subcommand
        """

    @abstractmethod
    def __call__(self, args):
        """ Run the subcommand with provided arguments
        """


class HiveDefinitionCommand(SubCommandBase):
    """ Base class for sub commands reading a hive definition.

    The definition is validated before run() unless validated is False.
    """
    validated = True

    def build_parser(self, parser):
        add_definition_arg(parser)
        self.add_arguments(parser)

    def add_arguments(self, parser):
        """ Add arguments specific to this subcommand
        """

    def __call__(self, args):
        hive = load_definition(args.config, args.format)
        if self.validated:
            validate(hive)
        return self.run(hive, args)

    @abstractmethod
    def run(self, hive: HiveDefinition, args):
        """ Run the subcommand against the loaded definition
        """


class CLIBase(SubCommandBase):
    """ Base class for command CLIs
    """
    command_classes = ()

    def __init__(self):
        self.sub_commands = dict()

        for cls in self.command_classes:
            sub_command = getattr(cls, 'sub_command', '')
            if sub_command:
                self.sub_commands[sub_command] = cls()

    def build_parser(self, parser):
        sub_parsers = parser.add_subparsers(help='sub commands', required=True,
                                            dest='sub_command')

        for sub_command in sorted(self.sub_commands):
            obj = self.sub_commands[sub_command]
            cmd_parser = sub_parsers.add_parser(sub_command,
                                                help=obj.__doc__)
            obj.build_parser(cmd_parser)

    def __call__(self, args):
        return self.sub_commands[args.sub_command](args)
