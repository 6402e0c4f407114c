""" Command-line utility """

from typing import List, Union
import sys
import argparse

import ntpclock
from ntpclock.cli import commands


def _add_settings_arguments(parser: argparse.ArgumentParser):
    """ Adds the time-synchronization settings CLI argument option(s). """
    parser.add_argument(
        '--servers',
        help="The network time protocol servers, as `host` or `host:port`.",
        type=str,
        nargs='+',
        default=None
    )
    parser.add_argument(
        '--port',
        help="The default network time protocol port.",
        type=int,
        default=None
    )
    parser.add_argument(
        '--time-out',
        dest='time_out',
        help="The time-out in seconds for each server exchange.",
        type=float,
        default=None
    )
    parser.add_argument(
        '--workers',
        help="The number of concurrent server exchanges.",
        type=int,
        default=None
    )


# Define ntpclock CLI tool function(s)
def main(argv: Union[List[str], None] = None) -> int:
    """
    usage: ntpclock [-h] [--version] {get,set,check,config} ...

    CLI application for getting, setting and checking the local system time.

    options:
    -h, --help  show this help message and exit
    --version   show program's version number and exit

    commands:
    The `ntpclock` command options.

    {get,set,check,config}
        get       Prints the local system time.
        set       Sets the local system time.
        check     Checks the local system time against ntp servers.
        config    Prints and saves the time-synchronization settings.

    Execute `ntpclock {command} --help` for more help.
    """

    # Setup CLI argument option(s)
    _ARG_PARSER = argparse.ArgumentParser(
        prog='ntpclock',
        description='CLI application for getting, setting and checking the local system time.',
        epilog="Execute `ntpclock {command} --help` for more help."
    )
    _ARG_PARSER.add_argument(
        '--version',
        action='version',
        version='%(prog)s ' + ntpclock.VERSION
    )

    # Setup command argument option(s)
    _ARG_SUBPARSER = _ARG_PARSER.add_subparsers(
        title='commands',
        prog='ntpclock',
        description='The `ntpclock` command options.'
    )

    # Setup `get` command CLI argument option(s)
    _GET_ARG_PARSER = _ARG_SUBPARSER.add_parser(
        name='get',
        help='Prints the local system time.',
        epilog="Execute `ntpclock get --help` for help."
    )
    _GET_ARG_PARSER.add_argument(
        '-s', '--use-standard',
        dest='standard',
        help="The time standard of the output.",
        type=str,
        choices=ntpclock.STANDARDS,
        default='rfc3339'
    )
    _GET_ARG_PARSER.set_defaults(func=commands.get)

    # Setup `set` command CLI argument option(s)
    _SET_ARG_PARSER = _ARG_SUBPARSER.add_parser(
        name='set',
        help='Sets the local system time.',
        epilog="Execute `ntpclock set --help` for help."
    )
    _SET_ARG_PARSER.add_argument(
        'datetime_',
        metavar='datetime',
        help="The date-time formatted as the time standard.",
        type=str
    )
    _SET_ARG_PARSER.add_argument(
        '-s', '--use-standard',
        dest='standard',
        help="The time standard of the date-time.",
        type=str,
        choices=ntpclock.STANDARDS,
        default='rfc3339'
    )
    _SET_ARG_PARSER.set_defaults(func=commands.set_)

    # Setup `check` command CLI argument option(s)
    _CHECK_ARG_PARSER = _ARG_SUBPARSER.add_parser(
        name='check',
        help='Checks the local system time against ntp servers.',
        epilog="Execute `ntpclock check --help` for help."
    )
    _add_settings_arguments(_CHECK_ARG_PARSER)
    _CHECK_ARG_PARSER.add_argument(
        '--apply',
        help="Sets the local system time to the corrected time.",
        action='store_true'
    )
    _CHECK_ARG_PARSER.set_defaults(func=commands.check)

    # Setup `config` command CLI argument option(s)
    _CONFIG_ARG_PARSER = _ARG_SUBPARSER.add_parser(
        name='config',
        help='Prints and saves the time-synchronization settings.',
        epilog="Execute `ntpclock config --help` for help."
    )
    _add_settings_arguments(_CONFIG_ARG_PARSER)
    _CONFIG_ARG_PARSER.add_argument(
        '--reset',
        help="Deletes the saved settings before applying new values.",
        action='store_true'
    )
    _CONFIG_ARG_PARSER.set_defaults(func=commands.config)

    # Parse arguments
    _ARGS = _ARG_PARSER.parse_args(argv)
    _KWARGS = {
        key: vars(_ARGS)[key]
        for key in vars(_ARGS).keys()
        if key != 'func'
    }

    # Execute sub-command
    if hasattr(_ARGS, 'func'):
        return _ARGS.func(**_KWARGS)
    else:
        _ARG_PARSER.print_help()
        return ntpclock.errors.INVALID_VALUE


if __name__ == '__main__':
    sys.exit(main())
