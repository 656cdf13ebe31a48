""" Command-line entry point for pysh. """
import argparse
import logging
import sys

from config import PARALLEL_STATUS_MODES, ShellConfig
from constants import is_shell_exit
from shell import Shell
from shell_state import ShellState


def build_arg_parser():
    parser = argparse.ArgumentParser(
        prog="pysh",
        description="A small POSIX-flavoured shell built on fork, exec and pipes"
    )
    parser.add_argument(
        "-c",
        dest="command",
        metavar="COMMAND",
        help="run COMMAND and exit with its status"
    )
    parser.add_argument(
        "--log-level",
        metavar="LEVEL",
        help="logging level (default: $PYSH_LOG_LEVEL or WARNING)"
    )
    parser.add_argument(
        "--parallel-status",
        choices=PARALLEL_STATUS_MODES,
        help="how '&' combines branch statuses (default: collapse)"
    )
    return parser


def configure_logging(level_name):
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(process)d %(name)s %(levelname)s: %(message)s",
    )


def main(argv=None):
    args = build_arg_parser().parse_args(argv)

    config = ShellConfig.from_env()
    if args.log_level:
        config.log_level = args.log_level.upper()
    if args.parallel_status:
        config.collapse_parallel_status = (args.parallel_status == "collapse")
    configure_logging(config.log_level)

    sh = Shell(ShellState(config=config))
    if args.command is not None:
        status = sh.run_line(args.command)
        if status is None or is_shell_exit(status):
            status = sh.state.last_status
        return status

    return sh.run()


if __name__ == "__main__":
    sys.exit(main())
