""" Registry of builtin commands. """
import logging
import os
import sys

from command import SimpleCommand
from constants import SHELL_EXIT, VAR_NAME_RX
from exceptions import RedirectionError
from redirection import apply_redirections
from shell_state import ShellState

logger = logging.getLogger(__name__)

BUILTINS = {}
# builtins whose redirections are applied to the shell process itself
REDIRECTING_BUILTINS = set()


def builtin(name, redirects=False):
    """Decorator to register builtins"""
    def wrapper(func):
        BUILTINS[name] = func
        if redirects:
            REDIRECTING_BUILTINS.add(name)
        return func
    return wrapper


@builtin("exit")
@builtin("quit")
def builtin_exit(args, state):
    return SHELL_EXIT


@builtin("cd", redirects=True)
def builtin_cd(args, state):
    if len(args) == 0:
        target = state.get_var("HOME") or "/"
    else:
        target = args[0]

    try:
        state.chdir(target)
        return 0
    except FileNotFoundError:
        print(f"cd: no such file or directory: {target}", file=sys.stderr)
    except NotADirectoryError:
        print(f"cd: not a directory: {target}", file=sys.stderr)
    except PermissionError:
        print(f"cd: permission denied: {target}", file=sys.stderr)
    # Indicate failure due to error
    return 1


def is_assignment(cmd: SimpleCommand) -> bool:
    """ A verb made of several parts is an environment assignment. """
    return len(cmd.verb.parts) > 1


def assign_variable(cmd: SimpleCommand, state: ShellState) -> int:
    """
    NAME=value: set NAME in the process environment.
    Extra parameter words are ignored.
    """
    parts = cmd.verb.parts
    if len(parts) != 3 or parts[1] != "=":
        print(f"pysh: malformed assignment: {cmd.verb.text}", file=sys.stderr)
        return 1

    name = parts[0]
    if not VAR_NAME_RX.match(name):
        print(f"assign: not a valid identifier: {name}", file=sys.stderr)
        return 1

    value = state.interpolate(parts[2])
    try:
        state.set_var(name, value)
    except (ValueError, OSError) as e:
        print(f"assign: {name}: {e}", file=sys.stderr)
        return 1

    logger.debug("assigned %s=%r", name, value)
    return 0


def run_builtin(cmd: SimpleCommand, state: ShellState):
    """
    Run cmd in the current process if it is a builtin.
    Returns its status (or SHELL_EXIT), or None when cmd is not a builtin.
    """
    name = cmd.verb.parts[0] if len(cmd.verb.parts) == 1 else None

    if name in BUILTINS:
        if name in REDIRECTING_BUILTINS:
            try:
                apply_redirections(cmd, state)
            except RedirectionError as e:
                print(f"pysh: {e}", file=sys.stderr)
                return 1
        args = [state.resolve(p) for p in cmd.params]
        logger.debug("builtin %s %r in pid %d", name, args, os.getpid())
        return BUILTINS[name](args, state)

    if is_assignment(cmd):
        return assign_variable(cmd, state)

    return None
