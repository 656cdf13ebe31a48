""" Execute a simple command. """
import logging
import os
import sys

from command import SimpleCommand
from constants import STATUS_FAILURE, STATUS_NOT_EXECUTABLE, STATUS_NOT_FOUND
from exceptions import SpawnError
from process import spawn, wait_for
from redirection import apply_redirections
from shell_builtins import run_builtin
from shell_state import ShellState

logger = logging.getLogger(__name__)


def exec_program(cmd: SimpleCommand, state: ShellState) -> int:
    """
    Replace the current process image with cmd's program.
    Only returns, with a failure status, if the program cannot be started.
    """
    apply_redirections(cmd, state)
    argv = state.argv(cmd)
    if not argv[0]:
        # a verb that expanded to nothing
        print(f"{cmd.verb.text}: command not found", file=sys.stderr)
        return STATUS_NOT_FOUND

    try:
        os.execvpe(argv[0], argv, state.environ_snapshot())
    except FileNotFoundError:
        print(f"{argv[0]}: command not found", file=sys.stderr)
        return STATUS_NOT_FOUND
    except PermissionError:
        print(f"{argv[0]}: permission denied", file=sys.stderr)
        return STATUS_NOT_EXECUTABLE
    except OSError as e:
        print(f"{argv[0]}: {e.strerror or e}", file=sys.stderr)
        return STATUS_NOT_EXECUTABLE


def execute_external(cmd: SimpleCommand, state: ShellState) -> int:
    """ Run cmd in a forked child and return the child's exit status. """
    try:
        pid = spawn(lambda: exec_program(cmd, state))
    except SpawnError as e:
        print(f"pysh: {e}", file=sys.stderr)
        return STATUS_FAILURE

    try:
        return wait_for(pid)
    except SpawnError as e:
        print(f"pysh: {e}", file=sys.stderr)
        return STATUS_FAILURE


def execute_command(cmd: SimpleCommand, state: ShellState):
    # Builtins run in this process; everything else in a child
    status = run_builtin(cmd, state)
    if status is not None:
        return status
    return execute_external(cmd, state)
