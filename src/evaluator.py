""" Walk a command tree and run it. """
import logging

from command import CommandNode, Operator
from constants import is_shell_exit
from parallel_executor import run_in_parallel
from pipe_executor import run_on_pipe
from runner import execute_command
from shell_state import ShellState

logger = logging.getLogger(__name__)


def evaluate(node: CommandNode, state: ShellState):
    """
    Run node and return its exit status, or SHELL_EXIT if exit/quit ran.

    ; always runs both sides and returns the right one's status.
    || runs the right side only when the left one failed, && only when it
    succeeded; the status of the last side that ran is returned.
    & and | run both sides in child processes.
    """
    op = node.op
    logger.debug("evaluate %s", op.name)

    if op is Operator.LEAF:
        status = execute_command(node.command, state)
        if not is_shell_exit(status):
            state.set_status(status)
        return status

    if op is Operator.PIPE:
        status = run_on_pipe(node.left, node.right, state, evaluate)
        state.set_status(status)
        return status

    if op is Operator.PARALLEL:
        status = run_in_parallel(node.left, node.right, state, evaluate)
        state.set_status(status)
        return status

    status = evaluate(node.left, state)
    if is_shell_exit(status):
        return status

    if op is Operator.SEQUENTIAL:
        return evaluate(node.right, state)
    if op is Operator.IF_NONZERO:
        return evaluate(node.right, state) if status != 0 else status
    if op is Operator.IF_ZERO:
        return evaluate(node.right, state) if status == 0 else status

    raise ValueError(f"unknown operator: {op!r}")
