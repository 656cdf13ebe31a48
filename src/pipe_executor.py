""" Connect two command trees through an anonymous pipe (left | right). """
import logging
import os
import sys

from constants import STATUS_FAILURE
from exceptions import SpawnError
from process import spawn, wait_all

logger = logging.getLogger(__name__)

READ = 0
WRITE = 1


def _attach(pipefds, end, target_fd):
    """
    Make one end of the pipe the child's target_fd and drop the originals.
    An end that already sits on target_fd (0 or 1 was closed when the pipe
    was made) is kept.
    """
    os.dup2(pipefds[end], target_fd)
    for fd in pipefds:
        if fd != target_fd:
            os.close(fd)


def run_on_pipe(left, right, state, evaluate) -> int:
    """
    Evaluate left with its stdout feeding right's stdin, each in its own
    child. Returns right's exit status.
    """
    try:
        pipefds = os.pipe()
    except OSError as e:
        print(f"pysh: pipe failed: {e.strerror or e}", file=sys.stderr)
        return STATUS_FAILURE

    def writer():
        _attach(pipefds, WRITE, 1)
        return evaluate(left, state)

    def reader():
        _attach(pipefds, READ, 0)
        return evaluate(right, state)

    pids = []
    try:
        pids.append(spawn(writer))
        pids.append(spawn(reader))
    except SpawnError as e:
        print(f"pysh: {e}", file=sys.stderr)
    finally:
        # the reader only sees end-of-input once every write end is closed
        os.close(pipefds[READ])
        os.close(pipefds[WRITE])

    logger.debug("pipe %r -> children %r", pipefds, pids)
    statuses = wait_all(pids)
    if len(statuses) < 2:
        return STATUS_FAILURE
    return statuses[1]
