""" Fork children and collect their exit statuses. """
import contextlib
import logging
import os
import sys

from constants import STATUS_FAILURE, STATUS_SIGNAL_BASE, is_shell_exit
from exceptions import RedirectionError, SpawnError

logger = logging.getLogger(__name__)


def child_exit_code(status) -> int:
    """ Map an evaluation result to the code a child process exits with. """
    if is_shell_exit(status):
        # exit/quit inside a forked branch only ends that branch
        return 0
    return int(status) & 0xFF


def decode_wait_status(raw: int) -> int:
    """ Translate a raw waitpid() status into a shell exit status. """
    if os.WIFEXITED(raw):
        return os.WEXITSTATUS(raw)
    if os.WIFSIGNALED(raw):
        return STATUS_SIGNAL_BASE + os.WTERMSIG(raw)
    return STATUS_FAILURE


def _flush_quietly():
    for stream in (sys.stdout, sys.stderr):
        # the descriptor behind a stream may already be closed in a child
        with contextlib.suppress(OSError, ValueError):
            if stream is not None:
                stream.flush()


def _run_child(body):
    status = STATUS_FAILURE
    try:
        status = child_exit_code(body())
    except RedirectionError as e:
        print(f"pysh: {e}", file=sys.stderr)
    except Exception:
        logger.exception("child %d failed", os.getpid())
    finally:
        _flush_quietly()
        # never return into the caller's stack
        os._exit(status)


def spawn(body) -> int:
    """
    Fork a child that runs body() and exits with its result.
    Returns the child's pid in the parent; raises SpawnError if the fork
    fails.
    """
    _flush_quietly()
    try:
        pid = os.fork()
    except OSError as e:
        raise SpawnError(f"fork failed: {e.strerror or e}") from e

    if pid == 0:
        _run_child(body)

    logger.debug("forked child %d", pid)
    return pid


def wait_for(pid: int) -> int:
    """ Block until child pid terminates and return its exit status. """
    try:
        _, raw = os.waitpid(pid, 0)
    except ChildProcessError as e:
        raise SpawnError(f"wait for {pid} failed: {e.strerror or e}") from e

    status = decode_wait_status(raw)
    logger.debug("child %d finished with status %d", pid, status)
    return status


def wait_all(pids) -> list[int]:
    """
    Reap every pid, in order. A pid that cannot be waited on counts as a
    failure.
    """
    statuses = []
    for pid in pids:
        try:
            statuses.append(wait_for(pid))
        except SpawnError as e:
            print(f"pysh: {e}", file=sys.stderr)
            statuses.append(STATUS_FAILURE)
    return statuses
