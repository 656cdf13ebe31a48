""" Attach redirection targets to the standard streams of the current process. """
import logging
import os
import sys

from constants import DEFAULT_FILE_MODE
from exceptions import RedirectionError

logger = logging.getLogger(__name__)

STREAM_FILENO = {
    "stdin": 0,
    "stdout": 1,
    "stderr": 2,
}


def open_target(path, stream, append=False, mode=DEFAULT_FILE_MODE):
    """
    Open a redirection target and return the raw descriptor.
    stdin targets are opened read-only; output targets are created if
    needed and either truncated or opened for appending.
    """
    if stream == "stdin":
        flags = os.O_RDONLY
    else:
        flags = os.O_WRONLY | os.O_CREAT | (os.O_APPEND if append else os.O_TRUNC)

    try:
        return os.open(path, flags, mode)
    except OSError as e:
        raise RedirectionError(path, stream, e.strerror or str(e)) from e


def plan_redirections(cmd, state):
    """
    Resolve the targets of cmd into (stream, path, append) triples, in the
    order they are opened.
    """
    plan = []
    if cmd.stdin is not None:
        plan.append(("stdin", state.resolve(cmd.stdin.target), False))

    if cmd.stdout is not None and cmd.stderr is not None:
        # with both targets, output always appends and error always truncates
        plan.append(("stdout", state.resolve(cmd.stdout.target), True))
        plan.append(("stderr", state.resolve(cmd.stderr.target), False))
    elif cmd.stdout is not None:
        plan.append(("stdout", state.resolve(cmd.stdout.target), cmd.stdout.append))
    elif cmd.stderr is not None:
        plan.append(("stderr", state.resolve(cmd.stderr.target), cmd.stderr.append))

    return plan


def flush_std_streams():
    """ Push buffered Python-level output to the descriptors it was meant for. """
    for stream in (sys.stdout, sys.stderr):
        if stream is not None:
            stream.flush()


def apply_redirections(cmd, state):
    """
    Redirect the standard streams of the calling process as cmd requests.

    Every target is opened before any descriptor is replaced, so a failure
    (RedirectionError) leaves stdin, stdout and stderr untouched.
    """
    plan = plan_redirections(cmd, state)
    if not plan:
        return

    opened = []
    try:
        for stream, path, append in plan:
            fd = open_target(path, stream, append, state.config.file_mode)
            logger.debug("opened %s target %r as fd %d (append=%s)", stream, path, fd, append)
            opened.append((stream, path, fd))

        flush_std_streams()
        for stream, path, fd in opened:
            try:
                os.dup2(fd, STREAM_FILENO[stream])
            except OSError as e:
                raise RedirectionError(path, stream, e.strerror or str(e)) from e
    finally:
        for stream, _, fd in opened:
            if fd != STREAM_FILENO[stream]:
                os.close(fd)
