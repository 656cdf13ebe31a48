""" Run two command trees side by side (left & right). """
import logging
import sys

from constants import STATUS_FAILURE
from exceptions import SpawnError
from process import spawn, wait_all

logger = logging.getLogger(__name__)


def combine_parallel_statuses(left_status, right_status, collapse=True) -> int:
    """
    With collapse, any failure becomes 1 and real exit codes are lost.
    Otherwise the left branch's failure wins over the right one's.
    """
    if collapse:
        return 0 if left_status == 0 and right_status == 0 else STATUS_FAILURE
    return left_status if left_status != 0 else right_status


def run_in_parallel(left, right, state, evaluate) -> int:
    pids = []
    try:
        pids.append(spawn(lambda: evaluate(left, state)))
        pids.append(spawn(lambda: evaluate(right, state)))
    except SpawnError as e:
        print(f"pysh: {e}", file=sys.stderr)

    logger.debug("parallel children %r", pids)
    statuses = wait_all(pids)
    if len(statuses) < 2:
        return STATUS_FAILURE
    return combine_parallel_statuses(statuses[0], statuses[1],
                                     state.config.collapse_parallel_status)
