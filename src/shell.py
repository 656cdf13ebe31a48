""" Implement the read-eval loop of the shell. """
import logging
import sys

from constants import STATUS_SYNTAX_ERROR, is_shell_exit
from evaluator import evaluate
from parser import parse_line
from shell_state import ShellState

logger = logging.getLogger(__name__)


def read_command(prompt="$ "):
    """ Read a command with support for line continuation. """
    lines = []
    while True:
        line = input(prompt)
        if line.endswith("\\"):
            lines.append(line[:-1])
            prompt = "> "
        else:
            lines.append(line)
            break
    return "".join(lines)


class Shell:
    def __init__(self, state=None):
        self.state = state if state is not None else ShellState()

    def run_line(self, line: str):
        """
        Parse and evaluate one input line.
        Returns its status, SHELL_EXIT, or None for an empty line.
        """
        try:
            node = parse_line(line)
        except SyntaxError as e:
            print(f"pysh: {e.msg or e}", file=sys.stderr)
            self.state.set_status(STATUS_SYNTAX_ERROR)
            return STATUS_SYNTAX_ERROR

        if node is None:
            return None

        logger.debug("evaluating %r", node)
        return evaluate(node, self.state)

    def run(self):
        while True:
            try:
                line = read_command()
                status = self.run_line(line)
                if is_shell_exit(status):
                    return self.state.last_status
                if status is not None:
                    self.state.set_status(status)

            except EOFError:
                print()
                return 0

            except KeyboardInterrupt:
                print()
