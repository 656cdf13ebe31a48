""" Current state of the shell. """
import os

from command import SimpleCommand, Word
from config import ShellConfig
from constants import PARAMETER_RX


class ShellState:
    """
    Process-wide context threaded through builtins and the evaluator.

    The environment mapping defaults to os.environ so that assignments are
    inherited by every child forked afterwards.
    """
    def __init__(self, environ=None, config=None):
        self.environ = os.environ if environ is None else environ
        self.config = config if config is not None else ShellConfig()
        self.last_status = 0

    def set_var(self, name, value):
        self.environ[name] = value

    def get_var(self, name):
        return self.environ.get(name, "")

    def set_status(self, status: int):
        # normalize like shells do
        self.last_status = int(status) if status is not None else 0

    def chdir(self, path):
        os.chdir(path)

    def environ_snapshot(self) -> dict:
        return dict(self.environ)

    def resolve(self, word: Word) -> str:
        """ Turn a word into the plain string a program sees. """
        return "".join(self.interpolate(part) for part in word.parts)

    def argv(self, cmd: SimpleCommand) -> list[str]:
        return [self.resolve(cmd.verb)] + [self.resolve(p) for p in cmd.params]

    def _parameter_value(self, match) -> str:
        if match.group("status"):
            return str(self.last_status)
        return self.get_var(match.group("braced") or match.group("name"))

    def interpolate(self, token: str) -> str:
        """ Expand $?, $NAME and ${NAME} in one token; unset names expand to "". """
        pieces = []
        pos = 0
        for match in PARAMETER_RX.finditer(token):
            pieces.append(token[pos:match.start()])
            pieces.append(self._parameter_value(match))
            pos = match.end()
        pieces.append(token[pos:])
        return "".join(pieces)
