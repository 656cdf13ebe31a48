import re

VAR_NAME_RX = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
# matches a verb token of the form NAME=value
ASSIGNMENT_RX = re.compile(r"^(?P<name>[A-Za-z_][A-Za-z0-9_]*)=(?P<value>.*)$", re.DOTALL)
# $?, ${NAME} or $NAME; any other '$' stays literal
PARAMETER_RX = re.compile(r"\$(?:(?P<status>\?)|\{(?P<braced>\w+)\}|(?P<name>[^\W\d]\w*))")

OPERATOR_TOKENS = {";", "&", "|", "&&", "||"}
REDIRECT_TOKENS = {"<", ">", ">>", "&>", "&>>"}

# permissions for files created by output/error redirection
DEFAULT_FILE_MODE = 0o644

STATUS_FAILURE = 1
STATUS_SYNTAX_ERROR = 2
STATUS_NOT_EXECUTABLE = 126
STATUS_NOT_FOUND = 127
STATUS_SIGNAL_BASE = 128


class _ShellExit:
    """ Result of exit/quit: the read-eval loop should stop. """
    __slots__ = ()

    def __repr__(self):
        return "SHELL_EXIT"


SHELL_EXIT = _ShellExit()


def is_shell_exit(status) -> bool:
    return status is SHELL_EXIT
