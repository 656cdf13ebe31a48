""" Runtime configuration of the shell. """
import os

from constants import DEFAULT_FILE_MODE

PARALLEL_STATUS_MODES = ("collapse", "first-failure")


class ShellConfig:
    def __init__(self, collapse_parallel_status=True, file_mode=DEFAULT_FILE_MODE,
                 log_level="WARNING"):
        # True: PARALLEL yields 0 or 1; False: the first failing branch's status
        self.collapse_parallel_status = collapse_parallel_status
        self.file_mode = file_mode
        self.log_level = log_level

    @classmethod
    def from_env(cls, environ=None):
        """
        Build a config from PYSH_* environment variables.
        Unknown values fall back to the defaults.
        """
        environ = os.environ if environ is None else environ

        mode = environ.get("PYSH_PARALLEL_STATUS", "collapse").strip().lower()
        if mode not in PARALLEL_STATUS_MODES:
            mode = "collapse"

        return cls(
            collapse_parallel_status=(mode == "collapse"),
            log_level=environ.get("PYSH_LOG_LEVEL", "WARNING").strip().upper() or "WARNING",
        )

    def __repr__(self):
        return (f"ShellConfig(collapse_parallel_status={self.collapse_parallel_status}, "
                f"file_mode={oct(self.file_mode)}, log_level={self.log_level!r})")
