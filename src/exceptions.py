""" Errors raised by the execution core. """


class ShellError(Exception):
    """ Base class for shell execution errors. """


class RedirectionError(ShellError):
    """ A redirection target could not be opened or attached. """
    def __init__(self, target, stream, reason):
        super().__init__(f"{target}: {reason}")
        self.target = target
        self.stream = stream
        self.reason = reason


class SpawnError(ShellError):
    """ A child process or pipe could not be created or reaped. """
