"""
Exceptions raised by pfShell
"""


class PfShellError(Exception):
    """Base class for pfShell errors"""


class ConfigNotFoundError(PfShellError):
    """The configuration export could not be read."""


class ConfigParseError(PfShellError):
    """The configuration export is not well-formed XML."""


class InvalidConfigError(PfShellError):
    """The configuration export lacks a required field."""


class SinkWriteError(PfShellError):
    """A finding group could not be written to a report."""

    def __init__(self, criterion_id, message):
        super().__init__(f"{criterion_id}: {message}")
        self.criterion_id = criterion_id
