"""Exception types raised by the Blog Builder outside of the parser.

Parse failures are never raised: the parser records them as Error
expressions and the validator turns them into diagnostics.
"""

from pathlib import Path
from typing import List, Union

import constants


class BlogError(Exception):
    """Base class for all Blog Builder errors."""
    pass


class CouldNotFindRoot(BlogError):
    """Raised when no site root holds a configuration file."""

    def __init__(self, start: Union[str, Path]):
        self.start = Path(start)
        super().__init__(
            f"could not find file '{constants.CONFIG_FILE_NAME}' in '{self.start}' "
            f"or any parent directory"
        )


class ConfigError(BlogError):
    """Raised when the site configuration is missing or malformed."""
    pass


class CannotReadFile(BlogError):
    """Raised (or accumulated) when a file cannot be read."""

    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = Path(path)
        self.reason = reason
        message = f"cannot read file '{self.path}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class CannotWriteFile(BlogError):
    """Raised (or accumulated) when an output file cannot be written."""

    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = Path(path)
        self.reason = reason
        message = f"cannot write file '{self.path}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class RenderError(BlogError):
    """Raised when an expression that must never be rendered reaches the emitter.

    This indicates a programming fault (for example an Error expression that
    slipped past validation), not a problem with the user's source.
    """
    pass


class BuildFailed(BlogError):
    """Raised by BlogResult.unwrap() and carries every accumulated error."""

    def __init__(self, errors: List[Exception]):
        self.errors = list(errors)
        count = len(self.errors)
        super().__init__(f"{count} error{'s' if count != 1 else ''} found")
