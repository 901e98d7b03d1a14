"""Error taxonomy for the shelving commands.

Every error carries a client error code so the CLI boundary can report
it as ``svn: <code>: <message>``.
"""


class ShelvingError(Exception):
    """Base exception for all shelving failures."""

    code = "E200000"
    default_message = ""

    def __init__(self, message: str | None = None, code: str | None = None):
        super().__init__(message if message is not None else self.default_message)
        if code is not None:
            self.code = code


class ArgumentShapeError(ShelvingError):
    """Wrong number of positional arguments or a bad option combination."""

    code = "E205000"
    default_message = "Try 'svn help' for more information"


class NoShelvesFoundError(ShelvingError):
    """The youngest shelf was requested but none exist."""

    code = "E205001"
    default_message = "No shelved changes found"


class TargetValidationError(ShelvingError):
    """No targets were given, or a target is not a local path."""

    code = "E205001"
    default_message = "Not enough arguments provided"


class StoreOperationError(ShelvingError):
    """Raised by store adapters for any failure of the underlying store."""


class EncodingError(ShelvingError):
    """A name argument could not be interpreted as UTF-8 text."""

    code = "E000022"
    default_message = "Can't convert string to UTF-8"


__all__ = [
    "ArgumentShapeError",
    "EncodingError",
    "NoShelvesFoundError",
    "ShelvingError",
    "StoreOperationError",
    "TargetValidationError",
]
