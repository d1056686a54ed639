class SerialscopeException(Exception):
    """Base class for errors raised by serialscope."""


class ExportError(SerialscopeException):
    """
    Writing the serial export file failed.

    The underlying OSError is kept on `cause` so callers can report it.
    """

    def __init__(self, path: str, cause: OSError):
        super().__init__(f"{cause.strerror or cause} ({path})")
        self.path = path
        self.cause = cause


class InventoryError(SerialscopeException):
    """An explicitly requested inventory document could not be loaded."""
