"""Exceptions raised by the check-in core."""


class GuestlistError(Exception):
    """Base class for check-in service errors."""


class SchemaError(GuestlistError):
    """A required column is missing from the sheet's header row.

    Not retryable: the sheet itself has to be fixed.
    """


class BackendError(GuestlistError):
    """Reading from or writing to the sheet failed (network, auth, quota)."""
