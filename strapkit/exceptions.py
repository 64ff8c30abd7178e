"""Exceptions raised by strapkit widgets and the form host."""


class StrapkitError(Exception):
    """Base class for every strapkit error."""


class CallerError(StrapkitError):
    """Raised when a widget API is used incorrectly (unknown property, wrong child type, missing callback)."""


class InvalidCastError(StrapkitError, TypeError):
    """Raised when a dynamically set property value cannot be cast to the expected type."""


class ControlNotFoundError(StrapkitError, KeyError):
    """Raised when a control id does not belong to the form."""
