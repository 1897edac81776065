"""Exception types shared by the request handler and its collaborators."""


class LinkBudgetError(Exception):
    """Base class for errors rendered back to the client."""
    pass


class InputValidationError(LinkBudgetError, ValueError):
    """Raised when a submitted field is missing, non-numeric or out of range"""
    pass


class SessionStorageError(LinkBudgetError):
    """Raised when session state cannot be read from or written to storage"""
    pass
