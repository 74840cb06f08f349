"""Domain exceptions for SalesDesk.

Everything raised on purpose by the pacing engine, the accounts layer or the
record stores inherits from SalesDeskError. The HTTP layer maps each kind to a
status code in ``salesdesk.main``.
"""


class SalesDeskError(Exception):
    """Base exception for all SalesDesk errors."""


class NotFound(SalesDeskError):
    """Raised when a seller or record does not exist (or the seller is inactive)."""


class ValidationError(SalesDeskError):
    """Raised when input violates a domain rule.

    Examples:
    - Negative monetary amounts, quotas or visit counts
    - Missing required fields on a record
    """


class ParseError(ValidationError):
    """Raised when a date string cannot be parsed as a calendar date."""


class Conflict(SalesDeskError):
    """Raised when a write collides with a unique key (e.g. seller name)."""


class DependencyError(SalesDeskError):
    """Raised when a collaborator (database, driver) fails.

    The original error is always chained as ``__cause__``. Callers must treat
    this as "could not compute", never as a zero result.
    """


class AuthenticationError(SalesDeskError):
    """Raised when credentials or a bearer token are missing or invalid."""


class AuthorizationError(SalesDeskError):
    """Raised when an authenticated seller lacks permission for an action."""
