"""Exceptions raised by the catalog services.

Each error carries the HTTP status the API layer responds with.
"""


class CatalogError(Exception):
    """Base class for catalog errors that map onto an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CatalogValidationError(CatalogError):
    """Required input is missing or malformed."""

    status_code = 400


class NotFoundError(CatalogError):
    """A product id or slug does not resolve."""

    status_code = 404


class UpstreamError(CatalogError):
    """A call to the image store failed."""

    status_code = 502


class PersistenceError(CatalogError):
    """A database call failed."""

    status_code = 500
