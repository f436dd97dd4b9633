class CatalogError(Exception):
    """Base class for errors raised by the catalog services."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ProductValidationError(CatalogError):
    """A required product field is missing; correctable by the caller."""


class AuthorizationError(CatalogError):
    """Token rejected or the user's role lacks the capability."""


class ProductNotFound(CatalogError):
    pass


class StorageError(CatalogError):
    """Transactional or I/O failure; the transaction has been rolled back."""


class AccountServiceError(CatalogError):
    """The external account service failed or answered with garbage."""


# Map error types to HTTP status codes
ERROR_STATUS_MAP = {
    ProductValidationError: 400,
    AuthorizationError: 403,
    ProductNotFound: 404,
    StorageError: 500,
    AccountServiceError: 500,
}


def status_for(exc: CatalogError) -> int:
    return ERROR_STATUS_MAP.get(type(exc), 500)
