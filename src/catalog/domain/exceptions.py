"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Storage failures are not wrapped; they reach the caller as raised.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A value could not be accepted by the domain model."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):
    """No product exists for the given ID."""

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product with ID '{product_id}' not found")
        self.product_id = product_id
