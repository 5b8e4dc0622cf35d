"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
None of them are retried: they abort the enclosing operation.
"""

from __future__ import annotations


def _label(status) -> str:
    return getattr(status, "value", str(status))


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):

    def __init__(self, ident: str) -> None:
        super().__init__(f"Product '{ident}' not found")
        self.ident = ident


class ProductsNotFoundError(EntityNotFoundError):
    """One or more products of a batch lookup could not be found."""

    def __init__(self, missing_idents: list[str]) -> None:
        super().__init__(f"Products not found: {', '.join(missing_idents)}")
        self.missing_idents = list(missing_idents)


class InvalidProductInitialStatusError(ValidationError):

    def __init__(self, status) -> None:
        super().__init__(
            f"New products must start in status CREATED, got {_label(status)}"
        )
        self.status = status


class InvalidProductDeleteStatusError(ValidationError):

    def __init__(self, ident: str, status) -> None:
        super().__init__(
            f"Cannot delete product '{ident}' in status {_label(status)}, "
            f"expected TERMINATED"
        )
        self.ident = ident
        self.status = status


class InvalidStatusTransitionError(ValidationError):

    def __init__(self, previous, next) -> None:
        super().__init__(
            f"Invalid status transition {_label(previous)} -> {_label(next)}"
        )
        self.previous = previous
        self.next = next


class CyclicRelationshipError(ValidationError):
    """A product was reached again while still on its own traversal path."""

    def __init__(self, ident: str) -> None:
        super().__init__(f"Cyclic product relationship detected at '{ident}'")
        self.ident = ident
