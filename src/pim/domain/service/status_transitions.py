"""Domain service: product status state machine.

The legal transitions live in a single adjacency table so the rule set
can be inspected and tested on its own.  Staying in the same status is
always allowed.
"""

from __future__ import annotations

from pim.domain.exceptions import (
    InvalidProductInitialStatusError,
    InvalidStatusTransitionError,
)
from pim.domain.model.status import ProductStatus

ALLOWED_TRANSITIONS: frozenset[tuple[ProductStatus, ProductStatus]] = frozenset(
    {
        (ProductStatus.CREATED, ProductStatus.ACTIVE),
        (ProductStatus.CREATED, ProductStatus.ABORTED),
        (ProductStatus.ACTIVE, ProductStatus.TERMINATED),
        (ProductStatus.TERMINATED, ProductStatus.ACTIVE),
        (ProductStatus.ACTIVE, ProductStatus.PENDINGTERMINATE),
        (ProductStatus.PENDINGTERMINATE, ProductStatus.TERMINATED),
        (ProductStatus.PENDINGTERMINATE, ProductStatus.ACTIVE),
    }
)

INITIAL_STATUS = ProductStatus.CREATED


def is_allowed(previous: ProductStatus, next: ProductStatus) -> bool:
    return previous == next or (previous, next) in ALLOWED_TRANSITIONS


def validate_status_transition(previous: ProductStatus, next: ProductStatus) -> None:
    """Raise InvalidStatusTransitionError unless ``previous -> next`` is legal."""
    if not is_allowed(previous, next):
        raise InvalidStatusTransitionError(previous, next)


def validate_initial_status(status: ProductStatus | None) -> ProductStatus:
    """Return the status a new product starts in.

    A missing status defaults to CREATED; anything else than CREATED is
    rejected.
    """
    if status is None:
        return INITIAL_STATUS
    if status != INITIAL_STATUS:
        raise InvalidProductInitialStatusError(status)
    return status
