"""Product aggregate.

A product is either the root of an ownership tree (it carries the
contract number) or a component bundled below another product.  The
tree is expressed through ``ProductRelationship`` edges owned by each
product; an edge only stores the ident of the product it points to.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime

from pim.domain.model.status import ProductStatus
from pim.domain.model.value_objects import Money
from pim.domain.service.status_transitions import validate_status_transition

ROOT = "root"
BUNDLED = "bundled"

ONE_TIME_CHARGE = "OTC"
MONTHLY_RECURRING_CHARGE = "MRC"


@dataclass(frozen=True)
class ProductRelationship:
    """Outgoing edge of its owning product.

    ``product_ref`` is the ident of the related product; the owner is
    implied by the list the edge lives in.
    """

    relationship_type: str
    product_ref: str


@dataclass(frozen=True)
class Edge:
    """A relationship read as a ``(from, type, to)`` triple."""

    from_ident: str
    relationship_type: str
    to_ident: str


@dataclass(frozen=True)
class ProductPrice:
    price_type: str
    price: Money | None = None
    name: str | None = None


@dataclass
class Product:
    """A product in the inventory.

    This is an aggregate root.  The ``__init__`` is intentionally simple
    so the repository can reconstitute persisted products without
    re-validating; new products go through the insert use case.
    """

    ident: str | None = None
    name: str | None = None
    status: ProductStatus | None = None
    base_type: str | None = None
    contract_number: str | None = None
    href: str | None = None
    description: str | None = None
    relationships: list[ProductRelationship] = field(default_factory=list)
    prices: list[ProductPrice] = field(default_factory=list)
    start_date: datetime | None = None
    termination_date: datetime | None = None

    @property
    def is_root(self) -> bool:
        return self.base_type == ROOT

    # --- State transitions ----------------------------------------------------

    def change_status(self, next_status: ProductStatus) -> None:
        """Move to ``next_status`` if the state machine allows it."""
        validate_status_transition(self.status, next_status)
        self.status = next_status

    # --- Relationships --------------------------------------------------------

    def edges(self) -> Iterator[Edge]:
        for rel in self.relationships:
            yield Edge(self.ident, rel.relationship_type, rel.product_ref)

    def has_root_relationship(self) -> bool:
        return any(rel.relationship_type == ROOT for rel in self.relationships)

    def add_relationship(self, relationship: ProductRelationship) -> None:
        self.relationships.append(relationship)

    def remove_relationships(self, relationship_type: str, product_ref: str) -> int:
        """Drop every edge of the given type pointing at ``product_ref``."""
        kept = [
            rel
            for rel in self.relationships
            if not (
                rel.relationship_type == relationship_type
                and rel.product_ref == product_ref
            )
        ]
        removed = len(self.relationships) - len(kept)
        self.relationships = kept
        return removed

    # --- Prices ---------------------------------------------------------------

    def first_price(self, price_type: str) -> ProductPrice | None:
        for price in self.prices:
            if price.price_type == price_type:
                return price
        return None
