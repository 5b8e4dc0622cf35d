"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.

Both fakes can share a ``journal`` list that records every write in
call order, so tests can assert on deletion ordering.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from pim.domain.model.product import Product
from pim.domain.model.search_criteria import SearchCriteria
from pim.domain.model.status import ProductStatus
from pim.domain.repository.product_repository import ProductRepository
from pim.domain.repository.relationship_repository import RelationshipRepository


class FakeProductRepository(ProductRepository):

    def __init__(
        self,
        products: list[Product] | None = None,
        journal: list[tuple] | None = None,
    ) -> None:
        self._store: dict[str, Product] = {}
        for p in products or []:
            self._store[p.ident] = p
        self._series = 0
        self.journal = journal if journal is not None else []

    def get_by_ident(self, ident: str) -> Product | None:
        return self._store.get(ident)

    def get_by_idents(self, idents: Iterable[str]) -> list[Product]:
        return [self._store[i] for i in idents if i in self._store]

    def list_all(self) -> list[Product]:
        return list(self._store.values())

    def find_by_search_criteria(self, criteria: SearchCriteria) -> list[Product]:
        return [
            p
            for p in self._store.values()
            if (criteria.status is None or p.status == criteria.status)
            and (criteria.base_type is None or p.base_type == criteria.base_type)
        ]

    def save(self, product: Product) -> Product:
        self._store[product.ident] = product
        self.journal.append(("save", product.ident))
        return product

    def delete(self, product: Product) -> None:
        self._store.pop(product.ident, None)
        self.journal.append(("delete", product.ident))

    def next_series_id(self) -> int:
        self._series += 1
        return self._series

    def terminate_expired_products(self, now: datetime) -> list[Product]:
        terminated = [
            p
            for p in self._store.values()
            if p.status in (ProductStatus.ACTIVE, ProductStatus.PENDINGTERMINATE)
            and p.termination_date is not None
            and p.termination_date <= now
        ]
        for p in terminated:
            p.change_status(ProductStatus.TERMINATED)
        return terminated


class FakeRelationshipRepository(RelationshipRepository):

    def __init__(
        self,
        product_repo: FakeProductRepository,
        journal: list[tuple] | None = None,
    ) -> None:
        self._product_repo = product_repo
        self.journal = journal if journal is not None else product_repo.journal

    def delete_by_type_and_product_ref(self, relationship_type: str, product_ref: str) -> int:
        self.journal.append(("cleanup", relationship_type, product_ref))
        return sum(
            p.remove_relationships(relationship_type, product_ref)
            for p in self._product_repo.list_all()
        )
