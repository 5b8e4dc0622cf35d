"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime

from pim.domain.model.product import Product
from pim.domain.model.search_criteria import SearchCriteria


class ProductRepository(ABC):

    @abstractmethod
    def get_by_ident(self, ident: str) -> Product | None:
        """Return a product by its ident, or None if not found."""

    @abstractmethod
    def get_by_idents(self, idents: Iterable[str]) -> list[Product]:
        """Return the products that exist among ``idents``; misses are skipped."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the inventory."""

    @abstractmethod
    def find_by_search_criteria(self, criteria: SearchCriteria) -> list[Product]:
        """Return every product matching all set fields of ``criteria``."""

    @abstractmethod
    def save(self, product: Product) -> Product:
        """Persist a new or updated product."""

    @abstractmethod
    def delete(self, product: Product) -> None:
        """Remove a product. Its own relationships go with it."""

    @abstractmethod
    def next_series_id(self) -> int:
        """Return the next value of the monotonic contract-number counter."""

    @abstractmethod
    def terminate_expired_products(self, now: datetime) -> list[Product]:
        """Terminate running products whose termination date has passed.

        Returns the products that were terminated.
        """
