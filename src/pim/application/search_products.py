"""Application service: Search Products use case (query)."""

from __future__ import annotations

from pim.domain.model.product import Product
from pim.domain.model.search_criteria import SearchCriteria
from pim.domain.repository.product_repository import ProductRepository


class SearchProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, criteria: SearchCriteria) -> list[Product]:
        return self._product_repo.find_by_search_criteria(criteria)
