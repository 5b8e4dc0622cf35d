"""Application service: product lookup use cases (queries)."""

from __future__ import annotations

from collections.abc import Iterable

from pim.domain.exceptions import ProductNotFoundError, ProductsNotFoundError
from pim.domain.model.product import Product
from pim.domain.repository.product_repository import ProductRepository


class GetProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, ident: str) -> Product:
        product = self._product_repo.get_by_ident(ident)
        if product is None:
            raise ProductNotFoundError(ident)
        return product


class GetProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, idents: Iterable[str]) -> list[Product]:
        """Load every requested product or fail naming the ones that are missing."""
        requested = list(dict.fromkeys(idents))
        products = self._product_repo.get_by_idents(requested)

        if len(products) != len(requested):
            found = {p.ident for p in products}
            raise ProductsNotFoundError(
                sorted(ident for ident in requested if ident not in found)
            )

        return products
