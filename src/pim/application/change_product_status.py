"""Application service: Change Product Status use case."""

from __future__ import annotations

from pim.domain.exceptions import ProductNotFoundError
from pim.domain.model.product import Product
from pim.domain.model.status import ProductStatus
from pim.domain.repository.product_repository import ProductRepository


class ChangeProductStatusHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, ident: str, status: ProductStatus) -> Product:
        product = self._product_repo.get_by_ident(ident)
        if product is None:
            raise ProductNotFoundError(ident)

        product.change_status(status)
        self._product_repo.save(product)
        return product
