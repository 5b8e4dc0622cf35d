"""Application service: Insert Product use case."""

from __future__ import annotations

import uuid
from collections.abc import Callable

from pim.application.store_product import StoreProductHandler
from pim.domain.model.product import Product
from pim.domain.repository.product_repository import ProductRepository
from pim.domain.repository.relationship_repository import RelationshipRepository
from pim.domain.service.status_transitions import validate_initial_status

CONTRACT_NUMBER_FORMAT = "GKP{:07d}"


def _new_ident() -> str:
    return str(uuid.uuid4())


class InsertProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        relationship_repo: RelationshipRepository,
        href_template: str,
        ident_factory: Callable[[], str] = _new_ident,
    ) -> None:
        self._product_repo = product_repo
        self._relationship_repo = relationship_repo
        self._href_template = href_template
        self._ident_factory = ident_factory

    def handle(self, product: Product, referenced_products: list[Product]) -> Product:
        """Create a new product.

        Steps:
        1. Check the initial status (missing means CREATED).
        2. Assign a fresh ident and its href.
        3. Root products draw the next contract number.
        4. Store it like any other product.
        """
        product.status = validate_initial_status(product.status)
        product.ident = self._ident_factory()
        product.href = self._href_template.format(ident=product.ident)

        if product.is_root:
            product.contract_number = CONTRACT_NUMBER_FORMAT.format(
                self._product_repo.next_series_id()
            )
        else:
            product.contract_number = None

        store = StoreProductHandler(self._product_repo, self._relationship_repo)
        return store.handle(product, referenced_products)
