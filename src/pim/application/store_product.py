"""Application service: Store Product use case.

Resolves the product's relationships against the referenced products,
fills in root edges for a root product's tree and saves every product
that changed.  Nothing is saved if resolution or propagation fails.
"""

from __future__ import annotations

from pim.domain.model.product import Product
from pim.domain.repository.product_repository import ProductRepository
from pim.domain.repository.relationship_repository import RelationshipRepository
from pim.domain.service.relationship_graph import RelationshipGraphMaintainer


class StoreProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        relationship_repo: RelationshipRepository,
    ) -> None:
        self._product_repo = product_repo
        self._maintainer = RelationshipGraphMaintainer(product_repo, relationship_repo)

    def handle(self, product: Product, referenced_products: list[Product]) -> Product:
        to_save = self._maintainer.normalize_and_resolve(product, referenced_products)

        for item in to_save:
            self._product_repo.save(item)

        return product
