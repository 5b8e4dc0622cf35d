"""Application service: Delete Product use case.

Deletes a TERMINATED product and everything bundled below it.
"""

from __future__ import annotations

from pim.domain.exceptions import ProductNotFoundError
from pim.domain.model.product import Product
from pim.domain.repository.product_repository import ProductRepository
from pim.domain.repository.relationship_repository import RelationshipRepository
from pim.domain.service.relationship_graph import RelationshipGraphMaintainer


class DeleteProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        relationship_repo: RelationshipRepository,
    ) -> None:
        self._product_repo = product_repo
        self._relationship_repo = relationship_repo

    def handle(self, ident: str) -> list[Product]:
        product = self._product_repo.get_by_ident(ident)
        if product is None:
            raise ProductNotFoundError(ident)

        maintainer = RelationshipGraphMaintainer(self._product_repo, self._relationship_repo)
        return maintainer.cascading_delete(product)
