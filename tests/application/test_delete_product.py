"""Integration tests for the DeleteProduct use case."""

import pytest

from pim.application.delete_product import DeleteProductHandler
from pim.domain.exceptions import InvalidProductDeleteStatusError, ProductNotFoundError
from pim.domain.model.product import BUNDLED, ROOT, Product, ProductRelationship
from pim.domain.model.status import ProductStatus
from tests.fakes import FakeProductRepository, FakeRelationshipRepository


def _setup():
    """R (TERMINATED) bundles A; A bundles B.  Children are still ACTIVE."""
    r = Product(
        ident="R",
        base_type=ROOT,
        status=ProductStatus.TERMINATED,
        relationships=[ProductRelationship(BUNDLED, "A")],
    )
    a = Product(
        ident="A",
        base_type=BUNDLED,
        status=ProductStatus.ACTIVE,
        relationships=[ProductRelationship(ROOT, "R"), ProductRelationship(BUNDLED, "B")],
    )
    b = Product(
        ident="B",
        base_type=BUNDLED,
        status=ProductStatus.ACTIVE,
        relationships=[ProductRelationship(ROOT, "R")],
    )
    product_repo = FakeProductRepository([r, a, b])
    relationship_repo = FakeRelationshipRepository(product_repo)
    return product_repo, relationship_repo


class TestDeleteProduct:

    def test_deletes_whole_tree_children_first(self):
        product_repo, relationship_repo = _setup()

        deleted = DeleteProductHandler(product_repo, relationship_repo).handle("R")

        assert [p.ident for p in deleted] == ["B", "A", "R"]
        assert [e for e in product_repo.journal if e[0] == "delete"] == [
            ("delete", "B"),
            ("delete", "A"),
            ("delete", "R"),
        ]
        assert [e for e in product_repo.journal if e[0] == "cleanup"] == [
            ("cleanup", BUNDLED, "B"),
            ("cleanup", BUNDLED, "A"),
        ]

    def test_unknown_product(self):
        product_repo, relationship_repo = _setup()

        with pytest.raises(ProductNotFoundError):
            DeleteProductHandler(product_repo, relationship_repo).handle("Z")

    def test_running_product_not_deleted(self):
        product_repo, relationship_repo = _setup()

        with pytest.raises(InvalidProductDeleteStatusError):
            DeleteProductHandler(product_repo, relationship_repo).handle("A")

        assert product_repo.journal == []
        assert len(product_repo.list_all()) == 3
