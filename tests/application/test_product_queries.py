"""Tests for lookup, search, status change, export and bulk termination."""

from datetime import datetime, timezone

import pytest

from pim.application.change_product_status import ChangeProductStatusHandler
from pim.application.export_products import ExportProductsHandler
from pim.application.get_products import GetProductHandler, GetProductsHandler
from pim.application.search_products import SearchProductsHandler
from pim.application.terminate_expired_products import TerminateExpiredProductsHandler
from pim.domain.exceptions import (
    InvalidStatusTransitionError,
    ProductNotFoundError,
    ProductsNotFoundError,
)
from pim.domain.model.product import BUNDLED, ROOT, Product
from pim.domain.model.search_criteria import SearchCriteria
from pim.domain.model.status import ProductStatus
from tests.fakes import FakeProductRepository


def _repo() -> FakeProductRepository:
    return FakeProductRepository(
        [
            Product(ident="A", name="Alpha", base_type=ROOT, status=ProductStatus.ACTIVE),
            Product(ident="B", name="Beta", base_type=BUNDLED, status=ProductStatus.CREATED),
            Product(ident="C", name="Gamma", base_type=BUNDLED, status=ProductStatus.ACTIVE),
        ]
    )


class TestGetProducts:

    def test_single_lookup(self):
        assert GetProductHandler(_repo()).handle("B").name == "Beta"

    def test_single_miss(self):
        with pytest.raises(ProductNotFoundError, match="'Z' not found"):
            GetProductHandler(_repo()).handle("Z")

    def test_batch_lookup(self):
        products = GetProductsHandler(_repo()).handle(["C", "A"])
        assert [p.ident for p in products] == ["C", "A"]

    def test_batch_reports_exactly_the_missing_idents(self):
        repo = FakeProductRepository(
            [Product(ident="A"), Product(ident="C")]
        )
        with pytest.raises(ProductsNotFoundError) as exc_info:
            GetProductsHandler(repo).handle({"A", "B", "C"})
        assert exc_info.value.missing_idents == ["B"]

    def test_duplicate_idents_are_not_misses(self):
        products = GetProductsHandler(_repo()).handle(["A", "A"])
        assert [p.ident for p in products] == ["A"]


class TestSearchProducts:

    def test_delegates_to_store(self):
        result = SearchProductsHandler(_repo()).handle(
            SearchCriteria(status=ProductStatus.ACTIVE, base_type=BUNDLED)
        )
        assert [p.ident for p in result] == ["C"]


class TestChangeProductStatus:

    def test_legal_transition_saved(self):
        repo = _repo()
        product = ChangeProductStatusHandler(repo).handle("A", ProductStatus.TERMINATED)
        assert product.status == ProductStatus.TERMINATED
        assert repo.journal == [("save", "A")]

    def test_illegal_transition_not_saved(self):
        repo = _repo()
        with pytest.raises(InvalidStatusTransitionError):
            ChangeProductStatusHandler(repo).handle("B", ProductStatus.TERMINATED)
        assert repo.journal == []

    def test_unknown_product(self):
        with pytest.raises(ProductNotFoundError):
            ChangeProductStatusHandler(_repo()).handle("Z", ProductStatus.ACTIVE)


class TestExportProducts:

    def test_exports_requested_products(self):
        data = ExportProductsHandler(_repo()).handle(["A", "C"])
        rows = data.decode("utf-8").splitlines()
        assert rows[1:] == ["Alpha,,,,,", "Gamma,,,,,"]

    def test_missing_product_fails_whole_export(self):
        with pytest.raises(ProductsNotFoundError):
            ExportProductsHandler(_repo()).handle(["A", "Z"])


class TestTerminateExpiredProducts:

    def test_only_expired_running_products_terminated(self):
        now = datetime(2024, 6, 1, tzinfo=timezone.utc)
        expired = Product(
            ident="E",
            status=ProductStatus.PENDINGTERMINATE,
            termination_date=datetime(2024, 5, 31, tzinfo=timezone.utc),
        )
        future = Product(
            ident="F",
            status=ProductStatus.ACTIVE,
            termination_date=datetime(2024, 7, 1, tzinfo=timezone.utc),
        )
        created = Product(
            ident="N",
            status=ProductStatus.CREATED,
            termination_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        repo = FakeProductRepository([expired, future, created])

        count = TerminateExpiredProductsHandler(repo).handle(now)

        assert count == 1
        assert expired.status == ProductStatus.TERMINATED
        assert future.status == ProductStatus.ACTIVE
        assert created.status == ProductStatus.CREATED
