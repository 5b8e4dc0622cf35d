"""Application service: Export Products use case.

Loads the requested products (all of them or fail) and renders them
with the CSV exporter.
"""

from __future__ import annotations

from collections.abc import Iterable

from pim.application.csv_exporter import CsvExporter
from pim.application.get_products import GetProductsHandler
from pim.domain.repository.product_repository import ProductRepository


class ExportProductsHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        exporter: CsvExporter | None = None,
    ) -> None:
        self._products = GetProductsHandler(product_repo)
        self._exporter = exporter or CsvExporter()

    def handle(self, idents: Iterable[str]) -> bytes:
        return self._exporter.export(self._products.handle(idents))
