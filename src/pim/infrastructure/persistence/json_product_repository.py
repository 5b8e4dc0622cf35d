"""JSON-file-backed implementations of ProductRepository and RelationshipRepository.

Products (with their relationships and prices) live in
``products.json``; the contract-number counter lives in ``series.json``
next to it.  There is no locking: one process at a time.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

from pim.domain.model.product import Product, ProductPrice, ProductRelationship
from pim.domain.model.search_criteria import SearchCriteria
from pim.domain.model.status import ProductStatus
from pim.domain.model.value_objects import Money
from pim.domain.repository.product_repository import ProductRepository
from pim.domain.repository.relationship_repository import RelationshipRepository

RUNNING_STATUSES = (ProductStatus.ACTIVE, ProductStatus.PENDINGTERMINATE)


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path, series_path: Path | None = None) -> None:
        self._file_path = file_path
        self._series_path = series_path or file_path.with_name("series.json")
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_ident(self, ident: str) -> Product | None:
        return self._load().get(ident)

    def get_by_idents(self, idents: Iterable[str]) -> list[Product]:
        products = self._load()
        return [products[ident] for ident in idents if ident in products]

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def find_by_search_criteria(self, criteria: SearchCriteria) -> list[Product]:
        return [p for p in self._load().values() if _matches(p, criteria)]

    def save(self, product: Product) -> Product:
        products = self._load()
        products[product.ident] = product
        self._persist(products)
        return product

    def delete(self, product: Product) -> None:
        products = self._load()
        products.pop(product.ident, None)
        self._persist(products)

    def next_series_id(self) -> int:
        last = 0
        if self._series_path.exists():
            last = json.loads(self._series_path.read_text(encoding="utf-8"))["last"]
        self._series_path.write_text(
            json.dumps({"last": last + 1}) + "\n", encoding="utf-8"
        )
        return last + 1

    def terminate_expired_products(self, now: datetime) -> list[Product]:
        products = self._load()
        terminated = [
            p
            for p in products.values()
            if p.status in RUNNING_STATUSES
            and p.termination_date is not None
            and _as_utc(p.termination_date) <= _as_utc(now)
        ]
        for product in terminated:
            product.change_status(ProductStatus.TERMINATED)
        if terminated:
            self._persist(products)
        return terminated

    # --- Used by JsonRelationshipRepository -----------------------------------

    def remove_relationships(self, relationship_type: str, product_ref: str) -> int:
        products = self._load()
        removed = sum(
            p.remove_relationships(relationship_type, product_ref)
            for p in products.values()
        )
        if removed:
            self._persist(products)
        return removed

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return {item["ident"]: self._to_domain(item) for item in raw}

    def _persist(self, products: dict[str, Product]) -> None:
        raw = [self._to_raw(p) for p in products.values()]
        self._file_path.write_text(
            json.dumps(raw, indent=2) + "\n", encoding="utf-8"
        )

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "ident": product.ident,
            "name": product.name,
            "description": product.description,
            "status": product.status.value if product.status else None,
            "base_type": product.base_type,
            "contract_number": product.contract_number,
            "href": product.href,
            "start_date": _iso(product.start_date),
            "termination_date": _iso(product.termination_date),
            "relationships": [
                {"type": rel.relationship_type, "product_ref": rel.product_ref}
                for rel in product.relationships
            ],
            "prices": [
                {
                    "price_type": price.price_type,
                    "name": price.name,
                    "amount": (
                        str(price.price.amount)
                        if price.price and price.price.amount is not None
                        else None
                    ),
                    "unit": price.price.unit if price.price else None,
                    "has_price": price.price is not None,
                }
                for price in product.prices
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            ident=raw["ident"],
            name=raw.get("name"),
            description=raw.get("description"),
            status=ProductStatus(raw["status"]) if raw.get("status") else None,
            base_type=raw.get("base_type"),
            contract_number=raw.get("contract_number"),
            href=raw.get("href"),
            start_date=_parse_iso(raw.get("start_date")),
            termination_date=_parse_iso(raw.get("termination_date")),
            relationships=[
                ProductRelationship(rel["type"], rel["product_ref"])
                for rel in raw.get("relationships", [])
            ],
            prices=[
                ProductPrice(
                    price_type=price["price_type"],
                    name=price.get("name"),
                    price=(
                        Money(
                            Decimal(price["amount"]) if price.get("amount") is not None else None,
                            price.get("unit"),
                        )
                        if price.get("has_price", True)
                        else None
                    ),
                )
                for price in raw.get("prices", [])
            ],
        )

    # --- File helpers ---------------------------------------------------------

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")


class JsonRelationshipRepository(RelationshipRepository):
    """Edges are stored inside their owning product's record."""

    def __init__(self, product_repo: JsonProductRepository) -> None:
        self._product_repo = product_repo

    def delete_by_type_and_product_ref(self, relationship_type: str, product_ref: str) -> int:
        return self._product_repo.remove_relationships(relationship_type, product_ref)


def _matches(product: Product, criteria: SearchCriteria) -> bool:
    if criteria.status is not None and product.status != criteria.status:
        return False
    if criteria.base_type is not None and product.base_type != criteria.base_type:
        return False
    if criteria.name is not None and (product.name or "").lower() != criteria.name.lower():
        return False
    if (
        criteria.contract_number is not None
        and product.contract_number != criteria.contract_number
    ):
        return False
    if criteria.related_ident is not None and not any(
        rel.product_ref == criteria.related_ident for rel in product.relationships
    ):
        return False
    return True


def _as_utc(value: datetime) -> datetime:
    # naive timestamps are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_iso(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None
