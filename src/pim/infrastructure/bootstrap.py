"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pim.infrastructure.config import Settings
from pim.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
    JsonRelationshipRepository,
)


def settings() -> Settings:
    return Settings.from_env()


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(settings().data_dir / "products.json")


def relationship_repository() -> JsonRelationshipRepository:
    return JsonRelationshipRepository(product_repository())
