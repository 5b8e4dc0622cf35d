"""Filter object handed to ``ProductRepository.find_by_search_criteria``."""

from __future__ import annotations

from dataclasses import dataclass

from pim.domain.model.status import ProductStatus


@dataclass(frozen=True)
class SearchCriteria:
    """Every field that is set must match (AND semantics); unset fields are ignored."""

    status: ProductStatus | None = None
    base_type: str | None = None
    name: str | None = None
    contract_number: str | None = None
    related_ident: str | None = None  # product holds any edge to this ident
