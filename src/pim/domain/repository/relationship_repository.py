"""Abstract repository for product relationships.

Relationships are owned by their product and are never stored on their
own; this interface only exposes the bulk clean-up needed before a
product is deleted.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class RelationshipRepository(ABC):

    @abstractmethod
    def delete_by_type_and_product_ref(self, relationship_type: str, product_ref: str) -> int:
        """Remove every edge of ``relationship_type`` pointing at ``product_ref``.

        Returns how many edges were removed.
        """
