"""Domain service: product relationship graph.

Products form ownership trees: a root product bundles component
products, which may bundle further components.  Every non-root product
of a tree also carries a denormalized "root" edge pointing straight at
the tree's root.  This module keeps that invariant when a tree is
stored and tears a tree down, children first, when it is deleted.

Traversals run on an explicit stack over a ``ProductGraph`` snapshot
keyed by ident, so deep trees do not hit the recursion limit and a
cycle is reported instead of looping forever.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from types import MappingProxyType

from pim.domain.exceptions import (
    CyclicRelationshipError,
    InvalidProductDeleteStatusError,
    ProductsNotFoundError,
)
from pim.domain.model.product import BUNDLED, ROOT, Edge, Product, ProductRelationship
from pim.domain.model.status import ProductStatus
from pim.domain.repository.product_repository import ProductRepository
from pim.domain.repository.relationship_repository import RelationshipRepository

logger = logging.getLogger(__name__)


class ProductGraph:
    """Read-only working set of products keyed by ident.

    Products that are not part of the snapshot are fetched on demand
    through ``loader`` (typically ``ProductRepository.get_by_ident``)
    and cached next to it; the snapshot itself never changes.
    """

    def __init__(
        self,
        products: Iterable[Product],
        loader: Callable[[str], Product | None] | None = None,
    ) -> None:
        self._snapshot = MappingProxyType({p.ident: p for p in products})
        self._loader = loader
        self._fetched: dict[str, Product] = {}

    def __contains__(self, ident: str) -> bool:
        return ident in self._snapshot

    def node(self, ident: str) -> Product:
        product = self._snapshot.get(ident) or self._fetched.get(ident)
        if product is None and self._loader is not None:
            product = self._loader(ident)
            if product is not None:
                self._fetched[ident] = product
        if product is None:
            raise ProductsNotFoundError([ident])
        return product

    def resolve(self, relationship: ProductRelationship) -> ProductRelationship:
        """Return a fresh edge whose reference is checked against the snapshot."""
        if relationship.product_ref not in self._snapshot:
            raise ProductsNotFoundError([relationship.product_ref])
        target = self._snapshot[relationship.product_ref]
        return ProductRelationship(relationship.relationship_type, target.ident)

    def walk(
        self,
        start: Product,
        follow: Callable[[Edge], bool],
        postorder: bool = True,
    ) -> list[Product]:
        """Return ``start`` and every product reachable through followed edges.

        Edges are taken in the natural order of each relationship list.
        With ``postorder`` children come before their parent, otherwise
        parents come first.  A product reached by two paths is listed
        once; reaching a product that is still on the current path
        raises CyclicRelationshipError.
        """
        order: list[Product] = []
        done: set[str] = set()
        on_path: set[str] = {start.ident}
        stack: list[tuple[Product, Iterator[Edge]]] = [(start, start.edges())]
        if not postorder:
            order.append(start)

        while stack:
            node, edges = stack[-1]
            for edge in edges:
                if not follow(edge):
                    continue
                if edge.to_ident in on_path:
                    raise CyclicRelationshipError(edge.to_ident)
                if edge.to_ident in done:
                    continue
                child = self.node(edge.to_ident)
                on_path.add(child.ident)
                stack.append((child, child.edges()))
                if not postorder:
                    order.append(child)
                break
            else:
                stack.pop()
                on_path.discard(node.ident)
                done.add(node.ident)
                if postorder:
                    order.append(node)

        return order


def _is_tree_edge(edge: Edge) -> bool:
    return edge.relationship_type != ROOT


def _is_bundled_edge(edge: Edge) -> bool:
    return edge.relationship_type == BUNDLED


class RelationshipGraphMaintainer:

    def __init__(
        self,
        product_repo: ProductRepository,
        relationship_repo: RelationshipRepository,
    ) -> None:
        self._product_repo = product_repo
        self._relationship_repo = relationship_repo

    def normalize_and_resolve(
        self,
        product: Product,
        referenced_products: list[Product],
    ) -> list[Product]:
        """Prepare ``product`` and its tree for saving.

        An empty ``referenced_products`` drops every relationship of the
        product.  Otherwise each edge must point at one of the
        referenced products; all dangling idents are reported together.
        Root products then get their tree's root edges filled in.

        Returns the products that must be saved, ``product`` first.
        """
        if not referenced_products:
            if product.relationships:
                logger.debug(
                    "No referenced products given, clearing relationships of %s",
                    product.ident,
                )
            product.relationships = []
            return [product]

        snapshot = ProductGraph(referenced_products)
        missing = [
            ident
            for ident in dict.fromkeys(rel.product_ref for rel in product.relationships)
            if ident not in snapshot
        ]
        if missing:
            raise ProductsNotFoundError(missing)

        product.relationships = [snapshot.resolve(rel) for rel in product.relationships]

        if not product.is_root:
            return [product]

        graph = ProductGraph(
            [*referenced_products, product], loader=self._product_repo.get_by_ident
        )
        touched = self.propagate_root(graph, product)
        return [product] + [p for p in touched if p.ident != product.ident]

    def propagate_root(self, graph: ProductGraph, root: Product) -> list[Product]:
        """Give every non-root product below ``root`` an edge back to it.

        Follows all edges except "root" ones.  Products that already
        carry a root edge are left alone, so running this twice changes
        nothing.  Returns the products that received a new edge.
        """
        reached = graph.walk(root, follow=_is_tree_edge, postorder=False)

        touched: list[Product] = []
        for node in reached:
            if node.ident == root.ident or node.has_root_relationship():
                continue
            logger.debug("Setting root product relationship of %s to %s", node.ident, root.ident)
            node.add_relationship(ProductRelationship(ROOT, root.ident))
            touched.append(node)
        return touched

    def cascading_delete(self, product: Product) -> list[Product]:
        """Delete ``product`` together with everything bundled below it.

        Only the top-level product must be TERMINATED; bundled children
        go with their owner whatever their status.  The whole subtree is
        planned before the first delete, so a missing child or a cycle
        aborts without deleting anything.

        Returns the deleted products in deletion order (children first).
        """
        if product.status != ProductStatus.TERMINATED:
            raise InvalidProductDeleteStatusError(product.ident, product.status)

        graph = ProductGraph([product], loader=self._product_repo.get_by_ident)
        plan = graph.walk(product, follow=_is_bundled_edge)

        for node in plan:
            if not node.is_root:
                logger.debug(
                    "Delete product relationship with relationshipType %s and productRef %s",
                    BUNDLED,
                    node.ident,
                )
                self._relationship_repo.delete_by_type_and_product_ref(BUNDLED, node.ident)
            logger.debug("Delete product with ident %s", node.ident)
            self._product_repo.delete(node)

        return plan
