"""Application service: Terminate Expired Products use case."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from pim.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class TerminateExpiredProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, now: datetime | None = None) -> int:
        now = now or datetime.now(timezone.utc)
        logger.debug("Terminate expired products at %s", now.isoformat())
        terminated = self._product_repo.terminate_expired_products(now)
        logger.info("Terminated %d expired product(s)", len(terminated))
        return len(terminated)
