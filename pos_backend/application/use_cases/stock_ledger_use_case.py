"""
Stock Ledger Use Case
"""

import logging
from typing import Iterable, List, Optional, Tuple

from pos_backend.domain.repositories.product_repository import ProductRepository


class StockLedger:
    """Deducts sold quantities from tracked products"""

    def __init__(self, product_repository: ProductRepository):
        self._product_repository = product_repository
        self._logger = logging.getLogger(self.__class__.__name__)

    async def deduct_batch(
        self, items: Iterable[Tuple[Optional[str], float]]
    ) -> List[str]:
        """
        Deduct each (product id, quantity) pair separately

        Every deduction is its own storage call; an error stops the batch and
        leaves earlier deductions in place. Lines without a product id and
        products that are missing or untracked are skipped.

        Returns:
            Ids of the products whose stock changed
        """
        adjusted: List[str] = []
        for product_id, quantity in items:
            if not product_id:
                continue
            if await self._product_repository.deduct_stock(product_id, quantity):
                adjusted.append(product_id)

        if adjusted:
            self._logger.info("📦 STOCK DEDUCTED: %d products", len(adjusted))
        return adjusted
