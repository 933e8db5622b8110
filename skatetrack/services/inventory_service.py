"""
Inventory service for the SkateTrack dashboard.

Shoe stock is display data: restocking produces an updated copy for the form
preview and never writes back to the seeded list.
"""
import logging
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional

from ..models import InventoryItem

logger = logging.getLogger(__name__)

EXPORT_HEADERS = ["ID", "Size", "Total", "Available", "In Use", "Status"]


class InventoryService:
    """Read-only view over rental shoe stock levels."""

    def __init__(self, items: Optional[List[InventoryItem]] = None):
        self._items: List[InventoryItem] = list(items or [])

    def search(self, size_query: str = "") -> List[InventoryItem]:
        size_query = (size_query or "").strip()
        return [item for item in self._items if size_query in item.size]

    def find_by_size(self, size: str) -> Optional[InventoryItem]:
        for item in self._items:
            if item.size == str(size):
                return item
        return None

    def totals(self) -> Dict[str, int]:
        """
        Overall stock figures.

        Returns:
            Dict with total_shoes, available_shoes and availability_percentage
        """
        total = sum(item.total for item in self._items)
        available = sum(item.available for item in self._items)
        percentage = round(available / total * 100) if total else 0
        return {
            "total_shoes": total,
            "available_shoes": available,
            "availability_percentage": percentage,
        }

    def plan_restock(self, size: str, quantity: int) -> InventoryItem:
        """
        Preview the stock level after adding pairs of one size.

        Raises:
            LookupError: If the size is not stocked
            ValueError: If quantity is not a positive integer
        """
        quantity = int(quantity)
        if quantity <= 0:
            raise ValueError("Quantity must be at least 1")

        item = self.find_by_size(size)
        if item is None:
            raise LookupError(f"No inventory for shoe size {size}")

        updated = replace(item, total=item.total + quantity, available=item.available + quantity)
        logger.info("Planned restock of size %s: +%d (%d available)", size, quantity, updated.available)
        return updated

    @staticmethod
    def export_rows(items: Iterable[InventoryItem]) -> List[List[Any]]:
        return [
            [item.id, item.size, item.total, item.available, item.in_use, item.status]
            for item in items
        ]
