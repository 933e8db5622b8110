"""Rental shoe inventory model."""

from dataclasses import dataclass

from ..utils import LOW_STOCK_THRESHOLD


@dataclass
class InventoryItem:
    """
    Stock level for one shoe size.

    ``status`` is a display classification derived from ``available`` only.
    """

    id: int
    size: str
    total: int
    available: int

    @property
    def in_use(self) -> int:
        return self.total - self.available

    @property
    def status(self) -> str:
        if self.available <= 0:
            return "out"
        if self.available <= LOW_STOCK_THRESHOLD:
            return "low"
        return "available"

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "size": self.size,
            "total": self.total,
            "available": self.available,
            "inUse": self.in_use,
            "status": self.status,
        }
