import unittest

from skatetrack.models import InventoryItem
from skatetrack.models.seed import seed_inventory
from skatetrack.services import InventoryService


class InventoryItemTests(unittest.TestCase):
    def test_status_follows_available_count(self) -> None:
        self.assertEqual(InventoryItem(1, "46", 2, 0).status, "out")
        self.assertEqual(InventoryItem(2, "45", 3, 1).status, "low")
        self.assertEqual(InventoryItem(3, "40", 6, 3).status, "available")

    def test_in_use(self) -> None:
        self.assertEqual(InventoryItem(1, "38", 5, 2).in_use, 3)


class InventoryServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.service = InventoryService(seed_inventory())

    def test_totals(self) -> None:
        self.assertEqual(self.service.totals(), {
            "total_shoes": 50,
            "available_shoes": 28,
            "availability_percentage": 56,
        })

    def test_empty_stock_totals(self) -> None:
        self.assertEqual(InventoryService().totals()["availability_percentage"], 0)

    def test_search_by_size_substring(self) -> None:
        self.assertEqual([item.size for item in self.service.search("4")],
                         ["40", "41", "42", "43", "44", "45", "46", "47"])
        self.assertEqual(len(self.service.search("")), 12)

    def test_plan_restock_returns_copy(self) -> None:
        updated = self.service.plan_restock("46", 2)
        self.assertEqual(updated.total, 4)
        self.assertEqual(updated.available, 2)
        self.assertEqual(updated.status, "available")
        self.assertEqual(self.service.find_by_size("46").available, 0)

    def test_plan_restock_validation(self) -> None:
        with self.assertRaises(LookupError):
            self.service.plan_restock("60", 1)
        with self.assertRaises(ValueError):
            self.service.plan_restock("40", 0)

    def test_export_rows(self) -> None:
        rows = InventoryService.export_rows(self.service.search("45"))
        self.assertEqual(rows, [[10, "45", 3, 1, 2, "low"]])


if __name__ == "__main__":
    unittest.main()
