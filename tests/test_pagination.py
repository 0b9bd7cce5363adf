import unittest

from inventory_api.core.constants import MAX_STORE_INTEGER
from inventory_api.core.pagination import build_window


class PagerTest(unittest.TestCase):
    def test_skip_formula(self):
        for page, limit in ((1, 10), (2, 10), (3, 25), (7, 1)):
            with self.subTest(page=page, limit=limit):
                window = build_window(str(page), str(limit))
                self.assertEqual(window.skip, (page - 1) * limit)
                self.assertEqual(window.limit, limit)

    def test_defaults(self):
        window = build_window()
        self.assertEqual((window.page, window.limit, window.skip), (1, 10, 0))
        self.assertEqual(build_window(default_limit=25).limit, 25)

    def test_stats(self):
        window = build_window("2", "10")
        stats = window.stats(95)
        self.assertEqual(stats.total_items, 95)
        self.assertEqual(stats.total_pages, 10)
        self.assertEqual(stats.current_page, 2)
        self.assertEqual(stats.items_per_page, 10)
        self.assertEqual(build_window("1", "10").stats(100).total_pages, 10)
        self.assertEqual(build_window("1", "10").stats(101).total_pages, 11)

    def test_zero_items_means_zero_pages(self):
        self.assertEqual(build_window().stats(0).total_pages, 0)

    def test_degenerate_input_is_clamped(self):
        self.assertEqual(build_window("0", "10").page, 1)
        self.assertEqual(build_window("-4", "10").skip, 0)
        self.assertEqual(build_window("1", "0").limit, 1)
        self.assertEqual(build_window("1", "100000").limit, 100)
        self.assertEqual(build_window("1", "100000", max_limit=None).limit, 100000)
        window = build_window("two", "ten")
        self.assertEqual((window.page, window.limit), (1, 10))

    def test_huge_page_keeps_offset_in_store_range(self):
        window = build_window("99999999999999999999", "10")
        self.assertLessEqual(window.skip, MAX_STORE_INTEGER)
        self.assertEqual(window.page, MAX_STORE_INTEGER // 10 + 1)

        unbounded = build_window("99999999999999999999", "99999999999999999999", max_limit=None)
        self.assertEqual(unbounded.limit, MAX_STORE_INTEGER)
        self.assertLessEqual(unbounded.skip, MAX_STORE_INTEGER)


if __name__ == "__main__":
    unittest.main()
