from __future__ import annotations

import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from viewer_core.layout import select_layout_mode, sidebar_width, visible_line_budget  # noqa: E402


class LayoutTests(unittest.TestCase):
    def test_narrow(self):
        self.assertEqual(select_layout_mode(80), "narrow")

    def test_wide(self):
        self.assertEqual(select_layout_mode(180), "wide")

    def test_sidebar_narrower_on_small_terminals(self):
        self.assertLess(sidebar_width("narrow"), sidebar_width("wide"))

    def test_visible_line_budget(self):
        self.assertEqual(visible_line_budget(24), 18)
        self.assertEqual(visible_line_budget(3), 1)


if __name__ == "__main__":
    unittest.main()
