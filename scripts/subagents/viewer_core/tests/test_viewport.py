from __future__ import annotations

import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from viewer_core import viewport  # noqa: E402
from viewer_core.viewport import ViewportState  # noqa: E402


class AutoScrollTests(unittest.TestCase):
    def test_appending_lines_keeps_tail_pinned(self):
        state = ViewportState(scroll_offset=80, auto_scroll=True, total_lines=100, visible_lines=20)
        state = viewport.lines_changed(state, 110)
        self.assertEqual(state.scroll_offset, 90)
        self.assertEqual(state.scroll_offset + state.visible_lines, state.total_lines)

    def test_appending_lines_without_auto_scroll_keeps_offset(self):
        state = ViewportState(scroll_offset=30, auto_scroll=False, total_lines=100, visible_lines=20)
        state = viewport.lines_changed(state, 150)
        self.assertEqual(state.scroll_offset, 30)
        self.assertFalse(state.auto_scroll)

    def test_scroll_up_disengages_and_scroll_down_reengages(self):
        state = ViewportState(scroll_offset=100, auto_scroll=True, total_lines=120, visible_lines=20)
        state = viewport.scroll_up(state)
        self.assertEqual(state.scroll_offset, 99)
        self.assertFalse(state.auto_scroll)
        state = viewport.scroll_down(state)
        self.assertEqual(state.scroll_offset, 100)
        self.assertTrue(state.auto_scroll)

    def test_scroll_down_short_of_bottom_leaves_auto_off(self):
        state = ViewportState(scroll_offset=50, auto_scroll=False, total_lines=120, visible_lines=20)
        state = viewport.scroll_down(state, 10)
        self.assertEqual(state.scroll_offset, 60)
        self.assertFalse(state.auto_scroll)

    def test_page_steps_clamp(self):
        state = ViewportState(scroll_offset=5, auto_scroll=False, total_lines=120, visible_lines=20)
        self.assertEqual(viewport.scroll_up(state, 10).scroll_offset, 0)
        state = ViewportState(scroll_offset=95, auto_scroll=False, total_lines=120, visible_lines=20)
        paged = viewport.scroll_down(state, 10)
        self.assertEqual(paged.scroll_offset, 100)
        self.assertTrue(paged.auto_scroll)

    def test_scroll_up_on_short_content_keeps_auto(self):
        state = ViewportState(scroll_offset=0, auto_scroll=True, total_lines=5, visible_lines=20)
        state = viewport.scroll_up(state)
        self.assertEqual(state.scroll_offset, 0)
        self.assertTrue(state.auto_scroll)

    def test_toggle_on_jumps_to_bottom(self):
        state = ViewportState(scroll_offset=10, auto_scroll=False, total_lines=100, visible_lines=20)
        state = viewport.toggle_auto_scroll(state)
        self.assertTrue(state.auto_scroll)
        self.assertEqual(state.scroll_offset, 80)

    def test_toggle_off_keeps_offset(self):
        state = ViewportState(scroll_offset=80, auto_scroll=True, total_lines=100, visible_lines=20)
        state = viewport.toggle_auto_scroll(state)
        self.assertFalse(state.auto_scroll)
        self.assertEqual(state.scroll_offset, 80)


class StreamSelectionTests(unittest.TestCase):
    def test_live_stream_starts_at_bottom(self):
        state = viewport.start_stream(ViewportState(visible_lines=20), "x", True, 100)
        self.assertEqual(state.scroll_offset, 80)
        self.assertTrue(state.auto_scroll)
        self.assertEqual(state.agent_id, "x")

    def test_completed_stream_starts_at_top(self):
        state = viewport.start_stream(ViewportState(visible_lines=20), "y", False, 100)
        self.assertEqual(state.scroll_offset, 0)
        self.assertFalse(state.auto_scroll)

    def test_same_agent_refresh_preserves_position(self):
        state = ViewportState(scroll_offset=5, auto_scroll=False, agent_id="x", total_lines=100, visible_lines=20)
        refreshed = viewport.start_stream(state, "x", False, 100)
        self.assertEqual(refreshed, state)
        refreshed = viewport.start_stream(state, "x", True, 100)
        self.assertEqual(refreshed.scroll_offset, 5)
        self.assertFalse(refreshed.auto_scroll)

    def test_switch_to_other_agent_resets(self):
        state = ViewportState(scroll_offset=5, auto_scroll=False, agent_id="x", total_lines=100, visible_lines=20)
        switched = viewport.start_stream(state, "y", False, 40)
        self.assertEqual(switched.scroll_offset, 0)
        switched = viewport.start_stream(state, "z", True, 40)
        self.assertEqual(switched.scroll_offset, 20)
        self.assertTrue(switched.auto_scroll)


class ClampingTests(unittest.TestCase):
    def test_shrinking_content_clamps_offset(self):
        state = ViewportState(scroll_offset=80, auto_scroll=False, total_lines=100, visible_lines=20)
        self.assertEqual(viewport.lines_changed(state, 50).scroll_offset, 30)
        self.assertEqual(viewport.lines_changed(state, 0).scroll_offset, 0)

    def test_resize_reclamps(self):
        state = ViewportState(scroll_offset=80, auto_scroll=False, total_lines=100, visible_lines=20)
        grown = viewport.resized(state, 60)
        self.assertEqual(grown.scroll_offset, 40)
        self.assertEqual(viewport.resized(state, 0).visible_lines, 1)

    def test_resize_with_auto_scroll_stays_pinned(self):
        state = ViewportState(scroll_offset=80, auto_scroll=True, total_lines=100, visible_lines=20)
        self.assertEqual(viewport.resized(state, 10).scroll_offset, 90)


class VisibleWindowTests(unittest.TestCase):
    def test_slice_and_indicators(self):
        lines = [f"line {i}" for i in range(30)]
        state = ViewportState(scroll_offset=10, total_lines=30, visible_lines=10)
        self.assertEqual(viewport.visible_slice(lines, state), lines[10:20])
        window = viewport.visible_window(state)
        self.assertTrue(window.more_above)
        self.assertTrue(window.more_below)
        self.assertEqual((window.first, window.last), (10, 20))
        self.assertEqual(window.percent, 50)

    def test_top_and_bottom_indicators(self):
        top = viewport.visible_window(ViewportState(scroll_offset=0, total_lines=30, visible_lines=10))
        self.assertFalse(top.more_above)
        self.assertTrue(top.more_below)
        bottom = viewport.visible_window(ViewportState(scroll_offset=20, total_lines=30, visible_lines=10))
        self.assertTrue(bottom.more_above)
        self.assertFalse(bottom.more_below)
        self.assertEqual(bottom.percent, 100)

    def test_short_content_has_no_indicators(self):
        window = viewport.visible_window(ViewportState(total_lines=3, visible_lines=10))
        self.assertFalse(window.more_above)
        self.assertFalse(window.more_below)
        self.assertEqual(window.percent, 100)
        self.assertEqual(window.last, 3)


if __name__ == "__main__":
    unittest.main()
