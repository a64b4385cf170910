"""Tests for cursor moves, viewport bookkeeping, and selection repair."""

from __future__ import annotations

import unittest

from lazytree.navigation import VIEWPORT_MARGIN, NavigationCursor, TraversalMode
from lazytree.tree_index import TreeIndex


def sample_index(**kwargs) -> TreeIndex:
    return TreeIndex(["/a/b", "/a/c", "/d"], **kwargs)


def flat_index(count: int = 20) -> TreeIndex:
    return TreeIndex([f"/d{i:02d}" for i in range(count)])


def path_of(cursor: NavigationCursor) -> str | None:
    return cursor.selected.path if cursor.selected is not None else None


class CursorMoveTests(unittest.TestCase):
    def test_example_parent_and_child_moves(self) -> None:
        with NavigationCursor(sample_index(), 10) as cursor:
            cursor.select_path("/a/b")
            self.assertTrue(cursor.move_to_parent())
            self.assertEqual(path_of(cursor), "/a")

            self.assertTrue(cursor.move_to_child())
            self.assertEqual(path_of(cursor), "/a/b")

    def test_hierarchical_forward_skips_children(self) -> None:
        with NavigationCursor(sample_index(), 10, traversal_mode=TraversalMode.HIERARCHICAL) as cursor:
            cursor.select_path("/a")

            self.assertEqual(cursor.move_forward(1), 1)
            self.assertEqual(path_of(cursor), "/d")

    def test_parent_then_child_restores_first_child(self) -> None:
        index = TreeIndex(["/p/q/r", "/p/q/s", "/p/z"])
        with NavigationCursor(index, 10) as cursor:
            cursor.select_path("/p/q")
            cursor.move_to_parent()
            cursor.move_to_child()

            self.assertEqual(path_of(cursor), "/p/q")

    def test_move_to_parent_decrements_offset_per_link(self) -> None:
        with NavigationCursor(sample_index(), 20) as cursor:
            cursor.select_path("/a/c")
            cursor.viewport_offset = 10

            cursor.move_to_parent()

            self.assertEqual(path_of(cursor), "/a")
            self.assertEqual(cursor.viewport_offset, 8)

    def test_move_to_parent_at_root_is_noop(self) -> None:
        with NavigationCursor(sample_index(), 10) as cursor:
            cursor.move_to_top()

            self.assertFalse(cursor.move_to_parent())
            self.assertEqual(path_of(cursor), "/")

    def test_move_to_child_rescans_once(self) -> None:
        calls: list[str] = []

        def list_children(directory: str, show_hidden: bool):
            calls.append(directory)
            return (["/a/new"] if directory == "/a" else []), None

        with NavigationCursor(TreeIndex(["/a"], list_children=list_children), 10) as cursor:
            cursor.select_path("/a")

            self.assertTrue(cursor.move_to_child())
            self.assertEqual(path_of(cursor), "/a/new")
            self.assertEqual(calls, ["/a"])

            self.assertFalse(cursor.move_to_child())
            self.assertEqual(path_of(cursor), "/a/new")
            self.assertEqual(calls, ["/a", "/a/new"])

    def test_linear_backward_then_forward_restores_selection(self) -> None:
        with NavigationCursor(flat_index(), 10) as cursor:
            cursor.select_path("/d10")

            self.assertEqual(cursor.move_backward(3), 3)
            self.assertEqual(cursor.move_forward(3), 3)
            self.assertEqual(path_of(cursor), "/d10")

    def test_boundary_limits_recovered_steps(self) -> None:
        with NavigationCursor(flat_index(), 10) as cursor:
            cursor.select_path("/d01")

            taken = cursor.move_backward(5)
            self.assertEqual(taken, 2)
            self.assertEqual(path_of(cursor), "/")

            cursor.move_forward(taken)
            self.assertEqual(path_of(cursor), "/d01")

    def test_top_and_bottom_offsets(self) -> None:
        with NavigationCursor(flat_index(), 10) as cursor:
            cursor.move_to_bottom()
            self.assertEqual(path_of(cursor), "/d19")
            self.assertEqual(cursor.viewport_offset, 10 - VIEWPORT_MARGIN - 1)

            cursor.move_to_top()
            self.assertEqual(path_of(cursor), "/")
            self.assertEqual(cursor.viewport_offset, 0)

    def test_select_line_uses_visible_line_map(self) -> None:
        index = sample_index()
        with NavigationCursor(index, 10) as cursor:
            cursor.visible_line_map = list(index.entries())

            self.assertTrue(cursor.select_line(2))
            self.assertEqual(path_of(cursor), "/a/b")
            self.assertEqual(cursor.viewport_offset, 2)
            self.assertFalse(cursor.select_line(9))

    def test_select_path_unknown_returns_false(self) -> None:
        with NavigationCursor(sample_index(), 10) as cursor:
            self.assertFalse(cursor.select_path("/nope"))
            self.assertEqual(path_of(cursor), "/")

    def test_toggle_traversal_mode(self) -> None:
        with NavigationCursor(sample_index(), 10) as cursor:
            self.assertEqual(cursor.toggle_traversal_mode(), TraversalMode.HIERARCHICAL)
            self.assertEqual(cursor.toggle_traversal_mode(), TraversalMode.LINEAR)


class ViewportOffsetTests(unittest.TestCase):
    def test_recenter_keeps_offset_inside_margins(self) -> None:
        with NavigationCursor(flat_index(), 10) as cursor:
            for offset in range(-5, 25):
                cursor.viewport_offset = offset
                cursor.recenter()
                with self.subTest(offset=offset):
                    self.assertGreaterEqual(cursor.viewport_offset, 3)
                    self.assertLessEqual(cursor.viewport_offset, 6)

    def test_forward_moves_push_offset_until_bottom_margin(self) -> None:
        with NavigationCursor(flat_index(), 10) as cursor:
            cursor.select_path("/d05")
            self.assertEqual(cursor.viewport_offset, 5)

            cursor.move_forward(1)
            self.assertEqual(cursor.viewport_offset, 6)
            cursor.move_forward(1)
            self.assertEqual(cursor.viewport_offset, 6)

    def test_window_height_change_recenters(self) -> None:
        with NavigationCursor(flat_index(), 20) as cursor:
            cursor.viewport_offset = 15

            cursor.set_window_height(20)
            self.assertEqual(cursor.viewport_offset, 15)

            cursor.set_window_height(10)
            self.assertEqual(cursor.viewport_offset, 6)


class SelectionRepairTests(unittest.TestCase):
    def test_removed_selection_moves_to_successor_then_predecessor(self) -> None:
        index = sample_index()
        with NavigationCursor(index, 10) as cursor:
            cursor.select_path("/a/c")
            index.remove("/a/c")
            self.assertEqual(path_of(cursor), "/d")

            index.remove("/d")
            self.assertEqual(path_of(cursor), "/a/b")

            index.remove("/")
            self.assertIsNone(cursor.selected)

    def test_removing_ancestor_skips_the_whole_removed_run(self) -> None:
        index = sample_index()
        with NavigationCursor(index, 10) as cursor:
            cursor.select_path("/a/b")

            index.remove("/a")

            self.assertEqual(path_of(cursor), "/d")

    def test_every_cursor_on_a_shared_index_is_repaired(self) -> None:
        index = sample_index()
        panel = NavigationCursor(index, 10, is_panel=True)
        dialog = NavigationCursor(index, 10)
        panel.select_path("/a/b")
        dialog.select_path("/a/c")

        index.remove("/a")

        self.assertEqual(path_of(panel), "/d")
        self.assertEqual(path_of(dialog), "/d")
        self.assertEqual(index.hook_count, 2)
        dialog.close()
        panel.close()
        self.assertEqual(index.hook_count, 0)

    def test_unrelated_removal_keeps_selection(self) -> None:
        index = sample_index()
        with NavigationCursor(index, 10) as cursor:
            cursor.select_path("/a/b")

            index.remove("/d")

            self.assertEqual(path_of(cursor), "/a/b")

    def test_closed_cursor_is_not_notified(self) -> None:
        index = sample_index()
        cursor = NavigationCursor(index, 10)
        cursor.select_path("/d")
        cursor.close()

        index.remove("/d")

        self.assertFalse(cursor.attached)
        self.assertEqual(cursor.ensure_selection().path, "/")


if __name__ == "__main__":
    unittest.main()
