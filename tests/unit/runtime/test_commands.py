"""Tests for tree command dispatch and the searching key state machine."""

from __future__ import annotations

import unittest

from lazytree.errors import ExternalOperationFailure
from lazytree.navigation import NavigationCursor, TraversalMode
from lazytree.runtime import TreeCommandContext, TreeCommands
from lazytree.tree_index import TreeIndex


class RecordingFileOps:
    def __init__(self, *, fail: bool = False) -> None:
        self.calls: list[tuple[str, ...]] = []
        self.fail = fail

    def _record(self, *call: str) -> None:
        self.calls.append(call)
        if self.fail:
            raise ExternalOperationFailure(f"Cannot {call[0]} {call[1]}")

    def copy_dir(self, source: str, destination: str) -> str:
        self._record("copy", source, destination)
        return f"{destination}/{source.rsplit('/', 1)[-1]}"

    def move_dir(self, source: str, destination: str) -> str:
        self._record("move", source, destination)
        return f"{destination}/{source.rsplit('/', 1)[-1]}"

    def delete_dir(self, path: str) -> None:
        self._record("delete", path)

    def change_directory(self, path: str) -> None:
        self._record("chdir", path)


def empty_children(_directory: str, _show_hidden: bool):
    return [], None


class TreeCommandsTestCase(unittest.TestCase):
    paths = ("/a/b", "/a/c", "/d")
    is_panel = False

    def setUp(self) -> None:
        self.index = TreeIndex(self.paths, list_children=empty_children)
        self.cursor = NavigationCursor(self.index, 10, is_panel=self.is_panel)
        self.file_ops = RecordingFileOps()
        self.prompts: list[str] = []
        self.questions: list[str] = []
        self.destination: str | None = None
        self.answer = True
        self.modes: list[TraversalMode] = []
        self.commands = self.make_commands()

    def tearDown(self) -> None:
        self.cursor.close()

    def make_commands(self, **overrides) -> TreeCommands:
        def prompt(label: str, _initial: str = "") -> str | None:
            self.prompts.append(label)
            return self.destination

        def confirm(question: str) -> bool:
            self.questions.append(question)
            return self.answer

        options = dict(
            file_ops=self.file_ops,
            prompt=prompt,
            confirm=confirm,
            on_mode_changed=self.modes.append,
        )
        options.update(overrides)
        return TreeCommands(self.cursor, TreeCommandContext(**options))

    def selected_path(self) -> str | None:
        return self.cursor.selected.path if self.cursor.selected is not None else None


class MovementCommandTests(TreeCommandsTestCase):
    def test_arrow_keys_move_linearly(self) -> None:
        self.assertTrue(self.commands.handle_key("DOWN"))
        self.assertTrue(self.commands.handle_key("DOWN"))
        self.assertEqual(self.selected_path(), "/a/b")

        self.assertTrue(self.commands.handle_key("UP"))
        self.assertEqual(self.selected_path(), "/a")

    def test_left_and_right_need_hierarchical_mode(self) -> None:
        self.cursor.select_path("/a/b")

        self.assertFalse(self.commands.execute("goto_left"))
        self.assertEqual(self.selected_path(), "/a/b")

        self.cursor.traversal_mode = TraversalMode.HIERARCHICAL
        self.assertTrue(self.commands.execute("goto_left"))
        self.assertEqual(self.selected_path(), "/a")
        self.assertTrue(self.commands.execute("goto_right"))
        self.assertEqual(self.selected_path(), "/a/b")

    def test_left_at_root_and_right_at_leaf_are_not_handled(self) -> None:
        self.cursor.traversal_mode = TraversalMode.HIERARCHICAL

        self.assertFalse(self.commands.execute("goto_left"))
        self.assertEqual(self.selected_path(), "/")

        self.cursor.select_path("/d")
        self.assertFalse(self.commands.handle_key("RIGHT"))
        self.assertEqual(self.selected_path(), "/d")

    def test_home_end_and_pages(self) -> None:
        self.commands.execute("goto_end")
        self.assertEqual(self.selected_path(), "/d")
        self.commands.execute("goto_page_up")
        self.assertEqual(self.selected_path(), "/")
        self.commands.execute("goto_page_down")
        self.assertEqual(self.selected_path(), "/d")
        self.commands.execute("goto_home")
        self.assertEqual(self.selected_path(), "/")

    def test_unknown_command_and_unbound_key_are_not_handled(self) -> None:
        self.assertFalse(self.commands.execute("no_such_command"))
        self.assertFalse(self.commands.handle_key("F9"))

    def test_toggle_navigation_mode_reports_new_mode(self) -> None:
        self.assertTrue(self.commands.handle_key("F4"))

        self.assertIs(self.cursor.traversal_mode, TraversalMode.HIERARCHICAL)
        self.assertEqual(self.modes, [TraversalMode.HIERARCHICAL])

    def test_chdir_adds_and_selects_path(self) -> None:
        self.assertTrue(self.commands.chdir("/x/y"))

        self.assertEqual(self.selected_path(), "/x/y")
        self.assertIsNotNone(self.index.lookup("/x"))


class SearchStateTests(TreeCommandsTestCase):
    def test_printable_key_starts_search(self) -> None:
        self.assertTrue(self.commands.handle_key("d"))

        self.assertTrue(self.cursor.is_searching)
        self.assertEqual(self.cursor.search_buffer, "d")
        self.assertEqual(self.selected_path(), "/d")

    def test_backspace_while_idle_starts_empty_search(self) -> None:
        self.assertTrue(self.commands.handle_key("BACKSPACE"))

        self.assertTrue(self.cursor.is_searching)
        self.assertEqual(self.cursor.search_buffer, "")

    def test_bound_command_ends_search(self) -> None:
        self.commands.handle_key("b")
        self.assertEqual(self.selected_path(), "/a/b")

        self.commands.handle_key("DOWN")

        self.assertFalse(self.cursor.is_searching)
        self.assertEqual(self.selected_path(), "/a/c")

    def test_search_key_while_searching_finds_next_match(self) -> None:
        self.index.add("/a/b2")
        self.commands.handle_key("CTRL_S")
        self.commands.handle_key("b")
        self.assertEqual(self.selected_path(), "/a/b")

        self.commands.handle_key("CTRL_S")

        self.assertTrue(self.cursor.is_searching)
        self.assertEqual(self.selected_path(), "/a/b2")

    def test_modal_abort_is_left_for_the_owner(self) -> None:
        self.commands.handle_key("d")

        self.assertFalse(self.commands.handle_key("ESC"))
        self.assertFalse(self.commands.closed)

    def test_help_closes_on_any_key(self) -> None:
        self.commands.handle_key("F1")
        self.assertTrue(self.commands.help_visible)

        self.assertTrue(self.commands.handle_key("x"))
        self.assertFalse(self.commands.help_visible)
        self.assertFalse(self.cursor.is_searching)


class PanelSearchStateTests(TreeCommandsTestCase):
    is_panel = True

    def test_panel_abort_ends_search_and_is_consumed(self) -> None:
        self.commands.handle_key("d")
        self.commands.help_visible = True

        self.assertTrue(self.commands.handle_key("ESC"))

        self.assertFalse(self.cursor.is_searching)
        self.assertFalse(self.commands.help_visible)
        self.assertFalse(self.commands.closed)

    def test_enter_changes_working_directory(self) -> None:
        self.cursor.select_path("/a")

        self.assertTrue(self.commands.handle_key("ENTER_CR"))

        self.assertEqual(self.file_ops.calls, [("chdir", "/a")])
        self.assertEqual(self.commands.message, "Current directory: /a")
        self.assertFalse(self.commands.closed)


class XtreeModeTests(TreeCommandsTestCase):
    is_panel = True

    def setUp(self) -> None:
        super().setUp()
        self.commands = self.make_commands(xtree_mode=True)

    def test_moves_change_working_directory(self) -> None:
        self.commands.handle_key("DOWN")
        self.commands.handle_key("DOWN")
        self.commands.execute("goto_end")

        self.assertEqual(self.file_ops.calls, [("chdir", "/a"), ("chdir", "/a/b"), ("chdir", "/d")])
        self.assertEqual(self.commands.message, "")

    def test_search_input_changes_working_directory(self) -> None:
        self.commands.handle_key("c")

        self.assertEqual(self.selected_path(), "/a/c")
        self.assertEqual(self.file_ops.calls, [("chdir", "/a/c")])

    def test_unmoved_left_does_not_change_directory(self) -> None:
        self.cursor.traversal_mode = TraversalMode.HIERARCHICAL

        self.assertFalse(self.commands.execute("goto_left"))
        self.assertEqual(self.file_ops.calls, [])

    def test_failed_change_becomes_message(self) -> None:
        self.file_ops.fail = True

        self.assertTrue(self.commands.handle_key("DOWN"))

        self.assertEqual(self.selected_path(), "/a")
        self.assertEqual(self.commands.message, "Cannot chdir /a")

    def test_modal_view_ignores_xtree_mode(self) -> None:
        self.cursor.is_panel = False

        self.commands.handle_key("DOWN")

        self.assertEqual(self.file_ops.calls, [])

    def test_panel_without_xtree_mode_only_moves(self) -> None:
        commands = self.make_commands()

        commands.handle_key("DOWN")

        self.assertEqual(self.selected_path(), "/a")
        self.assertEqual(self.file_ops.calls, [])


class ModalResultTests(TreeCommandsTestCase):
    def test_enter_returns_selection_and_closes(self) -> None:
        self.cursor.select_path("/a/c")

        self.commands.handle_key("ENTER_LF")

        self.assertTrue(self.commands.closed)
        self.assertEqual(self.commands.result_path, "/a/c")
        self.assertEqual(self.file_ops.calls, [])

    def test_quit_closes_without_result(self) -> None:
        self.commands.handle_key("F10")

        self.assertTrue(self.commands.closed)
        self.assertIsNone(self.commands.result_path)


class IndexCommandTests(TreeCommandsTestCase):
    def test_forget_removes_subtree_and_repairs_selection(self) -> None:
        self.cursor.select_path("/a")

        self.commands.handle_key("F3")

        self.assertIsNone(self.index.lookup("/a/b"))
        self.assertEqual(self.selected_path(), "/d")
        self.assertEqual(self.file_ops.calls, [])

    def test_rescan_reports_scan_error(self) -> None:
        def failing(_directory: str, _show_hidden: bool):
            return [], PermissionError(13, "Permission denied")

        self.index._list_children = failing
        self.cursor.select_path("/a")

        self.commands.handle_key("F2")

        self.assertIn("Cannot rescan /a", self.commands.message)
        self.assertIsNotNone(self.index.lookup("/a/b"))

    def test_rescan_drops_vanished_children(self) -> None:
        self.cursor.select_path("/a")

        self.commands.handle_key("F2")

        self.assertIsNone(self.index.lookup("/a/b"))
        self.assertEqual(self.selected_path(), "/a")


class FileCommandTests(TreeCommandsTestCase):
    def test_delete_after_confirmation(self) -> None:
        self.cursor.select_path("/a/b")

        self.commands.handle_key("F8")

        self.assertEqual(self.questions, ["Delete /a/b?"])
        self.assertEqual(self.file_ops.calls, [("delete", "/a/b")])
        self.assertIsNone(self.index.lookup("/a/b"))
        self.assertEqual(self.selected_path(), "/a/c")
        self.assertEqual(self.commands.message, "Deleted /a/b")

    def test_declined_delete_does_nothing(self) -> None:
        self.answer = False
        self.cursor.select_path("/a/b")

        self.commands.handle_key("DELETE")

        self.assertEqual(self.file_ops.calls, [])
        self.assertIsNotNone(self.index.lookup("/a/b"))

    def test_delete_without_confirmation_setting(self) -> None:
        commands = self.make_commands(confirm_delete=False)
        self.cursor.select_path("/d")

        commands.execute("delete")

        self.assertEqual(self.questions, [])
        self.assertEqual(self.file_ops.calls, [("delete", "/d")])

    def test_copy_prompts_and_rescans_indexed_destination(self) -> None:
        found = {"/d": ["/d/b"]}
        self.index._list_children = lambda directory, _hidden: (found.get(directory, []), None)
        self.destination = "/d"
        self.cursor.select_path("/a/b")

        self.commands.handle_key("F5")

        self.assertEqual(self.prompts, ["Copy /a/b to:"])
        self.assertEqual(self.file_ops.calls, [("copy", "/a/b", "/d")])
        self.assertIsNotNone(self.index.lookup("/a/b"))
        self.assertIsNotNone(self.index.lookup("/d/b"))
        self.assertEqual(self.commands.message, "Copy /a/b -> /d/b")

    def test_move_forgets_source(self) -> None:
        self.destination = "/tmp"
        self.cursor.select_path("/a/c")

        self.commands.handle_key("F6")

        self.assertEqual(self.file_ops.calls, [("move", "/a/c", "/tmp")])
        self.assertIsNone(self.index.lookup("/a/c"))
        self.assertIsNone(self.index.lookup("/tmp"))

    def test_cancelled_prompt_does_nothing(self) -> None:
        self.destination = None

        self.commands.execute("copy")

        self.assertEqual(self.file_ops.calls, [])

    def test_failure_becomes_message(self) -> None:
        self.file_ops.fail = True
        self.cursor.select_path("/d")

        self.assertTrue(self.commands.execute("delete"))

        self.assertEqual(self.commands.message, "Cannot delete /d")
        self.assertIsNotNone(self.index.lookup("/d"))


if __name__ == "__main__":
    unittest.main()
