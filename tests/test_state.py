"""Tests for the input state machine."""

import pytest
import readchar

from paged_menu.entries import normalize
from paged_menu.layout import compute_layout
from paged_menu.navigation import MenuContext
from paged_menu.state import (
    NO_CHANGE,
    InputStateMachine,
    MenuStatus,
    Mode,
    Redraw,
    SessionState,
    Transition,
)
from paged_menu.themes import Theme

UP = readchar.key.UP
DOWN = readchar.key.DOWN
HOME = readchar.key.HOME
END = readchar.key.END
RIGHT = readchar.key.RIGHT
LEFT = readchar.key.LEFT
PAGE_DOWN = readchar.key.PAGE_DOWN
PAGE_UP = readchar.key.PAGE_UP
ESC = readchar.key.ESC
BACKSPACE = readchar.key.BACKSPACE
ENTER = "\r"
SPACE = " "
INSERT = readchar.key.INSERT
DELETE = "\x1b[3~"

# Terminal height 7 minus 4 chrome lines: three rows per page
HEIGHT = 7
WIDTH = 80


def make_machine(source, multi=False, sort=False, execute=None, invoke=None):
    theme = Theme()
    entries = normalize(source, sort=sort)
    layout = compute_layout(
        entries, terminal_height=HEIGHT, multi_select=multi, terminal_width=WIDTH, theme=theme
    )
    mode = Mode.MULTI_SELECTING if multi else Mode.BROWSING
    state = SessionState(MenuContext("Root", entries), layout, mode)
    return InputStateMachine(
        state,
        execute=execute or (lambda command: None),
        invoke=invoke or (lambda command: []),
        terminal_size=lambda: (WIDTH, HEIGHT),
        sort=sort,
        theme=theme,
    )


def press(machine, *keys):
    return [machine.handle(key) for key in keys]


def labels(n):
    return [f"item{i}" for i in range(n)]


class TestMovement:
    def test_down_visits_every_row_without_wrapping(self):
        machine = make_machine(labels(3))
        rows = [machine.state.row]
        for _ in range(4):
            machine.handle(DOWN)
            rows.append(machine.state.row)
        assert rows == [0, 1, 2, 2, 2]
        assert machine.state.page == 0

    def test_down_moves_one_row_and_repaints_two(self):
        machine = make_machine(labels(3))
        assert machine.handle(DOWN) == Transition(Redraw.ROWS, (0, 1))

    def test_down_at_bottom_of_last_page_is_noop(self):
        machine = make_machine(labels(2))
        machine.handle(DOWN)
        assert machine.handle(DOWN) is NO_CHANGE

    def test_down_crosses_to_next_page_first_row(self):
        machine = make_machine(labels(7))
        press(machine, DOWN, DOWN)
        transition = machine.handle(DOWN)
        assert transition.redraw is Redraw.PAGE
        assert (machine.state.page, machine.state.row) == (1, 0)
        assert machine.state.current_entry.label == "item3"

    def test_up_at_top_row_is_noop_on_first_page(self):
        machine = make_machine(labels(3))
        assert machine.handle(UP) is NO_CHANGE

    def test_up_crosses_to_previous_page_last_row(self):
        machine = make_machine(labels(7))
        machine.handle(RIGHT)
        machine.handle(UP)
        assert (machine.state.page, machine.state.row) == (0, 2)
        assert machine.state.current_entry.label == "item2"

    def test_down_then_up_walks_all_entries(self):
        machine = make_machine(labels(7))
        seen = [machine.state.current_entry.label]
        for _ in range(6):
            machine.handle(DOWN)
            seen.append(machine.state.current_entry.label)
        assert seen == labels(7)
        for _ in range(6):
            machine.handle(UP)
        assert machine.state.index == 0

    def test_home_jumps_to_first_row(self):
        machine = make_machine(labels(3))
        press(machine, DOWN, DOWN)
        assert machine.handle(HOME) == Transition(Redraw.ROWS, (2, 0))

    def test_home_on_first_row_goes_to_previous_page_last_row(self):
        machine = make_machine(labels(7))
        machine.handle(RIGHT)
        machine.handle(HOME)
        assert (machine.state.page, machine.state.row) == (0, 2)

    def test_home_on_first_row_of_first_page_is_noop(self):
        machine = make_machine(labels(7))
        assert machine.handle(HOME) is NO_CHANGE

    def test_end_jumps_to_last_row(self):
        machine = make_machine(labels(3))
        assert machine.handle(END) == Transition(Redraw.ROWS, (0, 2))

    def test_end_on_last_row_goes_to_next_page(self):
        machine = make_machine(labels(7))
        press(machine, END, END)
        assert (machine.state.page, machine.state.row) == (1, 0)

    def test_end_on_short_last_page(self):
        machine = make_machine(labels(7))
        press(machine, RIGHT, RIGHT)
        assert machine.state.layout.page_length(2) == 1
        assert machine.handle(END) is NO_CHANGE
        assert machine.state.current_entry.label == "item6"


class TestPaging:
    @pytest.mark.parametrize("key", [RIGHT, PAGE_DOWN])
    def test_next_page_resets_to_first_row(self, key):
        machine = make_machine(labels(7))
        press(machine, DOWN, DOWN)
        assert machine.handle(key).redraw is Redraw.PAGE
        assert (machine.state.page, machine.state.row) == (1, 0)

    @pytest.mark.parametrize("key", [LEFT, PAGE_UP])
    def test_prev_page(self, key):
        machine = make_machine(labels(7))
        press(machine, RIGHT, RIGHT)
        machine.handle(key)
        assert (machine.state.page, machine.state.row) == (1, 0)

    def test_next_page_on_last_page_is_noop(self):
        machine = make_machine(labels(7))
        press(machine, RIGHT, RIGHT)
        assert machine.handle(RIGHT) is NO_CHANGE
        assert machine.state.page == 2

    def test_prev_page_on_first_page_is_noop(self):
        machine = make_machine(labels(7))
        assert machine.handle(LEFT) is NO_CHANGE

    def test_single_page_menu_ignores_paging(self):
        machine = make_machine(labels(2))
        assert machine.handle(PAGE_DOWN) is NO_CHANGE


class TestBack:
    @pytest.mark.parametrize("key", [ESC, BACKSPACE])
    def test_back_at_root_cancels(self, key):
        machine = make_machine(labels(3))
        machine.handle(key)
        assert machine.state.status is MenuStatus.CANCELLED
        assert machine.state.result is None

    @pytest.mark.parametrize("key", ["\x1bq", "\x1b\r"])
    def test_escape_with_trailing_key_at_root_cancels(self, key):
        machine = make_machine(labels(3))
        machine.handle(key)
        assert machine.state.status is MenuStatus.CANCELLED

    @pytest.mark.parametrize("key", ["\x1bq", "\x1b\r"])
    def test_escape_with_trailing_key_leaves_nested_menu(self, key):
        machine = make_machine({"Tools": {"Shell": "bash"}, "Quit": None})
        machine.handle(ENTER)
        assert machine.handle(key).redraw is Redraw.CONTEXT
        assert machine.state.context.title == "Root"
        assert machine.state.status is MenuStatus.RUNNING

    def test_back_returns_to_parent_context(self):
        machine = make_machine({"Tools": {"Shell": "bash", "Editor": "vi"}, "Quit": None})
        root_entries = machine.state.context.entries

        assert machine.handle(ENTER).redraw is Redraw.CONTEXT
        assert machine.state.context.title == "Tools"
        assert [e.label for e in machine.state.context.entries] == ["Shell", "Editor"]

        assert machine.handle(ESC).redraw is Redraw.CONTEXT
        assert machine.state.context.title == "Root"
        assert machine.state.context.entries is root_entries
        assert machine.state.status is MenuStatus.RUNNING

    def test_back_resets_parent_to_first_page(self):
        source = {label: None for label in labels(6)}
        source["Nested"] = {"x": None}
        machine = make_machine(source)
        press(machine, RIGHT, RIGHT)
        assert machine.state.current_entry.label == "Nested"

        machine.handle(ENTER)
        machine.handle(ESC)
        assert (machine.state.page, machine.state.row) == (0, 0)

    def test_back_twice_from_nested_cancels(self):
        machine = make_machine({"Tools": {"Shell": None}})
        press(machine, ENTER, ESC, ESC)
        assert machine.state.status is MenuStatus.CANCELLED

    def test_deep_nesting_unwinds_in_order(self):
        machine = make_machine({"A": {"B": {"C": {"leaf": None}}}})
        press(machine, ENTER, ENTER, ENTER)
        assert machine.state.context.title == "C"
        assert len(machine.state.stack) == 3
        titles = []
        for _ in range(3):
            machine.handle(BACKSPACE)
            titles.append(machine.state.context.title)
        assert titles == ["B", "A", "Root"]


class TestConfirmBrowsing:
    def test_plain_entry_returns_label(self):
        machine = make_machine(["Alpha", "Bravo"])
        press(machine, DOWN, ENTER)
        assert machine.state.status is MenuStatus.CONFIRMED
        assert machine.state.result == "Bravo"

    def test_command_entry_runs_and_returns_nothing(self):
        ran = []
        machine = make_machine({"Reboot": "shutdown -r now"}, execute=ran.append)
        machine.handle(ENTER)
        assert ran == ["shutdown -r now"]
        assert machine.state.status is MenuStatus.CONFIRMED
        assert machine.state.result is None

    def test_command_failure_propagates(self):
        def fail(command):
            raise RuntimeError(f"{command} failed")

        machine = make_machine({"Break": "false"}, execute=fail)
        with pytest.raises(RuntimeError, match="false failed"):
            machine.handle(ENTER)

    def test_nested_entry_stays_browsing(self):
        machine = make_machine({"Tools": ["Shell", "Editor"]})
        machine.handle(ENTER)
        assert machine.state.status is MenuStatus.RUNNING
        assert machine.state.mode is Mode.BROWSING
        press(machine, DOWN, ENTER)
        assert machine.state.result == "Editor"

    def test_invoke_pushes_parent_before_calling(self):
        depth_at_call = []

        def invoke(command):
            depth_at_call.append((command, len(machine.state.stack)))
            return ["Home", "Pro"]

        machine = make_machine({"Editions": "@list-editions"}, invoke=invoke)
        machine.handle(ENTER)

        assert depth_at_call == [("list-editions", 1)]
        assert machine.state.context.title == "Editions"
        assert [e.label for e in machine.state.context.entries] == ["Home", "Pro"]

        machine.handle(ESC)
        assert machine.state.context.title == "Root"
        assert machine.state.status is MenuStatus.RUNNING

    def test_invoke_result_is_sorted_when_sorting(self):
        machine = make_machine({"E": "@x"}, sort=True, invoke=lambda command: ["b", "a"])
        machine.handle(ENTER)
        assert [e.label for e in machine.state.context.entries] == ["a", "b"]

    def test_nested_mapping_is_sorted_when_sorting(self):
        machine = make_machine({"Tools": {"zsh": None, "bash": None}}, sort=True)
        machine.handle(ENTER)
        assert [e.label for e in machine.state.context.entries] == ["bash", "zsh"]

    def test_enter_on_empty_menu_is_noop(self):
        machine = make_machine([])
        assert machine.handle(ENTER) is NO_CHANGE
        assert machine.handle(DOWN) is NO_CHANGE
        assert machine.state.status is MenuStatus.RUNNING

    def test_space_does_nothing_while_browsing(self):
        machine = make_machine(["a"])
        assert machine.handle(SPACE) is NO_CHANGE
        assert machine.state.current_entry.selected is False

    def test_unknown_key_is_noop(self):
        machine = make_machine(["a", "b"])
        assert machine.handle("x") is NO_CHANGE
        assert machine.state.row == 0

    def test_keys_after_finish_are_ignored(self):
        machine = make_machine(["a", "b"])
        machine.handle(ENTER)
        assert machine.handle(DOWN) is NO_CHANGE
        assert machine.state.result == "a"


class TestMultiSelect:
    def test_space_toggles_highlighted_row(self):
        machine = make_machine(labels(3), multi=True)
        assert machine.handle(SPACE) == Transition(Redraw.ROWS, (0,))
        assert machine.state.current_entry.selected is True

    def test_space_twice_restores_state(self):
        machine = make_machine(labels(3), multi=True)
        press(machine, SPACE, SPACE)
        assert machine.state.current_entry.selected is False

    def test_insert_selects_all_pages(self):
        machine = make_machine(labels(7), multi=True)
        assert machine.handle(INSERT).redraw is Redraw.PAGE
        assert all(e.selected for e in machine.state.context.entries)

    def test_insert_then_delete_clears_all(self):
        machine = make_machine(labels(7), multi=True)
        press(machine, INSERT, DELETE)
        assert not any(e.selected for e in machine.state.context.entries)

    def test_confirm_runs_selected_commands_and_returns_other_labels(self):
        ran, invoked = [], []
        machine = make_machine(
            {"A": "", "B": "@f", "C": "cmd1"},
            multi=True,
            execute=ran.append,
            invoke=invoked.append,
        )
        press(machine, SPACE, DOWN, DOWN, SPACE, ENTER)

        assert machine.state.status is MenuStatus.CONFIRMED
        assert machine.state.result == ["A"]
        assert ran == ["cmd1"]
        assert invoked == []

    def test_confirm_with_nothing_selected_returns_empty_list(self):
        machine = make_machine(labels(3), multi=True)
        machine.handle(ENTER)
        assert machine.state.status is MenuStatus.CONFIRMED
        assert machine.state.result == []

    def test_confirm_keeps_display_order(self):
        machine = make_machine(["c", "a", "b"], multi=True, sort=True)
        press(machine, END, SPACE, HOME, SPACE, ENTER)
        assert machine.state.result == ["a", "c"]

    def test_nested_entries_are_returned_not_opened(self):
        machine = make_machine({"Tools": {"Shell": None}}, multi=True)
        press(machine, SPACE, ENTER)
        assert machine.state.result == ["Tools"]
        assert machine.state.stack.is_empty()
