import os
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from config import UserConfig
from core_navigator import FileNavigator


class ScriptedPrompts:
    """Answers prompts from a list and records what was asked."""

    def __init__(self, answers=None, typed=None):
        self.answers = list(answers or [])
        self.typed = list(typed or [])
        self.asked = []
        self.previews = []

    def prompt(self, label, initial="", validate=None):
        self.asked.append((label, initial))
        if validate is not None:
            for text in self.typed:
                self.previews.append((text, validate(text)))
        return self.answers.pop(0)

    def confirm(self, question):
        self.asked.append(question)
        return self.answers.pop(0)

    def confirm_with_details(self, question, title, lines):
        self.asked.append((question, title, lines))
        return self.answers.pop(0)


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "notes.txt").write_text("n")
    for name in ("apple", "avocado", "banana", "cherry"):
        (tmp_path / name).write_text(name)
    return tmp_path


@pytest.fixture(autouse=True)
def no_flash(monkeypatch):
    import curses

    monkeypatch.setattr(curses, "flash", lambda: None)


def make_nav(path: Path, jump_size: int = 10) -> FileNavigator:
    return FileNavigator(str(path), config=UserConfig(jump_size=jump_size))


def press(nav: FileNavigator, keys: str):
    results = [nav.input_handler.handle_key(ord(ch)) for ch in keys]
    return results[-1]


def test_digits_accumulate_into_repeat_count(tree: Path):
    nav = make_nav(tree)

    press(nav, "12")
    assert nav.repeat_count == 12

    press(nav, "j")
    assert nav.repeat_count == 0
    assert nav.cursor == 4


def test_counted_motion(tree: Path):
    nav = make_nav(tree)

    press(nav, "3j")
    assert nav.cursor == 3
    press(nav, "2k")
    assert nav.cursor == 1


def test_jump_uses_configured_size(tree: Path):
    nav = make_nav(tree, jump_size=2)

    press(nav, "}")
    assert nav.cursor == 2
    press(nav, "{")
    assert nav.cursor == 0
    press(nav, "2}")
    assert nav.cursor == 4


def test_top_and_bottom_ignore_count(tree: Path):
    nav = make_nav(tree)

    press(nav, "3G")
    assert nav.cursor == 4
    press(nav, "2g")
    assert nav.cursor == 0
    assert nav.repeat_count == 0


def test_unbound_key_clears_count(tree: Path):
    nav = make_nav(tree)

    press(nav, "5Z")

    assert nav.repeat_count == 0
    assert nav.cursor == 0


def test_quit_key_ends_session(tree: Path):
    nav = make_nav(tree)

    assert press(nav, "q") is True
    assert press(nav, "j") is False


def test_open_directory_and_go_back_to_parent(tree: Path):
    nav = make_nav(tree)

    press(nav, "l")
    assert nav.current_path == str(tree / "docs")

    press(nav, "h")
    assert nav.current_path == str(tree)
    assert nav.selected_item().name == "docs"


def test_previous_and_initial_directory(tree: Path):
    nav = make_nav(tree)

    press(nav, "-")
    assert nav.status_message == "No previous directory"

    press(nav, "l")
    press(nav, "-")
    assert nav.current_path == str(tree)
    press(nav, "-")
    assert nav.current_path == str(tree / "docs")

    press(nav, ".")
    assert nav.current_path == str(tree)


def test_home_key_enters_home(tree: Path, monkeypatch):
    monkeypatch.setenv("HOME", str(tree / "docs"))
    nav = make_nav(tree)

    press(nav, "~")

    assert nav.current_path == str(tree / "docs")


def test_open_file_runs_editor(tree: Path):
    nav = make_nav(tree)
    opened = []
    nav.file_actions = SimpleNamespace(open_in_editor=opened.append)

    press(nav, "jl")

    assert opened == [str(tree / "apple")]


def test_editor_failure_becomes_status_error(tree: Path):
    nav = make_nav(tree)

    def broken_editor(path):
        raise FileNotFoundError("No editor found")

    nav.file_actions = SimpleNamespace(open_in_editor=broken_editor)

    press(nav, "je")

    assert nav.status_is_error
    assert "No editor found" in nav.status_message


def test_open_with_prompts_for_program(tree: Path):
    nav = make_nav(tree)
    nav.prompts = ScriptedPrompts(answers=["less -R"])
    runs = []
    nav.file_actions = SimpleNamespace(run_program=lambda cmd, path: runs.append((cmd, path)))

    press(nav, "jo")

    assert nav.prompts.asked == [("Open with: ", "")]
    assert runs == [(["less", "-R"], str(tree / "apple"))]


def test_search_jumps_to_first_match(tree: Path):
    nav = make_nav(tree)
    nav.prompts = ScriptedPrompts(answers=["an"])

    press(nav, "/")

    assert nav.selected_item().name == "banana"
    assert nav.search_query == "an"


def test_search_preview_and_cancel_restore_cursor(tree: Path):
    nav = make_nav(tree)
    nav.set_cursor(1)
    nav.prompts = ScriptedPrompts(answers=[None], typed=["c", "ch", "chz"])

    press(nav, "/")

    assert nav.prompts.previews == [("c", True), ("ch", True), ("chz", False)]
    assert nav.cursor == 1
    assert nav.search_query == ""


def test_search_next_and_previous_wrap(tree: Path):
    nav = make_nav(tree)
    nav.prompts = ScriptedPrompts(answers=["a"])

    press(nav, "/")
    # docs, apple, avocado, banana, cherry
    assert nav.cursor == 1
    press(nav, "n")
    assert nav.cursor == 2
    press(nav, "n")
    assert nav.cursor == 3
    press(nav, "n")
    assert nav.cursor == 1
    press(nav, "N")
    assert nav.cursor == 3
    press(nav, "2n")
    assert nav.cursor == 2


def test_backward_search_reverses_n(tree: Path):
    nav = make_nav(tree)
    nav.prompts = ScriptedPrompts(answers=["a"])

    press(nav, "?")
    assert nav.cursor == 3
    press(nav, "n")
    assert nav.cursor == 2
    press(nav, "N")
    assert nav.cursor == 3


def test_search_without_match_reports_error(tree: Path):
    nav = make_nav(tree)
    nav.prompts = ScriptedPrompts(answers=["kiwi"])

    press(nav, "/")

    assert nav.cursor == 0
    assert nav.status_is_error
    assert nav.status_message == "Pattern not found: kiwi"


def test_repeat_search_without_query_does_nothing(tree: Path):
    nav = make_nav(tree)

    press(nav, "n")

    assert nav.cursor == 0
    assert nav.status_message == ""


def test_create_directory_selects_it(tree: Path):
    nav = make_nav(tree)
    nav.prompts = ScriptedPrompts(answers=["new/deeper"])

    press(nav, "d")

    assert (tree / "new" / "deeper").is_dir()
    assert nav.selected_item().name == "new"
    assert nav.prompts.asked == [("Create Dir: ", "")]


def test_create_file_keeps_existing_contents(tree: Path):
    nav = make_nav(tree)
    nav.prompts = ScriptedPrompts(answers=["apple", "fresh.txt"])

    press(nav, "f")
    assert (tree / "apple").read_text() == "apple"

    press(nav, "f")
    assert (tree / "fresh.txt").exists()
    assert nav.selected_item().name == "fresh.txt"


def test_create_directory_failure_is_reported(tree: Path):
    nav = make_nav(tree)
    nav.prompts = ScriptedPrompts(answers=["docs"])

    press(nav, "d")

    assert nav.status_is_error


def test_cancelled_create_does_nothing(tree: Path):
    nav = make_nav(tree)
    nav.prompts = ScriptedPrompts(answers=[None])
    before = sorted(os.listdir(tree))

    press(nav, "d")

    assert sorted(os.listdir(tree)) == before


def test_rename_prefills_name_and_follows_item(tree: Path):
    nav = make_nav(tree)
    nav.prompts = ScriptedPrompts(answers=["zucchini"])
    press(nav, "jx")
    press(nav, "k")

    press(nav, "r")

    assert nav.prompts.asked == [("Rename: ", "apple")]
    assert (tree / "zucchini").read_text() == "apple"
    assert not (tree / "apple").exists()
    assert nav.selected_item().name == "zucchini"
    assert nav.marked_items == {str(tree / "zucchini")}
    assert nav.status_message == "Renamed to zucchini"


def test_rename_onto_existing_name_picks_unique_name(tree: Path):
    nav = make_nav(tree)
    nav.prompts = ScriptedPrompts(answers=["banana"])

    press(nav, "jr")

    assert (tree / "banana").read_text() == "banana"
    assert (tree / "banana (1)").read_text() == "apple"
    assert nav.selected_item().name == "banana (1)"


def test_mark_with_count_advances_cursor(tree: Path):
    nav = make_nav(tree)

    press(nav, "j2x")

    assert nav.marked_items == {str(tree / "apple"), str(tree / "avocado")}
    assert nav.cursor == 3


def test_toggle_all(tree: Path):
    nav = make_nav(tree)
    press(nav, "x")

    press(nav, "X")

    assert len(nav.marked_items) == 4
    assert str(tree / "docs") not in nav.marked_items
