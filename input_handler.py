# ~/Apps/vfm/input_handler.py
import curses
import logging
import os
import shlex
from typing import Callable, Dict, List

from key_bindings import Action, digit_value, resolve
from search import find_next, find_previous, repeat_search

logger = logging.getLogger(__name__)


class InputHandler:
    """Turns key codes into actions against the navigator."""

    def __init__(self, navigator):
        self.nav = navigator
        self._handlers: Dict[Action, Callable[[int], None]] = {
            Action.MOVE_DOWN: lambda count: self._move(max(1, count)),
            Action.MOVE_UP: lambda count: self._move(-max(1, count)),
            Action.JUMP_DOWN: lambda count: self._move(max(1, count) * self._jump_size()),
            Action.JUMP_UP: lambda count: self._move(-max(1, count) * self._jump_size()),
            Action.TOP: lambda _count: self._jump_to_edge(top=True),
            Action.BOTTOM: lambda _count: self._jump_to_edge(top=False),
            Action.PARENT: self._go_parent,
            Action.OPEN: self._open_selected,
            Action.OPEN_EDITOR: self._open_in_editor,
            Action.OPEN_WITH: self._open_with,
            Action.HOME: lambda _count: self._enter(os.path.expanduser("~")),
            Action.INITIAL_DIR: lambda _count: self._enter(self.nav.initial_path),
            Action.PREVIOUS_DIR: self._go_previous,
            Action.SEARCH_FORWARD: lambda count: self._start_search(count, reverse=False),
            Action.SEARCH_BACKWARD: lambda count: self._start_search(count, reverse=True),
            Action.SEARCH_NEXT: lambda count: self._repeat_search(count, flip=False),
            Action.SEARCH_PREVIOUS: lambda count: self._repeat_search(count, flip=True),
            Action.CREATE_DIR: lambda _count: self._create("Create Dir: ", directory=True),
            Action.CREATE_FILE: lambda _count: self._create("Create File: ", directory=False),
            Action.TOGGLE_MARK: self._toggle_mark,
            Action.TOGGLE_ALL: self._toggle_all,
            Action.DELETE: self._delete,
            Action.MOVE_MARKED: self._move_marked,
            Action.COPY_MARKED: self._copy_marked,
            Action.RENAME: self._rename,
        }

    def _flash(self):
        try:
            curses.flash()
        except curses.error:
            pass

    def _jump_size(self) -> int:
        return getattr(self.nav.config, "jump_size", 10)

    def handle_key(self, key: int) -> bool:
        """Process one key; return True when the session should end."""
        digit = digit_value(key)
        if digit is not None:
            self.nav.repeat_count = self.nav.repeat_count * 10 + digit
            return False

        count = self.nav.repeat_count
        self.nav.repeat_count = 0

        action = resolve(key)
        if action is None:
            return False
        if action is Action.QUIT:
            return True

        logger.debug("%s (count=%d)", action.name, count)
        self._handlers[action](count)
        return False

    # === Motions ===
    def _move(self, delta: int) -> None:
        if not self.nav.items:
            self._flash()
            return
        self.nav.move_cursor(delta)

    def _jump_to_edge(self, top: bool) -> None:
        if not self.nav.items:
            self._flash()
            return
        self.nav.set_cursor(0 if top else len(self.nav.items) - 1)

    # === Directories ===
    def _enter(self, path: str) -> None:
        self.nav.enter(path)

    def _go_parent(self, _count: int) -> None:
        if not self.nav.leave_to_parent() and not self.nav.status_is_error:
            self._flash()

    def _go_previous(self, _count: int) -> None:
        if not self.nav.previous_path:
            self.nav.set_info("No previous directory")
            return
        self.nav.enter(self.nav.previous_path)

    # === Opening ===
    def _open_selected(self, count: int) -> None:
        item = self.nav.selected_item()
        if item is None:
            self._flash()
            return
        if item.is_dir:
            self.nav.enter(item.path)
        else:
            self._open_in_editor(count)

    def _open_in_editor(self, _count: int) -> None:
        item = self.nav.selected_item()
        if item is None:
            self._flash()
            return
        try:
            self.nav.file_actions.open_in_editor(item.path)
        except OSError as exc:
            logger.warning("editor failed on %s: %s", item.path, exc)
            self.nav.set_error(str(exc))

    def _open_with(self, _count: int) -> None:
        item = self.nav.selected_item()
        if item is None:
            self._flash()
            return

        program = self.nav.prompts.prompt("Open with: ")
        if not program or not program.strip():
            return
        try:
            command = shlex.split(program)
        except ValueError as exc:
            self.nav.set_error(f"Bad command: {exc}")
            return

        try:
            self.nav.file_actions.run_program(command, item.path)
        except OSError as exc:
            logger.warning("%s failed on %s: %s", command[0], item.path, exc)
            self.nav.set_error(str(exc))

    # === Search ===
    def _start_search(self, count: int, reverse: bool) -> None:
        names = self.nav.item_names()
        origin = self.nav.cursor
        step = find_previous if reverse else find_next

        def preview(text: str) -> bool:
            if not text:
                self.nav.cursor = origin
                return True
            found = step(names, text, origin)
            self.nav.cursor = origin if found is None else found
            return found is not None

        query = self.nav.prompts.prompt("?" if reverse else "/", validate=preview)
        self.nav.cursor = origin
        if query is None:
            return

        self.nav.search_query = query
        self.nav.search_reverse = reverse
        if query:
            self._jump_to_match(query, count, reverse)

    def _repeat_search(self, count: int, flip: bool) -> None:
        if not self.nav.search_query:
            self._flash()
            return
        reverse = self.nav.search_reverse != flip
        self._jump_to_match(self.nav.search_query, count, reverse)

    def _jump_to_match(self, query: str, count: int, reverse: bool) -> None:
        index = repeat_search(self.nav.item_names(), query, self.nav.cursor, count, reverse)
        if index is None:
            self.nav.set_error(f"Pattern not found: {query}")
            return
        self.nav.set_cursor(index)

    # === Creation and renaming ===
    def _create(self, label: str, directory: bool) -> None:
        name = self.nav.prompts.prompt(label)
        if name is None or not name.strip():
            return
        name = name.strip()

        path = os.path.join(self.nav.current_path, name)
        try:
            if directory:
                self.nav.file_actions.create_directory(path)
            else:
                self.nav.file_actions.create_file(path)
        except OSError as exc:
            logger.warning("cannot create %s: %s", path, exc)
            self.nav.set_error(str(exc))
            return

        self.nav.refresh()
        self.nav.find_exact(name.split(os.sep)[0])

    def _rename(self, _count: int) -> None:
        item = self.nav.selected_item()
        if item is None:
            self._flash()
            return

        new_name = self.nav.prompts.prompt("Rename: ", item.name)
        if new_name is None:
            return
        new_name = new_name.strip()
        if not new_name or new_name == item.name:
            return

        unique_name = self._get_unique_name(self.nav.current_path, new_name)
        new_path = os.path.join(self.nav.current_path, unique_name)
        try:
            self.nav.file_actions.rename(item.path, new_path)
        except OSError as exc:
            logger.warning("cannot rename %s: %s", item.path, exc)
            self.nav.set_error(str(exc))
            return

        if item.path in self.nav.marked_items:
            self.nav.marked_items.discard(item.path)
            self.nav.marked_items.add(new_path)

        self.nav.refresh()
        self.nav.find_exact(unique_name)
        self.nav.set_info(f"Renamed to {unique_name}")

    def _get_unique_name(self, dest_dir: str, base_name: str) -> str:
        dest_path = os.path.join(dest_dir, base_name)
        if not os.path.lexists(dest_path):
            return base_name
        name, ext = os.path.splitext(base_name)
        counter = 1
        while True:
            new_name = f"{name} ({counter}){ext}"
            if not os.path.lexists(os.path.join(dest_dir, new_name)):
                return new_name
            counter += 1

    # === Marks ===
    def _toggle_mark(self, count: int) -> None:
        if not self.nav.items:
            self._flash()
            return
        self.nav.toggle_mark_and_advance(count)

    def _toggle_all(self, _count: int) -> None:
        self.nav.toggle_all_marks()

    # === Batch operations on marks ===
    def _batch_targets(self) -> List[str]:
        if self.nav.marked_items:
            return self.nav.sorted_marks()
        item = self.nav.selected_item()
        return [item.path] if item else []

    def _confirm_batch(self, verb: str, targets: List[str]) -> bool:
        if len(targets) == 1:
            return self.nav.prompts.confirm(f"{verb} '{self.nav.relative_path(targets[0])}'?")

        lines = sorted(self.nav.relative_path(path) for path in targets)
        title = f"{verb} {len(targets)} items"
        return self.nav.prompts.confirm_with_details(f"{title}?", title, lines)

    def _run_batch(self, verb: str, targets: List[str], operation: Callable[[str], None]) -> int:
        done = 0
        for path in targets:
            try:
                operation(path)
            except OSError as exc:
                logger.warning("%s failed on %s: %s", verb.lower(), path, exc)
                self.nav.set_error(f"{verb} failed: {exc}")
                break
            done += 1
        return done

    def _report_batch(self, past_tense: str, done: int, total: int) -> None:
        if done < total:
            return
        noun = "item" if done == 1 else "items"
        self.nav.set_info(f"{past_tense} {done} {noun}")

    def _delete(self, count: int) -> None:
        nav = self.nav
        if not nav.items and not nav.marked_items:
            self._flash()
            return

        saved_cursor = nav.cursor
        transient: List[str] = []
        if not nav.marked_items and count > 0:
            transient = nav.toggle_mark_and_advance(count)

        targets = self._batch_targets()
        if not self._confirm_batch("Delete", targets):
            for path in transient:
                nav.marked_items.discard(path)
            nav.cursor = saved_cursor
            nav.set_info("Deletion cancelled")
            return

        done = self._run_batch("Delete", targets, nav.file_actions.delete)
        nav.marked_items.clear()
        if transient:
            nav.cursor = saved_cursor
        nav.refresh()
        self._report_batch("Deleted", done, len(targets))

    def _move_marked(self, _count: int) -> None:
        self._transfer_marked("Move", "Moved", self._move_here)

    def _copy_marked(self, _count: int) -> None:
        self._transfer_marked("Copy", "Copied", self._copy_here)

    def _transfer_marked(self, verb: str, past_tense: str, operation: Callable[[str], None]) -> None:
        targets = self._batch_targets()
        if not targets:
            self._flash()
            return
        if not self._confirm_batch(verb, targets):
            self.nav.set_info(f"{verb} cancelled")
            return

        done = self._run_batch(verb, targets, operation)
        self.nav.marked_items.clear()
        self.nav.refresh()
        self._report_batch(past_tense, done, len(targets))

    def _move_here(self, src: str) -> None:
        dest_dir = self.nav.current_path
        if os.path.dirname(src) == dest_dir:
            return
        name = self._get_unique_name(dest_dir, os.path.basename(src))
        self.nav.file_actions.move(src, os.path.join(dest_dir, name))

    def _copy_here(self, src: str) -> None:
        dest_dir = self.nav.current_path
        name = self._get_unique_name(dest_dir, os.path.basename(src))
        self.nav.file_actions.copy(src, os.path.join(dest_dir, name))
