# ~/Apps/vfm/core_navigator.py
import logging
import os
from typing import Callable, Dict, List, Optional, Set

from config import USER_CONFIG
from directory_manager import Item, is_root, list_directory, parent_path
from errors import SessionError
from file_actions import FileActionService
from input_handler import InputHandler
from prompts import PromptService
from ui_renderer import UIRenderer

logger = logging.getLogger(__name__)


class FileNavigator:
    """Navigation state plus the directory transitions that mutate it."""

    def __init__(
        self,
        start_path: str,
        config=None,
        lister: Callable[[str], List[Item]] = list_directory,
    ):
        self.config = config or USER_CONFIG
        self.lister = lister

        start_real = os.path.abspath(start_path)
        try:
            self.items: List[Item] = self.lister(start_real)
        except OSError as exc:
            raise SessionError(f"cannot list {exc.strerror or exc}", start_real) from exc

        self.initial_path = start_real
        self.current_path = start_real
        self.previous_path: Optional[str] = None
        self.cursor = 0
        self.list_offset = 0
        self.repeat_count = 0

        # Absolute paths; marks outlive directory changes until cleared
        self.marked_items: Set[str] = set()
        # directory -> name under the cursor when we left it
        self.visit_history: Dict[str, str] = {}

        self.search_query = ""
        self.search_reverse = False

        self.status_message = "; ".join(self.config.warnings)
        self.status_is_error = bool(self.config.warnings)

        self.renderer = UIRenderer(self)
        self.prompts = PromptService(self)
        self.file_actions = FileActionService(self)
        self.input_handler = InputHandler(self)

    # === Status ===
    def set_error(self, message: str) -> None:
        self.status_message = message
        self.status_is_error = True

    def set_info(self, message: str) -> None:
        self.status_message = message
        self.status_is_error = False

    def consume_status(self):
        message, is_error = self.status_message, self.status_is_error
        self.status_message = ""
        self.status_is_error = False
        return message, is_error

    # === Cursor ===
    def selected_item(self) -> Optional[Item]:
        if not self.items:
            return None
        return self.items[self.cursor]

    def set_cursor(self, index: int) -> None:
        if not self.items:
            self.cursor = 0
            return
        self.cursor = max(0, min(index, len(self.items) - 1))

    def move_cursor(self, delta: int) -> None:
        self.set_cursor(self.cursor + delta)

    def find_exact(self, name: str) -> bool:
        for index, item in enumerate(self.items):
            if item.name == name:
                self.cursor = index
                return True
        return False

    def item_names(self) -> List[str]:
        return [item.name for item in self.items]

    def relative_path(self, path: str) -> str:
        return os.path.relpath(path, self.current_path)

    # === Directory transitions ===
    def _transition(self, target: str, restore_name: Optional[str]) -> bool:
        try:
            items = self.lister(target)
        except OSError as exc:
            logger.warning("cannot enter %s: %s", target, exc)
            self.set_error(str(exc))
            return False

        selected = self.selected_item()
        if selected is not None:
            self.visit_history[self.current_path] = selected.name

        self.previous_path = self.current_path
        self.current_path = target
        self.items = items
        self.cursor = 0
        self.list_offset = 0

        if restore_name is not None:
            self.find_exact(restore_name)
        logger.debug("entered %s", target)
        return True

    def enter(self, target: str) -> bool:
        target = os.path.abspath(target)
        return self._transition(target, self.visit_history.get(target))

    def leave_to_parent(self) -> bool:
        if is_root(self.current_path):
            return False
        left_name = os.path.basename(self.current_path.rstrip(os.sep))
        return self._transition(parent_path(self.current_path), left_name)

    def refresh(self) -> None:
        """Re-list the current directory after a mutation.

        The directory was just listed successfully, so a failure here means
        the model can no longer be trusted and the session ends.
        """
        try:
            self.items = self.lister(self.current_path)
        except OSError as exc:
            logger.error("refresh of %s failed: %s", self.current_path, exc)
            raise SessionError(f"cannot refresh {exc.strerror or exc}", self.current_path) from exc
        self.set_cursor(self.cursor)

    # === Marks ===
    def toggle_mark(self, index: int) -> str:
        path = self.items[index].path
        if path in self.marked_items:
            self.marked_items.remove(path)
        else:
            self.marked_items.add(path)
        return path

    def toggle_mark_and_advance(self, count: int) -> List[str]:
        toggled: List[str] = []
        if not self.items:
            return toggled
        for _ in range(max(1, count)):
            toggled.append(self.toggle_mark(self.cursor))
            if self.cursor + 1 >= len(self.items):
                break
            self.cursor += 1
        return toggled

    def toggle_all_marks(self) -> None:
        for index in range(len(self.items)):
            self.toggle_mark(index)

    def sorted_marks(self) -> List[str]:
        return sorted(self.marked_items)
