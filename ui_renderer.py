# ~/Apps/vfm/ui_renderer.py
import curses
from typing import Any, Dict, Optional, Tuple, cast

from directory_manager import pretty_path
from viewport import scroll_to_cursor

# Pair numbers for init_pair; 0 is the terminal default
_PAIRS = {
    "header": (1, curses.COLOR_CYAN),
    "directory": (2, curses.COLOR_BLUE),
    "mark": (3, curses.COLOR_MAGENTA),
    "error": (4, curses.COLOR_RED),
    "prompt": (5, curses.COLOR_BLUE),
}

_STYLES: Dict[str, int] = {}


def _fallback_attr(name: str) -> int:
    if name == "normal":
        return curses.A_NORMAL
    if name == "cursor":
        return curses.A_REVERSE
    if name == "popup_title":
        return curses.A_BOLD | curses.A_REVERSE
    return curses.A_BOLD


def init_styles() -> None:
    """Build colour attributes once curses has started."""
    try:
        curses.start_color()
        curses.use_default_colors()
        for name, (pair, color) in _PAIRS.items():
            curses.init_pair(pair, color, -1)
            _STYLES[name] = curses.color_pair(pair) | curses.A_BOLD
    except curses.error:
        _STYLES.clear()


def style_attr(name: str) -> int:
    return _STYLES.get(name, _fallback_attr(name))


class UIRenderer:
    def __init__(self, navigator):
        self.nav = navigator
        self.stdscr: Optional[Any] = None

    def visible_rows(self) -> int:
        if self.stdscr is None:
            return 0
        max_y = self.stdscr.getmaxyx()[0]
        # Header row on top, message/status row at the bottom
        return max(0, max_y - 2)

    def render(self):
        stdscr = self.stdscr
        if stdscr is None:
            return

        max_y, max_x = cast(Tuple[int, int], stdscr.getmaxyx())
        try:
            stdscr.erase()
        except curses.error:
            pass

        self._render_header(stdscr, max_x)
        self._render_list(stdscr, max_y, max_x)
        self._render_status(stdscr, max_y, max_x)

        stdscr.refresh()

    def _render_header(self, stdscr: Any, max_x: int) -> None:
        try:
            stdscr.addstr(0, 0, pretty_path(self.nav.current_path)[: max_x - 1], style_attr("header"))
        except curses.error:
            pass

    def _render_list(self, stdscr: Any, max_y: int, max_x: int) -> None:
        items = self.nav.items
        total = len(items)
        rows = max(0, max_y - 2)

        self.nav.list_offset = scroll_to_cursor(self.nav.cursor, self.nav.list_offset, rows, total)

        if total == 0:
            try:
                stdscr.addstr(1, 0, "(empty directory)"[: max_x - 1], curses.A_DIM)
            except curses.error:
                pass
            return

        visible = items[self.nav.list_offset : self.nav.list_offset + rows]
        for i, item in enumerate(visible):
            index = self.nav.list_offset + i
            y = 1 + i

            attr = style_attr("directory") if item.is_dir else style_attr("normal")
            if index == self.nav.cursor:
                attr |= style_attr("cursor")

            try:
                stdscr.addstr(y, 0, item.name[: max_x - 2], attr)
                if item.path in self.nav.marked_items:
                    x = min(len(item.name), max_x - 2)
                    stdscr.addstr(y, x, "*", style_attr("mark"))
            except curses.error:
                pass

    def _render_status(self, stdscr: Any, max_y: int, max_x: int) -> None:
        if max_y < 2:
            return
        y = max_y - 1
        message, is_error = self.nav.consume_status()

        if message:
            text = message
            attr = style_attr("error") if is_error else style_attr("normal")
        else:
            parts = []
            total = len(self.nav.items)
            if total:
                parts.append(f"[{self.nav.cursor + 1}/{total}]")
            if self.nav.marked_items:
                parts.append(f"MARKED: {len(self.nav.marked_items)}")
            if self.nav.repeat_count:
                parts.append(str(self.nav.repeat_count))
            text = "  ".join(parts)
            attr = curses.A_DIM

        try:
            stdscr.move(y, 0)
            stdscr.clrtoeol()
            stdscr.addstr(y, 0, text[: max_x - 1], attr)
        except curses.error:
            pass
