import curses
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from constants import Constants
from line_editor import LineBuffer
from ui_renderer import style_attr


def _delete_char_left(buf: LineBuffer) -> None:
    buf.delete_by_motion(LineBuffer.move_char_left)


def _delete_char_right(buf: LineBuffer) -> None:
    buf.delete_by_motion(LineBuffer.move_char_right)


def _delete_word_left(buf: LineBuffer) -> None:
    buf.delete_by_motion(LineBuffer.move_word_left)


def _delete_word_right(buf: LineBuffer) -> None:
    buf.delete_by_motion(LineBuffer.move_word_right)


def _delete_to_start(buf: LineBuffer) -> None:
    buf.delete_by_motion(LineBuffer.move_start)


def _delete_to_end(buf: LineBuffer) -> None:
    buf.delete_by_motion(LineBuffer.move_end)


PROMPT_EDITS: Dict[int, Callable[[LineBuffer], None]] = {
    Constants.CTRL_A: LineBuffer.move_start,
    curses.KEY_HOME: LineBuffer.move_start,
    Constants.CTRL_E: LineBuffer.move_end,
    curses.KEY_END: LineBuffer.move_end,
    Constants.CTRL_B: LineBuffer.move_char_left,
    curses.KEY_LEFT: LineBuffer.move_char_left,
    Constants.CTRL_F: LineBuffer.move_char_right,
    curses.KEY_RIGHT: LineBuffer.move_char_right,
    Constants.CTRL_D: _delete_char_right,
    curses.KEY_DC: _delete_char_right,
    Constants.CTRL_W: _delete_word_left,
    Constants.CTRL_U: _delete_to_start,
    Constants.CTRL_K: _delete_to_end,
}
for _key in Constants.BACKSPACE_KEYS:
    PROMPT_EDITS[_key] = _delete_char_left

# Alt-<key>, delivered by the terminal as ESC followed by the key
META_EDITS: Dict[int, Callable[[LineBuffer], None]] = {
    ord("b"): LineBuffer.move_word_left,
    ord("f"): LineBuffer.move_word_right,
    ord("d"): _delete_word_right,
    127: _delete_word_left,
    curses.KEY_BACKSPACE: _delete_word_left,
}

YES_KEYS = (ord("y"), ord("Y"))
NO_KEYS = (ord("n"), ord("N"), Constants.ESC, Constants.CTRL_C)

POPUP_DOWN = (ord("j"), curses.KEY_DOWN)
POPUP_UP = (ord("k"), curses.KEY_UP)
POPUP_PAGE_DOWN = (Constants.CTRL_D, curses.KEY_NPAGE)
POPUP_PAGE_UP = (Constants.CTRL_U, curses.KEY_PPAGE)


@dataclass
class Popup:
    title: str
    lines: List[str] = field(default_factory=list)
    footer: str = ""
    scroll: int = 0


class PromptService:
    """Blocking sub-loops that take over the keyboard: prompt, confirm, popup."""

    def __init__(self, navigator):
        self.nav = navigator

    @property
    def stdscr(self) -> Optional[Any]:
        return getattr(self.nav.renderer, "stdscr", None)

    def _set_cursor_visible(self, visible: bool) -> None:
        try:
            curses.curs_set(1 if visible else 0)
        except curses.error:
            pass

    def _read_meta(self, stdscr) -> int:
        stdscr.timeout(Constants.META_TIMEOUT_MS)
        try:
            return stdscr.getch()
        finally:
            stdscr.timeout(-1)

    def _draw_bottom(self, stdscr, segments) -> int:
        max_y, max_x = stdscr.getmaxyx()
        y = max_y - 1
        x = 0
        try:
            stdscr.move(y, 0)
            stdscr.clrtoeol()
            for text, attr in segments:
                room = max_x - 1 - x
                if room <= 0:
                    break
                stdscr.addstr(y, x, text[:room], attr)
                x += min(len(text), room)
        except curses.error:
            pass
        return y

    # === Prompt ===
    def prompt(
        self,
        label: str,
        initial: str = "",
        validate: Optional[Callable[[str], bool]] = None,
    ) -> Optional[str]:
        """Edit a line of text at the bottom of the screen.

        Returns the text on Enter and ``None`` on Esc. ``validate`` is called
        after every edit; a ``False`` result only switches the text to the
        error style.
        """
        stdscr = self.stdscr
        if stdscr is None:
            return None

        buf = LineBuffer(initial)
        valid = validate(buf.text) if validate else True
        self._set_cursor_visible(True)
        try:
            while True:
                self.nav.renderer.render()
                self._draw_prompt(stdscr, label, buf, valid)

                key = stdscr.getch()
                if key == -1:
                    continue
                if key in Constants.ENTER_KEYS:
                    return buf.text
                if key == Constants.CTRL_C:
                    return None
                if key == Constants.ESC:
                    meta = self._read_meta(stdscr)
                    if meta == -1:
                        return None
                    edit = META_EDITS.get(meta)
                    if edit is None:
                        continue
                    edit(buf)
                elif key in PROMPT_EDITS:
                    PROMPT_EDITS[key](buf)
                elif 32 <= key <= 126:
                    buf.insert(chr(key))
                else:
                    continue

                if validate:
                    valid = validate(buf.text)
        finally:
            self._set_cursor_visible(False)

    def _draw_prompt(self, stdscr, label: str, buf: LineBuffer, valid: bool) -> None:
        max_x = stdscr.getmaxyx()[1]
        width = max(1, max_x - 1 - len(label))
        start = max(0, buf.cursor - width + 1)
        visible = buf.text[start : start + width]
        text_attr = style_attr("normal") if valid else style_attr("error")

        y = self._draw_bottom(
            stdscr, [(label, style_attr("prompt")), (visible, text_attr)]
        )
        try:
            stdscr.move(y, min(max_x - 1, len(label) + buf.cursor - start))
            stdscr.refresh()
        except curses.error:
            pass

    # === Confirm ===
    def confirm(self, question: str) -> bool:
        stdscr = self.stdscr
        if stdscr is None:
            return False

        text = f"{question} (y/n): "
        while True:
            self.nav.renderer.render()
            self._draw_bottom(stdscr, [(text, style_attr("prompt"))])
            try:
                stdscr.refresh()
            except curses.error:
                pass

            key = stdscr.getch()
            if key in YES_KEYS:
                return True
            if key in NO_KEYS:
                return False

    def confirm_with_details(self, question: str, title: str, lines: List[str]) -> bool:
        """Confirm while showing ``lines`` in a scrollable popup."""
        if self.stdscr is None:
            return False

        popup = Popup(title=title, lines=lines, footer=f"{question} (y/n): ")
        while True:
            key = self.popup(popup)
            if key in YES_KEYS:
                return True
            if key in NO_KEYS:
                return False

    # === Popup ===
    def popup(self, popup: Popup) -> int:
        """Scroll ``popup`` until a key it does not handle arrives; return that key."""
        stdscr = self.stdscr
        if stdscr is None:
            return Constants.ESC

        while True:
            rows = self._draw_popup(stdscr, popup)
            max_scroll = max(0, len(popup.lines) - rows)

            key = stdscr.getch()
            if key == -1:
                continue
            if key in POPUP_DOWN:
                popup.scroll = min(max_scroll, popup.scroll + 1)
            elif key in POPUP_UP:
                popup.scroll = max(0, popup.scroll - 1)
            elif key in POPUP_PAGE_DOWN:
                popup.scroll = min(max_scroll, popup.scroll + max(1, rows // 2))
            elif key in POPUP_PAGE_UP:
                popup.scroll = max(0, popup.scroll - max(1, rows // 2))
            elif key == ord("g"):
                popup.scroll = 0
            elif key == ord("G"):
                popup.scroll = max_scroll
            else:
                return key

    def _draw_popup(self, stdscr, popup: Popup) -> int:
        self.nav.renderer.render()
        max_y, max_x = stdscr.getmaxyx()
        # Title on row 1, footer on the last row
        rows = max(1, max_y - 3)
        popup.scroll = max(0, min(popup.scroll, max(0, len(popup.lines) - rows)))
        visible = popup.lines[popup.scroll : popup.scroll + rows]

        total = len(popup.lines)
        position = f" [{popup.scroll + 1}-{popup.scroll + len(visible)}/{total}]" if total else ""
        try:
            for y in range(1, max_y - 1):
                stdscr.move(y, 0)
                stdscr.clrtoeol()
            stdscr.addstr(1, 0, (popup.title + position)[: max_x - 1], style_attr("popup_title"))
            for i, line in enumerate(visible):
                stdscr.addstr(2 + i, 2, line[: max(0, max_x - 3)])
        except curses.error:
            pass

        self._draw_bottom(stdscr, [(popup.footer, style_attr("prompt"))])
        try:
            stdscr.refresh()
        except curses.error:
            pass
        return rows
