import curses
import logging
import os
from typing import Optional, Callable, Any

from core_navigator import FileNavigator
from errors import SessionError
from ui_renderer import init_styles

logger = logging.getLogger(__name__)


class Orchestrator:
    def __init__(
        self,
        start_path: Optional[str] = None,
        navigator_factory: Optional[Callable[[str], Any]] = None,
    ):
        self.start_path = os.path.abspath(start_path or os.getcwd())
        self.navigator_factory = navigator_factory or FileNavigator
        self.navigator: Optional[Any] = None

    def setup(self) -> None:
        if self.navigator is None:
            self.navigator = self.navigator_factory(self.start_path)

    def _curses_main(self, stdscr) -> None:
        assert self.navigator is not None
        navigator = self.navigator

        navigator.renderer.stdscr = stdscr

        try:
            curses.curs_set(0)
        except curses.error:
            pass
        try:
            curses.noecho()
            curses.raw()
            curses.nonl()
        except curses.error:
            pass
        init_styles()

        stdscr.keypad(True)
        stdscr.timeout(-1)

        while True:
            navigator.renderer.render()

            key = stdscr.getch()
            if key == -1:
                continue

            if navigator.input_handler.handle_key(key):
                break

    def _run_curses(self) -> None:
        try:
            curses.wrapper(self._curses_main)
        except curses.error as exc:
            raise SessionError(f"terminal unavailable ({exc})") from exc

    def run(self) -> str:
        """Run the session and return the directory it ended in."""
        self.setup()
        assert self.navigator is not None
        try:
            self._run_curses()
        except KeyboardInterrupt:
            pass
        except SessionError as exc:
            logger.error("session ended: %s", exc)
            raise
        return self.navigator.current_path
