import curses
import errno
import logging
import os
import shutil
import subprocess
from typing import List, Optional

logger = logging.getLogger(__name__)


class FileActionService:
    """Filesystem and external-program side of the browser.

    Every operation raises ``OSError`` on failure; callers turn that into a
    status message.
    """

    def __init__(self, navigator):
        self.nav = navigator

    # === Filesystem ===
    def create_directory(self, path: str) -> None:
        os.makedirs(path)
        logger.debug("created directory %s", path)

    def create_file(self, path: str) -> None:
        with open(path, "a"):
            pass
        logger.debug("created file %s", path)

    def delete(self, path: str) -> None:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.remove(path)
        logger.debug("deleted %s", path)

    def rename(self, old_path: str, new_path: str) -> None:
        os.rename(old_path, new_path)
        logger.debug("renamed %s -> %s", old_path, new_path)

    def move(self, src: str, dest: str) -> None:
        shutil.move(src, dest)
        logger.debug("moved %s -> %s", src, dest)

    def copy(self, src: str, dest: str) -> None:
        if os.path.isdir(src) and dest.startswith(src.rstrip(os.sep) + os.sep):
            raise OSError(errno.EINVAL, "Cannot copy a directory into itself", src)
        if os.path.isdir(src) and not os.path.islink(src):
            shutil.copytree(src, dest, symlinks=True)
        else:
            shutil.copy2(src, dest)
        logger.debug("copied %s -> %s", src, dest)

    # === External programs ===
    def _suspend_curses(self) -> None:
        if getattr(self.nav.renderer, "stdscr", None) is None:
            return
        try:
            curses.def_prog_mode()
            curses.endwin()
        except curses.error:
            pass

    def _resume_curses(self) -> None:
        stdscr = getattr(self.nav.renderer, "stdscr", None)
        if stdscr is None:
            return
        try:
            curses.reset_prog_mode()
        except curses.error:
            pass
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        try:
            stdscr.clear()
            stdscr.refresh()
        except curses.error:
            pass

    def run_program(self, command: List[str], path: str) -> None:
        """Run ``command`` on ``path`` in the foreground and wait for it.

        A ``{file}`` token is substituted; otherwise the path is appended.
        Raises ``ChildProcessError`` on a non-zero exit status.
        """
        tokens = [part.replace("{file}", path) for part in command]
        if not any("{file}" in part for part in command):
            tokens.append(path)
        if not tokens or not tokens[0]:
            raise FileNotFoundError("No program given")

        logger.debug("running %s", tokens)
        self._suspend_curses()
        try:
            result = subprocess.run(tokens, cwd=self.nav.current_path)
        finally:
            self._resume_curses()

        if result.returncode != 0:
            raise ChildProcessError(f"{tokens[0]} exited with status {result.returncode}")

    def open_in_editor(self, path: str) -> None:
        commands = self.nav.config.get_handler_commands("editor")
        command = self._first_available(commands)
        if command is None:
            raise FileNotFoundError("No editor found (set $EDITOR or handlers.editor)")
        self.run_program(command, path)

    @staticmethod
    def _first_available(commands: List[List[str]]) -> Optional[List[str]]:
        for cmd in commands:
            if cmd and shutil.which(cmd[0]) is not None:
                return cmd
        return None
