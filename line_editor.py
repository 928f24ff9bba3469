from typing import Callable, List


def _is_word(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


class LineBuffer:
    """Single-line edit buffer used by every prompt.

    Motions are plain methods so they can be handed to
    :meth:`delete_by_motion`, e.g. ``buf.delete_by_motion(LineBuffer.move_word_left)``.
    """

    def __init__(self, text: str = ""):
        self.chars: List[str] = list(text)
        self.cursor = len(self.chars)

    @property
    def text(self) -> str:
        return "".join(self.chars)

    def __len__(self) -> int:
        return len(self.chars)

    def insert(self, ch: str) -> None:
        self.chars.insert(self.cursor, ch)
        self.cursor += 1

    def move_start(self) -> None:
        self.cursor = 0

    def move_end(self) -> None:
        self.cursor = len(self.chars)

    def move_char_left(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def move_char_right(self) -> None:
        if self.cursor < len(self.chars):
            self.cursor += 1

    def move_word_left(self) -> None:
        while self.cursor > 0 and not _is_word(self.chars[self.cursor - 1]):
            self.cursor -= 1
        while self.cursor > 0 and _is_word(self.chars[self.cursor - 1]):
            self.cursor -= 1

    def move_word_right(self) -> None:
        end = len(self.chars)
        while self.cursor < end and not _is_word(self.chars[self.cursor]):
            self.cursor += 1
        while self.cursor < end and _is_word(self.chars[self.cursor]):
            self.cursor += 1

    def delete_by_motion(self, motion: Callable[["LineBuffer"], None]) -> None:
        mark = self.cursor
        motion(self)
        start, end = sorted((mark, self.cursor))
        del self.chars[start:end]
        self.cursor = start
