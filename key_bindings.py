import curses
from enum import Enum, auto
from typing import Dict, Optional

from constants import Constants


class Action(Enum):
    MOVE_DOWN = auto()
    MOVE_UP = auto()
    JUMP_DOWN = auto()
    JUMP_UP = auto()
    TOP = auto()
    BOTTOM = auto()
    PARENT = auto()
    OPEN = auto()
    OPEN_EDITOR = auto()
    OPEN_WITH = auto()
    HOME = auto()
    INITIAL_DIR = auto()
    PREVIOUS_DIR = auto()
    SEARCH_FORWARD = auto()
    SEARCH_BACKWARD = auto()
    SEARCH_NEXT = auto()
    SEARCH_PREVIOUS = auto()
    CREATE_DIR = auto()
    CREATE_FILE = auto()
    TOGGLE_MARK = auto()
    TOGGLE_ALL = auto()
    DELETE = auto()
    MOVE_MARKED = auto()
    COPY_MARKED = auto()
    RENAME = auto()
    QUIT = auto()


KEY_BINDINGS: Dict[int, Action] = {
    ord("j"): Action.MOVE_DOWN,
    curses.KEY_DOWN: Action.MOVE_DOWN,
    ord("k"): Action.MOVE_UP,
    curses.KEY_UP: Action.MOVE_UP,
    ord("}"): Action.JUMP_DOWN,
    curses.KEY_NPAGE: Action.JUMP_DOWN,
    ord("{"): Action.JUMP_UP,
    curses.KEY_PPAGE: Action.JUMP_UP,
    ord("g"): Action.TOP,
    curses.KEY_HOME: Action.TOP,
    ord("G"): Action.BOTTOM,
    curses.KEY_END: Action.BOTTOM,
    ord("h"): Action.PARENT,
    curses.KEY_LEFT: Action.PARENT,
    ord("l"): Action.OPEN,
    curses.KEY_RIGHT: Action.OPEN,
    ord("e"): Action.OPEN_EDITOR,
    ord("o"): Action.OPEN_WITH,
    ord("~"): Action.HOME,
    ord("."): Action.INITIAL_DIR,
    ord("-"): Action.PREVIOUS_DIR,
    ord("/"): Action.SEARCH_FORWARD,
    ord("?"): Action.SEARCH_BACKWARD,
    ord("n"): Action.SEARCH_NEXT,
    ord("N"): Action.SEARCH_PREVIOUS,
    ord("d"): Action.CREATE_DIR,
    ord("f"): Action.CREATE_FILE,
    ord("x"): Action.TOGGLE_MARK,
    ord("X"): Action.TOGGLE_ALL,
    ord("D"): Action.DELETE,
    ord("m"): Action.MOVE_MARKED,
    ord("c"): Action.COPY_MARKED,
    ord("r"): Action.RENAME,
    ord("q"): Action.QUIT,
}

for _key in Constants.BACKSPACE_KEYS:
    KEY_BINDINGS[_key] = Action.PARENT
for _key in Constants.ENTER_KEYS:
    KEY_BINDINGS[_key] = Action.OPEN


def resolve(key: int) -> Optional[Action]:
    return KEY_BINDINGS.get(key)


def digit_value(key: int) -> Optional[int]:
    if ord("0") <= key <= ord("9"):
        return key - ord("0")
    return None
