# ~/Apps/vfm/constants.py
import curses


class Constants:
    ESC = 27
    ENTER_KEYS = (10, 13, curses.KEY_ENTER)
    BACKSPACE_KEYS = (curses.KEY_BACKSPACE, 127, 8)

    CTRL_A = 1
    CTRL_B = 2
    CTRL_C = 3
    CTRL_D = 4
    CTRL_E = 5
    CTRL_F = 6
    CTRL_K = 11
    CTRL_U = 21
    CTRL_W = 23

    # How long to wait after ESC for an Alt-modified key (milliseconds)
    META_TIMEOUT_MS = 25

    DEFAULT_JUMP = 10
    DEFAULT_EDITOR = "vi"
