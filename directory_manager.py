# ~/Apps/vfm/directory_manager.py
import os
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Item:
    name: str
    path: str
    is_dir: bool


def sort_key(item: Item):
    # Directories first, then plain (case-sensitive) name order
    return (not item.is_dir, item.name)


def list_directory(path: str) -> List[Item]:
    """Return the sorted listing of ``path``.

    Raises ``OSError`` when the directory cannot be read.
    """
    items = []
    with os.scandir(path) as entries:
        for entry in entries:
            try:
                is_dir = entry.is_dir()
            except OSError:
                is_dir = False
            items.append(Item(name=entry.name, path=os.path.join(path, entry.name), is_dir=is_dir))

    items.sort(key=sort_key)
    return items


def parent_path(path: str) -> str:
    return os.path.dirname(path.rstrip(os.sep)) or os.sep


def is_root(path: str) -> bool:
    return parent_path(path) == path


def pretty_path(path: str) -> str:
    home = os.path.expanduser("~")
    real_home = os.path.realpath(home)

    for base in (home, real_home):
        if path == base:
            return "~"
        if path.startswith(base + os.sep):
            return "~" + path[len(base):]
    return path
