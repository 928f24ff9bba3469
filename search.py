from typing import Callable, Optional, Sequence


def _matches(name: str, query: str) -> bool:
    return query in name.lower()


def find_next(names: Sequence[str], query: str, start: int) -> Optional[int]:
    """Index of the next name containing ``query`` after ``start``.

    Wraps around to the beginning and checks ``start`` itself last, so the
    starting row only matches when nothing else does.
    """
    if not query:
        return None
    query = query.lower()

    for i in range(start + 1, len(names)):
        if _matches(names[i], query):
            return i
    for i in range(0, min(start, len(names))):
        if _matches(names[i], query):
            return i
    if 0 <= start < len(names) and _matches(names[start], query):
        return start
    return None


def find_previous(names: Sequence[str], query: str, start: int) -> Optional[int]:
    if not query:
        return None
    query = query.lower()

    for i in range(min(start, len(names)) - 1, -1, -1):
        if _matches(names[i], query):
            return i
    for i in range(len(names) - 1, start, -1):
        if _matches(names[i], query):
            return i
    if 0 <= start < len(names) and _matches(names[start], query):
        return start
    return None


def repeat_search(
    names: Sequence[str],
    query: str,
    start: int,
    count: int,
    reverse: bool = False,
) -> Optional[int]:
    """Apply ``find_next`` (or ``find_previous``) ``max(1, count)`` times.

    Once the walk comes back to the first match it found, the remaining
    steps are reduced modulo the length of that cycle.
    """
    step: Callable[[Sequence[str], str, int], Optional[int]]
    step = find_previous if reverse else find_next

    remaining = max(1, count)
    index = start
    first: Optional[int] = None
    steps_taken = 0

    while remaining > 0:
        found = step(names, query, index)
        if found is None:
            return None
        index = found
        remaining -= 1
        steps_taken += 1

        if first is None:
            first = found
        elif found == first:
            cycle_length = steps_taken - 1
            remaining %= cycle_length
            first = None
            steps_taken = 0

    return index
