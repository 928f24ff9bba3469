def scroll_to_cursor(cursor: int, anchor: int, visible_rows: int, total: int) -> int:
    """Return the first visible row so that ``cursor`` stays on screen."""
    if visible_rows <= 0 or total <= 0:
        return 0

    if cursor >= anchor + visible_rows:
        anchor = cursor - visible_rows + 1
    elif cursor < anchor:
        anchor = cursor

    # Keep the window full when the listing shrank underneath it
    return max(0, min(anchor, max(0, total - visible_rows)))
