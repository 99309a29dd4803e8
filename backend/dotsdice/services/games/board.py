"""Line and square addressing for an N x N board.

Horizontal lines are addressed by (row in [0, N], col in [0, N-1]) and
vertical lines by (row in [0, N-1], col in [0, N]). Square (r, c) is
bounded by horizontal (r, c) on top, horizontal (r+1, c) at the bottom,
vertical (r, c) on the left and vertical (r, c+1) on the right.
"""

from typing import List, Optional, Tuple

from dotsdice.models import HORIZONTAL, VERTICAL

_LINE_TYPE_ALIASES = {
    'h': HORIZONTAL,
    'horizontal': HORIZONTAL,
    'v': VERTICAL,
    'vertical': VERTICAL,
}


def parse_line_type(value) -> Optional[str]:
    """Map a client-supplied line type to HORIZONTAL/VERTICAL, or None."""
    if not isinstance(value, str):
        return None
    return _LINE_TYPE_ALIASES.get(value.strip().lower())


def line_slot_count(size: int) -> int:
    """Number of line slots per orientation."""
    return size * (size + 1)


def is_valid_line(size: int, line_type: str, row: int, col: int) -> bool:
    if line_type == HORIZONTAL:
        return 0 <= row <= size and 0 <= col < size
    if line_type == VERTICAL:
        return 0 <= row < size and 0 <= col <= size
    return False


def is_square_closed(horizontal_lines, vertical_lines, row: int, col: int) -> bool:
    return (
        horizontal_lines[row][col]
        and horizontal_lines[row + 1][col]
        and vertical_lines[row][col]
        and vertical_lines[row][col + 1]
    )


def adjacent_squares(size: int, line_type: str, row: int, col: int) -> List[Tuple[int, int]]:
    """Squares a freshly drawn line can close (at most two)."""
    candidates = []
    if line_type == HORIZONTAL:
        # below, then above
        if row < size:
            candidates.append((row, col))
        if row > 0:
            candidates.append((row - 1, col))
    elif line_type == VERTICAL:
        # right, then left
        if col < size:
            candidates.append((row, col))
        if col > 0:
            candidates.append((row, col - 1))
    return candidates
