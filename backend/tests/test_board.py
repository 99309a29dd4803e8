from dotsdice.models import HORIZONTAL, VERTICAL, GameState
from dotsdice.services.games import board


def test_line_slot_count_matches_both_orientations():
    for n in range(1, 6):
        state = GameState(n)
        assert sum(len(r) for r in state.horizontal_lines) == board.line_slot_count(n)
        assert sum(len(r) for r in state.vertical_lines) == board.line_slot_count(n)


def test_is_valid_line_bounds():
    assert board.is_valid_line(3, HORIZONTAL, 3, 2)
    assert not board.is_valid_line(3, HORIZONTAL, 4, 0)
    assert not board.is_valid_line(3, HORIZONTAL, 0, 3)
    assert board.is_valid_line(3, VERTICAL, 2, 3)
    assert not board.is_valid_line(3, VERTICAL, 3, 0)
    assert not board.is_valid_line(3, VERTICAL, -1, 0)
    assert not board.is_valid_line(3, 'DIAGONAL', 0, 0)


def test_adjacent_squares_for_horizontal_lines():
    assert board.adjacent_squares(3, HORIZONTAL, 0, 1) == [(0, 1)]
    assert board.adjacent_squares(3, HORIZONTAL, 3, 1) == [(2, 1)]
    assert board.adjacent_squares(3, HORIZONTAL, 1, 1) == [(1, 1), (0, 1)]


def test_adjacent_squares_for_vertical_lines():
    assert board.adjacent_squares(3, VERTICAL, 1, 0) == [(1, 0)]
    assert board.adjacent_squares(3, VERTICAL, 1, 3) == [(1, 2)]
    assert board.adjacent_squares(3, VERTICAL, 1, 2) == [(1, 2), (1, 1)]


def test_square_closes_only_with_all_four_edges():
    state = GameState(2)
    state.horizontal_lines[0][1] = True
    state.horizontal_lines[1][1] = True
    state.vertical_lines[0][1] = True
    assert not board.is_square_closed(state.horizontal_lines, state.vertical_lines, 0, 1)
    state.vertical_lines[0][2] = True
    assert board.is_square_closed(state.horizontal_lines, state.vertical_lines, 0, 1)
    assert not board.is_square_closed(state.horizontal_lines, state.vertical_lines, 0, 0)


def test_parse_line_type_accepts_client_spellings():
    assert board.parse_line_type('HORIZONTAL') == HORIZONTAL
    assert board.parse_line_type('h') == HORIZONTAL
    assert board.parse_line_type(' Vertical ') == VERTICAL
    assert board.parse_line_type('diag') is None
    assert board.parse_line_type(None) is None
