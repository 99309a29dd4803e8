import random
from typing import List, Optional, Tuple

from dotsdice.models import DRAW, GameState, HORIZONTAL, PLAYER_A, PLAYER_B
from . import board


class MoveResult:
    """What an accepted move changed."""

    def __init__(self, player: str, line_type: str, row: int, col: int):
        self.player = player
        self.line_type = line_type
        self.row = row
        self.col = col
        self.claimed: List[Tuple[int, int]] = []
        self.turn_changed = False
        self.winner: Optional[str] = None

    def to_dict(self):
        return {
            'player': self.player,
            'type': self.line_type,
            'row': self.row,
            'column': self.col,
            'claimed': [list(sq) for sq in self.claimed],
            'turnChanged': self.turn_changed,
            'winner': self.winner,
        }


def other_player(role: str) -> str:
    return PLAYER_B if role == PLAYER_A else PLAYER_A


def decide_winner(scores) -> str:
    if scores[PLAYER_A] > scores[PLAYER_B]:
        return PLAYER_A
    if scores[PLAYER_B] > scores[PLAYER_A]:
        return PLAYER_B
    return DRAW


def initialize_game(size: int) -> GameState:
    return GameState(size)


def roll_dice(state: GameState, board_size: int, rng=None) -> Optional[int]:
    """Roll for the current player.

    Draws uniformly from [1, board_size] and grants that many moves.
    Returns None without touching the state when the game is over or the
    current player still has moves to spend.
    """
    if state.is_finished or not state.waiting_for_roll:
        return None
    rng = rng or random
    value = rng.randint(1, board_size)
    state.dice_value = value
    state.moves_left = value
    state.waiting_for_roll = False
    return value


def make_move(state: GameState, line_type: str, row: int, col: int) -> Optional[MoveResult]:
    """Draw one line for the current player.

    Rejected moves return None and leave the state untouched: finished game,
    unknown line type or out-of-range coordinates, awaiting a roll, no moves
    left, or a line that is already drawn.
    """
    if state.is_finished:
        return None
    if not board.is_valid_line(state.size, line_type, row, col):
        return None
    if state.waiting_for_roll:
        return None
    if state.moves_left <= 0:
        return None

    lines = state.horizontal_lines if line_type == HORIZONTAL else state.vertical_lines
    if lines[row][col]:
        return None

    player = state.current_player
    result = MoveResult(player, line_type, row, col)

    lines[row][col] = True
    # Closing a square does not grant an extra move
    state.moves_left -= 1

    for sq_row, sq_col in board.adjacent_squares(state.size, line_type, row, col):
        if state.squares[sq_row][sq_col] is not None:
            continue
        if board.is_square_closed(state.horizontal_lines, state.vertical_lines, sq_row, sq_col):
            state.squares[sq_row][sq_col] = player
            state.scores[player] += 1
            result.claimed.append((sq_row, sq_col))

    if state.moves_left == 0:
        state.current_player = other_player(player)
        state.waiting_for_roll = True
        state.dice_value = None
        result.turn_changed = True

    # Checked after every move; the game can end mid-turn
    if state.scores[PLAYER_A] + state.scores[PLAYER_B] == state.size * state.size:
        state.moves_left = 0
        state.waiting_for_roll = False
        state.winner = decide_winner(state.scores)
        result.winner = state.winner

    return result
