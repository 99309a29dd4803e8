import random
import string
import threading
import time

PLAYER_A = 'A'
PLAYER_B = 'B'
DRAW = 'DRAW'
PLAYER_ROLES = (PLAYER_A, PLAYER_B)

HORIZONTAL = 'HORIZONTAL'
VERTICAL = 'VERTICAL'


class GameState:
    """Authoritative state of one room's board.

    Attributes are snake_case; ``to_dict`` produces the camelCase payload
    the web client renders.
    """

    def __init__(self, size):
        self.size = size
        self.horizontal_lines = [[False] * size for _ in range(size + 1)]
        self.vertical_lines = [[False] * (size + 1) for _ in range(size)]
        self.squares = [[None] * size for _ in range(size)]
        self.current_player = PLAYER_A
        self.scores = {PLAYER_A: 0, PLAYER_B: 0}
        self.moves_left = 0
        self.dice_value = None
        self.waiting_for_roll = True
        self.winner = None

    @property
    def is_finished(self):
        return self.winner is not None

    def claimed_count(self):
        return sum(1 for row in self.squares for owner in row if owner is not None)

    def to_dict(self):
        return {
            'horizontalLines': [list(row) for row in self.horizontal_lines],
            'verticalLines': [list(row) for row in self.vertical_lines],
            'squares': [list(row) for row in self.squares],
            'currentPlayer': self.current_player,
            'scores': dict(self.scores),
            'movesLeft': self.moves_left,
            'diceValue': self.dice_value,
            'waitingForRoll': self.waiting_for_roll,
            'winner': self.winner,
        }


class Player:
    def __init__(self, sid, role, name):
        self.sid = sid
        self.role = role
        self.name = name
        self.connected = True

    def to_dict(self):
        return {
            'socketId': self.sid,
            'playerType': self.role,
            'name': self.name,
        }


def generate_room_code(taken, length=5, rng=None):
    """Generate a short room code not present in ``taken``."""
    rng = rng or random
    alphabet = string.ascii_uppercase + string.digits
    while True:
        code = ''.join(rng.choices(alphabet, k=length))
        if code not in taken:
            return code


class Room:
    def __init__(self, code, board_size, game_state):
        self.code = code
        self.board_size = board_size
        self.players = []
        self.game_state = game_state
        # Held for the whole validate/mutate/serialize step of an intent
        self.lock = threading.Lock()
        self.created_at = time.time()
        self.finished_at = None

    @property
    def is_full(self):
        return len(self.players) >= len(PLAYER_ROLES)

    def player_for_sid(self, sid):
        for p in self.players:
            if p.sid == sid:
                return p
        return None

    def connected_players(self):
        return [p for p in self.players if p.connected]

    def to_dict(self):
        return {
            'roomId': self.code,
            'boardSize': self.board_size,
            'players': [p.to_dict() for p in self.players],
            'gameState': self.game_state.to_dict(),
        }
