import threading
import time
from typing import Dict, List, Optional, Tuple

from dotsdice.models import PLAYER_ROLES, Player, Room, generate_room_code
from .engine import initialize_game
from .errors import InvalidBoardSize, RoomFull, RoomNotFound


class RoomRegistry:
    """In-memory store of live rooms, owned by one Flask app.

    Rooms are removed when nobody is connected to them any more, and
    finished rooms are evicted once ``finished_ttl`` seconds have passed.
    """

    def __init__(self, code_length=5, finished_ttl=600, default_board_size=5,
                 min_board_size=1, max_board_size=12, rng=None):
        self.code_length = code_length
        self.finished_ttl = finished_ttl
        self.default_board_size = default_board_size
        self.min_board_size = min_board_size
        self.max_board_size = max_board_size
        self.rng = rng
        self._rooms: Dict[str, Room] = {}
        self._sid_rooms: Dict[str, str] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config, rng=None):
        return cls(
            code_length=int(config.get('ROOM_CODE_LENGTH', 5)),
            finished_ttl=int(config.get('FINISHED_ROOM_TTL_SEC', 600)),
            default_board_size=int(config.get('DEFAULT_BOARD_SIZE', 5)),
            min_board_size=int(config.get('MIN_BOARD_SIZE', 1)),
            max_board_size=int(config.get('MAX_BOARD_SIZE', 12)),
            rng=rng,
        )

    def __len__(self):
        return len(self._rooms)

    def __contains__(self, code):
        return self.get(code) is not None

    def _coerce_board_size(self, value) -> int:
        if value is None:
            return self.default_board_size
        if isinstance(value, bool):
            raise InvalidBoardSize()
        try:
            size = int(value)
        except (TypeError, ValueError):
            raise InvalidBoardSize()
        if not self.min_board_size <= size <= self.max_board_size:
            raise InvalidBoardSize(
                f'Board size must be between {self.min_board_size} and {self.max_board_size}.'
            )
        return size

    def create_room(self, sid: str, owner_name: str, board_size=None) -> Room:
        size = self._coerce_board_size(board_size)
        self.evict_finished()
        with self._lock:
            code = generate_room_code(self._rooms, length=self.code_length, rng=self.rng)
            room = Room(code, size, initialize_game(size))
            room.players.append(Player(sid, PLAYER_ROLES[0], owner_name))
            self._rooms[code] = room
            self._sid_rooms[sid] = code
        return room

    def join_room(self, code: str, sid: str, player_name: str) -> Room:
        with self._lock:
            room = self._rooms.get(_normalize(code))
            if room is None:
                raise RoomNotFound()
            seat = room.player_for_sid(sid)
            if seat is not None and seat.connected:
                return room
            if room.is_full:
                raise RoomFull()
            room.players.append(Player(sid, PLAYER_ROLES[len(room.players)], player_name))
            self._sid_rooms[sid] = room.code
        return room

    def get(self, code) -> Optional[Room]:
        return self._rooms.get(_normalize(code))

    def require(self, code) -> Room:
        room = self.get(code)
        if room is None:
            raise RoomNotFound()
        return room

    def room_for_sid(self, sid: str) -> Optional[Room]:
        code = self._sid_rooms.get(sid)
        return self._rooms.get(code) if code else None

    def _remove_locked(self, code: str) -> Optional[Room]:
        room = self._rooms.pop(code, None)
        if room is not None:
            for p in room.players:
                if self._sid_rooms.get(p.sid) == code:
                    self._sid_rooms.pop(p.sid, None)
        return room

    def release_player(self, code, sid: str) -> Tuple[Optional[Player], bool]:
        """Mark ``sid``'s seat as gone.

        Returns the released player (None if ``sid`` was not seated) and
        whether the room was removed because nobody is connected any more.
        """
        code = _normalize(code)
        with self._lock:
            room = self._rooms.get(code)
            if room is None:
                return None, False
            player = room.player_for_sid(sid)
            if player is None:
                return None, False
            player.connected = False
            if self._sid_rooms.get(sid) == code:
                self._sid_rooms.pop(sid, None)
            if not room.connected_players():
                self._remove_locked(code)
                return player, True
            return player, False

    def mark_finished(self, room: Room, now: Optional[float] = None) -> None:
        if room.finished_at is None:
            room.finished_at = now if now is not None else time.time()

    def evict_finished(self, now: Optional[float] = None) -> List[str]:
        now = now if now is not None else time.time()
        with self._lock:
            expired = [
                code for code, room in self._rooms.items()
                if room.finished_at is not None and now - room.finished_at >= self.finished_ttl
            ]
            for code in expired:
                self._remove_locked(code)
        return expired


def _normalize(code) -> str:
    return str(code or '').strip().upper()
