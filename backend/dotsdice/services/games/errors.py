class GameError(Exception):
    """A request-level failure reported to the requesting connection only."""

    code = 'GAME_ERROR'
    message = 'Request failed.'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self):
        return {'code': self.code, 'message': self.message}


class RoomNotFound(GameError):
    code = 'ROOM_NOT_FOUND'
    message = 'Room not found.'


class RoomFull(GameError):
    code = 'ROOM_FULL'
    message = 'Room is full.'


class NotYourTurn(GameError):
    code = 'NOT_YOUR_TURN'
    message = 'It is not your turn.'


class InvalidBoardSize(GameError):
    code = 'INVALID_BOARD_SIZE'
    message = 'Invalid board size.'


class InvalidRequest(GameError):
    code = 'INVALID_REQUEST'
    message = 'Invalid request.'
