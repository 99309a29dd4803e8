import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Transport pass-through settings
    ALLOWED_ORIGINS = [o.strip() for o in os.environ.get('ALLOWED_ORIGINS', '*').split(',') if o.strip()]
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3001'))
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Board size bounds (chosen per room at creation)
    DEFAULT_BOARD_SIZE = int(os.environ.get('DEFAULT_BOARD_SIZE', '5'))
    MIN_BOARD_SIZE = int(os.environ.get('MIN_BOARD_SIZE', '1'))
    MAX_BOARD_SIZE = int(os.environ.get('MAX_BOARD_SIZE', '12'))
    # Room codes are drawn from A-Z0-9
    ROOM_CODE_LENGTH = int(os.environ.get('ROOM_CODE_LENGTH', '5'))
    # Finished rooms are dropped after this many seconds
    FINISHED_ROOM_TTL_SEC = int(os.environ.get('FINISHED_ROOM_TTL_SEC', '600'))
