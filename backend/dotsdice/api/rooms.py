from flask import Blueprint, current_app, jsonify

from dotsdice.services.games.errors import RoomNotFound


rooms = Blueprint('rooms', __name__)


@rooms.route('/<string:room_code>', methods=['GET'])
def get_room_state(room_code):
    """
    Returns the current snapshot of a room: players, board size and game state.
    """
    registry = current_app.extensions['room_registry']
    try:
        room = registry.require(room_code)
    except RoomNotFound:
        return jsonify({'error': 'Room not found'}), 404
    with room.lock:
        payload = room.to_dict()
    payload['finished'] = room.game_state.is_finished
    payload['createdAt'] = room.created_at
    payload['finishedAt'] = room.finished_at
    return jsonify(payload)
