from flask_socketio import join_room, leave_room, emit
from flask import current_app, request

from dotsdice.services.games import board, engine
from dotsdice.services.games.errors import GameError, InvalidRequest, NotYourTurn
from dotsdice.services.games.scheduler import schedule_room_eviction


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _registry():
    return current_app.extensions['room_registry']


def _channel(code: str) -> str:
    return f"room:{code}"


def _emit_error(exc: GameError) -> None:
    emit('error', exc.to_dict())


def _coerce_index(value) -> int:
    """Accept ints, integral floats and integer strings; nothing else."""
    if isinstance(value, bool):
        raise InvalidRequest('row and column must be integers')
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise InvalidRequest('row and column must be integers')


def _require_turn(room, sid: str) -> None:
    player = room.player_for_sid(sid)
    if player is None or not player.connected or player.role != room.game_state.current_player:
        raise NotYourTurn()


def _release(sid: str, code: str) -> None:
    """Give up ``sid``'s seat and tell whoever is left."""
    player, removed = _registry().release_player(code, sid)
    if player is None:
        return
    current_app.logger.info(f"[player-left] room={code} player={player.role} name={player.name}")
    if removed:
        current_app.logger.info(f"[room-removed] room={code} reason=empty")
        return
    emit('opponent_left', {'roomId': code, 'playerType': player.role, 'name': player.name},
         to=_channel(code), include_self=False)


def _leave_previous_room(sid: str, previous, room) -> None:
    """Release ``previous`` once ``sid`` is seated in ``room``."""
    if previous is None or previous is room:
        return
    _release(sid, previous.code)
    leave_room(_channel(previous.code))


def handle_connect(auth=None):
    emit('connected', {'message': 'Connected'})


def handle_disconnect(reason=None):
    sid = _get_sid()
    room = _registry().room_for_sid(sid)
    if room is None:
        return
    _release(sid, room.code)


def handle_create_room(data):
    data = data or {}
    name = data.get('name')
    if not name:
        _emit_error(InvalidRequest('name is required'))
        return
    sid = _get_sid()
    registry = _registry()
    previous = registry.room_for_sid(sid)
    try:
        room = registry.create_room(sid, name, data.get('boardSize'))
    except GameError as exc:
        _emit_error(exc)
        return
    # Only give up the old seat once the new room exists
    _leave_previous_room(sid, previous, room)
    join_room(_channel(room.code))
    owner = room.players[0]
    emit('room_created', {'roomId': room.code, 'playerType': owner.role})
    current_app.logger.info(f"[room-created] room={room.code} size={room.board_size} owner={name}")


def handle_join_room(data):
    data = data or {}
    room_id = data.get('roomId')
    name = data.get('name')
    if not room_id or not name:
        _emit_error(InvalidRequest('roomId and name are required'))
        return
    sid = _get_sid()
    registry = _registry()
    previous = registry.room_for_sid(sid)
    rejoin = previous is not None and registry.get(room_id) is previous
    try:
        room = registry.join_room(room_id, sid, name)
    except GameError as exc:
        current_app.logger.info(f"[join-failed] room={room_id} reason={exc.code}")
        _emit_error(exc)
        return
    _leave_previous_room(sid, previous, room)
    join_room(_channel(room.code))
    with room.lock:
        snapshot = room.to_dict()
    payload = {
        'gameState': snapshot['gameState'],
        'players': snapshot['players'],
        'boardSize': snapshot['boardSize'],
    }
    if rejoin:
        # Already seated here: resync the requester only
        emit('game_start', payload)
        return
    # Tell everyone in the room that the game can begin
    emit('game_start', payload, to=_channel(room.code))
    current_app.logger.info(f"[room-joined] room={room.code} players={len(room.players)} name={name}")


def handle_leave_room(data):
    room_id = (data or {}).get('roomId')
    if not room_id:
        _emit_error(InvalidRequest('roomId is required'))
        return
    code = str(room_id).strip().upper()
    _release(_get_sid(), code)
    leave_room(_channel(code))
    emit('left', {'roomId': code})


def handle_roll_dice(data):
    registry = _registry()
    room = registry.get((data or {}).get('roomId'))
    if room is None:
        return
    sid = _get_sid()
    with room.lock:
        try:
            _require_turn(room, sid)
        except GameError as exc:
            _emit_error(exc)
            return
        value = engine.roll_dice(room.game_state, room.board_size, rng=registry.rng)
        if value is None:
            current_app.logger.debug(f"[roll-rejected] room={room.code}")
            return
        player = room.game_state.current_player
        payload = room.game_state.to_dict()
    emit('update_game', payload, to=_channel(room.code))
    current_app.logger.info(f"[roll] room={room.code} player={player} value={value}")


def handle_make_move(data):
    data = data or {}
    registry = _registry()
    room = registry.get(data.get('roomId'))
    if room is None:
        return
    sid = _get_sid()
    try:
        line_type = board.parse_line_type(data.get('type'))
        if line_type is None:
            raise InvalidRequest('type must be HORIZONTAL or VERTICAL')
        row = _coerce_index(data.get('row'))
        col = _coerce_index(data.get('column'))
    except GameError as exc:
        _emit_error(exc)
        return

    with room.lock:
        try:
            _require_turn(room, sid)
        except GameError as exc:
            _emit_error(exc)
            return
        result = engine.make_move(room.game_state, line_type, row, col)
        if result is None:
            current_app.logger.debug(f"[move-rejected] room={room.code} type={line_type} row={row} col={col}")
            return
        if result.winner:
            registry.mark_finished(room)
        payload = room.game_state.to_dict()

    emit('update_game', payload, to=_channel(room.code))
    emit('move_result', result.to_dict(), to=_channel(room.code))
    current_app.logger.info(
        f"[move] room={room.code} player={result.player} type={line_type} row={row} col={col} "
        f"claimed={len(result.claimed)} turn_changed={result.turn_changed}"
    )
    if result.winner:
        current_app.logger.info(f"[game-over] room={room.code} winner={result.winner} scores={payload['scores']}")
        schedule_room_eviction(current_app._get_current_object(), room.code)


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    from dotsdice import socketio

    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('create_room', handle_create_room, namespace=namespace)
    socketio.on_event('join_room', handle_join_room, namespace=namespace)
    socketio.on_event('leave_room', handle_leave_room, namespace=namespace)
    socketio.on_event('roll_dice', handle_roll_dice, namespace=namespace)
    socketio.on_event('make_move', handle_make_move, namespace=namespace)
    socketio.on_event('ping', handle_ping, namespace=namespace)
