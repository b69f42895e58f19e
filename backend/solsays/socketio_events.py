from flask_socketio import join_room, leave_room, emit
from flask import current_app
from solsays import socketio, get_sessions


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def _room_for(data):
    player_id = (data or {}).get('player_id')
    if player_id is None or str(player_id).strip() == '':
        emit('error', {'message': 'player_id is required'})
        return None, None
    player_id = str(player_id).strip()[:64]
    return player_id, f"session:{player_id}"


def handle_join_session(data):
    player_id, room = _room_for(data)
    if not room:
        return
    join_room(room)
    emit('joined', {'room': room})
    # Bring the new watcher up to date if a game is already running
    sessions = get_sessions()
    if player_id in sessions:
        with sessions.session(player_id) as manager:
            state = manager.get_game_state()
        emit('state_update', {'player_id': player_id, 'state': state.to_dict()})
    current_app.logger.info(f"[ws-join] room={room}")


def handle_leave_session(data):
    player_id, room = _room_for(data)
    if not room:
        return
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('join_session', handle_join_session, namespace='/ws')
    socketio.on_event('leave_session', handle_leave_session, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')

    if testing:
        # Test-only mirror on default namespace
        socketio.on_event('connect', handle_connect, namespace='/')
        socketio.on_event('join_session', handle_join_session, namespace='/')
        socketio.on_event('leave_session', handle_leave_session, namespace='/')
        socketio.on_event('ping', handle_ping, namespace='/')
