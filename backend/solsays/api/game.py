import time

from flask import Blueprint, jsonify, request, current_app
from solsays import get_sessions, socketio
from solsays.services.game import (
    Difficulty,
    GameError,
    InvalidLevel,
    InvalidState,
    PatternController,
    build_game,
)
from solsays.services.game.signals import check_level


game = Blueprint('game', __name__)

_STATUS_BY_ERROR = {
    InvalidState: 409,
}


@game.errorhandler(GameError)
def handle_game_error(exc: GameError):
    status = _STATUS_BY_ERROR.get(type(exc), 400)
    current_app.logger.info(f"[game-error] path={request.path} code={exc.code} message={exc.message}")
    return jsonify(exc.to_dict()), status


def _player_id(data=None) -> str:
    data = data or {}
    raw = data.get('player_id', data.get('playerId'))
    if raw is None:
        raw = request.args.get('player_id')
    if raw is None or str(raw).strip() == '':
        return str(current_app.config.get('DEFAULT_PLAYER_ID', 'default'))
    return str(raw).strip()[:64]


def _emit_state(player_id: str, state: dict) -> None:
    socketio.emit('state_update', {'player_id': player_id, 'state': state},
                  to=f"session:{player_id}", namespace='/ws')


def _debounced(player_id: str) -> bool:
    try:
        debounce_ms = int(current_app.config.get('INPUT_DEBOUNCE_MS', 0))
    except (TypeError, ValueError):
        debounce_ms = 0
    if debounce_ms <= 0:
        return False
    last_input = current_app.extensions.setdefault('input_debounce', {})
    now = time.time() * 1000.0
    if now - last_input.get(player_id, 0) < debounce_ms:
        return True
    last_input[player_id] = now
    sessions = get_sessions()
    if len(last_input) > sessions.max_sessions:
        for stale in [pid for pid in last_input if pid not in sessions]:
            del last_input[stale]
    return False


@game.route('/start', methods=['POST'])
def start_game():
    data = request.get_json(silent=True) or {}
    player_id = _player_id(data)
    state = get_sessions().start(player_id, data.get('difficulty'))
    payload = state.to_dict()
    current_app.logger.info(
        f"[game-start] player={player_id} difficulty={state.difficulty.value} length={len(state.pattern)}"
    )
    _emit_state(player_id, payload)
    return jsonify({'success': True, 'pattern': payload['pattern'], 'state': payload})


@game.route('/state', methods=['GET'])
def get_game_state():
    player_id = _player_id()
    sessions = get_sessions()
    if player_id not in sessions:
        # Never started: report an idle session without creating one
        return jsonify(build_game(sessions.default_difficulty).get_game_state().to_dict())
    with sessions.session(player_id) as manager:
        state = manager.get_game_state()
    return jsonify(state.to_dict())


@game.route('/input', methods=['POST'])
def submit_input():
    data = request.get_json(silent=True) or {}
    if 'input' not in data:
        return jsonify({'error': 'input is required'}), 400
    player_id = _player_id(data)
    sessions = get_sessions()
    if player_id not in sessions:
        raise InvalidState(f'No game in progress for player {player_id}; start a game first')
    if _debounced(player_id):
        return jsonify({'message': 'debounced'}), 202

    with sessions.session(player_id) as manager:
        manager.handle_input(data['input'])
        state = manager.get_game_state()
    payload = state.to_dict()
    _emit_state(player_id, payload)

    if state.level_failed:
        current_app.logger.info(f"[level-failed] player={player_id} level={state.level} score={state.score}")
        return jsonify({'success': False, 'message': 'Level failed', 'state': payload})
    if state.level_completed:
        current_app.logger.info(f"[level-completed] player={player_id} next_level={state.level} score={state.score}")
        return jsonify({'success': True, 'message': 'Level completed', 'state': payload})
    return jsonify({'success': True, 'state': payload})


@game.route('/pattern', methods=['POST'])
def preview_pattern():
    """Draw a pattern for ``level`` without touching any session."""
    data = request.get_json(silent=True) or {}
    if 'level' not in data:
        return jsonify({'error': 'level is required'}), 400
    level = check_level(data['level'])
    max_level = int(current_app.config.get('MAX_PREVIEW_LEVEL', 100))
    if level > max_level:
        raise InvalidLevel(f'Level must be <= {max_level}, got {level}')
    sessions = get_sessions()
    difficulty = Difficulty.parse(data.get('difficulty'), default=sessions.default_difficulty)
    pattern = PatternController(difficulty, rng=sessions.rng_factory()).generate_new_pattern(level)
    return jsonify({'level': level, 'difficulty': difficulty.value, 'pattern': [int(s) for s in pattern]})


@game.route('/session', methods=['DELETE'])
def end_session():
    """Release the player's session; a later start builds a fresh one."""
    data = request.get_json(silent=True) or {}
    player_id = _player_id(data)
    released = get_sessions().discard(player_id)
    current_app.extensions.get('input_debounce', {}).pop(player_id, None)
    current_app.logger.info(f"[game-end] player={player_id} released={released}")
    if not released:
        return jsonify({'error': f'No game in progress for player {player_id}'}), 404
    return jsonify({'success': True})
