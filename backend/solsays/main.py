from flask import Blueprint, request, jsonify, current_app
from solsays import db, get_sessions
from solsays.models import LeaderboardEntry

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Sol Says game server!'})


@main.route('/api/health')
def health():
    token = current_app.config.get('TELEGRAM_BOT_TOKEN')
    return jsonify({
        'status': 'ok',
        'game': current_app.config.get('GAME_NAME', 'solsays'),
        'sessions': len(get_sessions()),
        'telegram': {
            'configured': bool(token),
            'botToken': '✓ Set' if token else '✗ Missing',
        },
    })


@main.route('/api/score', methods=['POST'])
def submit_score():
    """Record a player's score on the leaderboard.

    ``force`` (default true) overwrites the stored score even when it is
    lower; with ``force: false`` only an improvement is accepted.
    """
    data = request.get_json(silent=True) or {}
    user_id = data.get('userId', data.get('user_id'))
    score = data.get('score')
    force = data.get('force', True)
    if user_id is None or str(user_id).strip() == '':
        return jsonify({'error': 'userId is required'}), 400
    if isinstance(score, bool) or not isinstance(score, int) or score < 0:
        return jsonify({'error': 'score must be a non-negative integer'}), 400
    if not isinstance(force, bool):
        return jsonify({'error': 'force must be a boolean'}), 400

    user_id = str(user_id).strip()
    entry = LeaderboardEntry.query.filter_by(user_id=user_id).first()
    if entry is None:
        entry = LeaderboardEntry(user_id=user_id, score=score)
    elif not force and score <= entry.score:
        return jsonify({'error': 'score not modified', 'entry': entry.to_dict()}), 400
    else:
        entry.score = score
    db.session.add(entry)
    db.session.commit()
    current_app.logger.info(f"[score] user={user_id} score={score} force={bool(force)}")
    return jsonify({'success': True, 'entry': entry.to_dict(), 'rank': entry.rank()})


@main.route('/api/scores')
def leaderboard():
    limit = request.args.get('limit', type=int) or current_app.config.get('LEADERBOARD_LIMIT', 10)
    limit = max(1, min(limit, 100))
    return jsonify([e.to_dict() for e in LeaderboardEntry.top(limit)])
