def _wrong(expected, signal_count=4):
    return (int(expected) + 1) % signal_count


def _start(client, **body):
    res = client.post('/api/game/start', json=body)
    assert res.status_code == 200
    return res.get_json()


def test_index_and_health(client):
    assert client.get('/').status_code == 200
    res = client.get('/api/health')
    assert res.status_code == 200
    data = res.get_json()
    assert data['status'] == 'ok'
    assert data['game'] == 'solsays'
    assert data['sessions'] == 0
    assert data['telegram']['configured'] is False
    assert data['telegram']['botToken'] == '✗ Missing'


def test_health_reports_configured_token(flask_app, client):
    flask_app.config['TELEGRAM_BOT_TOKEN'] = 'abc'
    data = client.get('/api/health').get_json()
    assert data['telegram']['configured'] is True
    assert data['telegram']['botToken'] == '✓ Set'


def test_start_returns_level_one_pattern(client):
    data = _start(client, player_id='alice')
    assert data['success'] is True
    state = data['state']
    assert data['pattern'] == state['pattern']
    assert len(state['pattern']) == 3
    assert state['level'] == 1
    assert state['progressIndex'] == 0
    assert state['score'] == 0
    assert state['levelCompleted'] is False
    assert state['levelFailed'] is False
    assert state['difficulty'] == 'novice'


def test_start_with_difficulty(client):
    state = _start(client, player_id='bob', difficulty='Expert')['state']
    assert state['difficulty'] == 'expert'
    assert len(state['pattern']) == 5


def test_start_unknown_difficulty(client):
    res = client.post('/api/game/start', json={'difficulty': 'impossible'})
    assert res.status_code == 400
    assert res.get_json()['code'] == 'invalid_difficulty'


def test_state_before_start_is_idle(client):
    res = client.get('/api/game/state?player_id=ghost')
    assert res.status_code == 200
    state = res.get_json()
    assert state['phase'] == 'idle'
    assert state['pattern'] == []
    # reading did not create a session
    assert client.get('/api/health').get_json()['sessions'] == 0


def test_state_is_idempotent(client):
    _start(client, player_id='alice')
    first = client.get('/api/game/state?player_id=alice').get_json()
    second = client.get('/api/game/state?player_id=alice').get_json()
    assert first == second


def test_full_level_flow(client):
    pattern = _start(client, player_id='alice')['pattern']

    res = client.post('/api/game/input', json={'player_id': 'alice', 'input': pattern[0]})
    data = res.get_json()
    assert data['success'] is True
    assert 'message' not in data
    assert data['state']['progressIndex'] == 1
    assert data['state']['score'] == 10

    client.post('/api/game/input', json={'player_id': 'alice', 'input': pattern[1]})
    data = client.post('/api/game/input', json={'player_id': 'alice', 'input': pattern[2]}).get_json()
    assert data['success'] is True
    assert data['message'] == 'Level completed'
    state = data['state']
    assert state['levelCompleted'] is True
    assert state['level'] == 2
    assert state['progressIndex'] == 0
    assert len(state['pattern']) == 4
    assert state['score'] == 113

    # the completion flag is still visible to a plain state read
    assert client.get('/api/game/state?player_id=alice').get_json()['levelCompleted'] is True


def test_mismatch_then_reset(client):
    pattern = _start(client, player_id='carol')['pattern']
    data = client.post('/api/game/input', json={'player_id': 'carol', 'input': _wrong(pattern[0])}).get_json()
    assert data['success'] is False
    assert data['message'] == 'Level failed'
    assert data['state']['levelFailed'] is True
    assert data['state']['score'] == 0

    res = client.post('/api/game/input', json={'player_id': 'carol', 'input': pattern[0]})
    assert res.status_code == 409
    assert res.get_json()['code'] == 'invalid_state'

    state = _start(client, player_id='carol')['state']
    assert state['levelFailed'] is False
    assert state['level'] == 1


def test_input_accepts_colour_names(client):
    pattern = _start(client, player_id='dave')['pattern']
    names = ['red', 'green', 'blue', 'yellow']
    data = client.post('/api/game/input', json={'player_id': 'dave', 'input': names[pattern[0]]}).get_json()
    assert data['state']['progressIndex'] == 1


def test_input_validation(client):
    _start(client)
    res = client.post('/api/game/input', json={})
    assert res.status_code == 400
    res = client.post('/api/game/input', json={'input': 7})
    assert res.status_code == 400
    assert res.get_json()['code'] == 'invalid_signal'
    res = client.post('/api/game/input', json={'input': 'chartreuse'})
    assert res.status_code == 400
    for malformed in ('--1', '²', '1' * 5000):
        res = client.post('/api/game/input', json={'input': malformed})
        assert res.status_code == 400
        assert res.get_json()['code'] == 'invalid_signal'


def test_input_without_session(client):
    res = client.post('/api/game/input', json={'player_id': 'nobody', 'input': 0})
    assert res.status_code == 409


def test_default_player_session(client):
    # clients that never send a player_id share the configured default session
    pattern = _start(client)['pattern']
    client.post('/api/game/input', json={'input': pattern[0]})
    state = client.get('/api/game/state').get_json()
    assert state['progressIndex'] == 1


def test_players_are_independent(client):
    a = _start(client, player_id='a')['pattern']
    _start(client, player_id='b')
    client.post('/api/game/input', json={'player_id': 'a', 'input': a[0]})
    assert client.get('/api/game/state?player_id=a').get_json()['progressIndex'] == 1
    assert client.get('/api/game/state?player_id=b').get_json()['progressIndex'] == 0


def test_input_debounce(flask_app, client):
    flask_app.config['INPUT_DEBOUNCE_MS'] = 60_000
    pattern = _start(client, player_id='eve')['pattern']
    assert client.post('/api/game/input', json={'player_id': 'eve', 'input': pattern[0]}).status_code == 200
    res = client.post('/api/game/input', json={'player_id': 'eve', 'input': pattern[1]})
    assert res.status_code == 202
    assert res.get_json()['message'] == 'debounced'
    assert client.get('/api/game/state?player_id=eve').get_json()['progressIndex'] == 1


def test_pattern_preview(client):
    res = client.post('/api/game/pattern', json={'level': 3, 'difficulty': 'novice'})
    assert res.status_code == 200
    data = res.get_json()
    assert len(data['pattern']) == 5
    assert all(0 <= s < 4 for s in data['pattern'])

    res = client.post('/api/game/pattern', json={'level': 0})
    assert res.status_code == 400
    assert res.get_json()['code'] == 'invalid_level'
    assert client.post('/api/game/pattern', json={}).status_code == 400


def test_submit_score_and_leaderboard(client):
    res = client.post('/api/score', json={'userId': 7, 'score': 120})
    assert res.status_code == 200
    data = res.get_json()
    assert data['success'] is True
    assert data['entry']['user_id'] == '7'
    assert data['rank'] == 1

    client.post('/api/score', json={'userId': 'zed', 'score': 300})
    board = client.get('/api/scores').get_json()
    assert [e['user_id'] for e in board] == ['zed', '7']

    # forced by default: a lower score overwrites
    client.post('/api/score', json={'userId': 'zed', 'score': 50})
    board = client.get('/api/scores?limit=1').get_json()
    assert len(board) == 1
    assert board[0]['user_id'] == '7'


def test_submit_score_without_force(client):
    client.post('/api/score', json={'userId': 'u1', 'score': 100})
    res = client.post('/api/score', json={'userId': 'u1', 'score': 90, 'force': False})
    assert res.status_code == 400
    assert res.get_json()['error'] == 'score not modified'
    res = client.post('/api/score', json={'userId': 'u1', 'score': 150, 'force': False})
    assert res.status_code == 200
    assert res.get_json()['entry']['score'] == 150


def test_submit_score_validation(client):
    assert client.post('/api/score', json={'score': 10}).status_code == 400
    assert client.post('/api/score', json={'userId': 'x', 'score': -1}).status_code == 400
    assert client.post('/api/score', json={'userId': 'x', 'score': '10'}).status_code == 400
    assert client.post('/api/score', json={'userId': 'x', 'score': True}).status_code == 400
    res = client.post('/api/score', json={'userId': 'x', 'score': 10, 'force': 'false'})
    assert res.status_code == 400
    assert res.get_json()['error'] == 'force must be a boolean'
    assert client.post('/api/score', json={'userId': 'x', 'score': 10, 'force': 0}).status_code == 400
    # nothing was recorded by the rejected requests
    assert client.get('/api/scores').get_json() == []


def test_unknown_route(client):
    assert client.get('/api/nothing').status_code == 404


def test_pattern_preview_level_cap(flask_app, client):
    flask_app.config['MAX_PREVIEW_LEVEL'] = 20
    assert client.post('/api/game/pattern', json={'level': 20}).status_code == 200
    res = client.post('/api/game/pattern', json={'level': 100_000_000})
    assert res.status_code == 400
    assert res.get_json()['code'] == 'invalid_level'
    res = client.post('/api/game/pattern', json={'level': '3'})
    assert res.status_code == 400


def test_end_session_releases_player(client):
    _start(client, player_id='frank')
    assert client.get('/api/health').get_json()['sessions'] == 1
    res = client.delete('/api/game/session', json={'player_id': 'frank'})
    assert res.status_code == 200
    assert client.get('/api/health').get_json()['sessions'] == 0
    assert client.get('/api/game/state?player_id=frank').get_json()['phase'] == 'idle'
    assert client.post('/api/game/input', json={'player_id': 'frank', 'input': 0}).status_code == 409
    assert client.delete('/api/game/session', json={'player_id': 'frank'}).status_code == 404


def test_sessions_are_bounded(client):
    sessions = client.application.extensions['game_sessions']
    sessions.max_sessions = 5
    for i in range(20):
        _start(client, player_id=f'p{i}')
    assert client.get('/api/health').get_json()['sessions'] == 5
    assert client.get('/api/game/state?player_id=p0').get_json()['phase'] == 'idle'
    assert client.get('/api/game/state?player_id=p19').get_json()['phase'] == 'awaiting_input'
