import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///solsays.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    GAME_NAME = os.environ.get('GAME_NAME', 'solsays')
    # Difficulty used when /api/game/start does not name one
    DEFAULT_DIFFICULTY = os.environ.get('DEFAULT_DIFFICULTY', 'novice')
    # Session used by clients that do not send a player_id
    DEFAULT_PLAYER_ID = os.environ.get('DEFAULT_PLAYER_ID', 'default')
    # Optional: seed pattern generation (demos, reproducible runs). Empty disables.
    PATTERN_SEED = os.environ.get('PATTERN_SEED') or None
    # Optional: debounce repeated inputs per player (ms). 0 disables.
    INPUT_DEBOUNCE_MS = int(os.environ.get('INPUT_DEBOUNCE_MS', '0'))
    # Rows returned by GET /api/scores when no limit is given
    LEADERBOARD_LIMIT = int(os.environ.get('LEADERBOARD_LIMIT', '10'))
    # Live sessions kept in memory; the least recently used one is evicted beyond this
    MAX_SESSIONS = int(os.environ.get('MAX_SESSIONS', '1000'))
    # Highest level POST /api/game/pattern will draw
    MAX_PREVIEW_LEVEL = int(os.environ.get('MAX_PREVIEW_LEVEL', '100'))
    # Only reported by /api/health; the bot itself lives outside this service
    TELEGRAM_BOT_TOKEN = os.environ.get('TELEGRAM_BOT_TOKEN')
