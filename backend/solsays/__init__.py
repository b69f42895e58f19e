import random

from flask import Flask, current_app
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

from solsays.services.game import SessionRegistry

db = SQLAlchemy()
migrate = Migrate()
allowed_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)


def build_session_registry(config) -> SessionRegistry:
    seed = config.get('PATTERN_SEED')
    rng_factory = (lambda: random.Random(seed)) if seed is not None else None
    return SessionRegistry(
        config.get('DEFAULT_DIFFICULTY', 'novice'),
        rng_factory=rng_factory,
        max_sessions=int(config.get('MAX_SESSIONS', 1000)),
    )


def get_sessions() -> SessionRegistry:
    """Session registry owned by the current app."""
    return current_app.extensions['game_sessions']


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    flask_app.extensions['game_sessions'] = build_session_registry(flask_app.config)

    from solsays.main import main
    flask_app.register_blueprint(main)

    from solsays.api.game import game
    flask_app.register_blueprint(game, url_prefix='/api/game')

    from solsays.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the leaderboard tables."""
        import solsays.models  # noqa: F401
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            click.echo('Database has been reset!')

    flask_app.cli.add_command(db_reset_command)

    flask_app.logger.info(
        f"[app-init] game={flask_app.config.get('GAME_NAME')} difficulty={flask_app.config.get('DEFAULT_DIFFICULTY')}"
    )
    return flask_app
