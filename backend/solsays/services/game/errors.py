"""Validation errors raised by the game engine.

All of them are raised synchronously at the offending call and never retried
internally; the HTTP layer maps ``code`` onto a response.
"""


class GameError(Exception):
    code = 'game_error'

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {'error': self.message, 'code': self.code}


class InvalidLevel(GameError):
    """A level below 1 (or not an integer) was requested."""
    code = 'invalid_level'


class InvalidSignal(GameError):
    """A signal outside the active signal set."""
    code = 'invalid_signal'


class InvalidState(GameError):
    """Input submitted while no pattern is active or after a failure."""
    code = 'invalid_state'


class InvalidDifficulty(GameError):
    code = 'invalid_difficulty'
