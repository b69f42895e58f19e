from dataclasses import dataclass

from .errors import InvalidSignal
from .rewards import RewardSystem
from .signals import Difficulty, Signal


@dataclass(frozen=True)
class InputResult:
    matched: bool
    score_delta: int


class ButtonController:
    """Checks one player input against one expected step.

    Never touches the session; ``GameStateManager`` applies the result.
    """

    def __init__(self, reward_system: RewardSystem, difficulty='novice'):
        self.reward_system = reward_system
        self.difficulty = Difficulty.parse(difficulty)

    def validate(self, signal, level: int) -> Signal:
        """Return ``signal`` as a ``Signal`` if it is in play at ``level``."""
        parsed = Signal.parse(signal)
        count = self.difficulty.profile.signal_count(level)
        if parsed >= count:
            raise InvalidSignal(
                f'Signal {parsed.name.lower()} ({int(parsed)}) is not in play at level {level}; '
                f'valid codes are 0-{count - 1}'
            )
        return parsed

    def handle_input(self, expected_signal, actual_signal, level: int, progress_index: int) -> InputResult:
        expected = self.validate(expected_signal, level)
        actual = self.validate(actual_signal, level)
        if actual == expected:
            return InputResult(True, self.reward_system.score_for_correct_step(level, progress_index))
        return InputResult(False, -self.reward_system.penalty_for_mismatch(level))
