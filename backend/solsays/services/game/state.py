"""Session state machine.

Phases::

    idle --reset--> awaiting_input --match, pattern done--> level_completed
                         |   ^                                   |
                         |   +---------- next input -------------+
                         +--mismatch--> level_failed --reset--> awaiting_input

``level_completed`` is transient: the next pattern is already drawn when it is
entered, and the following input is played against it. ``level_failed`` is
terminal until ``reset()``.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .buttons import ButtonController
from .errors import InvalidState
from .patterns import PatternController
from .rewards import RewardSystem
from .signals import Difficulty, Pattern


class GamePhase(str, Enum):
    IDLE = 'idle'
    AWAITING_INPUT = 'awaiting_input'
    LEVEL_COMPLETED = 'level_completed'
    LEVEL_FAILED = 'level_failed'


@dataclass
class Session:
    level: int = 1
    pattern: Pattern = ()
    progress_index: int = 0
    score: int = 0
    level_completed: bool = False
    level_failed: bool = False
    phase: GamePhase = GamePhase.IDLE


@dataclass(frozen=True)
class GameState:
    """Read-only snapshot of a session."""
    level: int
    pattern: Pattern
    progress_index: int
    score: int
    level_completed: bool
    level_failed: bool
    phase: GamePhase
    difficulty: Difficulty

    def to_dict(self) -> dict:
        return {
            'level': self.level,
            'pattern': [int(s) for s in self.pattern],
            'progressIndex': self.progress_index,
            'score': self.score,
            'levelCompleted': self.level_completed,
            'levelFailed': self.level_failed,
            'phase': self.phase.value,
            'difficulty': self.difficulty.value,
        }


class GameStateManager:
    """Owns one session and applies every transition to it.

    Not thread-safe: callers serving concurrent requests must serialise access
    per session (see ``SessionRegistry``).
    """

    def __init__(self, pattern_controller: PatternController, button_controller: ButtonController):
        if pattern_controller.difficulty != button_controller.difficulty:
            raise ValueError(
                f'Pattern difficulty {pattern_controller.difficulty.value} does not match '
                f'button difficulty {button_controller.difficulty.value}'
            )
        self.pattern_controller = pattern_controller
        self.button_controller = button_controller
        self._session = Session()

    @property
    def difficulty(self) -> Difficulty:
        return self.pattern_controller.difficulty

    @property
    def reward_system(self) -> RewardSystem:
        return self.button_controller.reward_system

    def generate_new_pattern(self, level: int) -> Pattern:
        return self.pattern_controller.generate_new_pattern(level)

    def reset(self) -> None:
        self._session = Session(
            pattern=self.generate_new_pattern(1),
            phase=GamePhase.AWAITING_INPUT,
        )

    def handle_input(self, signal) -> None:
        s = self._session
        if s.phase == GamePhase.IDLE:
            raise InvalidState('No game in progress; start a game first')
        if s.phase == GamePhase.LEVEL_FAILED:
            raise InvalidState('Level failed; reset to play again')

        expected = s.pattern[s.progress_index]
        result = self.button_controller.handle_input(expected, signal, s.level, s.progress_index)

        # completion is reported once, up to the next accepted input
        s.level_completed = False
        s.phase = GamePhase.AWAITING_INPUT
        if not result.matched:
            s.score = max(0, s.score + result.score_delta)
            s.level_failed = True
            s.phase = GamePhase.LEVEL_FAILED
            return

        s.score += result.score_delta
        s.progress_index += 1
        if s.progress_index < len(s.pattern):
            return

        s.score += self.reward_system.score_for_level_completion(s.level, len(s.pattern))
        s.level += 1
        s.pattern = self.generate_new_pattern(s.level)
        s.progress_index = 0
        s.level_completed = True
        s.phase = GamePhase.LEVEL_COMPLETED

    def get_game_state(self) -> GameState:
        s = self._session
        return GameState(
            level=s.level,
            pattern=tuple(s.pattern),
            progress_index=s.progress_index,
            score=s.score,
            level_completed=s.level_completed,
            level_failed=s.level_failed,
            phase=s.phase,
            difficulty=self.difficulty,
        )


def build_game(difficulty='novice', rng: Optional[random.Random] = None,
               reward_system: Optional[RewardSystem] = None) -> GameStateManager:
    """Wire a manager with its controllers for one difficulty."""
    rewards = reward_system or RewardSystem()
    return GameStateManager(
        PatternController(difficulty, rng=rng),
        ButtonController(rewards, difficulty),
    )
