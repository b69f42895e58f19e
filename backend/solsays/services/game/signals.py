"""Signals, patterns and difficulty profiles."""

import re
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, Optional, Tuple

from .errors import InvalidDifficulty, InvalidLevel, InvalidSignal


class Signal(IntEnum):
    """One button/colour on the board. Lower codes are always in play."""
    RED = 0
    GREEN = 1
    BLUE = 2
    YELLOW = 3
    PURPLE = 4
    ORANGE = 5
    CYAN = 6
    PINK = 7

    @classmethod
    def parse(cls, value: Any) -> 'Signal':
        """Convert a request payload value (code, numeric string or colour name)."""
        if isinstance(value, bool):
            raise InvalidSignal(f'Invalid signal: {value!r}')
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise InvalidSignal(f'Invalid signal: {value!r}') from None
        if isinstance(value, str):
            text = value.strip()
            if re.fullmatch(r'-?[0-9]{1,9}', text):
                return cls.parse(int(text))
            member = cls.__members__.get(text.upper())
            if member is not None:
                return member
        raise InvalidSignal(f'Invalid signal: {value!r}')


Pattern = Tuple[Signal, ...]


@dataclass(frozen=True)
class DifficultyProfile:
    """Length and signal-set growth for one difficulty.

    ``widen_every`` is the number of levels between each extra signal; 0 keeps
    the signal set fixed at ``base_signals``.
    """
    base_length: int
    growth: int
    base_signals: int
    max_signals: int
    widen_every: int = 0

    def pattern_length(self, level: int) -> int:
        check_level(level)
        return self.base_length + self.growth * (level - 1)

    def signal_count(self, level: int) -> int:
        check_level(level)
        if not self.widen_every:
            return self.base_signals
        return min(self.max_signals, self.base_signals + (level - 1) // self.widen_every)


class Difficulty(str, Enum):
    NOVICE = 'novice'
    INTERMEDIATE = 'intermediate'
    EXPERT = 'expert'

    @classmethod
    def parse(cls, value: Any, default: Optional['Difficulty'] = None) -> 'Difficulty':
        if value is None or value == '':
            if default is None:
                raise InvalidDifficulty('Difficulty is required')
            return cls.parse(default)
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        choices = ', '.join(d.value for d in cls)
        raise InvalidDifficulty(f'Unknown difficulty {value!r}; expected one of: {choices}')

    @property
    def profile(self) -> DifficultyProfile:
        return PROFILES[self]


PROFILES: Dict[Difficulty, DifficultyProfile] = {
    Difficulty.NOVICE: DifficultyProfile(base_length=3, growth=1, base_signals=4, max_signals=4),
    Difficulty.INTERMEDIATE: DifficultyProfile(base_length=4, growth=1, base_signals=4, max_signals=6, widen_every=3),
    Difficulty.EXPERT: DifficultyProfile(base_length=5, growth=2, base_signals=6, max_signals=len(Signal), widen_every=2),
}


def check_level(level: Any) -> int:
    if isinstance(level, bool) or not isinstance(level, int):
        raise InvalidLevel(f'Level must be an integer, got {level!r}')
    if level < 1:
        raise InvalidLevel(f'Level must be >= 1, got {level}')
    return level
