import random
from typing import Optional

from .signals import Difficulty, Pattern, Signal, check_level


class PatternController:
    """Draws the target sequence for a level.

    The length is a pure function of difficulty and level; the content comes
    from ``rng``, which callers may seed (``random.Random(42)``) to get a
    reproducible run.
    """

    def __init__(self, difficulty='novice', rng: Optional[random.Random] = None):
        self.difficulty = Difficulty.parse(difficulty)
        self.profile = self.difficulty.profile
        self.rng = rng or random.Random()

    def pattern_length(self, level: int) -> int:
        return self.profile.pattern_length(level)

    def signal_count(self, level: int) -> int:
        return self.profile.signal_count(level)

    def generate_new_pattern(self, level: int) -> Pattern:
        check_level(level)
        count = self.signal_count(level)
        return tuple(Signal(self.rng.randrange(count)) for _ in range(self.pattern_length(level)))
