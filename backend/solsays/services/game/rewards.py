from .signals import check_level


class RewardSystem:
    """Points for game events.

    Stateless: the caller accumulates the score and clamps it at zero after
    applying a mismatch penalty.
    """

    def __init__(self, step_points: int = 10, level_bonus: int = 50, mismatch_penalty: int = 5):
        if min(step_points, level_bonus, mismatch_penalty) < 0:
            raise ValueError('Reward values must be non-negative')
        self.step_points = step_points
        self.level_bonus = level_bonus
        self.mismatch_penalty = mismatch_penalty

    def score_for_correct_step(self, level: int, progress_index: int) -> int:
        # later steps of a pattern are worth slightly more
        check_level(level)
        return self.step_points * level + max(0, progress_index)

    def score_for_level_completion(self, level: int, pattern_length: int) -> int:
        check_level(level)
        return self.level_bonus * level + self.step_points * max(1, pattern_length)

    def penalty_for_mismatch(self, level: int) -> int:
        check_level(level)
        return self.mismatch_penalty * level
