from dataclasses import dataclass

from tilematch.constants import BASE_POINTS, MATCH_BONUS


@dataclass(slots=True)
class ScoreRules:
    """Points awarded by a removal step: removed * base_points + match_bonus."""
    base_points: int = BASE_POINTS
    match_bonus: int = MATCH_BONUS

    def points_for(self, removed: int) -> int:
        if removed <= 0:
            return 0
        return removed * self.base_points + self.match_bonus
