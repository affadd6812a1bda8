"""Configuration knobs for composition and scoring.

Defaults give a five-piece build roughly 150 points in each focus stat
before mods, which lands focus stats at tier 7-8.
"""

from dataclasses import dataclass, field

from d2_planner.models.constants import PLAYABLE_CLASSES, ClassType


SCORE_CATEGORIES = (
    "stat_distribution",
    "synergy",
    "exotic_utility",
    "mod_effectiveness",
    "activity_optimization",
    "user_preference",
)

DEFAULT_SCORE_WEIGHTS: dict[str, float] = {
    "stat_distribution": 0.25,
    "synergy": 0.20,
    "exotic_utility": 0.15,
    "mod_effectiveness": 0.15,
    "activity_optimization": 0.15,
    "user_preference": 0.10,
}


@dataclass(slots=True)
class EngineConfig:
    """Tuneable parameters for the build pipeline."""

    default_class: ClassType = "hunter"   # when neither request nor exotic names one
    base_floor: int = 8                   # per-piece floor for every stat
    focus_investment: int = 30            # per-piece value for focus stats
    activity_floor: int = 20              # per-piece floor for activity-favored stats
    playstyle_floor: int = 16             # per-piece floor for playstyle stats
    mod_slots_per_piece: int = 3
    max_aspects: int = 2
    max_fragments: int = 4
    synergy_stat_tier: int = 7
    score_weights: dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_SCORE_WEIGHTS)
    )
    mod_score_cap: int = 8                # mod count that earns full marks
    strength_threshold: int = 80
    weakness_threshold: int = 50
    recommendation_threshold: int = 60    # advise only when the weakest category is below this
    alternatives_count: int = 3

    def __post_init__(self) -> None:
        if self.default_class not in PLAYABLE_CLASSES:
            raise ValueError(f"default_class must be one of {PLAYABLE_CLASSES}")
        for name in ("base_floor", "focus_investment", "activity_floor", "playstyle_floor"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        if self.mod_slots_per_piece < 0 or self.mod_score_cap <= 0:
            raise ValueError("mod capacity must be non-negative and mod_score_cap positive")
        if set(self.score_weights) != set(SCORE_CATEGORIES):
            raise ValueError(f"score_weights must cover exactly {SCORE_CATEGORIES}")
        if abs(sum(self.score_weights.values()) - 1.0) > 1e-6:
            raise ValueError("score_weights must sum to 1.0")
