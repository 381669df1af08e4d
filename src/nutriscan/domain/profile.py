"""Domain models for the user's dietary profile and goals."""

from dataclasses import dataclass, field

from nutriscan.domain.catalogs import DEFAULT_GOAL_VALUES, STANDARD_DIET


@dataclass(frozen=True)
class UserProfile:
    """Active diet, declared allergens and extra ingredients to avoid."""

    diet: str = STANDARD_DIET
    allergens: frozenset[str] = field(default_factory=frozenset)
    avoid_ingredients: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class NutrientGoal:
    """Daily target for a nutrient with optional bounds."""

    target: float
    max: float | None = None
    min: float | None = None

    def __post_init__(self) -> None:
        if self.target <= 0:
            raise ValueError("Goal target must be positive")
        if self.max is not None and self.max < self.target:
            raise ValueError("Goal max must be greater than or equal to target")
        if self.min is not None and self.min > self.target:
            raise ValueError("Goal min must be less than or equal to target")


GoalSet = dict[str, NutrientGoal]


def default_goals() -> GoalSet:
    """Return a fresh copy of the default goal set."""
    return {
        nutrient: NutrientGoal(target=target, max=maximum, min=minimum)
        for nutrient, (target, maximum, minimum) in DEFAULT_GOAL_VALUES.items()
    }
