"""Result models produced by the product analyzers."""

from dataclasses import dataclass, field
from datetime import datetime

from nutriscan.domain.products import ProductRecord


@dataclass(frozen=True)
class AllergenFinding:
    """An allergen category detected in a product."""

    name: str
    severity: str
    description: str
    matched_keywords: tuple[str, ...]
    is_user_allergen: bool


@dataclass(frozen=True)
class AllergenWarning:
    """User-facing allergen alert."""

    level: str
    message: str
    action: str
    details: tuple[str, ...] = ()


@dataclass(frozen=True)
class AllergenReport:
    """Output of the allergen matcher."""

    has_allergens: bool
    has_user_allergens: bool
    all_allergens: tuple[AllergenFinding, ...]
    user_allergens: tuple[AllergenFinding, ...]
    safety_score: int
    warning: AllergenWarning


@dataclass(frozen=True)
class DietViolation:
    """A forbidden ingredient found for the active diet."""

    ingredient: str
    reason: str
    severity: str = "high"


@dataclass(frozen=True)
class DietWarning:
    """A cautionary finding for the active diet."""

    message: str
    reason: str | None = None
    ingredients: tuple[str, ...] = ()
    severity: str = "medium"


@dataclass(frozen=True)
class DietRecommendation:
    """Summary advice for the dietary check."""

    suitable: bool
    message: str
    details: str


@dataclass(frozen=True)
class DietReport:
    """Output of the dietary compatibility checker."""

    diet: str
    compatible: bool
    score: int
    violations: tuple[DietViolation, ...]
    warnings: tuple[DietWarning, ...]
    recommendation: DietRecommendation


@dataclass(frozen=True)
class NutrientOutlook:
    """Projected cumulative intake for one nutrient."""

    current: float
    target: float
    max: float | None
    remaining: float | None


@dataclass(frozen=True)
class GoalWarning:
    """Projected goal breach for one nutrient."""

    nutrient: str
    message: str
    severity: str


@dataclass(frozen=True)
class GoalProjection:
    """Forecast impact of one serving on today's goals."""

    serving_size: float
    impact: dict[str, float]
    remaining: dict[str, NutrientOutlook]
    percent_of_goal: dict[str, float]
    warnings: tuple[GoalWarning, ...]
    recommendations: tuple[str, ...]


@dataclass(frozen=True)
class HealthFactor:
    """A single contribution to the health score."""

    name: str
    impact: int
    value: str


@dataclass(frozen=True)
class HealthReport:
    """Output of the health scorer."""

    score: int
    factors: tuple[HealthFactor, ...]
    description: str
    recommendation: str


@dataclass(frozen=True)
class AnalysisVerdict:
    """Merged result of one analysis pass."""

    product: ProductRecord
    allergens: AllergenReport
    dietary: DietReport
    goals: GoalProjection
    health: HealthReport
    avoided_ingredients: tuple[str, ...] = ()
    analyzed_at: datetime | None = field(default=None)
