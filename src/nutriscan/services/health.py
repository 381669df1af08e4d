"""Overall health scoring for products."""

from collections.abc import Mapping
from dataclasses import dataclass

from nutriscan.domain.products import IngredientItem, ProductRecord
from nutriscan.domain.verdict import HealthFactor, HealthReport
from nutriscan.services.nutrients import nutrient_value

BASE_SCORE = 50

GRADE_POINTS = {"A": 40, "B": 25, "C": 10, "D": -10, "E": -30}

EXCELLENT = 80
GOOD = 60
MODERATE = 40

_DESCRIPTIONS = (
    (
        EXCELLENT,
        "Excellent nutritional profile with beneficial ingredients and balanced "
        "nutrition.",
        "Great choice! This product aligns well with a healthy diet.",
    ),
    (
        GOOD,
        "Good nutritional profile suitable for regular consumption.",
        "Good option. Enjoy in moderation as part of a balanced diet.",
    ),
    (
        MODERATE,
        "Moderate nutritional profile. Consider portion sizes and consumption "
        "frequency.",
        "Moderate choice. Balance with healthier options throughout the day.",
    ),
)
_LOWER_DESCRIPTION = (
    "Lower nutritional profile. Best consumed occasionally as part of a "
    "balanced diet."
)
_LOWER_RECOMMENDATION = (
    "Consider healthier alternatives or limit consumption frequency."
)


@dataclass
class HealthScorer:
    """Combine grade, nutrient thresholds and ingredient quality into a score."""

    base_score: int = BASE_SCORE

    def score(self, product: ProductRecord) -> HealthReport:
        """Return a 0-100 score with the factors that produced it."""
        factors: list[HealthFactor] = []

        grade = (product.nutrition_grade or "").strip().upper()
        if grade:
            factors.append(
                HealthFactor(
                    name="Nutri-Score", impact=GRADE_POINTS.get(grade, 0), value=grade
                )
            )

        if product.nutriments:
            factors.extend(_nutrition_factors(product.nutriments))

        if any(item.status for item in product.ingredients):
            factors.append(_ingredient_factor(product.ingredients))

        total = self.base_score + sum(factor.impact for factor in factors)
        clamped = max(0, min(100, total))
        description, recommendation = _describe(clamped)
        return HealthReport(
            score=round(clamped),
            factors=tuple(factors),
            description=description,
            recommendation=recommendation,
        )


def _nutrition_factors(nutriments: Mapping[str, object]) -> list[HealthFactor]:
    factors: list[HealthFactor] = []

    sugar = nutrient_value(nutriments, "sugar")
    if sugar is not None:
        if sugar < 5:  # noqa: PLR2004
            factors.append(HealthFactor("Low Sugar", 10, f"{sugar:g}g"))
        elif sugar > 15:  # noqa: PLR2004
            factors.append(HealthFactor("High Sugar", -15, f"{sugar:g}g"))

    sodium_g = nutrient_value(nutriments, "sodium")
    if sodium_g is not None:
        sodium = round(sodium_g * 1000, 3)
        if sodium < 300:  # noqa: PLR2004
            factors.append(HealthFactor("Low Sodium", 10, f"{sodium:g}mg"))
        elif sodium > 800:  # noqa: PLR2004
            factors.append(HealthFactor("High Sodium", -10, f"{sodium:g}mg"))

    fat = nutrient_value(nutriments, "fat")
    if fat is not None and fat > 30:  # noqa: PLR2004
        factors.append(HealthFactor("High Fat", -10, f"{fat:g}g"))

    fiber = nutrient_value(nutriments, "fiber")
    if fiber is not None and fiber > 5:  # noqa: PLR2004
        factors.append(HealthFactor("Good Fiber", 5, f"{fiber:g}g"))

    protein = nutrient_value(nutriments, "protein")
    if protein is not None and protein > 10:  # noqa: PLR2004
        factors.append(HealthFactor("High Protein", 5, f"{protein:g}g"))

    return factors


def _ingredient_factor(ingredients: tuple[IngredientItem, ...]) -> HealthFactor:
    good = sum(1 for item in ingredients if item.status == "good")
    bad = sum(1 for item in ingredients if item.status == "bad")
    return HealthFactor(
        name="Ingredient Quality",
        impact=good * 2 - bad * 5,
        value=f"{good} good, {bad} concerning",
    )


def _describe(score: float) -> tuple[str, str]:
    for threshold, description, recommendation in _DESCRIPTIONS:
        if score >= threshold:
            return description, recommendation
    return _LOWER_DESCRIPTION, _LOWER_RECOMMENDATION
