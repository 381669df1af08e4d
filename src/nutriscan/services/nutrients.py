"""Helpers for reading per-100g nutrition values."""

import math
import re
from collections.abc import Mapping

from nutriscan.domain.catalogs import TRACKED_NUTRIENTS

# tracked nutrient -> OpenFoodFacts keys, in lookup order
NUTRIENT_KEYS: dict[str, tuple[str, ...]] = {
    "calories": ("energy-kcal", "energy"),
    "sugar": ("sugars", "sugar"),
    "sodium": ("sodium",),
    "protein": ("proteins", "protein"),
    "fiber": ("fiber",),
    "fat": ("fat",),
}

_NON_NUMERIC = re.compile(r"[^\d.]")


def parse_nutrient_value(value: object) -> float | None:
    """Parse a numeric or textual nutrition value.

    Strings are stripped of everything except digits and dots before
    parsing, so ``"12.5 g"`` reads as ``12.5``. Returns ``None`` when the
    value is missing or cannot be parsed.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
        return number if math.isfinite(number) else None
    if isinstance(value, str):
        cleaned = _NON_NUMERIC.sub("", value)
        try:
            return float(cleaned)
        except ValueError:
            return None
    return None


def nutrient_value(
    nutriments: Mapping[str, object] | None, nutrient: str
) -> float | None:
    """Return the per-100g value of a tracked nutrient, if parseable."""
    if not nutriments:
        return None
    for key in NUTRIENT_KEYS.get(nutrient, (nutrient,)):
        parsed = parse_nutrient_value(nutriments.get(key))
        if parsed is not None:
            return parsed
    return None


def scale_to_serving(
    nutriments: Mapping[str, object] | None, serving_size: float
) -> dict[str, float]:
    """Scale every tracked nutrient to a serving size in grams.

    Missing or unparsable values count as zero.
    """
    factor = serving_size / 100
    return {
        nutrient: (nutrient_value(nutriments, nutrient) or 0.0) * factor
        for nutrient in TRACKED_NUTRIENTS
    }
