"""Allergen detection against the user's declared allergens."""

from collections.abc import Collection
from dataclasses import dataclass

from nutriscan.domain.catalogs import AllergenCatalog
from nutriscan.domain.products import ProductRecord
from nutriscan.domain.verdict import AllergenFinding, AllergenReport, AllergenWarning

_SEVERITY_PENALTY = {"high": 40, "medium": 20}


@dataclass
class AllergenMatcher:
    """Match product ingredients and allergen tags against a catalog.

    Matching is plain case-insensitive substring containment, so ``"egg"``
    also matches ``"eggplant"``.
    """

    catalog: AllergenCatalog

    def detect(
        self, product: ProductRecord, user_allergens: Collection[str]
    ) -> AllergenReport:
        """Return detected allergens and the user-specific alert."""
        ingredients_text = (product.ingredients_text or "").lower()
        tags = [
            tag.strip().lower() for tag in (product.allergens or "").split(",")
        ]
        tags = [tag for tag in tags if tag]

        detected: list[AllergenFinding] = []
        for rule in self.catalog.rules:
            matched = tuple(
                keyword
                for keyword in rule.keywords
                if keyword.lower() in ingredients_text
            )
            tagged = any(rule.name in tag for tag in tags)
            if not matched and not tagged:
                continue
            detected.append(
                AllergenFinding(
                    name=rule.name,
                    severity=rule.severity,
                    description=rule.description,
                    matched_keywords=matched,
                    is_user_allergen=rule.name in user_allergens,
                )
            )

        user_matches = tuple(item for item in detected if item.is_user_allergen)
        return AllergenReport(
            has_allergens=bool(detected),
            has_user_allergens=bool(user_matches),
            all_allergens=tuple(detected),
            user_allergens=user_matches,
            safety_score=_safety_score(user_matches),
            warning=_build_warning(user_matches),
        )


def _safety_score(user_matches: tuple[AllergenFinding, ...]) -> int:
    score = 100
    for finding in user_matches:
        score -= _SEVERITY_PENALTY.get(finding.severity, 0)
    return max(0, score)


def _build_warning(user_matches: tuple[AllergenFinding, ...]) -> AllergenWarning:
    if not user_matches:
        return AllergenWarning(
            level="safe",
            message="No known allergens detected for your profile",
            action="Safe to consume based on allergen profile",
        )
    names = ", ".join(finding.name for finding in user_matches)
    has_high = any(finding.severity == "high" for finding in user_matches)
    return AllergenWarning(
        level="danger" if has_high else "warning",
        message=f"ALLERGEN ALERT: Contains {names}",
        action="DO NOT CONSUME - This product contains allergens you have marked",
        details=tuple(finding.description for finding in user_matches),
    )
