"""Supabase repository for nutrient goals."""

from dataclasses import dataclass

from nutriscan.adapters.supabase_documents import SupabaseDocumentTable
from nutriscan.domain.profile import GoalSet, NutrientGoal
from nutriscan.services.goals import GoalRepository

GOALS_KEY = "dietary_goals"


@dataclass
class SupabaseGoalRepository(GoalRepository):
    """Supabase implementation for nutrient goals."""

    documents: SupabaseDocumentTable

    def get_goals(self) -> GoalSet | None:
        """Return the stored goal set."""
        data = self.documents.get(GOALS_KEY)
        if not isinstance(data, dict) or not data:
            return None
        return {
            nutrient: NutrientGoal(
                target=float(goal["target"]),
                max=_optional_float(goal.get("max")),
                min=_optional_float(goal.get("min")),
            )
            for nutrient, goal in data.items()
        }

    def save_goals(self, goals: GoalSet) -> None:
        """Persist the goal set."""
        self.documents.put(
            GOALS_KEY,
            {
                nutrient: {"target": goal.target, "max": goal.max, "min": goal.min}
                for nutrient, goal in goals.items()
            },
        )


def _optional_float(value: object) -> float | None:
    return float(value) if value is not None else None
