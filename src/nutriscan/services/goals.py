"""Daily nutrient goal tracking."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, timedelta
from enum import Enum
from typing import Literal, Protocol
from zoneinfo import ZoneInfo

from nutriscan.domain.catalogs import TRACKED_NUTRIENTS
from nutriscan.domain.intake import (
    DailyIntakeLedger,
    DayStats,
    LedgerEntry,
    NutrientProgress,
    zero_totals,
)
from nutriscan.domain.products import ProductRecord
from nutriscan.domain.profile import GoalSet, NutrientGoal, default_goals
from nutriscan.domain.verdict import GoalProjection, GoalWarning, NutrientOutlook
from nutriscan.services.nutrients import scale_to_serving

HIGH_SUGAR_PER_SERVING = 10
HIGH_SODIUM_PER_SERVING = 500
WEEK_DAYS = 7

_logger = logging.getLogger(__name__)


class _Keep(Enum):
    KEEP = "keep"


# goal bound that set_goal leaves unchanged
KEEP = _Keep.KEEP
Bound = float | None | Literal[_Keep.KEEP]


class GoalRepository(Protocol):
    """Persistence interface for nutrient goals."""

    def get_goals(self) -> GoalSet | None:
        """Return the stored goal set, if any."""

    def save_goals(self, goals: GoalSet) -> None:
        """Persist the goal set."""


class IntakeRepository(Protocol):
    """Persistence interface for day-keyed intake ledgers."""

    def get_ledger(self, day: date) -> DailyIntakeLedger | None:
        """Return the ledger for a day, if one was recorded."""

    def save_ledger(self, ledger: DailyIntakeLedger) -> None:
        """Persist a day's ledger."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class GoalTracker:
    """Forecast and log product servings against daily nutrient goals.

    ``project`` is a pure forecast over today's ledger. ``commit`` is the
    only operation that changes the ledger, and must be called at most once
    per accepted scan. Goals and ledgers are read from the repositories on
    every call. While a read fails, changes are kept in memory only and are
    never written over the stored documents.
    """

    goal_repository: GoalRepository
    intake_repository: IntakeRepository
    timezone_name: str = "UTC"
    clock: Callable[[], datetime] = _utc_now
    _offline_goals: GoalSet | None = field(default=None, init=False, repr=False)
    _offline_ledger: DailyIntakeLedger | None = field(
        default=None, init=False, repr=False
    )

    def today(self) -> date:
        """Return the current calendar day in the tracker's timezone."""
        return self.clock().astimezone(ZoneInfo(self.timezone_name)).date()

    @property
    def goals(self) -> GoalSet:
        """Return the active goal set."""
        goals, _stored = self._read_goals()
        return goals

    def current_ledger(self) -> DailyIntakeLedger:
        """Return today's ledger, or an empty one if nothing was logged yet."""
        ledger, _stored = self._read_ledger(self.today())
        return ledger

    def project(
        self, product: ProductRecord, serving_size: float = 100
    ) -> GoalProjection:
        """Forecast the effect of a serving on today's goals without logging it."""
        impact = _serving_impact(product, serving_size)
        ledger = self.current_ledger()
        goals = self.goals

        remaining: dict[str, NutrientOutlook] = {}
        percent_of_goal: dict[str, float] = {}
        warnings: list[GoalWarning] = []
        for nutrient, value in impact.items():
            goal = goals.get(nutrient)
            if goal is None:
                continue
            projected = ledger.totals.get(nutrient, 0.0) + value
            remaining[nutrient] = NutrientOutlook(
                current=projected,
                target=goal.target,
                max=goal.max,
                remaining=goal.max - projected if goal.max is not None else None,
            )
            percent_of_goal[nutrient] = projected / goal.target * 100
            if goal.max is not None and projected > goal.max:
                warnings.append(
                    GoalWarning(
                        nutrient=nutrient,
                        message=f"This will exceed your daily {nutrient} limit",
                        severity="high",
                    )
                )
            elif goal.max is not None and projected > goal.target:
                warnings.append(
                    GoalWarning(
                        nutrient=nutrient,
                        message=f"This will push you over your {nutrient} target",
                        severity="medium",
                    )
                )

        return GoalProjection(
            serving_size=serving_size,
            impact=impact,
            remaining=remaining,
            percent_of_goal=percent_of_goal,
            warnings=tuple(warnings),
            recommendations=_recommend(impact, warnings),
        )

    def commit(
        self, product: ProductRecord, serving_size: float = 100
    ) -> DailyIntakeLedger:
        """Add a serving to today's ledger and persist it.

        Today's ledger is re-read from the store before the serving is added.
        """
        impact = _serving_impact(product, serving_size)
        ledger, stored = self._read_ledger(self.today())
        totals = {
            nutrient: ledger.totals.get(nutrient, 0.0) + impact[nutrient]
            for nutrient in TRACKED_NUTRIENTS
        }
        entry = LedgerEntry(
            name=product.name,
            barcode=product.barcode,
            serving_size=serving_size,
            timestamp=self.clock(),
        )
        updated = replace(ledger, totals=totals, entries=(*ledger.entries, entry))
        if stored:
            self._offline_ledger = None
            try:
                self.intake_repository.save_ledger(updated)
            except Exception:
                _logger.exception("Failed to persist intake ledger for %s", updated.day)
        else:
            self._offline_ledger = updated
            _logger.warning(
                "Intake store unreadable, keeping ledger for %s in memory only",
                updated.day,
            )
        _logger.info(
            "Logged %s (%sg) for %s", product.barcode, serving_size, updated.day
        )
        return updated

    def daily_progress(self) -> dict[str, NutrientProgress]:
        """Return today's progress toward every configured goal."""
        ledger = self.current_ledger()
        progress: dict[str, NutrientProgress] = {}
        for nutrient, goal in self.goals.items():
            current = ledger.totals.get(nutrient, 0.0)
            progress[nutrient] = NutrientProgress(
                current=round(current, 1),
                target=goal.target,
                max=goal.max,
                min=goal.min,
                percentage=round(current / goal.target * 100),
                remaining=(
                    round(goal.max - current, 1) if goal.max is not None else None
                ),
                status=_goal_status(current, goal),
            )
        return progress

    def weekly_stats(self) -> list[DayStats]:
        """Return the last seven days of totals, oldest first."""
        today = self.today()
        stats: list[DayStats] = []
        for offset in range(WEEK_DAYS - 1, -1, -1):
            day = today - timedelta(days=offset)
            ledger, _stored = self._read_ledger(day)
            totals = zero_totals()
            totals.update(ledger.totals)
            stats.append(
                DayStats(day=day, totals=totals, scanned_count=len(ledger.entries))
            )
        return stats

    def set_goal(
        self,
        nutrient: str,
        target: float,
        maximum: Bound = KEEP,
        minimum: Bound = KEEP,
    ) -> bool:
        """Update a nutrient goal; return False and keep state on invalid input.

        Bounds left as ``KEEP`` keep their current value, ``None`` removes
        the bound.
        """
        if nutrient not in TRACKED_NUTRIENTS:
            _logger.info("Rejected goal for unknown nutrient %r", nutrient)
            return False
        goals, stored = self._read_goals()
        current = goals.get(nutrient)
        if maximum is KEEP:
            maximum = current.max if current is not None else None
        if minimum is KEEP:
            minimum = current.min if current is not None else None
        try:
            goal = NutrientGoal(target=target, max=maximum, min=minimum)
        except ValueError as exc:
            _logger.info("Rejected goal for %s: %s", nutrient, exc)
            return False
        goals[nutrient] = goal
        if not stored:
            self._offline_goals = goals
            _logger.warning("Goal store unreadable, keeping goals in memory only")
            return True
        self._offline_goals = None
        try:
            self.goal_repository.save_goals(goals)
        except Exception:
            _logger.exception("Failed to persist goals")
        return True

    def _read_goals(self) -> tuple[GoalSet, bool]:
        """Return the goal set and whether it came from a successful read."""
        try:
            stored = self.goal_repository.get_goals()
        except Exception:
            _logger.exception("Failed to load goals, using in-memory goals")
            return dict(self._offline_goals or default_goals()), False
        return dict(stored or default_goals()), True

    def _read_ledger(self, day: date) -> tuple[DailyIntakeLedger, bool]:
        """Return a day's ledger and whether it came from a successful read."""
        try:
            stored = self.intake_repository.get_ledger(day)
        except Exception:
            _logger.exception("Failed to load intake ledger for %s", day)
            offline = self._offline_ledger
            if offline is not None and offline.day == day:
                return offline, False
            return DailyIntakeLedger(day=day), False
        return stored or DailyIntakeLedger(day=day), True


def _serving_impact(product: ProductRecord, serving_size: float) -> dict[str, float]:
    if serving_size <= 0:
        raise ValueError("Serving size must be positive")
    return scale_to_serving(product.nutriments, serving_size)


def _recommend(
    impact: dict[str, float], warnings: list[GoalWarning]
) -> tuple[str, ...]:
    if not warnings:
        return ("This product fits within your daily goals",)
    recommendations = ["Consider portion size to stay within goals"]
    if impact.get("sugar", 0.0) > HIGH_SUGAR_PER_SERVING:
        recommendations.append("High sugar content - consume in moderation")
    if impact.get("sodium", 0.0) > HIGH_SODIUM_PER_SERVING:
        recommendations.append("High sodium - balance with low-sodium meals")
    return tuple(recommendations)


def _goal_status(current: float, goal: NutrientGoal) -> str:
    if goal.max is not None and current > goal.max:
        return "exceeded"
    if current > goal.target:
        return "over-target"
    if goal.min is not None and current < goal.min:
        return "under-target"
    return "on-track"
