"""Profile and goal endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, status

from nutriscan.api.auth import require_token
from nutriscan.api.models import (
    AllergenUpdate,
    AvoidIngredientUpdate,
    DietUpdate,
    GoalUpdate,
)
from nutriscan.services.goals import KEEP

if TYPE_CHECKING:
    from nutriscan.containers import AppContainer
    from nutriscan.domain.profile import UserProfile

router = APIRouter(tags=["profile"], dependencies=[Depends(require_token)])


def _profile_payload(profile: UserProfile) -> dict[str, object]:
    return {
        "diet": profile.diet,
        "allergens": sorted(profile.allergens),
        "avoid_ingredients": sorted(profile.avoid_ingredients),
    }


def _ensure(accepted: bool, detail: str) -> None:
    if not accepted:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


@router.get("/profile")
async def get_profile(request: Request) -> dict[str, object]:
    """Return the active profile."""
    container: AppContainer = request.app.state.container
    return _profile_payload(container.profile_service.get_profile())


@router.put("/profile/diet")
async def set_diet(body: DietUpdate, request: Request) -> dict[str, object]:
    """Change the active diet."""
    container: AppContainer = request.app.state.container
    _ensure(container.profile_service.set_diet(body.diet), "Unknown diet")
    return _profile_payload(container.profile_service.get_profile())


@router.post("/profile/allergens")
async def add_allergen(body: AllergenUpdate, request: Request) -> dict[str, object]:
    """Declare an allergen."""
    container: AppContainer = request.app.state.container
    _ensure(container.profile_service.add_allergen(body.allergen), "Unknown allergen")
    return _profile_payload(container.profile_service.get_profile())


@router.delete("/profile/allergens/{allergen}")
async def remove_allergen(allergen: str, request: Request) -> dict[str, object]:
    """Remove a declared allergen."""
    container: AppContainer = request.app.state.container
    _ensure(container.profile_service.remove_allergen(allergen), "Unknown allergen")
    return _profile_payload(container.profile_service.get_profile())


@router.post("/profile/avoid")
async def add_avoid_ingredient(
    body: AvoidIngredientUpdate, request: Request
) -> dict[str, object]:
    """Add an ingredient to the avoid list."""
    container: AppContainer = request.app.state.container
    _ensure(
        container.profile_service.add_avoid_ingredient(body.ingredient),
        "Invalid ingredient",
    )
    return _profile_payload(container.profile_service.get_profile())


@router.delete("/profile/avoid/{ingredient}")
async def remove_avoid_ingredient(
    ingredient: str, request: Request
) -> dict[str, object]:
    """Remove an ingredient from the avoid list."""
    container: AppContainer = request.app.state.container
    _ensure(
        container.profile_service.remove_avoid_ingredient(ingredient),
        "Ingredient is not on the avoid list",
    )
    return _profile_payload(container.profile_service.get_profile())


@router.get("/goals")
async def get_goals(request: Request) -> dict[str, object]:
    """Return the active nutrient goals."""
    container: AppContainer = request.app.state.container
    return {
        nutrient: asdict(goal)
        for nutrient, goal in container.goal_tracker.goals.items()
    }


@router.put("/goals/{nutrient}")
async def set_goal(
    nutrient: str, body: GoalUpdate, request: Request
) -> dict[str, object]:
    """Update a nutrient goal.

    Omitted bounds keep their current value; an explicit ``null`` removes
    the bound.
    """
    container: AppContainer = request.app.state.container
    given = body.model_fields_set
    _ensure(
        container.goal_tracker.set_goal(
            nutrient,
            body.target,
            maximum=body.max if "max" in given else KEEP,
            minimum=body.min if "min" in given else KEEP,
        ),
        "Invalid goal",
    )
    return asdict(container.goal_tracker.goals[nutrient])
