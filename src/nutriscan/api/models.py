"""Request bodies for the API."""

from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    """Options for analyzing a product."""

    serving_size: float | None = Field(default=None, gt=0)


class IntakeRequest(BaseModel):
    """A product serving to log against today's intake."""

    barcode: str = Field(min_length=1)
    serving_size: float | None = Field(default=None, gt=0)


class DietUpdate(BaseModel):
    """New active diet."""

    diet: str


class AllergenUpdate(BaseModel):
    """Allergen category to declare."""

    allergen: str


class AvoidIngredientUpdate(BaseModel):
    """Ingredient to add to the avoid list."""

    ingredient: str = Field(min_length=1)


class GoalUpdate(BaseModel):
    """New goal values for a nutrient; send ``null`` to remove a bound."""

    target: float = Field(gt=0)
    max: float | None = Field(default=None, gt=0)
    min: float | None = Field(default=None, ge=0)
