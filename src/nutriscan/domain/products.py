"""Domain models for scanned products."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class IngredientItem:
    """Structured ingredient with an optional quality tag."""

    name: str
    status: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class ProductRecord:
    """Product data as received from the lookup collaborator.

    ``nutriments`` holds per-100g values keyed by OpenFoodFacts names
    (``energy-kcal``, ``sugars``, ``sodium``, ...). Values may be numbers,
    strings such as ``"12 g"`` or ``None``. The mapping is copied into a
    read-only view on construction.
    """

    barcode: str
    name: str = "Unknown Product"
    brand: str = "Unknown Brand"
    ingredients_text: str = ""
    ingredients: tuple[IngredientItem, ...] = ()
    nutriments: Mapping[str, float | str | None] = field(
        default_factory=lambda: MappingProxyType({})
    )
    nutrition_grade: str | None = None
    allergens: str = ""
    image_url: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "nutriments", MappingProxyType(dict(self.nutriments))
        )


def product_to_document(product: ProductRecord) -> dict[str, object]:
    """Serialize a product record to JSON-compatible data."""
    return {
        "barcode": product.barcode,
        "name": product.name,
        "brand": product.brand,
        "ingredients_text": product.ingredients_text,
        "ingredients": [
            {"name": item.name, "status": item.status, "description": item.description}
            for item in product.ingredients
        ],
        "nutriments": dict(product.nutriments),
        "nutrition_grade": product.nutrition_grade,
        "allergens": product.allergens,
        "image_url": product.image_url,
    }
