"""Product lookup service backed by OpenFoodFacts."""

import logging
import re
from dataclasses import dataclass

from nutriscan.adapters.openfoodfacts_client import ProductLookupClient
from nutriscan.domain.products import IngredientItem, ProductRecord
from nutriscan.services.cache import ProductCache
from nutriscan.services.nutrients import NUTRIENT_KEYS

MAX_INGREDIENTS = 15

GOOD_INGREDIENTS = (
    "water",
    "salt",
    "sugar",
    "flour",
    "milk",
    "eggs",
    "butter",
    "oil",
    "olive oil",
    "vinegar",
    "lemon",
    "tomato",
    "onion",
    "garlic",
    "herbs",
    "spices",
    "vanilla",
    "cocoa",
    "chocolate",
    "fruit",
    "vegetable",
    "whole grain",
    "oat",
    "rice",
    "wheat",
    "corn",
    "honey",
    "yeast",
    "baking powder",
    "baking soda",
)

BAD_INGREDIENTS = (
    "artificial",
    "preservative",
    "coloring",
    "flavoring",
    "monosodium glutamate",
    "msg",
    "high fructose corn syrup",
    "hfcs",
    "trans fat",
    "hydrogenated",
    "partially hydrogenated",
    "nitrate",
    "nitrite",
    "aspartame",
    "sucralose",
    "acesulfame",
    "benzoate",
    "sulfate",
    "phosphate",
    "tbhq",
    "bha",
    "bht",
    "red 40",
    "yellow 5",
    "blue 1",
    "caramel color",
)

# Checked in order; the first key contained in the ingredient wins.
INGREDIENT_DESCRIPTIONS = {
    "water": "Essential hydration base",
    "sugar": "Provides sweetness and quick energy",
    "salt": "Enhances flavor and acts as preservative",
    "flour": "Carbohydrate base providing structure",
    "milk": "Good source of protein and calcium",
    "eggs": "High-quality protein and nutrients",
    "butter": "Natural fat source, adds richness",
    "oil": "Source of fats and flavor carrier",
    "olive oil": "Heart-healthy monounsaturated fat",
    "vinegar": "Adds acidity and preserves food",
    "cocoa": "Rich in antioxidants and minerals",
    "vanilla": "Natural flavoring agent",
    "whole grain": "High in fiber and nutrients",
    "honey": "Natural sweetener with antioxidants",
    "artificial": "Synthetic additive - check necessity",
    "preservative": "Extends shelf life artificially",
    "high fructose corn syrup": "Processed sweetener - limit intake",
    "hydrogenated": "Contains trans fats - avoid",
    "monosodium glutamate": "Flavor enhancer - some sensitivity",
    "aspartame": "Artificial sweetener",
    "nitrate": "Preservative - potential health concerns",
    "coloring": "Artificial color additive",
}

_TRAILING_NOISE = re.compile(r"[()%\d\s]+$")
_INGREDIENT_SEPARATORS = re.compile(r"[,;]")

_logger = logging.getLogger(__name__)


@dataclass
class ProductService:
    """Look up products by barcode with caching."""

    client: ProductLookupClient
    cache: ProductCache

    async def lookup(self, barcode: str) -> ProductRecord | None:
        """Return the product for a barcode, or None when it is unknown."""
        cached = self.cache.get(barcode)
        if cached is not None:
            return cached

        payload = await self.client.get_product(barcode)
        product = payload.get("product")
        if payload.get("status") != 1 or not isinstance(product, dict):
            _logger.info("Product not found: barcode=%s", barcode)
            return None

        record = parse_product(product, barcode)
        self.cache.set(barcode, record)
        return record


def parse_product(product: dict[str, object], barcode: str) -> ProductRecord:
    """Build a product record from an OpenFoodFacts product payload."""
    ingredients_text = str(product.get("ingredients_text") or "")
    raw_ingredients = product.get("ingredients")
    grade = str(product.get("nutriscore_grade") or "").strip().upper()
    return ProductRecord(
        barcode=barcode,
        name=str(
            product.get("product_name")
            or product.get("product_name_en")
            or "Unknown Product"
        ),
        brand=str(product.get("brands") or "Unknown Brand"),
        ingredients_text=ingredients_text,
        ingredients=parse_ingredients(
            ingredients_text,
            raw_ingredients if isinstance(raw_ingredients, list) else [],
        ),
        nutriments=_per_100g(product.get("nutriments")),
        nutrition_grade=grade if len(grade) == 1 else None,
        allergens=str(product.get("allergens") or ""),
        image_url=product.get("image_url") or product.get("image_front_url"),
    )


def parse_ingredients(
    ingredients_text: str, raw_ingredients: list[object]
) -> tuple[IngredientItem, ...]:
    """Return up to 15 tagged ingredients, preferring the structured list."""
    if raw_ingredients:
        names = [
            str(item.get("text") or item.get("id") or "")
            for item in raw_ingredients
            if isinstance(item, dict)
        ]
    else:
        names = _INGREDIENT_SEPARATORS.split(ingredients_text)
    names = [name.strip() for name in names if name.strip()][:MAX_INGREDIENTS]

    items = []
    for name in names:
        clean = _TRAILING_NOISE.sub("", name).strip()
        lowered = clean.lower()
        items.append(
            IngredientItem(
                name=clean,
                status=categorize_ingredient(lowered),
                description=describe_ingredient(lowered),
            )
        )
    return tuple(items)


def categorize_ingredient(ingredient: str) -> str:
    """Tag a lowercase ingredient as good, bad or neutral."""
    if any(bad in ingredient for bad in BAD_INGREDIENTS):
        return "bad"
    if any(good in ingredient for good in GOOD_INGREDIENTS):
        return "good"
    return "neutral"


def describe_ingredient(ingredient: str) -> str:
    """Return a short description for a lowercase ingredient."""
    for key, description in INGREDIENT_DESCRIPTIONS.items():
        if key in ingredient:
            return description
    return "Common food ingredient"


def _per_100g(nutriments: object) -> dict[str, float | str | None]:
    if not isinstance(nutriments, dict):
        return {}
    values: dict[str, float | str | None] = {}
    for keys in NUTRIENT_KEYS.values():
        for key in keys:
            value = nutriments.get(f"{key}_100g", nutriments.get(key))
            if value is not None:
                values[key] = value
    return values
