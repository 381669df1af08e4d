"""Reference catalogs for allergens, diets and default goals."""

from dataclasses import dataclass

TRACKED_NUTRIENTS = ("calories", "sugar", "sodium", "protein", "fiber", "fat")

STANDARD_DIET = "standard"


@dataclass(frozen=True)
class AllergenRule:
    """Keywords and severity for a single allergen category."""

    name: str
    keywords: tuple[str, ...]
    severity: str
    description: str


@dataclass(frozen=True)
class DietRule:
    """Ingredient rules for a named diet."""

    name: str
    forbidden: tuple[str, ...] = ()
    cautions: tuple[str, ...] = ()
    high_carb: tuple[str, ...] = ()


@dataclass(frozen=True)
class AllergenCatalog:
    """Versioned, immutable set of allergen rules."""

    version: str
    rules: tuple[AllergenRule, ...]

    def names(self) -> tuple[str, ...]:
        """Return category names in catalog order."""
        return tuple(rule.name for rule in self.rules)

    def get(self, name: str) -> AllergenRule | None:
        """Return the rule for a category name, if present."""
        for rule in self.rules:
            if rule.name == name:
                return rule
        return None

    def __contains__(self, name: object) -> bool:
        return any(rule.name == name for rule in self.rules)


@dataclass(frozen=True)
class DietCatalog:
    """Versioned set of valid diets and their rules.

    A diet may be valid without a rule set (``standard``, ``paleo``); checking
    such a diet is a no-op.
    """

    version: str
    diets: tuple[str, ...]
    rules: tuple[DietRule, ...]

    def get(self, name: str) -> DietRule | None:
        """Return the rule set for a diet, if it has one."""
        for rule in self.rules:
            if rule.name == name:
                return rule
        return None

    def __contains__(self, name: object) -> bool:
        return name in self.diets


DEFAULT_ALLERGEN_CATALOG = AllergenCatalog(
    version="2024.1",
    rules=(
        AllergenRule(
            name="milk",
            keywords=(
                "milk",
                "dairy",
                "lactose",
                "whey",
                "casein",
                "cream",
                "butter",
                "cheese",
                "yogurt",
            ),
            severity="high",
            description="Contains milk or dairy products",
        ),
        AllergenRule(
            name="eggs",
            keywords=("egg", "albumin", "mayonnaise", "meringue", "lecithin"),
            severity="high",
            description="Contains eggs or egg products",
        ),
        AllergenRule(
            name="fish",
            keywords=(
                "fish",
                "anchovy",
                "bass",
                "catfish",
                "cod",
                "flounder",
                "grouper",
                "haddock",
                "hake",
                "halibut",
                "herring",
                "mahi mahi",
                "perch",
                "pike",
                "pollock",
                "salmon",
                "sardine",
                "sole",
                "snapper",
                "swordfish",
                "tilapia",
                "trout",
                "tuna",
            ),
            severity="high",
            description="Contains fish",
        ),
        AllergenRule(
            name="shellfish",
            keywords=(
                "shellfish",
                "crab",
                "lobster",
                "shrimp",
                "prawn",
                "crawfish",
                "crayfish",
            ),
            severity="high",
            description="Contains shellfish",
        ),
        AllergenRule(
            name="tree nuts",
            keywords=(
                "almond",
                "cashew",
                "walnut",
                "pecan",
                "pistachio",
                "macadamia",
                "hazelnut",
                "brazil nut",
                "pine nut",
            ),
            severity="high",
            description="Contains tree nuts",
        ),
        AllergenRule(
            name="peanuts",
            keywords=("peanut", "groundnut", "peanut butter", "peanut oil"),
            severity="high",
            description="Contains peanuts",
        ),
        AllergenRule(
            name="wheat",
            keywords=(
                "wheat",
                "wheat flour",
                "wheat starch",
                "wheat gluten",
                "bulgur",
                "durum",
                "semolina",
                "spelt",
            ),
            severity="high",
            description="Contains wheat",
        ),
        AllergenRule(
            name="soybeans",
            keywords=(
                "soy",
                "soybean",
                "tofu",
                "edamame",
                "miso",
                "tempeh",
                "soy sauce",
                "soy protein",
            ),
            severity="high",
            description="Contains soy",
        ),
        AllergenRule(
            name="sesame",
            keywords=("sesame", "tahini", "sesame oil", "sesame seed"),
            severity="medium",
            description="Contains sesame",
        ),
    ),
)

DEFAULT_DIET_CATALOG = DietCatalog(
    version="2024.1",
    diets=(
        STANDARD_DIET,
        "vegan",
        "vegetarian",
        "gluten-free",
        "dairy-free",
        "keto",
        "paleo",
        "halal",
        "kosher",
    ),
    rules=(
        DietRule(
            name="vegan",
            forbidden=(
                "meat",
                "beef",
                "pork",
                "chicken",
                "fish",
                "seafood",
                "milk",
                "dairy",
                "cheese",
                "butter",
                "cream",
                "yogurt",
                "eggs",
                "honey",
                "gelatin",
                "whey",
                "casein",
                "lactose",
            ),
            cautions=("may contain milk", "may contain eggs"),
        ),
        DietRule(
            name="vegetarian",
            forbidden=(
                "meat",
                "beef",
                "pork",
                "chicken",
                "fish",
                "seafood",
                "gelatin",
                "rennet",
                "lard",
                "animal fat",
            ),
            cautions=("may contain fish",),
        ),
        DietRule(
            name="gluten-free",
            forbidden=(
                "wheat",
                "barley",
                "rye",
                "malt",
                "gluten",
                "wheat flour",
                "wheat starch",
                "triticale",
            ),
            cautions=(
                "may contain gluten",
                "processed in facility that handles wheat",
            ),
        ),
        DietRule(
            name="dairy-free",
            forbidden=(
                "milk",
                "dairy",
                "cheese",
                "butter",
                "cream",
                "yogurt",
                "whey",
                "casein",
                "lactose",
            ),
            cautions=("may contain milk",),
        ),
        DietRule(
            name="keto",
            cautions=("high in carbohydrates",),
            high_carb=(
                "sugar",
                "flour",
                "bread",
                "rice",
                "pasta",
                "potato",
                "corn",
                "wheat",
                "oats",
            ),
        ),
        DietRule(
            name="halal",
            forbidden=(
                "pork",
                "lard",
                "alcohol",
                "wine",
                "beer",
                "gelatin (non-halal)",
                "animal shortening",
            ),
            cautions=("verify halal certification",),
        ),
        DietRule(
            name="kosher",
            forbidden=("pork", "shellfish", "mixing meat and dairy"),
            cautions=("verify kosher certification",),
        ),
    ),
)

# nutrient -> (target, max, min)
DEFAULT_GOAL_VALUES: dict[str, tuple[float, float | None, float | None]] = {
    "calories": (2000, 2500, None),
    "sugar": (50, 75, None),
    "sodium": (2000, 2300, None),
    "protein": (50, None, 40),
    "fiber": (25, None, 20),
    "fat": (65, 80, None),
}
