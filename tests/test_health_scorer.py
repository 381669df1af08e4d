from nutriscan.domain.products import IngredientItem
from nutriscan.services.health import HealthScorer
from tests.conftest import make_product


def test_grade_only_products() -> None:
    scorer = HealthScorer()

    best = scorer.score(make_product(nutrition_grade="a"))
    worst = scorer.score(make_product(nutrition_grade="E"))

    assert best.score == 90
    assert best.factors[0].name == "Nutri-Score"
    assert best.factors[0].value == "A"
    assert best.recommendation.startswith("Great choice!")
    assert worst.score == 20
    assert worst.description.startswith("Lower nutritional profile")


def test_nutrient_thresholds() -> None:
    product = make_product(nutriments={"sugars": 20, "sodium": 0.9, "fat": 10})

    report = HealthScorer().score(product)

    assert report.score == 25
    factors = [(factor.name, factor.impact, factor.value) for factor in report.factors]
    assert factors == [
        ("High Sugar", -15, "20g"),
        ("High Sodium", -10, "900mg"),
    ]


def test_positive_factors_and_clamp() -> None:
    product = make_product(
        nutrition_grade="a",
        nutriments={
            "sugars": 1,
            "sodium": 0.1,
            "fiber": 8,
            "proteins": 20,
            "fat": 3,
        },
        ingredients=tuple(
            IngredientItem(name=f"oats {index}", status="good") for index in range(10)
        ),
    )

    report = HealthScorer().score(product)

    assert report.score == 100
    names = [factor.name for factor in report.factors]
    assert names == [
        "Nutri-Score",
        "Low Sugar",
        "Low Sodium",
        "Good Fiber",
        "High Protein",
        "Ingredient Quality",
    ]
    assert report.factors[-1].value == "10 good, 0 concerning"


def test_score_floors_at_zero() -> None:
    product = make_product(
        nutrition_grade="e",
        nutriments={"sugars": 40, "sodium": 2, "fat": 35},
        ingredients=(
            IngredientItem(name="palm oil", status="bad"),
            IngredientItem(name="aspartame", status="bad"),
        ),
    )

    report = HealthScorer().score(product)

    assert report.score == 0
    assert report.factors[-1].impact == -10


def test_missing_and_unparsable_values_are_ignored() -> None:
    product = make_product(
        nutriments={"sugars": "N/A", "sodium": None, "fat": "unknown"},
        ingredients=(IngredientItem(name="water"),),
    )

    report = HealthScorer().score(product)

    assert report.score == 50
    assert report.factors == ()
    assert report.description.startswith("Moderate nutritional profile")


def test_unknown_grade_keeps_neutral_factor() -> None:
    report = HealthScorer().score(make_product(nutrition_grade="unknown"))

    assert report.score == 50
    assert report.factors[0].impact == 0


def test_good_tier_boundary() -> None:
    product = make_product(nutrition_grade="c")

    report = HealthScorer().score(product)

    assert report.score == 60
    assert report.description.startswith("Good nutritional profile")
