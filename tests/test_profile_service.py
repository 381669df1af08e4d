from nutriscan.domain.catalogs import DEFAULT_ALLERGEN_CATALOG, DEFAULT_DIET_CATALOG
from nutriscan.domain.profile import UserProfile
from nutriscan.services.profiles import ProfileService
from tests.conftest import (
    BrokenStore,
    FlakyProfileRepository,
    InMemoryProfileRepository,
)


def test_defaults_when_nothing_stored(profile_service: ProfileService) -> None:
    assert profile_service.get_profile() == UserProfile()


def test_set_diet(
    profile_service: ProfileService, profile_repository: InMemoryProfileRepository
) -> None:
    assert profile_service.set_diet("vegan") is True
    assert profile_service.set_diet("carnivore") is False

    assert profile_service.get_profile().diet == "vegan"
    assert profile_repository.profile is not None
    assert profile_repository.profile.diet == "vegan"
    assert profile_repository.saves == 1


def test_allergen_setters(
    profile_service: ProfileService, profile_repository: InMemoryProfileRepository
) -> None:
    assert profile_service.add_allergen("milk") is True
    assert profile_service.add_allergen("peanuts") is True
    assert profile_service.add_allergen("milk") is True
    assert profile_service.add_allergen("mustard") is False
    assert profile_service.remove_allergen("peanuts") is True
    assert profile_service.remove_allergen("lupin") is False

    assert profile_service.get_profile().allergens == frozenset({"milk"})
    assert profile_repository.saves == 3


def test_avoid_ingredients_are_normalized(profile_service: ProfileService) -> None:
    assert profile_service.add_avoid_ingredient("  Palm Oil ") is True
    assert profile_service.add_avoid_ingredient("   ") is False
    assert profile_service.remove_avoid_ingredient("carrageenan") is False

    assert profile_service.get_profile().avoid_ingredients == frozenset({"palm oil"})
    assert profile_service.remove_avoid_ingredient("PALM OIL") is True
    assert profile_service.get_profile().avoid_ingredients == frozenset()


def test_stored_profile_is_sanitized() -> None:
    repository = InMemoryProfileRepository(
        profile=UserProfile(
            diet="raw-food",
            allergens=frozenset({"milk", "lupin"}),
            avoid_ingredients=frozenset({"msg"}),
        )
    )
    service = ProfileService(
        repository=repository,
        allergen_catalog=DEFAULT_ALLERGEN_CATALOG,
        diet_catalog=DEFAULT_DIET_CATALOG,
    )

    profile = service.get_profile()

    assert profile.diet == "standard"
    assert profile.allergens == frozenset({"milk"})
    assert profile.avoid_ingredients == frozenset({"msg"})


def test_storage_failures_keep_session_profile() -> None:
    service = ProfileService(
        repository=BrokenStore(),
        allergen_catalog=DEFAULT_ALLERGEN_CATALOG,
        diet_catalog=DEFAULT_DIET_CATALOG,
    )

    assert service.get_profile() == UserProfile()
    assert service.set_diet("keto") is True
    assert service.add_allergen("eggs") is True
    assert service.get_profile() == UserProfile(
        diet="keto", allergens=frozenset({"eggs"})
    )


def _service(repository: InMemoryProfileRepository) -> ProfileService:
    return ProfileService(
        repository=repository,
        allergen_catalog=DEFAULT_ALLERGEN_CATALOG,
        diet_catalog=DEFAULT_DIET_CATALOG,
    )


def _stored_vegan() -> UserProfile:
    return UserProfile(diet="vegan", allergens=frozenset({"milk", "peanuts"}))


def test_failed_read_does_not_overwrite_stored_profile() -> None:
    repository = FlakyProfileRepository(profile=_stored_vegan())
    service = _service(repository)

    assert service.get_profile() == UserProfile()
    assert service.add_avoid_ingredient("palm oil") is True

    assert repository.profile == UserProfile(
        diet="vegan",
        allergens=frozenset({"milk", "peanuts"}),
        avoid_ingredients=frozenset({"palm oil"}),
    )
    assert service.get_profile() == repository.profile


def test_changes_during_failed_reads_stay_in_memory() -> None:
    repository = FlakyProfileRepository(profile=_stored_vegan(), failing_reads=2)
    service = _service(repository)

    service.get_profile()
    assert service.add_allergen("eggs") is True

    assert repository.saves == 0
    assert repository.profile == _stored_vegan()
    assert service.get_profile() == _stored_vegan()


def test_profile_changes_are_shared_through_the_store(
    profile_repository: InMemoryProfileRepository,
) -> None:
    first = _service(profile_repository)
    second = _service(profile_repository)
    first.get_profile()
    second.get_profile()

    first.add_allergen("milk")
    second.add_allergen("peanuts")

    assert first.get_profile().allergens == frozenset({"milk", "peanuts"})
    assert profile_repository.profile is not None
    assert profile_repository.profile.allergens == frozenset({"milk", "peanuts"})
