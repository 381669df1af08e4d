from nutriscan.services.cache import InMemoryProductCache
from tests.conftest import make_product


def test_cache_returns_stored_product() -> None:
    cache = InMemoryProductCache()
    product = make_product()

    cache.set(product.barcode, product)

    assert cache.get(product.barcode) is product
    assert cache.get("0000000000000") is None


def test_cache_expires_entries() -> None:
    cache = InMemoryProductCache(ttl_seconds=0)
    product = make_product()

    cache.set(product.barcode, product)

    assert cache.get(product.barcode) is None
    assert len(cache) == 0


def test_cache_evicts_oldest_when_full() -> None:
    cache = InMemoryProductCache(max_entries=2)

    for barcode in ("1", "2", "3"):
        cache.set(barcode, make_product(barcode=barcode))

    assert len(cache) == 2
    assert cache.get("1") is None
    assert cache.get("3") is not None
