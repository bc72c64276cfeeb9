"""
Unit Tests for CachedProductService

Tests cache-aside reads, write-path invalidation, the disabled bypass,
failure passthrough and fail-open behavior of the product cache decorator.
"""

from unittest.mock import MagicMock

import pytest

from catalog_cache.core.interfaces.cache import InMemoryCacheStore
from catalog_cache.infrastructure.cache.keys import ProductCacheKeys
from catalog_cache.infrastructure.monitoring.cache_metrics import CacheMetricsRecorder
from catalog_cache.products.cached_product_service import CacheOptions, CachedProductService
from catalog_cache.products.models import (
    CreateProductRequest,
    Result,
    SearchCriteria,
    UpdateProductRequest,
)
from tests.test_fixtures import CacheTestFactory, ProductTestFactory

INDEX = ProductCacheKeys.PAGED_INDEX_SET


def _service(inner, cache_store, metrics=None, **options) -> CachedProductService:
    return CachedProductService(
        inner=inner,
        cache_store=cache_store,
        metrics=metrics or CacheMetricsRecorder(),
        options=CacheOptions(**{"enabled": True, "default_ttl": 300, **options}),
    )


@pytest.mark.unit
class TestCacheOptions:
    """Test TTL resolution and settings mapping."""

    def test_overrides_fall_back_to_default(self):
        options = CacheOptions(default_ttl=120)

        assert options.by_id_ttl_seconds == 120
        assert options.paged_ttl_seconds == 120

    def test_overrides_win(self):
        options = CacheOptions(default_ttl=300, by_id_ttl=600, paged_ttl=45)

        assert options.by_id_ttl_seconds == 600
        assert options.paged_ttl_seconds == 45

    def test_from_settings(self, mock_settings):
        mock_settings.cache.CACHE_PRODUCT_DETAIL_TTL = 600

        options = CacheOptions.from_settings(mock_settings)

        assert options.enabled is True
        assert options.default_ttl == 300
        assert options.by_id_ttl == 600
        assert options.paged_ttl is None


@pytest.mark.unit
class TestGetById:
    """Test cache-aside by-id lookups."""

    @pytest.mark.asyncio
    async def test_round_trip_hits_on_second_call(self, cached_service, product_store, metrics_recorder):
        """Test that the store is called once and the second read is served from cache."""
        first = await cached_service.get_by_id(5)
        second = await cached_service.get_by_id(5)

        assert product_store.get_by_id.await_count == 1
        assert first.is_success and second.is_success
        assert second.data == first.data

        snapshot = metrics_recorder.snapshot()
        assert snapshot.hit_count == 1
        assert snapshot.miss_count == 1

    @pytest.mark.asyncio
    async def test_miss_returns_inner_result_unchanged(self, cached_service, product_store):
        inner_result = product_store.get_by_id.return_value

        result = await cached_service.get_by_id(5)

        assert result is inner_result

    @pytest.mark.asyncio
    async def test_miss_populates_with_by_id_ttl(self, product_store, in_memory_cache_store):
        service = _service(product_store, in_memory_cache_store, by_id_ttl=600)

        await service.get_by_id(5)

        assert in_memory_cache_store.contains("product:by-id:5")
        assert in_memory_cache_store.ttl_of("product:by-id:5") == 600

    @pytest.mark.asyncio
    async def test_failure_is_not_cached(self, failing_product_store, mock_cache_store):
        """Test that a failure result is returned as-is and never stored."""
        service = _service(failing_product_store, mock_cache_store)
        inner_result = failing_product_store.get_by_id.return_value

        result = await service.get_by_id(404)

        assert result is inner_result
        assert result.is_success is False
        mock_cache_store.set.assert_not_called()

    @pytest.mark.asyncio
    async def test_success_without_data_is_not_cached(self, product_store, mock_cache_store):
        product_store.get_by_id.return_value = Result.success(None)
        service = _service(product_store, mock_cache_store)

        result = await service.get_by_id(5)

        assert result.is_success is True
        mock_cache_store.set.assert_not_called()

    @pytest.mark.asyncio
    async def test_by_id_lookup_never_touches_tracking_set(self, product_store, mock_cache_store):
        service = _service(product_store, mock_cache_store)

        await service.get_by_id(5)

        mock_cache_store.add_to_set.assert_not_called()


@pytest.mark.unit
class TestSearch:
    """Test cache-aside search lookups."""

    @pytest.mark.asyncio
    async def test_round_trip_hits_on_second_call(self, cached_service, product_store):
        criteria = SearchCriteria(category="Footwear")

        first = await cached_service.search(criteria)
        second = await cached_service.search(SearchCriteria(category="Footwear"))

        assert product_store.search.await_count == 1
        assert second.data == first.data

    @pytest.mark.asyncio
    async def test_different_criteria_miss(self, cached_service, product_store):
        await cached_service.search(SearchCriteria())
        await cached_service.search(SearchCriteria(page=2))

        assert product_store.search.await_count == 2

    @pytest.mark.asyncio
    async def test_populated_page_is_tracked(self, cached_service, in_memory_cache_store):
        criteria = SearchCriteria(search_term="shoe")

        await cached_service.search(criteria)

        assert await in_memory_cache_store.get_set_members(INDEX) == [
            ProductCacheKeys.paged(criteria)
        ]

    @pytest.mark.asyncio
    async def test_set_happens_before_tracking(self, product_store, mock_cache_store):
        """Test that a page is stored before its key is registered."""
        calls = MagicMock()
        mock_cache_store.set.side_effect = lambda *args, **kwargs: calls("set") or True
        mock_cache_store.add_to_set.side_effect = lambda *args, **kwargs: calls("add_to_set") or True
        service = _service(product_store, mock_cache_store, paged_ttl=45)

        await service.search(SearchCriteria())

        assert [c.args[0] for c in calls.call_args_list] == ["set", "add_to_set"]
        key = ProductCacheKeys.paged(SearchCriteria())
        mock_cache_store.set.assert_awaited_once_with(
            key, product_store.search.return_value.data, 45
        )
        mock_cache_store.add_to_set.assert_awaited_once_with(INDEX, key)

    @pytest.mark.asyncio
    async def test_hit_does_not_retrack(self, product_store, sample_page):
        store = CacheTestFactory.mock_cache_store()
        store.get.return_value = sample_page
        service = _service(product_store, store)

        result = await service.search(SearchCriteria())

        assert result.is_success
        assert result.data == sample_page
        product_store.search.assert_not_called()
        store.add_to_set.assert_not_called()

    @pytest.mark.asyncio
    async def test_failed_search_is_not_cached_or_tracked(self, failing_product_store, mock_cache_store):
        service = _service(failing_product_store, mock_cache_store)

        result = await service.search(SearchCriteria())

        assert result.is_success is False
        mock_cache_store.set.assert_not_called()
        mock_cache_store.add_to_set.assert_not_called()


@pytest.mark.unit
class TestWriteInvalidation:
    """Test invalidation on writes."""

    @pytest.mark.asyncio
    async def test_update_forces_requery(self, cached_service, product_store):
        """Test that a read after an update goes back to the store."""
        await cached_service.get_by_id(5)
        await cached_service.update(5, UpdateProductRequest(name="Renamed"))
        await cached_service.get_by_id(5)

        assert product_store.get_by_id.await_count == 2

    @pytest.mark.asyncio
    async def test_delete_drops_by_id_entry(self, cached_service, in_memory_cache_store):
        await cached_service.get_by_id(5)

        await cached_service.delete(5)

        assert not in_memory_cache_store.contains("product:by-id:5")

    @pytest.mark.asyncio
    async def test_create_keeps_by_id_entries(self, cached_service, in_memory_cache_store):
        await cached_service.get_by_id(5)

        await cached_service.create(CreateProductRequest(name="New", price="9.99"))

        assert in_memory_cache_store.contains("product:by-id:5")

    @pytest.mark.asyncio
    async def test_bulk_search_invalidation(self, product_store):
        """Test that one create drops every tracked page with a single bulk delete."""
        store = CacheTestFactory.mock_cache_store()
        tracked = [ProductCacheKeys.paged(SearchCriteria(page=p)) for p in range(1, 6)]
        store.get_set_members.return_value = tracked
        service = _service(product_store, store)

        await service.create(CreateProductRequest(name="New", price="9.99"))

        store.get_set_members.assert_awaited_once_with(INDEX)
        store.delete_many.assert_awaited_once_with(tracked)
        store.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_search_pages_requery_after_create(self, cached_service, product_store):
        for page in (1, 2, 3):
            await cached_service.search(SearchCriteria(page=page))

        await cached_service.create(CreateProductRequest(name="New", price="9.99"))

        for page in (1, 2, 3):
            await cached_service.search(SearchCriteria(page=page))
        assert product_store.search.await_count == 6

    @pytest.mark.asyncio
    async def test_tracking_set_is_kept(self, cached_service, in_memory_cache_store):
        await cached_service.search(SearchCriteria())

        await cached_service.seed(10)

        assert await in_memory_cache_store.get_set_members(INDEX) != []

    @pytest.mark.asyncio
    async def test_empty_tracking_set_skips_delete(self, product_store, mock_cache_store):
        service = _service(product_store, mock_cache_store)

        await service.seed(10)

        mock_cache_store.get_set_members.assert_awaited_once_with(INDEX)
        mock_cache_store.delete_many.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_and_delete_invalidate_both(self, product_store, mock_cache_store):
        mock_cache_store.get_set_members.return_value = ["product:paged:abc"]
        service = _service(product_store, mock_cache_store)

        await service.update(7, UpdateProductRequest(price="1.00"))
        await service.delete(8)

        deleted = [c.args[0] for c in mock_cache_store.delete.await_args_list]
        assert deleted == ["product:by-id:7", "product:by-id:8"]
        assert mock_cache_store.delete_many.await_count == 2

    @pytest.mark.asyncio
    async def test_seed_only_invalidates_search(self, product_store, mock_cache_store):
        mock_cache_store.get_set_members.return_value = ["product:paged:abc"]
        service = _service(product_store, mock_cache_store)

        await service.seed(25)

        mock_cache_store.delete.assert_not_called()
        mock_cache_store.delete_many.assert_awaited_once_with(["product:paged:abc"])

    @pytest.mark.asyncio
    async def test_failed_writes_do_not_invalidate(self, failing_product_store, mock_cache_store):
        service = _service(failing_product_store, mock_cache_store)

        results = [
            await service.create(CreateProductRequest(name="X", price="1")),
            await service.update(1, UpdateProductRequest()),
            await service.delete(1),
            await service.seed(5),
        ]

        assert all(not result.is_success for result in results)
        mock_cache_store.delete.assert_not_called()
        mock_cache_store.get_set_members.assert_not_called()
        mock_cache_store.delete_many.assert_not_called()

    @pytest.mark.asyncio
    async def test_write_result_returned_unchanged(self, cached_service, product_store):
        inner_result = product_store.update.return_value

        result = await cached_service.update(5, UpdateProductRequest(name="Renamed"))

        assert result is inner_result


@pytest.mark.unit
class TestDisabledBypass:
    """Test that a disabled cache is fully transparent."""

    @pytest.mark.asyncio
    async def test_no_cache_or_metrics_interaction(self, product_store):
        cache_store = CacheTestFactory.mock_cache_store()
        metrics = MagicMock(spec=CacheMetricsRecorder)
        service = _service(product_store, cache_store, metrics=metrics, enabled=False)

        await service.get_by_id(5)
        await service.get_by_id(5)
        await service.search(SearchCriteria())
        await service.create(CreateProductRequest(name="X", price="1"))
        await service.update(5, UpdateProductRequest())
        await service.delete(5)
        await service.seed(3)

        assert product_store.get_by_id.await_count == 2
        assert cache_store.method_calls == []
        assert metrics.method_calls == []

    @pytest.mark.asyncio
    async def test_results_are_the_inner_results(self, product_store):
        service = _service(product_store, CacheTestFactory.mock_cache_store(), enabled=False)

        assert await service.get_by_id(5) is product_store.get_by_id.return_value
        assert await service.search(SearchCriteria()) is product_store.search.return_value


@pytest.mark.unit
class TestFailOpen:
    """Test that a raising cache store never breaks a product call."""

    @pytest.mark.asyncio
    async def test_raising_get_falls_through_to_store(self, product_store):
        service = _service(product_store, CacheTestFactory.raising_cache_store())

        result = await service.get_by_id(5)

        assert result is product_store.get_by_id.return_value
        product_store.get_by_id.assert_awaited_once_with(5)

    @pytest.mark.asyncio
    async def test_raising_search_falls_through_to_store(self, product_store):
        service = _service(product_store, CacheTestFactory.raising_cache_store())

        result = await service.search(SearchCriteria())

        assert result is product_store.search.return_value

    @pytest.mark.asyncio
    async def test_raising_invalidation_keeps_write_result(self, product_store):
        service = _service(product_store, CacheTestFactory.raising_cache_store())

        result = await service.update(5, UpdateProductRequest(name="Renamed"))

        assert result is product_store.update.return_value

    @pytest.mark.asyncio
    async def test_unreachable_redis_store_behaves_as_miss(self, product_store, failing_redis_client):
        """Test the full path through RedisCacheStore with a dead backend."""
        from catalog_cache.infrastructure.cache.cache_store import RedisCacheStore

        metrics = CacheMetricsRecorder()
        service = _service(product_store, RedisCacheStore(failing_redis_client), metrics=metrics)

        first = await service.get_by_id(5)
        second = await service.get_by_id(5)

        assert first.is_success and second.is_success
        assert product_store.get_by_id.await_count == 2
        assert metrics.snapshot().miss_count == 2


@pytest.mark.unit
class TestReporting:
    """Test metrics and health exposure."""

    @pytest.mark.asyncio
    async def test_metrics_snapshot_reflects_lookups(self, cached_service):
        await cached_service.get_by_id(1)
        await cached_service.get_by_id(2)
        await cached_service.get_by_id(1)

        snapshot = cached_service.metrics_snapshot()

        assert snapshot.hit_count == 1
        assert snapshot.miss_count == 2
        assert snapshot.per_pattern_counts == {"product:by-id": 3}

    @pytest.mark.asyncio
    async def test_health_includes_enabled_flag(self, product_store):
        service = _service(product_store, InMemoryCacheStore())

        health = await service.health_check()

        assert health["status"] == "healthy"
        assert health["caching_enabled"] is True

    @pytest.mark.asyncio
    async def test_close_closes_cache_store(self, product_store, mock_cache_store):
        service = _service(product_store, mock_cache_store)

        await service.close()

        mock_cache_store.close.assert_awaited_once()

    def test_options_exposed(self):
        service = _service(ProductTestFactory.product_store(), InMemoryCacheStore(), paged_ttl=45)

        assert service.options.paged_ttl_seconds == 45
