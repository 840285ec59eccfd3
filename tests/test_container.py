"""Tests for container wiring."""

from nutrient_swap.containers import build_container
from nutrient_swap.services.cache import InMemoryReferenceCache


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.swap_service is not None
    assert container.goal_optimizer is not None
    assert container.aggregator is not None
    assert container.plate_service is not None
    assert container.meal_log_service is not None
    assert container.swap_service.profiles is container.profile_service


def test_build_services_shares_reference_cache(container) -> None:
    cache = container.profile_service.cache

    assert isinstance(cache, InMemoryReferenceCache)
    assert cache.ttl_seconds == 86400
    assert container.aggregator.profiles is container.profile_service
