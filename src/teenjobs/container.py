"""Dependency injection container for the marketplace services."""

from __future__ import annotations

from typing import Any

from dependency_injector import containers, providers

from .backend import InMemoryBackend, RestBackend
from .core import JobFilterEngine
from .core.criteria import (
    DateRangeCriterion,
    DurationCriterion,
    GeoRadiusConfig,
    GeoRadiusCriterion,
    LocationTextCriterion,
    PayRangeCriterion,
    TagCriterion,
)
from .geocoding import MapboxGeocoder
from .schemas.config import load_config
from .services import ApplicationService, JobsService, ProfileService, RoleGuard


class MarketplaceContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    backend = providers.Selector(
        config.backend.kind,
        memory=providers.Singleton(InMemoryBackend),
        rest=providers.Singleton(
            RestBackend,
            base_url=config.backend.url,
            api_key=config.backend.api_key,
            access_token=config.backend.access_token,
            timeout=config.backend.timeout,
        ),
    )

    date_range_criterion = providers.Singleton(DateRangeCriterion)
    pay_range_criterion = providers.Singleton(PayRangeCriterion)
    duration_criterion = providers.Singleton(DurationCriterion)
    location_criterion = providers.Singleton(LocationTextCriterion)
    geo_radius_criterion = providers.Singleton(GeoRadiusCriterion)
    tag_criterion = providers.Singleton(TagCriterion)

    criteria = providers.List(
        date_range_criterion,
        pay_range_criterion,
        duration_criterion,
        location_criterion,
        geo_radius_criterion,
        tag_criterion,
    )

    filter_engine = providers.Singleton(JobFilterEngine, criteria=criteria)

    jobs_service = providers.Factory(JobsService, backend=backend, engine=filter_engine)

    application_service = providers.Factory(
        ApplicationService,
        backend=backend,
        reject_competing_on_accept=config.lifecycle.reject_competing_on_accept,
    )

    profile_service = providers.Factory(ProfileService, backend=backend)

    role_guard = providers.Factory(RoleGuard, backend=backend)

    geocoder = providers.Singleton(
        MapboxGeocoder,
        access_token=config.geocoding.access_token,
        country=config.geocoding.country,
        language=config.geocoding.language,
        limit=config.geocoding.limit,
        timeout=config.geocoding.timeout,
    )


def create_container(*, settings: dict[str, Any] | None = None) -> MarketplaceContainer:
    """Instantiate the container from validated settings."""

    app_config = load_config(settings)
    container = MarketplaceContainer()
    container.config.from_dict(app_config.to_settings())

    filter_settings = settings.get("filters", {}) if isinstance(settings, dict) else {}
    if "earth_radius_km" in filter_settings:
        geo_config = GeoRadiusConfig(earth_radius_km=app_config.filters.earth_radius_km)
        container.geo_radius_criterion.override(
            providers.Singleton(GeoRadiusCriterion, config=geo_config)
        )

    return container
