"""Tests for profile-driven recommendations."""

from __future__ import annotations

import pytest

from sparmatch.schemas.event import (
    Coordinate,
    ExperienceLevel,
    FighterQueryProfile,
    SearchFilters,
    WeightClass,
)
from sparmatch.services.errors import ProfileNotFound
from sparmatch.services.location import StaticLocationProvider
from sparmatch.services.recommendation import (
    RecommendationComposer,
    build_recommendation_filters,
    load_fighter_profile,
)
from tests.support.in_memory_stores import InMemoryProfileStore


class RecordingSearcher:
    def __init__(self) -> None:
        self.calls: list[tuple[SearchFilters | None, Coordinate | None, str | None]] = []

    async def search_events(self, filters=None, searcher_location=None, searcher_id=None):
        self.calls.append((filters, searcher_location, searcher_id))
        return []


def test_filters_follow_the_profile() -> None:
    fighter = FighterQueryProfile(
        fighter_id="f-1",
        weight_class=WeightClass.WELTERWEIGHT,
        experience_level=ExperienceLevel.INTERMEDIATE,
    )

    filters = build_recommendation_filters(fighter, radius_km=25)

    assert filters.weight_classes == [WeightClass.WELTERWEIGHT]
    assert filters.experience_levels == [ExperienceLevel.INTERMEDIATE]
    assert filters.max_distance == 25


def test_bare_profile_leaves_attribute_filters_unset() -> None:
    filters = build_recommendation_filters(FighterQueryProfile(fighter_id="f-1"))

    assert filters.weight_classes is None
    assert filters.experience_levels is None
    assert filters.max_distance == 50


@pytest.mark.asyncio
async def test_composer_passes_location_and_fighter_id(searcher: Coordinate) -> None:
    recording = RecordingSearcher()
    composer = RecommendationComposer(recording, radius_km=30, location_timeout_seconds=1)

    await composer.recommend(
        FighterQueryProfile(fighter_id="f-9", weight_class=WeightClass.LIGHTWEIGHT),
        StaticLocationProvider(searcher),
    )

    filters, location, searcher_id = recording.calls[0]
    assert filters is not None and filters.max_distance == 30
    assert filters.weight_classes == [WeightClass.LIGHTWEIGHT]
    assert location == searcher
    assert searcher_id == "f-9"


@pytest.mark.asyncio
async def test_composer_without_location_still_searches() -> None:
    recording = RecordingSearcher()
    composer = RecommendationComposer(recording)

    await composer.recommend(FighterQueryProfile(fighter_id="f-1"), None)

    assert recording.calls[0][1] is None


@pytest.mark.asyncio
async def test_load_profile_returns_known_fighter() -> None:
    profile = FighterQueryProfile(fighter_id="f-1", weight_class=WeightClass.HEAVYWEIGHT)

    assert await load_fighter_profile(InMemoryProfileStore([profile]), "f-1") == profile


@pytest.mark.asyncio
async def test_load_profile_raises_for_unknown_fighter() -> None:
    with pytest.raises(ProfileNotFound) as excinfo:
        await load_fighter_profile(InMemoryProfileStore([]), "ghost")

    assert excinfo.value.fighter_id == "ghost"


@pytest.mark.asyncio
async def test_load_profile_without_store_builds_bare_profile() -> None:
    profile = await load_fighter_profile(
        None, "f-1", weight_class=WeightClass.WELTERWEIGHT
    )

    assert profile == FighterQueryProfile(
        fighter_id="f-1", weight_class=WeightClass.WELTERWEIGHT, experience_level=None
    )


@pytest.mark.asyncio
async def test_load_profile_with_store_ignores_query_attributes() -> None:
    stored = FighterQueryProfile(fighter_id="f-1", weight_class=WeightClass.LIGHTWEIGHT)

    profile = await load_fighter_profile(
        InMemoryProfileStore([stored]), "f-1", weight_class=WeightClass.HEAVYWEIGHT
    )

    assert profile == stored
