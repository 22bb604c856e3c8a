"""Fixed sample data served when the live stores are unavailable.

The sample keeps the discovery screens populated for offline and demo
operation. Its content never changes at runtime and is returned without
filtering. The dates below are reference dates only: callers serve
:func:`sample_catalog_starting` so the first event falls on the current day
and the spacing between events is kept.

Events (reference dates):

* ``sample-1`` Technical Sparring Session, Elite Boxing Academy (Berlin),
  2026-02-15, welterweight/middleweight, intermediate/advanced.
* ``sample-2`` Hard Rounds Friday, Elite Boxing Academy (Berlin),
  2026-02-20 (day +5), lightweight/welterweight, advanced/pro.
* ``sample-3`` Open Mat Training, Fight Academy Vilnius, 2026-03-01
  (day +14), every weight class from lightweight to middleweight, all levels.

Gyms (directory): Elite Boxing Club and Fight Academy Vilnius (Vilnius),
Kaunas MMA Center (Kaunas).
"""

from __future__ import annotations

from datetime import date

from sparmatch.schemas.event import (
    CatalogEntry,
    Event,
    EventIntensity,
    EventStatus,
    EventType,
    ExperienceLevel,
    GymSummary,
    WeightClass,
)
from sparmatch.schemas.gym import CombatSport, DirectoryGym

_BERLIN_GYM = GymSummary(
    gym_id="sample-gym-berlin",
    name="Elite Boxing Academy",
    city="Berlin",
    country="Germany",
    latitude=52.5200,
    longitude=13.4050,
)

_VILNIUS_GYM = GymSummary(
    gym_id="sample-gym-vilnius",
    name="Fight Academy Vilnius",
    city="Vilnius",
    country="Lithuania",
    latitude=54.7023,
    longitude=25.2798,
)

SAMPLE_CATALOG: tuple[CatalogEntry, ...] = (
    CatalogEntry(
        event=Event(
            event_id="sample-1",
            gym_id=_BERLIN_GYM.gym_id,
            event_type=EventType.SPARRING,
            intensity=EventIntensity.TECHNICAL,
            title="Technical Sparring Session",
            description="Light contact sparring focused on technique",
            event_date=date(2026, 2, 15),
            start_time="18:00",
            end_time="20:00",
            weight_classes=[WeightClass.WELTERWEIGHT, WeightClass.MIDDLEWEIGHT],
            experience_levels=[ExperienceLevel.INTERMEDIATE, ExperienceLevel.ADVANCED],
            max_participants=16,
            current_participants=8,
            status=EventStatus.PUBLISHED,
        ),
        gym=_BERLIN_GYM,
    ),
    CatalogEntry(
        event=Event(
            event_id="sample-2",
            gym_id=_BERLIN_GYM.gym_id,
            event_type=EventType.SPARRING,
            intensity=EventIntensity.HARD,
            title="Hard Rounds Friday",
            event_date=date(2026, 2, 20),
            start_time="19:00",
            end_time="21:00",
            weight_classes=[WeightClass.LIGHTWEIGHT, WeightClass.WELTERWEIGHT],
            experience_levels=[ExperienceLevel.ADVANCED, ExperienceLevel.PRO],
            max_participants=12,
            current_participants=8,
            status=EventStatus.PUBLISHED,
        ),
        gym=_BERLIN_GYM,
    ),
    CatalogEntry(
        event=Event(
            event_id="sample-3",
            gym_id=_VILNIUS_GYM.gym_id,
            event_type=EventType.TRAINING,
            intensity=EventIntensity.MODERATE,
            title="Open Mat Training",
            event_date=date(2026, 3, 1),
            start_time="11:00",
            end_time="13:00",
            weight_classes=[
                WeightClass.LIGHTWEIGHT,
                WeightClass.LIGHT_WELTERWEIGHT,
                WeightClass.WELTERWEIGHT,
                WeightClass.LIGHT_MIDDLEWEIGHT,
                WeightClass.MIDDLEWEIGHT,
            ],
            experience_levels=list(ExperienceLevel),
            max_participants=30,
            current_participants=11,
            status=EventStatus.PUBLISHED,
        ),
        gym=_VILNIUS_GYM,
    ),
)

SAMPLE_GYM_DIRECTORY: tuple[DirectoryGym, ...] = (
    DirectoryGym(
        gym_id="sample-directory-1",
        name="Elite Boxing Club",
        slug="elite-boxing-club-vilnius",
        country_code="LT",
        country_name="Lithuania",
        city="Vilnius",
        address="Gedimino pr. 50, Vilnius",
        latitude=54.6872,
        longitude=25.2797,
        sports=[CombatSport.BOXING, CombatSport.KICKBOXING],
        is_claimed=True,
        verified=True,
    ),
    DirectoryGym(
        gym_id="sample-directory-2",
        name="Fight Academy Vilnius",
        slug="fight-academy-vilnius",
        country_code="LT",
        country_name="Lithuania",
        city="Vilnius",
        address="Kalvariju g. 125, Vilnius",
        latitude=54.7023,
        longitude=25.2798,
        sports=[CombatSport.MMA, CombatSport.MUAY_THAI],
    ),
    DirectoryGym(
        gym_id="sample-directory-3",
        name="Kaunas MMA Center",
        slug="kaunas-mma-center",
        country_code="LT",
        country_name="Lithuania",
        city="Kaunas",
        address="Savanoriu pr. 200, Kaunas",
        latitude=54.8985,
        longitude=23.9036,
        sports=[CombatSport.MMA, CombatSport.BOXING],
    ),
)


def sample_catalog_starting(start: date) -> tuple[CatalogEntry, ...]:
    """Return the sample catalog with its earliest event moved to ``start``."""

    offset = start - min(entry.event.event_date for entry in SAMPLE_CATALOG)
    return tuple(
        entry.model_copy(
            update={
                "event": entry.event.model_copy(
                    update={"event_date": entry.event.event_date + offset}
                )
            }
        )
        for entry in SAMPLE_CATALOG
    )


__all__ = ["SAMPLE_CATALOG", "SAMPLE_GYM_DIRECTORY", "sample_catalog_starting"]
