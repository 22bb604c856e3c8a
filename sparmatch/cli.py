"""Operator commands for local development and demos.

Usage:
    sparmatch init-db
    sparmatch seed-sample
    sparmatch search --lat 54.6872 --lng 25.2797 --weight-class welterweight
    sparmatch search --json
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Sequence
from datetime import date

import click
from rich.console import Console
from rich.table import Table
from sqlalchemy.ext.asyncio import AsyncEngine

from sparmatch.db.connection import create_engine, create_session_factory
from sparmatch.db.models import Base, Gym, SparringEvent
from sparmatch.db.repositories import SQLEventRepository, SQLGymRepository, SQLRequestRepository
from sparmatch.schemas.event import (
    Coordinate,
    EnrichedEvent,
    ExperienceLevel,
    SearchFilters,
    WeightClass,
)
from sparmatch.services.catalog import CatalogReader, LiveCatalogSource
from sparmatch.services.discovery_service import DiscoveryResult, DiscoveryService
from sparmatch.services.enrichment import RequestStateEnricher
from sparmatch.services.errors import CatalogUnavailable
from sparmatch.services.sample_catalog import (
    SAMPLE_CATALOG,
    SAMPLE_GYM_DIRECTORY,
    sample_catalog_starting,
)
from sparmatch.settings import get_settings

console = Console()

# Sample event gyms only carry a country name.
_COUNTRY_CODES = {"Germany": "DE", "Lithuania": "LT"}


def _engine(database_url: str | None) -> AsyncEngine:
    url = database_url or get_settings().resolved_database_url
    if url is None:
        raise click.UsageError("DATABASE_URL is not set; pass --database-url or configure .env")
    return create_engine(url)


async def _init_db(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()


def sample_rows(start: date | None) -> tuple[list[Gym], list[SparringEvent]]:
    """Build ORM rows for the sample catalog and gym directory.

    When ``start`` is given, event dates are shifted so the earliest sample
    event falls on ``start`` and the spacing between events is kept.
    """

    catalog = sample_catalog_starting(start) if start is not None else SAMPLE_CATALOG

    gyms: dict[str, Gym] = {}
    for entry in catalog:
        summary = entry.gym
        if summary is None or summary.gym_id in gyms:
            continue
        gyms[summary.gym_id] = Gym(
            id=summary.gym_id,
            name=summary.name,
            slug=summary.gym_id,
            city=summary.city or "",
            country=summary.country or "",
            country_code=_COUNTRY_CODES.get(summary.country or "", "XX"),
            latitude=summary.latitude,
            longitude=summary.longitude,
            sports=["boxing"],
        )
    for listing in SAMPLE_GYM_DIRECTORY:
        gyms[listing.gym_id] = Gym(
            id=listing.gym_id,
            name=listing.name,
            slug=listing.slug,
            city=listing.city,
            country=listing.country_name,
            country_code=listing.country_code,
            address=listing.address,
            latitude=listing.latitude,
            longitude=listing.longitude,
            sports=[sport.value for sport in listing.sports],
            is_claimed=listing.is_claimed,
            verified=listing.verified,
        )

    events = [
        SparringEvent(
            id=entry.event.event_id,
            gym_id=entry.event.gym_id,
            event_type=entry.event.event_type.value if entry.event.event_type else None,
            intensity=entry.event.intensity.value if entry.event.intensity else None,
            title=entry.event.title,
            description=entry.event.description,
            event_date=entry.event.event_date,
            start_time=entry.event.start_time,
            end_time=entry.event.end_time,
            weight_classes=[value.value for value in entry.event.weight_classes],
            experience_levels=[value.value for value in entry.event.experience_levels],
            max_participants=entry.event.max_participants,
            current_participants=entry.event.current_participants,
            status=entry.event.status.value,
        )
        for entry in catalog
    ]
    return list(gyms.values()), events


async def _seed_sample(engine: AsyncEngine, start: date | None) -> int:
    gyms, events = sample_rows(start)
    session_factory = create_session_factory(engine)
    async with session_factory() as session:
        for gym in gyms:
            await session.merge(gym)
        await session.flush()
        for event in events:
            await session.merge(event)
        await session.commit()
    await engine.dispose()
    return len(events)


async def _search(
    engine: AsyncEngine,
    filters: SearchFilters,
    location: Coordinate | None,
    searcher_id: str | None,
) -> DiscoveryResult:
    session_factory = create_session_factory(engine)
    try:
        async with session_factory() as session:
            service = DiscoveryService(
                LiveCatalogSource(
                    CatalogReader(SQLEventRepository(session), SQLGymRepository(session))
                ),
                RequestStateEnricher(SQLRequestRepository(session)),
            )
            return await service.search_events(filters, location, searcher_id)
    finally:
        await engine.dispose()


def _render_table(events: Sequence[EnrichedEvent]) -> Table:
    table = Table(title=f"{len(events)} event(s)")
    table.add_column("Date", style="cyan")
    table.add_column("Event")
    table.add_column("Gym", style="magenta")
    table.add_column("Distance", justify="right")
    table.add_column("Weight classes", style="dim")
    table.add_column("Request", style="yellow")
    for event in events:
        table.add_row(
            event.event_date.isoformat(),
            event.title,
            event.gym_name or "-",
            f"{event.distance:.1f} km" if event.distance is not None else "-",
            ", ".join(value.value for value in event.weight_classes),
            event.request_status.value if event.request_status else "",
        )
    return table


@click.group()
@click.option("--database-url", envvar="DATABASE_URL", help="Override DATABASE_URL")
@click.pass_context
def cli(ctx: click.Context, database_url: str | None) -> None:
    """Sparmatch discovery tooling."""
    ctx.ensure_object(dict)
    ctx.obj["database_url"] = database_url


@cli.command("init-db")
@click.pass_context
def init_db(ctx: click.Context) -> None:
    """Create every table directly (development databases only; use Alembic elsewhere)."""
    asyncio.run(_init_db(_engine(ctx.obj["database_url"])))
    console.print("[green]Tables created[/green]")


@cli.command("seed-sample")
@click.option(
    "--keep-dates",
    is_flag=True,
    help="Keep the sample dates instead of moving the first event to today",
)
@click.pass_context
def seed_sample(ctx: click.Context, keep_dates: bool) -> None:
    """Load the sample catalog and gym directory into the database."""
    start = None if keep_dates else date.today()
    count = asyncio.run(_seed_sample(_engine(ctx.obj["database_url"]), start))
    console.print(f"[green]Seeded {count} sample events[/green]")


@cli.command("search")
@click.option("--lat", type=click.FloatRange(-90, 90), default=None)
@click.option("--lng", type=click.FloatRange(-180, 180), default=None)
@click.option(
    "--weight-class",
    "weight_classes",
    multiple=True,
    type=click.Choice([value.value for value in WeightClass]),
)
@click.option(
    "--experience-level",
    "experience_levels",
    multiple=True,
    type=click.Choice([value.value for value in ExperienceLevel]),
)
@click.option("--max-distance", type=click.FloatRange(min=0), default=None, help="Kilometres")
@click.option("--searcher-id", default=None, help="Fighter whose request state to show")
@click.option("--json", "output_json", is_flag=True, help="Print results as JSON")
@click.pass_context
def search(
    ctx: click.Context,
    lat: float | None,
    lng: float | None,
    weight_classes: tuple[str, ...],
    experience_levels: tuple[str, ...],
    max_distance: float | None,
    searcher_id: str | None,
    output_json: bool,
) -> None:
    """Run an event search against the configured database."""
    location = Coordinate(latitude=lat, longitude=lng) if lat is not None and lng is not None else None
    filters = SearchFilters(
        weight_classes=[WeightClass(value) for value in weight_classes],
        experience_levels=[ExperienceLevel(value) for value in experience_levels],
        max_distance=max_distance,
    )
    try:
        result = asyncio.run(
            _search(_engine(ctx.obj["database_url"]), filters, location, searcher_id)
        )
    except CatalogUnavailable as exc:
        raise click.ClickException(str(exc)) from exc

    if output_json:
        click.echo(
            json.dumps(
                {
                    "ranked": result.ranked,
                    "events": [event.model_dump(mode="json") for event in result.events],
                },
                indent=2,
            )
        )
        return

    console.print(_render_table(result.events))
    if location is None:
        console.print("[dim]No location given; results are in date order[/dim]")


if __name__ == "__main__":
    cli()
