"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta

import pytest
import pytest_asyncio

from db.database import Database
from models import Coordinates, EquipmentRecord


def make_equipment(
    name: str,
    origin: str = "United States",
    category: str = "Fighter",
    lat: float = 38.9,
    lng: float = -77.0,
    **kwargs,
) -> EquipmentRecord:
    """Build an equipment record with sensible defaults."""
    return EquipmentRecord(
        name=name,
        origin=origin,
        type=category,
        coords=[lat, lng],
        specs={"speed": "Mach 2", "armament": "Cannon", "range": "3,000 km"},
        inService=kwargs.pop("in_service", 1990),
        status=kwargs.pop("status", "Active"),
        users=kwargs.pop("users", [origin]),
        **kwargs,
    )


@pytest.fixture
def equipment_factory():
    return make_equipment


@pytest.fixture
def catalog():
    """A small mixed catalog with three categories."""
    return [
        make_equipment("F-16 Fighting Falcon", "United States", "Fighter", 32.77, -97.44),
        make_equipment("Eurofighter Typhoon", "United Kingdom", "Fighter", 53.77, -2.87),
        make_equipment("Su-57", "Russia", "Fighter", 50.55, 137.01),
        make_equipment("Dassault Rafale", "France", "Fighter", 44.83, -0.70),
        make_equipment("Saab JAS 39 Gripen", "Sweden", "Fighter", 58.41, 15.62),
        make_equipment("Leopard 2", "Germany", "Tank", 48.14, 11.58),
        make_equipment("T-90", "Russia", "Tank", 57.91, 59.97),
        make_equipment("Merkava Mk 4", "Israel", "Tank", 32.08, 34.78),
        make_equipment("T129 ATAK", "Turkey", "Helicopter", 39.93, 32.86),
        make_equipment("HAL Prachand", "India", "Helicopter", 12.97, 77.59),
    ]


class FakeCountryLookup:
    """Names the country at exact catalog coordinates; everywhere else is open water."""

    def __init__(self, countries: dict[tuple[float, float], str]):
        self.countries = countries

    def country_at(self, location: Coordinates):
        return self.countries.get((location.lat, location.lng))


@pytest.fixture
def country_lookup(catalog):
    return FakeCountryLookup({(e.coords.lat, e.coords.lng): e.origin for e in catalog})


class FakeClock:
    """A controllable replacement for datetime.now."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 3, 15, 12, 0, 0))


@pytest_asyncio.fixture
async def db():
    """Create an in-memory database for testing."""
    database = Database(":memory:")
    await database.connect()
    yield database
    await database.close()
