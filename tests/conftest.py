"""Shared test fixtures."""

import os
import random

import pytest
from bottega import (
    BuildingSpec,
    CraftedItem,
    Era,
    InventoryLedger,
    Material,
    Recipe,
    RecipeCatalog,
    Science,
    Temperature,
    WorkshopBusClient,
    WorkshopSession,
)


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


MORTAR_RECIPE = Recipe(
    output=CraftedItem.LIME_MORTAR,
    ingredients={Material.LIMESTONE: 2, Material.WATER: 1},
    temperature=Temperature.MEDIUM,
    processing_time=3.0,
)

TILES_RECIPE = Recipe(
    output=CraftedItem.TERRACOTTA_TILES,
    ingredients={Material.CLAY: 3, Material.WATER: 1},
    temperature=Temperature.HIGH,
    processing_time=4.0,
)

# One building gated only by mortar, one gated by everything.
MORTAR_HOUSE = BuildingSpec(
    building_id=100,
    name="Mortar House",
    era=Era.ANCIENT_ROME,
    required_materials={CraftedItem.LIME_MORTAR: 2},
)

TEMPLE = BuildingSpec(
    building_id=200,
    name="Temple",
    era=Era.RENAISSANCE,
    sciences=[Science.GEOMETRY, Science.ARCHITECTURE],
    required_materials={CraftedItem.LIME_MORTAR: 1, CraftedItem.TERRACOTTA_TILES: 1},
    has_sketch=True,
    has_quiz=True,
)


@pytest.fixture
def nats_url() -> str:
    return os.environ.get("NATS_URL", "nats://localhost:4222")


@pytest.fixture
async def bus_client(nats_url: str) -> WorkshopBusClient:
    """Provide a connected WorkshopBusClient, cleaned up after use."""
    client = WorkshopBusClient(nats_url)
    await client.connect()
    yield client  # type: ignore[misc]
    await client.close()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def catalog() -> RecipeCatalog:
    return RecipeCatalog([MORTAR_RECIPE, TILES_RECIPE])


@pytest.fixture
def buildings() -> dict[int, BuildingSpec]:
    return {MORTAR_HOUSE.building_id: MORTAR_HOUSE, TEMPLE.building_id: TEMPLE}


@pytest.fixture
def session(catalog, buildings, clock) -> WorkshopSession:
    """Session on the small test catalogue, no florins, no firing reward, seeded master."""
    return WorkshopSession(
        catalog=catalog,
        buildings=buildings,
        ledger=InventoryLedger(),
        clock=clock,
        reward=0,
        rng=random.Random(0),
    )
