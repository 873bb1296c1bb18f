"""Building requirement specs — the read-only input of the construction gate."""

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

from bottega.models.catalogue import CraftedItem


class Science(StrEnum):
    """Sciences whose badges a building can require."""

    MATHEMATICS = "mathematics"
    PHYSICS = "physics"
    CHEMISTRY = "chemistry"
    GEOMETRY = "geometry"
    ENGINEERING = "engineering"
    ASTRONOMY = "astronomy"
    BIOLOGY = "biology"
    GEOLOGY = "geology"
    OPTICS = "optics"
    HYDRAULICS = "hydraulics"
    ACOUSTICS = "acoustics"
    MATERIALS = "materials"
    ARCHITECTURE = "architecture"


class Era(StrEnum):
    ANCIENT_ROME = "ancient_rome"
    RENAISSANCE = "renaissance"


class BuildingSpec(BaseModel):
    """What a building needs before construction can begin."""

    building_id: int
    name: str
    era: Era
    sciences: list[Science] = Field(default_factory=list)
    required_materials: dict[CraftedItem, int] = Field(default_factory=dict)
    has_sketch: bool = False  # sketch content exists for this building
    has_quiz: bool = False  # quiz content exists for this building

    @field_validator("required_materials")
    @classmethod
    def _positive_counts(cls, value: dict[CraftedItem, int]) -> dict[CraftedItem, int]:
        for item, count in value.items():
            if count <= 0:
                raise ValueError(f"required count for {item} must be positive")
        return value


# --- City plots ---

BUILDINGS: dict[int, BuildingSpec] = {
    b.building_id: b
    for b in (
        BuildingSpec(
            building_id=1,
            name="Aqueduct",
            era=Era.ANCIENT_ROME,
            sciences=[Science.ENGINEERING, Science.HYDRAULICS, Science.MATHEMATICS],
            required_materials={
                CraftedItem.LIME_MORTAR: 2,
                CraftedItem.ROMAN_CONCRETE: 1,
                CraftedItem.LEAD_SHEETING: 1,
            },
            has_sketch=True,
            has_quiz=True,
        ),
        BuildingSpec(
            building_id=2,
            name="Colosseum",
            era=Era.ANCIENT_ROME,
            sciences=[Science.ARCHITECTURE, Science.ENGINEERING, Science.ACOUSTICS],
            required_materials={
                CraftedItem.ROMAN_CONCRETE: 2,
                CraftedItem.MARBLE_SLABS: 1,
                CraftedItem.TIMBER_BEAMS: 1,
            },
            has_quiz=True,
        ),
        BuildingSpec(
            building_id=3,
            name="Roman Baths",
            era=Era.ANCIENT_ROME,
            sciences=[Science.HYDRAULICS, Science.CHEMISTRY, Science.MATERIALS],
            required_materials={
                CraftedItem.TERRACOTTA_TILES: 2,
                CraftedItem.LEAD_SHEETING: 1,
                CraftedItem.TIMBER_BEAMS: 1,
            },
            has_quiz=True,
        ),
        BuildingSpec(
            building_id=4,
            name="Duomo",
            era=Era.RENAISSANCE,
            sciences=[Science.GEOMETRY, Science.ARCHITECTURE, Science.PHYSICS],
            required_materials={
                CraftedItem.TERRACOTTA_TILES: 2,
                CraftedItem.LIME_MORTAR: 1,
                CraftedItem.STAINED_GLASS: 1,
            },
            has_sketch=True,
            has_quiz=True,
        ),
        BuildingSpec(
            building_id=5,
            name="Observatory",
            era=Era.RENAISSANCE,
            sciences=[Science.ASTRONOMY, Science.OPTICS, Science.MATHEMATICS],
            required_materials={
                CraftedItem.GLASS_PANES: 2,
                CraftedItem.BRONZE_FITTINGS: 1,
            },
        ),
        BuildingSpec(
            building_id=6,
            name="Workshop",
            era=Era.RENAISSANCE,
            sciences=[Science.ENGINEERING, Science.PHYSICS, Science.MATERIALS],
            required_materials={
                CraftedItem.TIMBER_BEAMS: 1,
                CraftedItem.CARVED_WOOD: 1,
                CraftedItem.SILK_FABRIC: 1,
            },
            has_sketch=True,
        ),
    )
}


def is_valid_building(building_id: int) -> bool:
    """Check if a building id exists in the city plan."""
    return building_id in BUILDINGS
