"""Catalogue data — materials, crafted items, and recipes for the workshop."""

from collections.abc import Iterable, Iterator, Mapping
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

WORKBENCH_SLOTS = 4


class Material(StrEnum):
    """Raw materials collected at the workshop stations."""

    LIMESTONE = "limestone"
    VOLCANIC_ASH = "volcanic_ash"
    SAND = "sand"
    WATER = "water"
    IRON_ORE = "iron_ore"
    CLAY = "clay"
    MARBLE_DUST = "marble_dust"
    RED_OCHRE = "red_ochre"
    LAPIS_BLUE = "lapis_blue"
    VERDIGRIS_GREEN = "verdigris_green"
    TIMBER = "timber"
    LEAD = "lead"
    MARBLE = "marble"
    SILK = "silk"


class CraftedItem(StrEnum):
    """Building supplies produced by firing a workbench mix."""

    LIME_MORTAR = "lime_mortar"
    ROMAN_CONCRETE = "roman_concrete"
    TERRACOTTA_TILES = "terracotta_tiles"
    RED_FRESCO_PIGMENT = "red_fresco_pigment"
    BLUE_FRESCO_PIGMENT = "blue_fresco_pigment"
    BRONZE_FITTINGS = "bronze_fittings"
    TIMBER_BEAMS = "timber_beams"
    GLASS_PANES = "glass_panes"
    STAINED_GLASS = "stained_glass"
    MARBLE_SLABS = "marble_slabs"
    LEAD_SHEETING = "lead_sheeting"
    SILK_FABRIC = "silk_fabric"
    CARVED_WOOD = "carved_wood"


class Temperature(StrEnum):
    """Furnace heat settings."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MaterialInfo(BaseModel):
    """Catalogue entry for a raw material."""

    material: Material
    display_name: str
    icon: str
    cost: int = Field(gt=0)  # florins per unit


class CraftedItemInfo(BaseModel):
    """Catalogue entry for a crafted item."""

    item: CraftedItem
    display_name: str
    icon: str


class Recipe(BaseModel):
    """An exact ingredient multiset that fires into one crafted item."""

    model_config = {"frozen": True}

    output: CraftedItem
    ingredients: dict[Material, int]
    temperature: Temperature
    processing_time: float = Field(gt=0)  # seconds in the furnace
    educational_text: str = ""

    @field_validator("ingredients")
    @classmethod
    def _positive_counts(cls, value: dict[Material, int]) -> dict[Material, int]:
        if not value:
            raise ValueError("recipe needs at least one ingredient")
        for material, count in value.items():
            if count <= 0:
                raise ValueError(f"ingredient {material} must have a positive count")
        return value

    def __hash__(self) -> int:
        # `ingredients` is a dict, so hash on its multiset instead.
        return hash((self.output, _multiset_key(self.ingredients), self.temperature))

    @property
    def unit_count(self) -> int:
        """Total number of workbench slots this recipe occupies."""
        return sum(self.ingredients.values())


class CatalogError(ValueError):
    """Raised when a recipe catalogue would make lookups ambiguous."""


def _multiset_key(ingredients: Mapping[Material, int]) -> frozenset[tuple[Material, int]]:
    return frozenset((m, c) for m, c in ingredients.items() if c > 0)


class RecipeCatalog:
    """Validated, ordered collection of recipes.

    Rejects catalogues where two recipes share an ingredient multiset or an
    output, so both forward (workbench) and backward (shortfall) lookups
    are unambiguous.
    """

    def __init__(self, recipes: Iterable[Recipe], slots: int = WORKBENCH_SLOTS) -> None:
        self._recipes: list[Recipe] = []
        self._by_inputs: dict[frozenset[tuple[Material, int]], Recipe] = {}
        self._by_output: dict[CraftedItem, Recipe] = {}

        for recipe in recipes:
            key = _multiset_key(recipe.ingredients)
            if key in self._by_inputs:
                raise CatalogError(
                    f"Recipes for '{self._by_inputs[key].output}' and '{recipe.output}' "
                    f"share the same ingredients"
                )
            if recipe.output in self._by_output:
                raise CatalogError(f"More than one recipe produces '{recipe.output}'")
            if recipe.unit_count > slots:
                raise CatalogError(
                    f"Recipe for '{recipe.output}' needs {recipe.unit_count} units "
                    f"but the workbench has {slots} slots"
                )
            self._recipes.append(recipe)
            self._by_inputs[key] = recipe
            self._by_output[recipe.output] = recipe

    def __iter__(self) -> Iterator[Recipe]:
        return iter(self._recipes)

    def __len__(self) -> int:
        return len(self._recipes)

    def match(self, ingredients: Mapping[Material, int]) -> Recipe | None:
        """Return the recipe whose ingredients equal this multiset exactly."""
        return self._by_inputs.get(_multiset_key(ingredients))

    def recipe_for(self, output: CraftedItem) -> Recipe | None:
        """Return the recipe producing `output`, if any."""
        return self._by_output.get(output)


# --- Material catalogue ---

MATERIALS: dict[Material, MaterialInfo] = {
    m.material: m
    for m in (
        MaterialInfo(material=Material.LIMESTONE, display_name="Limestone", icon="🪨", cost=2),
        MaterialInfo(material=Material.VOLCANIC_ASH, display_name="Volcanic Ash", icon="🌋", cost=4),
        MaterialInfo(material=Material.SAND, display_name="Sand", icon="🏖️", cost=1),
        MaterialInfo(material=Material.WATER, display_name="Water", icon="💧", cost=1),
        MaterialInfo(material=Material.IRON_ORE, display_name="Iron Ore", icon="⛏️", cost=4),
        MaterialInfo(material=Material.CLAY, display_name="Clay", icon="🟤", cost=2),
        MaterialInfo(material=Material.MARBLE_DUST, display_name="Marble Dust", icon="⚪", cost=3),
        MaterialInfo(material=Material.RED_OCHRE, display_name="Red Ochre", icon="🔴", cost=3),
        MaterialInfo(material=Material.LAPIS_BLUE, display_name="Lapis Blue", icon="🔵", cost=8),
        MaterialInfo(
            material=Material.VERDIGRIS_GREEN, display_name="Verdigris Green", icon="🟢", cost=5
        ),
        MaterialInfo(material=Material.TIMBER, display_name="Timber", icon="🪵", cost=2),
        MaterialInfo(material=Material.LEAD, display_name="Lead", icon="🔩", cost=5),
        MaterialInfo(material=Material.MARBLE, display_name="Marble", icon="🏛️", cost=6),
        MaterialInfo(material=Material.SILK, display_name="Silk", icon="🧵", cost=6),
    )
}


# --- Crafted item catalogue ---

CRAFTED_ITEMS: dict[CraftedItem, CraftedItemInfo] = {
    c.item: c
    for c in (
        CraftedItemInfo(item=CraftedItem.LIME_MORTAR, display_name="Lime Mortar", icon="🏺"),
        CraftedItemInfo(item=CraftedItem.ROMAN_CONCRETE, display_name="Roman Concrete", icon="🧱"),
        CraftedItemInfo(
            item=CraftedItem.TERRACOTTA_TILES, display_name="Terracotta Tiles", icon="🟫"
        ),
        CraftedItemInfo(
            item=CraftedItem.RED_FRESCO_PIGMENT, display_name="Red Fresco Pigment", icon="🎨"
        ),
        CraftedItemInfo(
            item=CraftedItem.BLUE_FRESCO_PIGMENT, display_name="Blue Fresco Pigment", icon="🖌️"
        ),
        CraftedItemInfo(item=CraftedItem.BRONZE_FITTINGS, display_name="Bronze Fittings", icon="⚙️"),
        CraftedItemInfo(item=CraftedItem.TIMBER_BEAMS, display_name="Timber Beams", icon="🪵"),
        CraftedItemInfo(item=CraftedItem.GLASS_PANES, display_name="Glass Panes", icon="🪟"),
        CraftedItemInfo(item=CraftedItem.STAINED_GLASS, display_name="Stained Glass", icon="🌈"),
        CraftedItemInfo(item=CraftedItem.MARBLE_SLABS, display_name="Marble Slabs", icon="⬜"),
        CraftedItemInfo(item=CraftedItem.LEAD_SHEETING, display_name="Lead Sheeting", icon="📄"),
        CraftedItemInfo(item=CraftedItem.SILK_FABRIC, display_name="Silk Fabric", icon="🧶"),
        CraftedItemInfo(item=CraftedItem.CARVED_WOOD, display_name="Carved Wood", icon="🪑"),
    )
}


# --- Recipes ---

RECIPES = RecipeCatalog(
    [
        Recipe(
            output=CraftedItem.LIME_MORTAR,
            ingredients={Material.LIMESTONE: 2, Material.WATER: 1, Material.SAND: 1},
            temperature=Temperature.HIGH,
            processing_time=4.0,
            educational_text=(
                "Limestone heated to 900°C becomes quicklime; slaked with water it "
                "binds stone. Romans used lime mortar for 2000 years."
            ),
        ),
        Recipe(
            output=CraftedItem.ROMAN_CONCRETE,
            ingredients={
                Material.LIMESTONE: 1,
                Material.VOLCANIC_ASH: 1,
                Material.WATER: 1,
                Material.SAND: 1,
            },
            temperature=Temperature.MEDIUM,
            processing_time=5.0,
            educational_text=(
                "Volcanic ash (pozzolana) makes concrete that sets under water. "
                "The Pantheon dome still stands after 2000 years."
            ),
        ),
        Recipe(
            output=CraftedItem.TERRACOTTA_TILES,
            ingredients={Material.CLAY: 3, Material.WATER: 1},
            temperature=Temperature.HIGH,
            processing_time=4.0,
            educational_text="Terra cotta means 'baked earth'. Clay fired at 1000°C roofs Florence.",
        ),
        Recipe(
            output=CraftedItem.RED_FRESCO_PIGMENT,
            ingredients={Material.RED_OCHRE: 2, Material.WATER: 1, Material.LIMESTONE: 1},
            temperature=Temperature.LOW,
            processing_time=3.0,
            educational_text="Fresco pigment is bound by lime crystallizing in wet plaster.",
        ),
        Recipe(
            output=CraftedItem.BLUE_FRESCO_PIGMENT,
            ingredients={Material.LAPIS_BLUE: 2, Material.WATER: 1, Material.LIMESTONE: 1},
            temperature=Temperature.LOW,
            processing_time=3.0,
            educational_text="Ultramarine from lapis lazuli once cost more than gold.",
        ),
        Recipe(
            output=CraftedItem.BRONZE_FITTINGS,
            ingredients={Material.IRON_ORE: 2, Material.CLAY: 1},
            temperature=Temperature.HIGH,
            processing_time=5.0,
            educational_text="Metal is poured into clay molds; casting needs extreme heat.",
        ),
        Recipe(
            output=CraftedItem.TIMBER_BEAMS,
            ingredients={Material.TIMBER: 3, Material.IRON_ORE: 1},
            temperature=Temperature.MEDIUM,
            processing_time=3.0,
            educational_text="Oak and chestnut beams were shaped with iron adzes and nailed.",
        ),
        Recipe(
            output=CraftedItem.GLASS_PANES,
            ingredients={Material.SAND: 2, Material.LIMESTONE: 1, Material.WATER: 1},
            temperature=Temperature.HIGH,
            processing_time=4.0,
            educational_text="Limestone lowers the melting point of sand so glass can be cast.",
        ),
        Recipe(
            output=CraftedItem.STAINED_GLASS,
            ingredients={
                Material.SAND: 1,
                Material.LEAD: 1,
                Material.LAPIS_BLUE: 1,
                Material.LIMESTONE: 1,
            },
            temperature=Temperature.HIGH,
            processing_time=5.0,
            educational_text="Colored glass pieces were joined with lead cames.",
        ),
        Recipe(
            output=CraftedItem.MARBLE_SLABS,
            ingredients={Material.MARBLE: 3, Material.WATER: 1},
            temperature=Temperature.LOW,
            processing_time=3.0,
            educational_text="Marble was cut with sand-fed saws and polished with water.",
        ),
        Recipe(
            output=CraftedItem.LEAD_SHEETING,
            ingredients={Material.LEAD: 2, Material.IRON_ORE: 1, Material.WATER: 1},
            temperature=Temperature.HIGH,
            processing_time=4.0,
            educational_text="Cast lead sheets waterproofed roofs; lead pipes carried city water.",
        ),
        Recipe(
            output=CraftedItem.SILK_FABRIC,
            ingredients={Material.SILK: 2, Material.WATER: 1},
            temperature=Temperature.LOW,
            processing_time=3.0,
            educational_text="Starched silk taffeta covered the wings of Leonardo's flying machine.",
        ),
        Recipe(
            output=CraftedItem.CARVED_WOOD,
            ingredients={Material.TIMBER: 2, Material.IRON_ORE: 1},
            temperature=Temperature.LOW,
            processing_time=4.0,
            educational_text="Walnut was the wood of choice for fine carving.",
        ),
    ]
)


def material_cost(materials: Mapping[Material, int]) -> int:
    """Return the florin price of a raw-material multiset."""
    return sum(MATERIALS[m].cost * qty for m, qty in materials.items())


def is_valid_material(name: str) -> bool:
    """Check if a name is a known raw material identifier."""
    return name in {m.value for m in Material}


def is_valid_crafted_item(name: str) -> bool:
    """Check if a name is a known crafted item identifier."""
    return name in {c.value for c in CraftedItem}


def as_material_map(materials: Mapping[str, int]) -> dict[Material, int] | None:
    """Key a quantity map by `Material`. Returns None if any key is not a material."""
    if not all(isinstance(m, str) and is_valid_material(m) for m in materials):
        return None
    return {Material(m): qty for m, qty in materials.items()}
