"""Construction gate — decides whether a building may begin construction.

A building is ready when four requirements hold:

1. every science it lists has a badge,
2. its sketch is complete (skipped when it has no sketch content),
3. its quiz is passed (skipped when it has no quiz content),
4. crafted stock covers its required materials.

The gate is monotone: more badges or more stock never close it again.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from bottega.engine.ledger import InventoryLedger
from bottega.engine.progress import ProgressBook
from bottega.models.buildings import BuildingSpec, Science
from bottega.models.catalogue import CraftedItem, Material, RecipeCatalog, material_cost

logger = logging.getLogger(__name__)

TOTAL_REQUIREMENTS = 4  # sciences, sketch, quiz, materials


@dataclass
class GateReport:
    """Checklist of one building's requirements."""

    building_id: int
    sciences_ok: bool
    sketch_ok: bool
    quiz_ok: bool
    materials_ok: bool
    missing_sciences: list[Science] = field(default_factory=list)
    missing_materials: dict[CraftedItem, int] = field(default_factory=dict)

    @property
    def requirements_met(self) -> int:
        return sum((self.sciences_ok, self.sketch_ok, self.quiz_ok, self.materials_ok))

    @property
    def total_requirements(self) -> int:
        return TOTAL_REQUIREMENTS

    @property
    def can_start(self) -> bool:
        return self.requirements_met == TOTAL_REQUIREMENTS


@dataclass
class MaterialShortfall:
    """Raw materials still needed to craft a building's missing supplies."""

    raw_deficit: dict[Material, int] = field(default_factory=dict)
    total_cost: int = 0
    uncraftable: list[CraftedItem] = field(default_factory=list)  # short, but no recipe

    @property
    def is_empty(self) -> bool:
        return not self.raw_deficit and not self.uncraftable


class ConstructionGate:
    """Reads the ledger and progress book; never mutates either."""

    def __init__(
        self,
        buildings: Mapping[int, BuildingSpec],
        ledger: InventoryLedger,
        progress: ProgressBook,
        catalog: RecipeCatalog,
    ) -> None:
        self._buildings = buildings
        self._ledger = ledger
        self._progress = progress
        self._catalog = catalog

    def building(self, building_id: int) -> BuildingSpec:
        spec = self._buildings.get(building_id)
        if spec is None:
            raise ValueError(f"Unknown building: {building_id!r}")
        return spec

    def check(self, building_id: int) -> GateReport:
        """Evaluate every requirement of a building."""
        spec = self.building(building_id)
        progress = self._progress.get(building_id)

        missing_sciences = [
            s for s in spec.sciences if s not in progress.science_badges_earned
        ]
        missing_materials = self._missing_crafted(spec)

        return GateReport(
            building_id=building_id,
            sciences_ok=not missing_sciences,
            sketch_ok=not spec.has_sketch or progress.sketch_completed,
            quiz_ok=not spec.has_quiz or progress.quiz_passed,
            materials_ok=not missing_materials,
            missing_sciences=missing_sciences,
            missing_materials=missing_materials,
        )

    def can_start_building(self, building_id: int) -> bool:
        """True only when all applicable requirements pass."""
        report = self.check(building_id)
        logger.debug(
            "Building %d: %d/%d requirements met",
            building_id,
            report.requirements_met,
            report.total_requirements,
        )
        return report.can_start

    def material_shortfall(self, building_id: int) -> MaterialShortfall:
        """Raw materials (and their price) needed to craft what is still missing.

        Needs are summed over every short item first, then stock on hand is
        subtracted once, so one limestone is never counted toward two recipes.
        """
        spec = self.building(building_id)
        needed: dict[Material, int] = {}
        uncraftable: list[CraftedItem] = []

        for item, units in self._missing_crafted(spec).items():
            recipe = self._catalog.recipe_for(item)
            if recipe is None:
                uncraftable.append(item)
                continue
            for material, count in recipe.ingredients.items():
                needed[material] = needed.get(material, 0) + count * units

        deficit: dict[Material, int] = {}
        for material, qty in needed.items():
            short = qty - self._ledger.raw_count(material)
            if short > 0:
                deficit[material] = short

        return MaterialShortfall(
            raw_deficit=deficit, total_cost=material_cost(deficit), uncraftable=uncraftable
        )

    def _missing_crafted(self, spec: BuildingSpec) -> dict[CraftedItem, int]:
        missing: dict[CraftedItem, int] = {}
        for item, required in spec.required_materials.items():
            have = self._ledger.crafted_count(item)
            if have < required:
                missing[item] = required - have
        return missing
