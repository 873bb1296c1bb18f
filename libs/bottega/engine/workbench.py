"""Workbench — four staging slots where raw materials are combined before firing.

Placing a material only stages it; the ledger is debited once, at `mix()`.
"""

import logging
from collections import Counter

from bottega.engine.errors import CommandResult, CraftError, MixResult
from bottega.engine.furnace import Furnace, FurnaceState
from bottega.engine.ledger import InventoryLedger
from bottega.models.catalogue import WORKBENCH_SLOTS, Material, Recipe, RecipeCatalog

logger = logging.getLogger(__name__)


class Workbench:
    """Stages materials, resolves them against the catalogue, and feeds the furnace."""

    def __init__(
        self,
        catalog: RecipeCatalog,
        ledger: InventoryLedger,
        furnace: Furnace,
        slot_count: int = WORKBENCH_SLOTS,
    ) -> None:
        self._catalog = catalog
        self._ledger = ledger
        self._furnace = furnace
        self._slots: list[Material | None] = [None] * slot_count

    @property
    def slots(self) -> list[Material | None]:
        return list(self._slots)

    def staged(self) -> dict[Material, int]:
        """Multiset of the filled slots."""
        return dict(Counter(m for m in self._slots if m is not None))

    def available(self, material: Material) -> int:
        """Ledger stock not already staged on the bench."""
        return self._ledger.raw_count(material) - self._slots.count(material)

    def place(self, material: Material) -> CommandResult:
        """Put a material in the first empty slot."""
        try:
            index = self._slots.index(None)
        except ValueError:
            return CommandResult.fail(CraftError.WORKBENCH_FULL, "Workbench full!")
        if self.available(material) <= 0:
            return CommandResult.fail(
                CraftError.MATERIAL_UNAVAILABLE, f"No {material} left!"
            )
        self._slots[index] = material
        return CommandResult()

    def remove(self, slot_index: int) -> Material | None:
        """Empty one slot and return what was in it."""
        if not 0 <= slot_index < len(self._slots):
            raise IndexError(f"slot index {slot_index} out of range")
        material = self._slots[slot_index]
        self._slots[slot_index] = None
        return material

    def clear(self) -> None:
        self._slots = [None] * len(self._slots)

    def resolve_recipe(self) -> Recipe | None:
        """The recipe matching the staged multiset exactly, regardless of slot order."""
        staged = self.staged()
        if not staged:
            return None
        return self._catalog.match(staged)

    def mix(self) -> MixResult:
        """Consume the staged materials and load them into the furnace.

        Fails without changing anything when no recipe matches, the furnace
        is occupied, or the ledger cannot cover the batch.
        """
        recipe = self.resolve_recipe()
        if recipe is None:
            return MixResult.fail(CraftError.NO_RECIPE_MATCH, "Invalid recipe!")

        if self._furnace.state != FurnaceState.IDLE:
            return MixResult.fail(
                CraftError.FURNACE_BUSY, f"Furnace is {self._furnace.state}"
            )

        inputs = self.staged()
        if not self._ledger.debit_raw_materials(inputs):
            return MixResult.fail(
                CraftError.INSUFFICIENT_RAW_MATERIALS,
                f"Not enough raw materials for {recipe.output}",
            )

        loaded = self._furnace.load(inputs, recipe)
        if not loaded.ok:
            # Refund: the furnace refused the batch.
            self._ledger.add_raw_materials(inputs)
            return MixResult(error=loaded.error, reason=loaded.reason)

        self.clear()
        logger.info("Mixed %s for %s", inputs, recipe.output)
        return MixResult(inputs=inputs, recipe=recipe)
