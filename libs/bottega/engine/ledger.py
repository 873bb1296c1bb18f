"""Inventory ledger — raw materials, crafted items, and florins for one player.

Every mutating call validates the whole request before touching any count,
so a refused call leaves the ledger exactly as it was.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from bottega.models.catalogue import CraftedItem, Material, as_material_map

logger = logging.getLogger(__name__)

STARTING_FLORINS = 100


@dataclass
class InventoryLedger:
    """Counts never go negative; zero entries are dropped from the maps."""

    _raw: dict[Material, int] = field(default_factory=dict)
    _crafted: dict[CraftedItem, int] = field(default_factory=dict)
    _currency: int = 0

    # --- Read-only snapshots ---

    @property
    def raw_materials(self) -> dict[Material, int]:
        return dict(self._raw)

    @property
    def crafted_materials(self) -> dict[CraftedItem, int]:
        return dict(self._crafted)

    @property
    def currency(self) -> int:
        return self._currency

    def raw_count(self, material: Material) -> int:
        """Return the quantity of a raw material on hand."""
        return self._raw.get(material, 0)

    def crafted_count(self, item: CraftedItem) -> int:
        """Return the quantity of a crafted item on hand."""
        return self._crafted.get(item, 0)

    def has_raw_materials(self, requirements: Mapping[Material, int]) -> bool:
        """Check if raw stock satisfies all requirements."""
        return all(self.raw_count(m) >= qty for m, qty in requirements.items())

    # --- Raw materials ---

    def add_raw_materials(self, materials: Mapping[str, int]) -> bool:
        """Credit raw materials in bulk.

        Returns False if any key is not a raw material or any quantity is non-positive.
        """
        keyed = as_material_map(materials)
        if keyed is None or any(qty <= 0 for qty in keyed.values()):
            return False
        for material, qty in keyed.items():
            self._raw[material] = self._raw.get(material, 0) + qty
        logger.debug("Credited raw materials %s", keyed)
        return True

    def debit_raw_materials(self, materials: Mapping[str, int]) -> bool:
        """Remove raw materials all together. Returns False (and changes nothing) if short."""
        keyed = as_material_map(materials)
        if keyed is None or any(qty < 0 for qty in keyed.values()):
            return False
        if not self.has_raw_materials(keyed):
            return False
        for material, qty in keyed.items():
            if qty == 0:
                continue
            self._raw[material] -= qty
            if self._raw[material] == 0:
                del self._raw[material]
        logger.debug("Debited raw materials %s", keyed)
        return True

    # --- Crafted items ---

    def credit_crafted_item(self, item: CraftedItem, count: int = 1) -> None:
        """Add crafted items to stock."""
        if count <= 0:
            raise ValueError(f"count must be positive, got {count}")
        self._crafted[item] = self._crafted.get(item, 0) + count

    # --- Currency ---

    def spend_currency(self, amount: int) -> bool:
        """Subtract florins. Returns False if the balance is too low."""
        if amount < 0:
            raise ValueError(f"amount must not be negative, got {amount}")
        if self._currency < amount:
            return False
        self._currency -= amount
        return True

    def add_currency(self, amount: int) -> None:
        """Add florins to the balance."""
        if amount <= 0:
            raise ValueError(f"amount must be positive, got {amount}")
        self._currency += amount
