"""Master assignments — the workshop master's standing order for one crafted item.

Firing the ordered item pays a bonus on top of the craft reward, and the
master immediately sets a new order.
"""

import logging
import random
from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from bottega.models.catalogue import CraftedItem, RecipeCatalog

logger = logging.getLogger(__name__)

MASTER_ASSIGNMENT_REWARD = 15  # bonus florins for the ordered item

FLAVOR_TEXT: dict[CraftedItem, str] = {
    CraftedItem.LIME_MORTAR: "The Aqueduct repairs need mortar. Craft Lime Mortar for the builders!",
    CraftedItem.ROMAN_CONCRETE: "The Pantheon dome requires Roman Concrete. Mix ash and limestone!",
    CraftedItem.TERRACOTTA_TILES: "The Duomo needs roof tiles. Fire some Terracotta Tiles!",
    CraftedItem.RED_FRESCO_PIGMENT: "A chapel wall awaits color. Grind Red Fresco Pigment!",
    CraftedItem.BLUE_FRESCO_PIGMENT: "The ceiling needs ultramarine. Prepare Blue Fresco Pigment!",
    CraftedItem.BRONZE_FITTINGS: "The Arsenal doors need hardware. Cast some Bronze Fittings!",
    CraftedItem.TIMBER_BEAMS: "The Baths roof is sagging. Shape Timber Beams to reinforce it!",
    CraftedItem.GLASS_PANES: "The Glassworks needs demonstration pieces. Blow some Glass Panes!",
    CraftedItem.STAINED_GLASS: "A cathedral window is incomplete. Create Stained Glass!",
    CraftedItem.MARBLE_SLABS: "The Colosseum floor needs marble. Polish some Marble Slabs!",
    CraftedItem.LEAD_SHEETING: "The Harbor warehouse leaks. Hammer out Lead Sheeting!",
    CraftedItem.SILK_FABRIC: "Leonardo's flying machine needs wings. Weave Silk Fabric!",
    CraftedItem.CARVED_WOOD: "The Anatomy Theater needs more seating. Carve some walnut wood!",
}


class MasterAssignment(BaseModel):
    target_item: CraftedItem
    reward: int = Field(ge=0, default=MASTER_ASSIGNMENT_REWARD)
    flavor_text: str = ""


@dataclass
class AssignmentBoard:
    """Holds the current assignment and draws the next one from the catalogue."""

    catalog: RecipeCatalog
    rng: random.Random = field(default_factory=random.Random)
    reward: int = MASTER_ASSIGNMENT_REWARD
    current: MasterAssignment | None = None

    def draw(self) -> MasterAssignment | None:
        """Replace the current assignment with a random craftable item."""
        recipes = list(self.catalog)
        if not recipes:
            self.current = None
            return None
        item = self.rng.choice(recipes).output
        self.current = MasterAssignment(
            target_item=item, reward=self.reward, flavor_text=FLAVOR_TEXT.get(item, "")
        )
        logger.info("Master assigned %s", item)
        return self.current

    def settle(self, item: CraftedItem) -> int:
        """Bonus owed for producing `item`; a completed assignment is replaced."""
        if self.current is None or self.current.target_item != item:
            return 0
        bonus = self.current.reward
        logger.info("Master's task complete: %s (+%d florins)", item, bonus)
        self.draw()
        return bonus
