"""Message types and payload models for the workshop protocol.

Commands flow from a UI to the workshop service; events flow back.
"""

from enum import StrEnum

from pydantic import BaseModel, Field

from bottega.models.buildings import Science
from bottega.models.catalogue import CraftedItem, Material, Temperature


class MessageType(StrEnum):
    """All message types in the protocol."""

    # Commands
    PLACE_MATERIAL = "place_material"
    REMOVE_MATERIAL = "remove_material"
    CLEAR_WORKBENCH = "clear_workbench"
    MIX = "mix"
    SET_TEMPERATURE = "set_temperature"
    START_FIRING = "start_firing"
    CANCEL_FIRING = "cancel_firing"
    COLLECT_MATERIALS = "collect_materials"
    PURCHASE_MATERIALS = "purchase_materials"
    BUY_SHORTFALL = "buy_shortfall"
    ADD_CURRENCY = "add_currency"
    UPDATE_PROGRESS = "update_progress"
    CHECK_BUILDING = "check_building"
    # Events
    COMMAND_RESULT = "command_result"
    FIRING_COMPLETE = "firing_complete"
    BUILDING_STATUS = "building_status"


class PlaceMaterial(BaseModel):
    """Stage one raw material on the workbench."""

    material: Material


class RemoveMaterial(BaseModel):
    """Empty one workbench slot."""

    slot_index: int = Field(ge=0)


class ClearWorkbench(BaseModel):
    """Empty the workbench (e.g. the player left the screen)."""


class Mix(BaseModel):
    """Consume the staged materials and load the furnace."""


class SetTemperature(BaseModel):
    temperature: Temperature


class StartFiring(BaseModel):
    """Light the furnace."""


class CancelFiring(BaseModel):
    """Discard a loaded, unstarted batch."""


class CollectMaterials(BaseModel):
    """Raw materials yielded by exploration."""

    materials: dict[Material, int]


class PurchaseMaterials(BaseModel):
    """Buy raw materials with florins."""

    materials: dict[Material, int]


class BuyShortfall(BaseModel):
    """Buy whatever raw materials a building still lacks."""

    building_id: int


class AddCurrency(BaseModel):
    """Florins earned outside the workshop (lessons, quizzes...)."""

    amount: int = Field(gt=0)
    reason: str | None = None


class UpdateProgress(BaseModel):
    """Progress reported by the lesson, quiz, and sketch collaborators."""

    building_id: int
    badge: Science | None = None
    sketch_completed: bool = False
    quiz_passed: bool = False
    lesson_read: bool = False
    bookmark_index: int | None = Field(ge=0, default=None)


class CheckBuilding(BaseModel):
    building_id: int


class CommandResultEvent(BaseModel):
    """The service's answer to one command."""

    reference_msg_id: str
    ok: bool
    error: str | None = None
    reason: str | None = None


class FiringComplete(BaseModel):
    """A furnace job finished, successfully or not."""

    recipe: CraftedItem
    success: bool
    temperature: Temperature
    inputs: dict[Material, int]
    reward: int = 0
    assignment_bonus: int = 0  # master's task bonus, paid on top of `reward`
    next_assignment: CraftedItem | None = None
    error: str | None = None
    educational_text: str | None = None


class BuildingStatus(BaseModel):
    """Construction gate state of one building."""

    building_id: int
    can_start: bool
    requirements_met: int
    total_requirements: int
    missing_sciences: list[Science] = Field(default_factory=list)
    missing_materials: dict[CraftedItem, int] = Field(default_factory=dict)
    raw_deficit: dict[Material, int] = Field(default_factory=dict)
    cost_to_buy: int = 0


# Registry mapping message types to their payload models
PAYLOAD_REGISTRY: dict[MessageType, type[BaseModel]] = {
    MessageType.PLACE_MATERIAL: PlaceMaterial,
    MessageType.REMOVE_MATERIAL: RemoveMaterial,
    MessageType.CLEAR_WORKBENCH: ClearWorkbench,
    MessageType.MIX: Mix,
    MessageType.SET_TEMPERATURE: SetTemperature,
    MessageType.START_FIRING: StartFiring,
    MessageType.CANCEL_FIRING: CancelFiring,
    MessageType.COLLECT_MATERIALS: CollectMaterials,
    MessageType.PURCHASE_MATERIALS: PurchaseMaterials,
    MessageType.BUY_SHORTFALL: BuyShortfall,
    MessageType.ADD_CURRENCY: AddCurrency,
    MessageType.UPDATE_PROGRESS: UpdateProgress,
    MessageType.CHECK_BUILDING: CheckBuilding,
    MessageType.COMMAND_RESULT: CommandResultEvent,
    MessageType.FIRING_COMPLETE: FiringComplete,
    MessageType.BUILDING_STATUS: BuildingStatus,
}

COMMAND_TYPES: frozenset[MessageType] = frozenset(
    t
    for t in MessageType
    if t
    not in (MessageType.COMMAND_RESULT, MessageType.FIRING_COMPLETE, MessageType.BUILDING_STATUS)
)
