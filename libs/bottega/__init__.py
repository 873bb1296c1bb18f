"""Bottega — crafting and construction-gating engine for the Renaissance workshop."""

from bottega.client.nats_client import WorkshopBusClient
from bottega.engine import (
    CRAFT_COMPLETE_REWARD,
    MASTER_ASSIGNMENT_REWARD,
    AssignmentBoard,
    STARTING_FLORINS,
    BuildingProgress,
    CommandResult,
    ConstructionGate,
    CraftError,
    FiringOutcome,
    FiringVerdict,
    Furnace,
    FurnaceJob,
    FurnaceState,
    GateReport,
    InventoryLedger,
    MasterAssignment,
    MaterialShortfall,
    MixResult,
    ProgressBook,
    SessionSnapshot,
    Workbench,
    WorkshopSession,
    lossy_firing_policy,
    retry_firing_policy,
)
from bottega.helpers.factory import create_message, parse_message, parse_payload
from bottega.helpers.validation import validate_message
from bottega.models.buildings import BUILDINGS, BuildingSpec, Era, Science, is_valid_building
from bottega.models.catalogue import (
    CRAFTED_ITEMS,
    MATERIALS,
    RECIPES,
    WORKBENCH_SLOTS,
    CatalogError,
    CraftedItem,
    CraftedItemInfo,
    Material,
    MaterialInfo,
    Recipe,
    RecipeCatalog,
    Temperature,
    as_material_map,
    is_valid_crafted_item,
    is_valid_material,
    material_cost,
)
from bottega.models.envelope import Envelope
from bottega.models.messages import (
    COMMAND_TYPES,
    PAYLOAD_REGISTRY,
    AddCurrency,
    BuildingStatus,
    BuyShortfall,
    CancelFiring,
    CheckBuilding,
    ClearWorkbench,
    CollectMaterials,
    CommandResultEvent,
    FiringComplete,
    MessageType,
    Mix,
    PlaceMaterial,
    PurchaseMaterials,
    RemoveMaterial,
    SetTemperature,
    StartFiring,
    UpdateProgress,
)
from bottega.models.topics import Topics, from_nats_subject, to_nats_subject

__all__ = [
    # Client
    "WorkshopBusClient",
    # Engine
    "AssignmentBoard",
    "BuildingProgress",
    "CRAFT_COMPLETE_REWARD",
    "CommandResult",
    "ConstructionGate",
    "CraftError",
    "FiringOutcome",
    "FiringVerdict",
    "Furnace",
    "FurnaceJob",
    "FurnaceState",
    "GateReport",
    "InventoryLedger",
    "MASTER_ASSIGNMENT_REWARD",
    "MasterAssignment",
    "MaterialShortfall",
    "MixResult",
    "ProgressBook",
    "STARTING_FLORINS",
    "SessionSnapshot",
    "Workbench",
    "WorkshopSession",
    "lossy_firing_policy",
    "retry_firing_policy",
    # Catalogue
    "BUILDINGS",
    "BuildingSpec",
    "CRAFTED_ITEMS",
    "CatalogError",
    "CraftedItem",
    "CraftedItemInfo",
    "Era",
    "MATERIALS",
    "Material",
    "MaterialInfo",
    "RECIPES",
    "Recipe",
    "RecipeCatalog",
    "Science",
    "Temperature",
    "WORKBENCH_SLOTS",
    # Protocol
    "AddCurrency",
    "BuildingStatus",
    "BuyShortfall",
    "COMMAND_TYPES",
    "CancelFiring",
    "CheckBuilding",
    "ClearWorkbench",
    "CollectMaterials",
    "CommandResultEvent",
    "Envelope",
    "FiringComplete",
    "MessageType",
    "Mix",
    "PAYLOAD_REGISTRY",
    "PlaceMaterial",
    "PurchaseMaterials",
    "RemoveMaterial",
    "SetTemperature",
    "StartFiring",
    "Topics",
    "UpdateProgress",
    # Helpers
    "as_material_map",
    "create_message",
    "from_nats_subject",
    "is_valid_building",
    "is_valid_crafted_item",
    "is_valid_material",
    "material_cost",
    "parse_message",
    "parse_payload",
    "to_nats_subject",
    "validate_message",
]
