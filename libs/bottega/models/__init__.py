from bottega.models.buildings import BUILDINGS, BuildingSpec, Era, Science
from bottega.models.catalogue import (
    CRAFTED_ITEMS,
    MATERIALS,
    RECIPES,
    WORKBENCH_SLOTS,
    CatalogError,
    CraftedItem,
    Material,
    Recipe,
    RecipeCatalog,
    Temperature,
)
from bottega.models.envelope import Envelope
from bottega.models.messages import PAYLOAD_REGISTRY, MessageType
from bottega.models.topics import Topics, from_nats_subject, to_nats_subject

__all__ = [
    "BUILDINGS",
    "BuildingSpec",
    "CRAFTED_ITEMS",
    "CatalogError",
    "CraftedItem",
    "Envelope",
    "Era",
    "MATERIALS",
    "Material",
    "MessageType",
    "PAYLOAD_REGISTRY",
    "RECIPES",
    "Recipe",
    "RecipeCatalog",
    "Science",
    "Temperature",
    "Topics",
    "WORKBENCH_SLOTS",
    "from_nats_subject",
    "to_nats_subject",
]
