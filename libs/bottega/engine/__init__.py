"""Crafting engine — ledger, workbench, furnace, progress, and construction gate."""

from bottega.engine.assignment import MASTER_ASSIGNMENT_REWARD, AssignmentBoard, MasterAssignment
from bottega.engine.errors import CommandResult, CraftError, MixResult
from bottega.engine.furnace import (
    CRAFT_COMPLETE_REWARD,
    FiringOutcome,
    FiringPolicy,
    FiringVerdict,
    Furnace,
    FurnaceJob,
    FurnaceState,
    lossy_firing_policy,
    retry_firing_policy,
)
from bottega.engine.gate import ConstructionGate, GateReport, MaterialShortfall
from bottega.engine.ledger import STARTING_FLORINS, InventoryLedger
from bottega.engine.progress import BuildingProgress, ProgressBook
from bottega.engine.session import SessionSnapshot, WorkshopSession
from bottega.engine.workbench import Workbench

__all__ = [
    "AssignmentBoard",
    "BuildingProgress",
    "CRAFT_COMPLETE_REWARD",
    "CommandResult",
    "ConstructionGate",
    "CraftError",
    "FiringOutcome",
    "FiringPolicy",
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
]
