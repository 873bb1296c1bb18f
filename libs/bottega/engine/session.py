"""WorkshopSession — the explicit per-player context every engine operation runs in.

One session is constructed per active player and torn down with them; there
is no process-wide instance.
"""

import logging
import random
import time
from collections.abc import Callable, Mapping

from pydantic import BaseModel, Field

from bottega.engine.assignment import (
    MASTER_ASSIGNMENT_REWARD,
    AssignmentBoard,
    MasterAssignment,
)
from bottega.engine.errors import CommandResult, CraftError
from bottega.engine.furnace import (
    CRAFT_COMPLETE_REWARD,
    FiringOutcome,
    FiringPolicy,
    Furnace,
    FurnaceJob,
    lossy_firing_policy,
)
from bottega.engine.gate import ConstructionGate
from bottega.engine.ledger import STARTING_FLORINS, InventoryLedger
from bottega.engine.progress import BuildingProgress, ProgressBook
from bottega.engine.workbench import Workbench
from bottega.models.buildings import BUILDINGS, BuildingSpec, Science
from bottega.models.catalogue import (
    RECIPES,
    CraftedItem,
    Material,
    Recipe,
    RecipeCatalog,
    Temperature,
    as_material_map,
    material_cost,
)

logger = logging.getLogger(__name__)


# --- Snapshot models ---


class FurnaceJobSnapshot(BaseModel):
    inputs: dict[Material, int]
    recipe: Recipe
    temperature: Temperature
    processing: bool = False
    elapsed: float = Field(ge=0, default=0.0)


class ProgressSnapshot(BaseModel):
    science_badges_earned: list[Science] = Field(default_factory=list)
    sketch_completed: bool = False
    quiz_passed: bool = False
    lesson_read: bool = False
    lesson_bookmark_index: int = Field(ge=0, default=0)


class SessionSnapshot(BaseModel):
    """Plain data of a session. How the bytes are stored is up to the caller."""

    raw_materials: dict[Material, int] = Field(default_factory=dict)
    crafted_materials: dict[CraftedItem, int] = Field(default_factory=dict)
    currency: int = Field(ge=0, default=0)
    workbench: list[Material | None] = Field(default_factory=list)
    furnace_job: FurnaceJobSnapshot | None = None
    assignment: MasterAssignment | None = None
    progress: dict[int, ProgressSnapshot] = Field(default_factory=dict)


class WorkshopSession:
    """Wires catalogue, ledger, workbench, furnace, progress, and gate together."""

    def __init__(
        self,
        catalog: RecipeCatalog = RECIPES,
        buildings: Mapping[int, BuildingSpec] = BUILDINGS,
        ledger: InventoryLedger | None = None,
        clock: Callable[[], float] = time.monotonic,
        policy: FiringPolicy = lossy_firing_policy,
        reward: int = CRAFT_COMPLETE_REWARD,
        rng: random.Random | None = None,
        assignment_reward: int = MASTER_ASSIGNMENT_REWARD,
    ) -> None:
        self.catalog = catalog
        self.buildings = buildings
        self.ledger = ledger if ledger is not None else InventoryLedger(_currency=STARTING_FLORINS)
        self.assignments = AssignmentBoard(
            catalog, rng=rng if rng is not None else random.Random(), reward=assignment_reward
        )
        self.assignments.draw()
        self.furnace = Furnace(
            self.ledger, clock=clock, policy=policy, reward=reward, assignments=self.assignments
        )
        self.workbench = Workbench(catalog, self.ledger, self.furnace)
        self.progress = ProgressBook()
        self.gate = ConstructionGate(buildings, self.ledger, self.progress, catalog)

    # --- Convenience pass-throughs ---

    def progress_for(self, building_id: int) -> BuildingProgress:
        return self.progress.get(building_id)

    @property
    def current_assignment(self) -> MasterAssignment | None:
        return self.assignments.current

    def tick(self, now: float | None = None) -> FiringOutcome | None:
        return self.furnace.tick(now)

    # --- Purchases ---

    def purchase_materials(self, materials: Mapping[str, int]) -> CommandResult:
        """Buy raw materials at catalogue prices. All or nothing."""
        keyed = as_material_map(materials)
        if keyed is None:
            return CommandResult.fail(
                CraftError.INVALID_COMMAND, f"Unknown material in {dict(materials)}"
            )
        if not keyed or any(qty <= 0 for qty in keyed.values()):
            return CommandResult.fail(
                CraftError.INVALID_COMMAND, "Purchase quantities must be positive"
            )
        materials = keyed
        cost = material_cost(materials)
        if not self.ledger.spend_currency(cost):
            return CommandResult.fail(
                CraftError.INSUFFICIENT_CURRENCY,
                f"Not enough florins! Need {cost}, have {self.ledger.currency}",
            )
        self.ledger.add_raw_materials(materials)
        logger.info("Bought %s for %d florins", dict(materials), cost)
        return CommandResult()

    def buy_shortfall(self, building_id: int) -> CommandResult:
        """Buy exactly the raw materials a building is still missing."""
        shortfall = self.gate.material_shortfall(building_id)
        if not shortfall.raw_deficit:
            return CommandResult()
        return self.purchase_materials(shortfall.raw_deficit)

    # --- Snapshots ---

    def snapshot(self, now: float | None = None) -> SessionSnapshot:
        """Capture the session, including how long the furnace has been firing."""
        job_snapshot = None
        job = self.furnace.job
        if job is not None:
            current = self.furnace.clock() if now is None else now
            job_snapshot = FurnaceJobSnapshot(
                inputs=job.inputs,
                recipe=job.recipe,
                temperature=job.temperature,
                processing=job.is_processing,
                elapsed=job.elapsed(current),
            )

        return SessionSnapshot(
            raw_materials=self.ledger.raw_materials,
            crafted_materials=self.ledger.crafted_materials,
            currency=self.ledger.currency,
            workbench=self.workbench.slots,
            furnace_job=job_snapshot,
            assignment=self.assignments.current,
            progress={
                building_id: ProgressSnapshot(
                    science_badges_earned=sorted(record.science_badges_earned),
                    sketch_completed=record.sketch_completed,
                    quiz_passed=record.quiz_passed,
                    lesson_read=record.lesson_read,
                    lesson_bookmark_index=record.lesson_bookmark_index,
                )
                for building_id, record in self.progress.items()
            },
        )

    @classmethod
    def restore(
        cls,
        snapshot: SessionSnapshot,
        catalog: RecipeCatalog = RECIPES,
        buildings: Mapping[int, BuildingSpec] = BUILDINGS,
        clock: Callable[[], float] = time.monotonic,
        policy: FiringPolicy = lossy_firing_policy,
        reward: int = CRAFT_COMPLETE_REWARD,
        rng: random.Random | None = None,
        now: float | None = None,
    ) -> "WorkshopSession":
        """Rebuild a session from a snapshot; a firing job resumes where it stopped."""
        ledger = InventoryLedger(
            _raw={m: q for m, q in snapshot.raw_materials.items() if q > 0},
            _crafted={c: q for c, q in snapshot.crafted_materials.items() if q > 0},
            _currency=snapshot.currency,
        )
        session = cls(
            catalog=catalog,
            buildings=buildings,
            ledger=ledger,
            clock=clock,
            policy=policy,
            reward=reward,
            rng=rng,
        )
        session.assignments.current = snapshot.assignment

        for material in snapshot.workbench:
            if material is not None:
                session.workbench.place(material)

        job = snapshot.furnace_job
        if job is not None:
            session.furnace.restore(
                FurnaceJob(
                    inputs=dict(job.inputs),
                    recipe=job.recipe,
                    temperature=job.temperature,
                    started_at=0.0 if job.processing else None,
                ),
                elapsed=job.elapsed,
                now=now,
            )

        for building_id, saved in snapshot.progress.items():
            record = session.progress.get(building_id)
            for science in saved.science_badges_earned:
                record.earn_badge(science)
            if saved.sketch_completed:
                record.mark_sketch_complete()
            if saved.quiz_passed:
                record.mark_quiz_passed()
            if saved.lesson_read:
                record.mark_lesson_read()
            record.set_bookmark(saved.lesson_bookmark_index)

        logger.info("Restored session (furnace %s)", session.furnace.state)
        return session
