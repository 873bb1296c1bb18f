"""Furnace — the single-slot timed processor of the workshop.

A job's progress is derived from the clock (`started_at` + recipe duration),
never from a UI timer, so a job survives any number of UI rebuilds and its
completion is applied exactly once by whichever caller ticks first.

States::

    IDLE --load--> LOADED --start--> PROCESSING --tick(done)--> IDLE
                     |  ^                              |
                   cancel +------ RETRY verdict -------+
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum

from bottega.engine.assignment import AssignmentBoard
from bottega.engine.errors import CommandResult, CraftError
from bottega.engine.ledger import InventoryLedger
from bottega.models.catalogue import CraftedItem, Material, Recipe, Temperature

logger = logging.getLogger(__name__)

CRAFT_COMPLETE_REWARD = 5  # florins per successful firing
DEFAULT_TEMPERATURE = Temperature.MEDIUM


class FurnaceState(StrEnum):
    IDLE = "idle"
    LOADED = "loaded"
    PROCESSING = "processing"


class FiringVerdict(StrEnum):
    """What completion does with a finished job."""

    PRODUCE = "produce"  # credit the output
    DISCARD = "discard"  # inputs lost, nothing produced
    RETRY = "retry"  # inputs kept in the furnace, back to LOADED


@dataclass
class FurnaceJob:
    """The one mix currently inside the furnace."""

    inputs: dict[Material, int]
    recipe: Recipe
    temperature: Temperature = DEFAULT_TEMPERATURE
    started_at: float | None = None

    @property
    def duration(self) -> float:
        return self.recipe.processing_time

    @property
    def is_processing(self) -> bool:
        return self.started_at is not None

    def elapsed(self, now: float) -> float:
        """Seconds spent processing (0 before start)."""
        if self.started_at is None:
            return 0.0
        return max(0.0, now - self.started_at)

    def progress(self, now: float) -> float:
        """Fraction of the firing done, in [0, 1]."""
        return min(1.0, self.elapsed(now) / self.duration)


@dataclass
class FiringOutcome:
    """What came out of the furnace when a job finished."""

    recipe: Recipe
    inputs: dict[Material, int]
    temperature: Temperature
    success: bool
    output: CraftedItem | None = None
    reward: int = 0
    assignment_bonus: int = 0
    error: CraftError | None = None


FiringPolicy = Callable[[FurnaceJob], FiringVerdict]


def lossy_firing_policy(job: FurnaceJob) -> FiringVerdict:
    """Wrong heat ruins the batch: the materials are gone."""
    if job.temperature == job.recipe.temperature:
        return FiringVerdict.PRODUCE
    return FiringVerdict.DISCARD


def retry_firing_policy(job: FurnaceJob) -> FiringVerdict:
    """Wrong heat leaves the batch in the furnace for another try."""
    if job.temperature == job.recipe.temperature:
        return FiringVerdict.PRODUCE
    return FiringVerdict.RETRY


@dataclass
class Furnace:
    """Holds at most one job at a time and credits its output to the ledger."""

    ledger: InventoryLedger
    clock: Callable[[], float] = time.monotonic
    policy: FiringPolicy = lossy_firing_policy
    reward: int = CRAFT_COMPLETE_REWARD
    assignments: AssignmentBoard | None = None
    _job: FurnaceJob | None = field(default=None, repr=False)

    @property
    def state(self) -> FurnaceState:
        if self._job is None:
            return FurnaceState.IDLE
        if self._job.is_processing:
            return FurnaceState.PROCESSING
        return FurnaceState.LOADED

    @property
    def job(self) -> FurnaceJob | None:
        return self._job

    @property
    def temperature(self) -> Temperature | None:
        return self._job.temperature if self._job is not None else None

    def progress(self, now: float | None = None) -> float:
        """Progress of the current job; 0 when idle or loaded."""
        if self._job is None:
            return 0.0
        return self._job.progress(self._now(now))

    def _now(self, now: float | None) -> float:
        return self.clock() if now is None else now

    # --- Commands ---

    def load(self, inputs: dict[Material, int], recipe: Recipe) -> CommandResult:
        """Take a mixed batch. Only allowed when idle."""
        if self._job is not None:
            return CommandResult.fail(
                CraftError.FURNACE_BUSY,
                f"Furnace already holds {self._job.recipe.output} ({self.state})",
            )
        self._job = FurnaceJob(inputs=dict(inputs), recipe=recipe)
        logger.info("Furnace loaded for %s", recipe.output)
        return CommandResult()

    def set_temperature(self, value: Temperature) -> CommandResult:
        """Choose the heat for a loaded batch. Correctness is judged at completion."""
        error = self._require_loaded()
        if error is not None:
            return error
        self._job.temperature = value  # type: ignore[union-attr]
        return CommandResult()

    def start(self, now: float | None = None) -> CommandResult:
        """Begin firing. Once started a job cannot be cancelled."""
        error = self._require_loaded()
        if error is not None:
            return error
        job = self._job
        job.started_at = self._now(now)  # type: ignore[union-attr]
        logger.info(
            "Firing %s at %s heat for %.1fs",
            job.recipe.output,  # type: ignore[union-attr]
            job.temperature,  # type: ignore[union-attr]
            job.duration,  # type: ignore[union-attr]
        )
        return CommandResult()

    def cancel(self) -> CommandResult:
        """Throw away a loaded batch. Materials were spent at mix time; no refund."""
        error = self._require_loaded()
        if error is not None:
            return error
        logger.info("Discarded loaded batch for %s", self._job.recipe.output)  # type: ignore[union-attr]
        self._job = None
        return CommandResult()

    def tick(self, now: float | None = None) -> FiringOutcome | None:
        """Sample the clock; finish the job if its time is up.

        Returns the outcome on the call that completes the job, None otherwise.
        """
        job = self._job
        if job is None or not job.is_processing:
            return None
        if job.progress(self._now(now)) < 1.0:
            return None
        return self._complete(job)

    def restore(self, job: FurnaceJob, elapsed: float = 0.0, now: float | None = None) -> None:
        """Re-attach a job from a snapshot, keeping its elapsed firing time."""
        if self._job is not None:
            raise ValueError("Furnace already holds a job")
        if job.started_at is not None:
            job.started_at = self._now(now) - elapsed
        self._job = job

    # --- Internals ---

    def _require_loaded(self) -> CommandResult | None:
        if self._job is None:
            return CommandResult.fail(CraftError.FURNACE_EMPTY, "Furnace is empty")
        if self._job.is_processing:
            return CommandResult.fail(
                CraftError.FURNACE_BUSY, f"Furnace is firing {self._job.recipe.output}"
            )
        return None

    def _complete(self, job: FurnaceJob) -> FiringOutcome:
        verdict = self.policy(job)
        recipe = job.recipe

        if verdict == FiringVerdict.PRODUCE:
            self._job = None
            self.ledger.credit_crafted_item(recipe.output)
            if self.reward > 0:
                self.ledger.add_currency(self.reward)
            bonus = 0
            if self.assignments is not None:
                bonus = self.assignments.settle(recipe.output)
            if bonus > 0:
                self.ledger.add_currency(bonus)
            logger.info("Created %s (+%d florins)", recipe.output, self.reward + bonus)
            return FiringOutcome(
                recipe=recipe,
                inputs=job.inputs,
                temperature=job.temperature,
                success=True,
                output=recipe.output,
                reward=self.reward,
                assignment_bonus=bonus,
            )

        if verdict == FiringVerdict.RETRY:
            job.started_at = None
        else:
            self._job = None
        logger.warning(
            "Firing failed: %s needs %s heat, got %s (%s)",
            recipe.output,
            recipe.temperature,
            job.temperature,
            verdict,
        )
        return FiringOutcome(
            recipe=recipe,
            inputs=job.inputs,
            temperature=job.temperature,
            success=False,
            error=CraftError.WRONG_TEMPERATURE,
        )
