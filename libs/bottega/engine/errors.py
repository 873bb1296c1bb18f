"""Error kinds and result objects returned by engine commands."""

from dataclasses import dataclass, field
from enum import StrEnum

from bottega.models.catalogue import Material, Recipe


class CraftError(StrEnum):
    """Recoverable failure kinds. None of them corrupt session state."""

    NO_RECIPE_MATCH = "no_recipe_match"
    INSUFFICIENT_RAW_MATERIALS = "insufficient_raw_materials"
    FURNACE_BUSY = "furnace_busy"
    FURNACE_EMPTY = "furnace_empty"
    WORKBENCH_FULL = "workbench_full"
    MATERIAL_UNAVAILABLE = "material_unavailable"
    INSUFFICIENT_CURRENCY = "insufficient_currency"
    WRONG_TEMPERATURE = "wrong_temperature"
    INVALID_COMMAND = "invalid_command"


@dataclass
class CommandResult:
    """Outcome of an engine command. `error` is None on success."""

    error: CraftError | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def fail(cls, error: CraftError, reason: str) -> "CommandResult":
        return cls(error=error, reason=reason)


@dataclass
class MixResult(CommandResult):
    """Result of mixing the workbench; carries what went into the furnace."""

    inputs: dict[Material, int] = field(default_factory=dict)
    recipe: Recipe | None = None
