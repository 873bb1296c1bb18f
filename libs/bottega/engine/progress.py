"""Per-building progress toward construction.

Written by the lesson, quiz, and sketch collaborators; only read by the
construction gate. Every setter is idempotent.
"""

from dataclasses import dataclass, field

from bottega.models.buildings import Science


@dataclass
class BuildingProgress:
    science_badges_earned: set[Science] = field(default_factory=set)
    sketch_completed: bool = False
    quiz_passed: bool = False
    lesson_read: bool = False
    lesson_bookmark_index: int = 0  # which lesson section the student is on

    def earn_badge(self, science: Science) -> None:
        self.science_badges_earned.add(science)

    def mark_sketch_complete(self) -> None:
        self.sketch_completed = True

    def mark_quiz_passed(self) -> None:
        self.quiz_passed = True

    def mark_lesson_read(self) -> None:
        self.lesson_read = True

    def set_bookmark(self, index: int) -> None:
        if index < 0:
            raise ValueError(f"bookmark index must not be negative, got {index}")
        self.lesson_bookmark_index = index


@dataclass
class ProgressBook:
    """All building progress records of a session, created on first reference."""

    _records: dict[int, BuildingProgress] = field(default_factory=dict)

    def get(self, building_id: int) -> BuildingProgress:
        """Return the record for a building, creating a blank one if needed."""
        record = self._records.get(building_id)
        if record is None:
            record = BuildingProgress()
            self._records[building_id] = record
        return record

    def has_record(self, building_id: int) -> bool:
        return building_id in self._records

    def items(self) -> list[tuple[int, BuildingProgress]]:
        return list(self._records.items())
