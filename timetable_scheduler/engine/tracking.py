from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

from timetable_scheduler.engine.units import SchedulingUnit
from timetable_scheduler.models.schemas import ScheduleEntry
from timetable_scheduler.models.time_grid import TimeSlot, all_slots, block_periods


@dataclass(frozen=True)
class Assignment:
    """A candidate binding for one unit. For lab units `period` is the first period of the block."""

    day: str
    period: int
    faculty_id: str
    room_id: str
    faculty_name: Optional[str] = None


class TrackingStore:
    """
    Per-slot occupancy for faculty, rooms and classes, plus the number of
    entries each (class, subject) already has on each day.

    Every slot of the grid is pre-populated with empty sets, so lookups never
    need a default.
    """

    def __init__(self):
        slots = all_slots()
        self.faculty_occupancy: Dict[TimeSlot, Set[str]] = {slot: set() for slot in slots}
        self.room_occupancy: Dict[TimeSlot, Set[str]] = {slot: set() for slot in slots}
        self.class_occupancy: Dict[TimeSlot, Set[str]] = {slot: set() for slot in slots}
        self.daily_subject_counts: Counter = Counter()

    def faculty_busy(self, slot: TimeSlot, faculty_id: str) -> bool:
        return faculty_id in self.faculty_occupancy[slot]

    def room_busy(self, slot: TimeSlot, room_id: str) -> bool:
        return room_id in self.room_occupancy[slot]

    def class_busy(self, slot: TimeSlot, class_id: str) -> bool:
        return class_id in self.class_occupancy[slot]

    def subject_count_on_day(self, class_id: str, subject_id: str, day: str) -> int:
        return self.daily_subject_counts[(class_id, subject_id, day)]

    def occupy(self, slot: TimeSlot, faculty_id: str, room_id: str, class_id: str, subject_id: str):
        self.faculty_occupancy[slot].add(faculty_id)
        self.room_occupancy[slot].add(room_id)
        self.class_occupancy[slot].add(class_id)
        self.daily_subject_counts[(class_id, subject_id, slot.day)] += 1

    def release(self, slot: TimeSlot, faculty_id: str, room_id: str, class_id: str, subject_id: str):
        # remove() rather than discard(): releasing something never occupied is a bug.
        self.faculty_occupancy[slot].remove(faculty_id)
        self.room_occupancy[slot].remove(room_id)
        self.class_occupancy[slot].remove(class_id)
        key = (class_id, subject_id, slot.day)
        self.daily_subject_counts[key] -= 1
        if self.daily_subject_counts[key] <= 0:
            del self.daily_subject_counts[key]

    def is_empty(self) -> bool:
        return (
            not self.daily_subject_counts
            and not any(self.faculty_occupancy.values())
            and not any(self.room_occupancy.values())
            and not any(self.class_occupancy.values())
        )


class Placement:
    """
    The recorded effect of one commit. `undo()` reverses exactly these
    slots and entries, so the inverse cannot drift from the forward step.
    """

    def __init__(self, state: "SearchState", unit: SchedulingUnit, assignment: Assignment,
                 slots: Tuple[TimeSlot, ...], start_index: int):
        self.state = state
        self.unit = unit
        self.assignment = assignment
        self.slots = slots
        self.start_index = start_index
        self.active = True

    def undo(self):
        if not self.active:
            raise RuntimeError(f"Placement of {self.unit.class_id}/{self.unit.subject_id} was already undone.")

        schedule = self.state.schedule
        if self.start_index + len(self.slots) != len(schedule):
            raise RuntimeError("Placements must be undone in reverse commit order.")

        for slot in self.slots:
            self.state.tracking.release(
                slot, self.assignment.faculty_id, self.assignment.room_id,
                self.unit.class_id, self.unit.subject_id,
            )
        del schedule[self.start_index:]
        self.active = False


class SearchState:
    """Tracking store and schedule buffer owned by one search run."""

    def __init__(self):
        self.tracking = TrackingStore()
        self.schedule: List[ScheduleEntry] = []

    def commit(self, unit: SchedulingUnit, assignment: Assignment) -> Placement:
        length = unit.required_consecutive_periods
        slots = tuple(block_periods(assignment.day, assignment.period, length))
        start_index = len(self.schedule)

        for part, slot in enumerate(slots, start=1):
            self.tracking.occupy(slot, assignment.faculty_id, assignment.room_id, unit.class_id, unit.subject_id)
            self.schedule.append(ScheduleEntry(
                class_id=unit.class_id,
                class_name=unit.class_name,
                subject_id=unit.subject_id,
                subject_name=unit.subject_name,
                faculty_id=assignment.faculty_id,
                faculty_name=assignment.faculty_name,
                room_id=assignment.room_id,
                day=slot.day,
                period=slot.period,
                is_lab=unit.is_lab,
                lab_part_index=part if unit.is_lab else None,
                lab_part_total=length if unit.is_lab else None,
            ))

        return Placement(self, unit, assignment, slots, start_index)
