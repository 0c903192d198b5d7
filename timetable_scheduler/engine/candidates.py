import random
from typing import Dict, FrozenSet, List, Sequence

from timetable_scheduler.engine.tracking import Assignment, SearchState
from timetable_scheduler.engine.units import SchedulingUnit
from timetable_scheduler.models.schemas import Faculty, Room
from timetable_scheduler.models.time_grid import TimeSlot, block_periods, block_start_slots
from timetable_scheduler.utils.config import MAX_SAME_SUBJECT_PER_DAY


class CandidateGenerator:
    """
    Enumerates the feasible (slot, faculty, room) triples for one unit
    against the current search state, then shuffles them.
    """

    def __init__(self, faculty: Sequence[Faculty], rooms: Sequence[Room], rng: random.Random,
                 max_same_subject_per_day: int = MAX_SAME_SUBJECT_PER_DAY):
        self.faculty = list(faculty)
        self.rooms = list(rooms)
        self.rng = rng
        self.max_same_subject_per_day = max_same_subject_per_day

        self.capabilities: Dict[str, FrozenSet[str]] = {
            f.id: frozenset(f.subjects_can_teach) for f in self.faculty
        }
        self.availability: Dict[str, FrozenSet[TimeSlot]] = {
            f.id: frozenset(TimeSlot(s.day, s.period) for s in f.availability_slots) for f in self.faculty
        }
        self._start_slots: Dict[int, List[TimeSlot]] = {}

    # --- Eligibility ---

    def can_teach(self, faculty_id: str, unit: SchedulingUnit) -> bool:
        # Capability lists may hold subject ids or subject display names.
        capabilities = self.capabilities.get(faculty_id, frozenset())
        if unit.subject_id in capabilities:
            return True
        return unit.subject_name is not None and unit.subject_name in capabilities

    def eligible_faculty(self, unit: SchedulingUnit) -> List[Faculty]:
        return [f for f in self.faculty if self.can_teach(f.id, unit)]

    def eligible_rooms(self, unit: SchedulingUnit) -> List[Room]:
        return [r for r in self.rooms if r.is_lab == unit.is_lab]

    def start_slots(self, unit: SchedulingUnit) -> List[TimeSlot]:
        length = unit.required_consecutive_periods
        if length not in self._start_slots:
            self._start_slots[length] = block_start_slots(length)
        return self._start_slots[length]

    def is_available(self, faculty_id: str, slot: TimeSlot) -> bool:
        declared = self.availability.get(faculty_id)
        if not declared:
            return True
        return slot in declared

    # --- Constraint check ---

    def accepts(self, unit: SchedulingUnit, assignment: Assignment, state: SearchState) -> bool:
        tracking = state.tracking
        day_count = tracking.subject_count_on_day(unit.class_id, unit.subject_id, assignment.day)

        # A lab block adds all of its periods to the day at once.
        if day_count + unit.required_consecutive_periods > self.max_same_subject_per_day:
            return False

        for slot in block_periods(assignment.day, assignment.period, unit.required_consecutive_periods):
            if tracking.faculty_busy(slot, assignment.faculty_id):
                return False
            if tracking.room_busy(slot, assignment.room_id):
                return False
            if tracking.class_busy(slot, unit.class_id):
                return False
            if not self.is_available(assignment.faculty_id, slot):
                return False
        return True

    # --- Generation ---

    def generate(self, unit: SchedulingUnit, state: SearchState) -> List[Assignment]:
        faculty = self.eligible_faculty(unit)
        rooms = self.eligible_rooms(unit)

        candidates: List[Assignment] = []
        for slot in self.start_slots(unit):
            for f in faculty:
                for room in rooms:
                    assignment = Assignment(
                        day=slot.day,
                        period=slot.period,
                        faculty_id=f.id,
                        room_id=room.id,
                        faculty_name=f.name,
                    )
                    if self.accepts(unit, assignment, state):
                        candidates.append(assignment)

        self.rng.shuffle(candidates)
        return candidates
