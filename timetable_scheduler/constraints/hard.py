from collections import defaultdict
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

from timetable_scheduler.models.schemas import ScheduleEntry

SlotSchedule = Dict[str, Dict[Tuple[str, int], List[ScheduleEntry]]]

# --- Helper Functions ---

def _add_violation(entry: ScheduleEntry, constraint_name: str,
                   all_violating_ids: Set[str],
                   violation_details: Dict[str, List[str]]):
    """
    Records a specific constraint violation for a given schedule entry.
    """
    label = entry.label()
    all_violating_ids.add(label)

    if label not in violation_details:
        violation_details[label] = []

    if constraint_name not in violation_details[label]:
        violation_details[label].append(constraint_name)

def group_by_slot(schedule: List[ScheduleEntry], attribute: str) -> SlotSchedule:
    """{entity id: {(day, period): [entries]}} for faculty_id, room_id or class_id."""
    grouped: SlotSchedule = defaultdict(lambda: defaultdict(list))
    for entry in schedule:
        grouped[getattr(entry, attribute)][(entry.day, entry.period)].append(entry)
    return grouped

class HardConstraintRules:
    """
    Stateless checks of a finished schedule against the hard invariants.
    Each check returns the number of violations it recorded.
    """

    @staticmethod
    def check_double_booking(slot_schedule: SlotSchedule, violation_name: str, ids: Set, details: Dict) -> int:
        """
        Ensures a faculty member, room or class holds at most one entry per slot.
        """
        violations = 0
        for _, time_slots in slot_schedule.items():
            for _, entries in time_slots.items():
                if len(entries) > 1:
                    for entry in entries:
                        _add_violation(entry, violation_name, ids, details)
                        violations += 1
        return violations

    @staticmethod
    def check_capability(schedule: List[ScheduleEntry], capabilities: Dict[str, FrozenSet[str]],
                         subject_names: Dict[str, Optional[str]], ids: Set, details: Dict) -> int:
        """
        Ensures every entry's faculty member can teach its subject, by subject id or display name.
        """
        violations = 0
        for entry in schedule:
            can_teach = capabilities.get(entry.faculty_id, frozenset())
            name = subject_names.get(entry.subject_id) or entry.subject_name
            if entry.subject_id in can_teach or (name is not None and name in can_teach):
                continue
            _add_violation(entry, "Faculty Capability", ids, details)
            violations += 1
        return violations

    @staticmethod
    def check_availability(schedule: List[ScheduleEntry], availability: Dict[str, FrozenSet[Tuple[str, int]]],
                           ids: Set, details: Dict) -> int:
        """
        Ensures entries of faculty with declared availability fall inside it.
        """
        violations = 0
        for entry in schedule:
            declared = availability.get(entry.faculty_id)
            if declared and (entry.day, entry.period) not in declared:
                _add_violation(entry, "Faculty Availability", ids, details)
                violations += 1
        return violations

    @staticmethod
    def check_daily_subject_cap(schedule: List[ScheduleEntry], max_per_day: int, ids: Set, details: Dict) -> int:
        """
        Ensures a class has at most `max_per_day` entries of one subject on one day.
        Every period of a lab block counts as an entry.
        """
        violations = 0
        per_day = defaultdict(list)
        for entry in schedule:
            per_day[(entry.class_id, entry.subject_id, entry.day)].append(entry)

        for entries in per_day.values():
            if len(entries) > max_per_day:
                for entry in entries:
                    _add_violation(entry, "Daily Subject Cap", ids, details)
                    violations += 1
        return violations

    @staticmethod
    def check_lab_contiguity(schedule: List[ScheduleEntry], ids: Set, details: Dict) -> int:
        """
        Ensures each lab session is a run of consecutive periods on one day with
        the same faculty and room, numbered 1..N.
        """
        violations = 0
        by_day = defaultdict(list)
        for entry in schedule:
            if entry.is_lab:
                by_day[(entry.class_id, entry.subject_id, entry.day)].append(entry)

        for entries in by_day.values():
            entries.sort(key=lambda e: e.period)
            blocks: List[List[ScheduleEntry]] = []
            for entry in entries:
                if entry.lab_part_index == 1 or not blocks:
                    blocks.append([entry])
                else:
                    blocks[-1].append(entry)

            for block in blocks:
                if _is_contiguous_block(block):
                    continue
                for entry in block:
                    _add_violation(entry, "Lab Contiguity", ids, details)
                    violations += 1
        return violations

def _is_contiguous_block(block: List[ScheduleEntry]) -> bool:
    first = block[0]
    if first.lab_part_index != 1 or first.lab_part_total != len(block):
        return False
    for previous, current in zip(block, block[1:]):
        if current.period != previous.period + 1:
            return False
        if current.lab_part_index != previous.lab_part_index + 1:
            return False
        if (current.faculty_id, current.room_id) != (previous.faculty_id, previous.room_id):
            return False
    return True
