from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from timetable_scheduler.models.schemas import Faculty, ScheduleEntry, Subject
from timetable_scheduler.utils.config import MAX_SAME_SUBJECT_PER_DAY
from .hard import HardConstraintRules, group_by_slot

class ScheduleValidator:
    def __init__(self, faculty: Sequence[Faculty], subjects: Optional[Sequence[Subject]] = None,
                 max_same_subject_per_day: int = MAX_SAME_SUBJECT_PER_DAY):
        """
        Initialize with static data once.
        """
        self.capabilities = {f.id: frozenset(f.subjects_can_teach) for f in faculty}
        self.availability = {
            f.id: frozenset((s.day, s.period) for s in f.availability_slots) for f in faculty
        }
        self.subject_names = {s.id: s.name for s in (subjects or [])}
        self.max_same_subject_per_day = max_same_subject_per_day

    def validate_hard_constraints(self, schedule: Sequence[Any]) -> Tuple[Set[str], Dict[str, List[str]]]:
        """
        Runs all hard constraint checks.
        Returns: (Set of violating entry labels, Dict of violations per entry label)
        """
        entries = [e if isinstance(e, ScheduleEntry) else ScheduleEntry.model_validate(e) for e in schedule]

        violating_ids: Set[str] = set()
        details: Dict[str, List[str]] = defaultdict(list)

        HardConstraintRules.check_double_booking(group_by_slot(entries, "faculty_id"), "Faculty Conflict", violating_ids, details)
        HardConstraintRules.check_double_booking(group_by_slot(entries, "room_id"), "Room Conflict", violating_ids, details)
        HardConstraintRules.check_double_booking(group_by_slot(entries, "class_id"), "Class Conflict", violating_ids, details)
        HardConstraintRules.check_lab_contiguity(entries, violating_ids, details)
        HardConstraintRules.check_capability(entries, self.capabilities, self.subject_names, violating_ids, details)
        HardConstraintRules.check_availability(entries, self.availability, violating_ids, details)
        HardConstraintRules.check_daily_subject_cap(entries, self.max_same_subject_per_day, violating_ids, details)

        return violating_ids, dict(details)

    def build_report(self, schedule: Sequence[Any], source: str = "") -> dict:
        """Validation summary in the shape saved by the pipeline."""
        violating_ids, details = self.validate_hard_constraints(schedule)

        violations_summary: Dict[str, int] = {}
        for violation_list in details.values():
            for v_type in violation_list:
                violations_summary[v_type] = violations_summary.get(v_type, 0) + 1

        return {
            "source_file": source,
            "total_entries": len(schedule),
            "total_unique_entries_violating": len(violating_ids),
            "violations_summary_by_type": violations_summary,
            "violations_details_per_entry": details,
        }
