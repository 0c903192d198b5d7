from typing import Any, Dict, List, Optional, Sequence

from timetable_scheduler.models.schemas import EntitySchedule, Faculty, FacultyTimetable, ScheduleEntry
from timetable_scheduler.models.time_grid import DAYS, PERIODS, chronological_key

Grid = Dict[str, Dict[int, Optional[Dict[str, Any]]]]

def sort_chronologically(entries: Sequence[ScheduleEntry]) -> List[ScheduleEntry]:
    return sorted(entries, key=lambda e: chronological_key(e.day, e.period))

class TimetableFormatter:
    """
    Pure projections of a flat schedule into per-class, per-faculty and grid views.
    Groups keep the order in which their entity first appears in the schedule.
    """

    @staticmethod
    def _group(schedule: Sequence[ScheduleEntry], id_attr: str, name_attr: str) -> List[EntitySchedule]:
        groups: Dict[str, EntitySchedule] = {}
        for entry in schedule:
            entity_id = getattr(entry, id_attr)
            if entity_id not in groups:
                groups[entity_id] = EntitySchedule(entity_id=entity_id, entity_name=getattr(entry, name_attr))
            groups[entity_id].entries.append(entry)

        for group in groups.values():
            group.entries = sort_chronologically(group.entries)
        return list(groups.values())

    @staticmethod
    def by_class(schedule: Sequence[ScheduleEntry]) -> List[EntitySchedule]:
        return TimetableFormatter._group(schedule, "class_id", "class_name")

    @staticmethod
    def by_faculty(schedule: Sequence[ScheduleEntry]) -> List[EntitySchedule]:
        return TimetableFormatter._group(schedule, "faculty_id", "faculty_name")

    @staticmethod
    def as_grid(schedule: Sequence[ScheduleEntry], class_id: str) -> Grid:
        """Day x period matrix for one class; empty cells are None."""
        grid: Grid = {day: {period: None for period in PERIODS} for day in DAYS}

        for entry in schedule:
            if entry.class_id != class_id:
                continue
            grid[entry.day][entry.period] = {
                "subject": entry.subject_name or entry.subject_id,
                "faculty": entry.faculty_name or entry.faculty_id,
                "room": entry.room_id,
                "isLab": entry.is_lab,
            }
        return grid

    @staticmethod
    def faculty_timetable(schedule: Sequence[ScheduleEntry], faculty_id: str,
                          faculty: Optional[Faculty] = None) -> FacultyTimetable:
        """One instructor's week with a teaching-period total."""
        entries = sort_chronologically([e for e in schedule if e.faculty_id == faculty_id])
        return FacultyTimetable(
            faculty_id=faculty_id,
            faculty_name=(faculty.name if faculty and faculty.name else faculty_id),
            department=(faculty.department if faculty and faculty.department else ""),
            entries=entries,
            total_classes=len(entries),
        )


# Module-level aliases for callers that prefer functions
format_timetable_by_class = TimetableFormatter.by_class
format_timetable_by_faculty = TimetableFormatter.by_faculty
format_as_grid = TimetableFormatter.as_grid
format_faculty_timetable = TimetableFormatter.faculty_timetable
