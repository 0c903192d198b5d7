"""
Weekly timetable generation by constraint-satisfaction backtracking.

Typical use:

    from timetable_scheduler import generate_timetable
    result = generate_timetable(classes, subjects, faculty, rooms, seed=7)
    if result.success:
        ...
"""

from timetable_scheduler.engine.backtracking import BacktrackingScheduler, generate_timetable
from timetable_scheduler.models.schemas import FailureReason, GenerationResult, ScheduleEntry
from timetable_scheduler.processing.formatter import TimetableFormatter

__all__ = [
    "BacktrackingScheduler",
    "FailureReason",
    "GenerationResult",
    "ScheduleEntry",
    "TimetableFormatter",
    "generate_timetable",
]
