from .schemas import (
    AvailabilitySlot, EntitySchedule, Faculty, FacultyTimetable, FailureReason, GenerationMetadata,
    GenerationResult, InputSnapshot, Room, ScheduleEntry, SchoolClass, Subject,
)
