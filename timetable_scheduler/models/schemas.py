from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from timetable_scheduler.utils.config import DEFAULT_LAB_HOURS_PER_SESSION
from .time_grid import DAYS, PERIODS_PER_DAY


class SnapshotModel(BaseModel):
    """Entity records arrive camelCased; fields are snake_case in Python."""
    model_config = ConfigDict(populate_by_name=True)


def check_day(value: str) -> str:
    if value not in DAYS:
        raise ValueError(f"day must be one of {', '.join(DAYS)} (got {value!r})")
    return value


# 1. Input snapshots
class AvailabilitySlot(SnapshotModel):
    day: str = Field(description="Weekday name, 'Monday' to 'Saturday'")
    period: int = Field(ge=1, le=PERIODS_PER_DAY, description="Period number, 1 to 8")

    @field_validator("day")
    @classmethod
    def validate_day(cls, value: str) -> str:
        return check_day(value)


class Faculty(SnapshotModel):
    id: str
    name: Optional[str] = None
    department: Optional[str] = None
    subjects_can_teach: List[str] = Field(
        default_factory=list, alias="subjectsCanTeach",
        description="Subject ids (or subject display names) this instructor can teach",
    )
    availability_slots: List[AvailabilitySlot] = Field(
        default_factory=list, alias="availabilitySlots",
        description="Slots the instructor can teach in. Empty means always available.",
    )
    # Carried for the caller; the scheduler does not enforce these.
    max_hours_per_day: int = Field(default=6, alias="maxHoursPerDay")
    preferred_slots: List[AvailabilitySlot] = Field(default_factory=list, alias="preferredSlots")


class Room(SnapshotModel):
    id: str = Field(validation_alias=AliasChoices("id", "roomId"))
    kind: str = Field(default="classroom", validation_alias=AliasChoices("kind", "type"))
    name: Optional[str] = None
    capacity: Optional[int] = None  # not compared against class size

    @field_validator("kind")
    @classmethod
    def normalize_kind(cls, value: str) -> str:
        kind = value.strip().lower()
        if kind not in {"classroom", "lab"}:
            raise ValueError(f"room kind must be 'classroom' or 'lab' (got {value!r})")
        return kind

    @property
    def is_lab(self) -> bool:
        return self.kind == "lab"


class Subject(SnapshotModel):
    id: str
    name: Optional[str] = None
    code: Optional[str] = None
    department: Optional[str] = None
    semester: Optional[int] = None
    weekly_hours: int = Field(ge=0, alias="weeklyHours")
    is_lab: bool = Field(default=False, alias="isLab")
    lab_hours_per_session: int = Field(default=DEFAULT_LAB_HOURS_PER_SESSION, ge=1, alias="labHoursPerSession")


class SchoolClass(SnapshotModel):
    id: str
    name: Optional[str] = None
    department: Optional[str] = None
    semester: Optional[int] = None
    section: Optional[str] = None
    student_count: Optional[int] = Field(default=None, alias="studentCount")
    subjects: List[str] = Field(default_factory=list, description="Explicit subject ids for this class")


class InputSnapshot(BaseModel):
    """Everything one generation run reads."""
    classes: List[SchoolClass] = Field(default_factory=list)
    subjects: List[Subject] = Field(default_factory=list)
    faculty: List[Faculty] = Field(default_factory=list)
    rooms: List[Room] = Field(default_factory=list)


# 2. Output records
class ScheduleEntry(SnapshotModel):
    class_id: str = Field(alias="classId")
    class_name: Optional[str] = Field(default=None, alias="className")
    subject_id: str = Field(alias="subjectId")
    subject_name: Optional[str] = Field(default=None, alias="subjectName")
    faculty_id: str = Field(alias="facultyId")
    faculty_name: Optional[str] = Field(default=None, alias="facultyName")
    room_id: str = Field(alias="roomId")
    day: str
    period: int = Field(ge=1, le=PERIODS_PER_DAY)
    is_lab: bool = Field(default=False, alias="isLab")
    lab_part_index: Optional[int] = Field(default=None, alias="labPartIndex")
    lab_part_total: Optional[int] = Field(default=None, alias="labPartTotal")

    @field_validator("day")
    @classmethod
    def validate_day(cls, value: str) -> str:
        return check_day(value)

    def label(self) -> str:
        """Short identifier used in validation reports."""
        return f"{self.class_id}:{self.subject_id}@{self.day}-{self.period}"


class FailureReason(str, Enum):
    EMPTY_INPUT = "EMPTY_INPUT"
    SEARCH_EXHAUSTED = "SEARCH_EXHAUSTED"


class GenerationMetadata(SnapshotModel):
    generation_time_ms: int = Field(default=0, alias="generationTimeMs")
    attempts: int = 0
    backtracks: int = 0
    total_units: Optional[int] = Field(default=None, alias="totalUnits")
    seed: Optional[int] = None
    budget_exhausted: Optional[bool] = Field(default=None, alias="budgetExhausted")


class GenerationResult(SnapshotModel):
    success: bool
    message: str
    reason: Optional[FailureReason] = None
    schedule: List[ScheduleEntry] = Field(default_factory=list)
    metadata: GenerationMetadata = Field(default_factory=GenerationMetadata)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# 3. Formatted views
class EntitySchedule(SnapshotModel):
    entity_id: str = Field(alias="entityId")
    entity_name: Optional[str] = Field(default=None, alias="entityName")
    entries: List[ScheduleEntry] = Field(default_factory=list)


class FacultyTimetable(SnapshotModel):
    faculty_id: str = Field(alias="facultyId")
    faculty_name: str = Field(alias="facultyName")
    department: str = ""
    entries: List[ScheduleEntry] = Field(default_factory=list)
    total_classes: int = Field(default=0, alias="totalClasses")
