import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from timetable_scheduler.models.schemas import SchoolClass, Subject


@dataclass(frozen=True)
class SchedulingUnit:
    """
    One atomic requirement: a single theory hour, or one lab session that
    needs `required_consecutive_periods` back-to-back periods.
    """

    class_id: str
    subject_id: str
    is_lab: bool
    required_consecutive_periods: int = 1
    session_index: int = 0
    class_name: Optional[str] = None
    subject_name: Optional[str] = None


def resolve_class_subjects(school_class: SchoolClass, subjects: Sequence[Subject]) -> List[Subject]:
    """
    Subjects that apply to a class: listed explicitly on the class, or
    sharing the class's department and semester. A class without a
    department only gets its explicit list.
    """
    explicit = set(school_class.subjects)
    return [
        subject for subject in subjects
        if subject.id in explicit
        or (school_class.department is not None
            and subject.department == school_class.department
            and subject.semester == school_class.semester)
    ]


def expand_subject(school_class: SchoolClass, subject: Subject) -> List[SchedulingUnit]:
    if subject.is_lab:
        block = subject.lab_hours_per_session
        sessions = math.ceil(subject.weekly_hours / block)
        return [
            SchedulingUnit(
                class_id=school_class.id,
                subject_id=subject.id,
                is_lab=True,
                required_consecutive_periods=block,
                session_index=session,
                class_name=school_class.name,
                subject_name=subject.name,
            )
            for session in range(sessions)
        ]

    return [
        SchedulingUnit(
            class_id=school_class.id,
            subject_id=subject.id,
            is_lab=False,
            session_index=hour,
            class_name=school_class.name,
            subject_name=subject.name,
        )
        for hour in range(subject.weekly_hours)
    ]


def build_scheduling_units(classes: Sequence[SchoolClass], subjects: Sequence[Subject]) -> List[SchedulingUnit]:
    """
    Expands every (class, subject) pair into units and orders them
    most-constrained first: lab units before theory units, then by class id.
    The sort is stable, so units of one class keep their subject order.
    """
    units: List[SchedulingUnit] = []
    for school_class in classes:
        for subject in resolve_class_subjects(school_class, subjects):
            units.extend(expand_subject(school_class, subject))

    units.sort(key=lambda unit: (not unit.is_lab, unit.class_id))
    return units
