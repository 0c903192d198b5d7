from timetable_scheduler.constraints import ScheduleValidator

from tests.factories import make_entry, make_faculty, make_subject

FACULTY = [
    make_faculty("F1", ["S1", "L1"]),
    make_faculty("F2", ["Discrete Mathematics"]),
    make_faculty("F3", ["S1"], availability=[("Monday", 1)]),
]
SUBJECTS = [make_subject("S1", 3), make_subject("MA301", 3, name="Discrete Mathematics"), make_subject("L1", 2, is_lab=True)]


def violations(schedule):
    _, details = ScheduleValidator(FACULTY, SUBJECTS).validate_hard_constraints(schedule)
    return {label: sorted(names) for label, names in details.items()}


def test_clean_schedule_has_no_violations():
    schedule = [
        make_entry("C1", "S1", "F1", "R1", "Monday", 1),
        make_entry("C1", "MA301", "F2", "R1", "Monday", 2),
        make_entry("C1", "L1", "F1", "LAB1", "Tuesday", 3, is_lab=True, part=1, total=2),
        make_entry("C1", "L1", "F1", "LAB1", "Tuesday", 4, is_lab=True, part=2, total=2),
        make_entry("C2", "S1", "F3", "R2", "Monday", 1),
    ]
    assert violations(schedule) == {}


def test_double_bookings_are_reported_per_resource():
    faculty_clash = [make_entry("C1", "S1", "F1", "R1", "Monday", 1), make_entry("C2", "S1", "F1", "R2", "Monday", 1)]
    assert violations(faculty_clash) == {
        "C1:S1@Monday-1": ["Faculty Conflict"], "C2:S1@Monday-1": ["Faculty Conflict"],
    }

    room_clash = [make_entry("C1", "S1", "F1", "R1", "Monday", 1), make_entry("C2", "MA301", "F2", "R1", "Monday", 1)]
    assert set(sum(violations(room_clash).values(), [])) == {"Room Conflict"}

    class_clash = [make_entry("C1", "S1", "F1", "R1", "Monday", 1), make_entry("C1", "MA301", "F2", "R2", "Monday", 1)]
    assert set(sum(violations(class_clash).values(), [])) == {"Class Conflict"}


def test_capability_and_availability():
    schedule = [
        make_entry("C1", "MA301", "F1", "R1", "Monday", 1),
        make_entry("C2", "S1", "F3", "R2", "Friday", 5),
    ]
    assert violations(schedule) == {
        "C1:MA301@Monday-1": ["Faculty Capability"],
        "C2:S1@Friday-5": ["Faculty Availability"],
    }


def test_daily_subject_cap():
    schedule = [make_entry("C1", "S1", "F1", "R1", "Monday", p) for p in (1, 2, 3)]
    assert set(violations(schedule)) == {"C1:S1@Monday-1", "C1:S1@Monday-2", "C1:S1@Monday-3"}

    two_lab_sessions = [
        make_entry("C1", "L1", "F1", "LAB1", "Monday", 1, is_lab=True, part=1, total=2),
        make_entry("C1", "L1", "F1", "LAB1", "Monday", 2, is_lab=True, part=2, total=2),
        make_entry("C1", "L1", "F1", "LAB1", "Monday", 5, is_lab=True, part=1, total=2),
        make_entry("C1", "L1", "F1", "LAB1", "Monday", 6, is_lab=True, part=2, total=2),
    ]
    assert violations(two_lab_sessions) == {
        f"C1:L1@Monday-{p}": ["Daily Subject Cap"] for p in (1, 2, 5, 6)
    }

    three_period_lab = [
        make_entry("C1", "L1", "F1", "LAB1", "Monday", p, is_lab=True, part=p, total=3) for p in (1, 2, 3)
    ]
    assert violations(three_period_lab) == {
        f"C1:L1@Monday-{p}": ["Daily Subject Cap"] for p in (1, 2, 3)
    }


def test_broken_lab_block_is_reported():
    schedule = [
        make_entry("C1", "L1", "F1", "LAB1", "Monday", 1, is_lab=True, part=1, total=2),
        make_entry("C1", "L1", "F1", "LAB1", "Monday", 3, is_lab=True, part=2, total=2),
    ]
    assert violations(schedule) == {
        "C1:L1@Monday-1": ["Lab Contiguity"], "C1:L1@Monday-3": ["Lab Contiguity"],
    }


def test_report_summarises_violations_and_accepts_dicts():
    schedule = [
        make_entry("C1", "S1", "F1", "R1", "Monday", 1).model_dump(by_alias=True),
        make_entry("C2", "S1", "F1", "R2", "Monday", 1).model_dump(by_alias=True),
    ]
    report = ScheduleValidator(FACULTY, SUBJECTS).build_report(schedule, source="result.json")
    assert report["source_file"] == "result.json"
    assert report["total_entries"] == 2
    assert report["total_unique_entries_violating"] == 2
    assert report["violations_summary_by_type"] == {"Faculty Conflict": 2}
