from timetable_scheduler.models.time_grid import DAYS, PERIODS
from timetable_scheduler.processing import TimetableFormatter

from tests.factories import make_entry, make_faculty

SCHEDULE = [
    make_entry("C2", "S1", "F1", "R1", "Wednesday", 2),
    make_entry("C1", "S2", "F2", "R2", "Tuesday", 5),
    make_entry("C1", "S1", "F1", "R1", "Monday", 3),
    make_entry("C1", "L1", "F1", "LAB1", "Friday", 1, is_lab=True, part=1, total=2),
    make_entry("C1", "L1", "F1", "LAB1", "Friday", 2, is_lab=True, part=2, total=2),
]


def test_by_class_keeps_first_appearance_and_sorts_entries():
    groups = TimetableFormatter.by_class(SCHEDULE)
    assert [g.entity_id for g in groups] == ["C2", "C1"]
    c1 = groups[1]
    assert [(e.day, e.period) for e in c1.entries] == [
        ("Monday", 3), ("Tuesday", 5), ("Friday", 1), ("Friday", 2),
    ]


def test_by_faculty_groups_every_entry_once():
    groups = TimetableFormatter.by_faculty(SCHEDULE)
    assert [g.entity_id for g in groups] == ["F1", "F2"]
    assert sum(len(g.entries) for g in groups) == len(SCHEDULE)


def test_grid_has_every_cell_and_marks_labs():
    grid = TimetableFormatter.as_grid(SCHEDULE, "C1")
    assert list(grid) == list(DAYS)
    assert all(list(grid[day]) == list(PERIODS) for day in DAYS)
    assert grid["Monday"][3] == {"subject": "S1", "faculty": "F1", "room": "R1", "isLab": False}
    assert grid["Friday"][2]["isLab"] is True
    assert grid["Wednesday"][2] is None
    assert sum(cell is not None for day in DAYS for cell in grid[day].values()) == 4


def test_grid_for_unknown_class_is_empty():
    grid = TimetableFormatter.as_grid(SCHEDULE, "C9")
    assert all(cell is None for day in DAYS for cell in grid[day].values())


def test_faculty_timetable_counts_teaching_periods():
    view = TimetableFormatter.faculty_timetable(SCHEDULE, "F1", make_faculty("F1", ["S1"], name="Dr. One"))
    assert view.faculty_name == "Dr. One"
    assert view.total_classes == 4
    assert view.entries[0].day == "Monday"

    bare = TimetableFormatter.faculty_timetable(SCHEDULE, "F2")
    assert (bare.faculty_name, bare.department, bare.total_classes) == ("F2", "", 1)
