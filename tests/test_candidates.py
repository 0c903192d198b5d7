import random

from timetable_scheduler.engine.candidates import CandidateGenerator
from timetable_scheduler.engine.tracking import Assignment, SearchState
from timetable_scheduler.engine.units import SchedulingUnit

from tests.factories import make_faculty, make_room


def theory_unit(subject_id="S1", subject_name=None, class_id="C1"):
    return SchedulingUnit(class_id=class_id, subject_id=subject_id, is_lab=False, subject_name=subject_name)


def lab_unit(length=2, subject_id="L1"):
    return SchedulingUnit(class_id="C1", subject_id=subject_id, is_lab=True, required_consecutive_periods=length)


def generator(faculty, rooms, seed=0):
    return CandidateGenerator(faculty, rooms, random.Random(seed))


def test_faculty_matches_by_subject_id_or_display_name():
    gen = generator(
        [make_faculty("F1", ["S1"]), make_faculty("F2", ["Discrete Mathematics"]), make_faculty("F3", ["S9"])],
        [make_room("R1")],
    )
    by_id = [f.id for f in gen.eligible_faculty(theory_unit("S1"))]
    by_name = [f.id for f in gen.eligible_faculty(theory_unit("MA301", subject_name="Discrete Mathematics"))]

    assert by_id == ["F1"]
    assert by_name == ["F2"]


def test_rooms_must_match_unit_kind():
    gen = generator([make_faculty("F1", ["S1", "L1"])], [make_room("R1"), make_room("LAB1", "lab")])
    assert [r.id for r in gen.eligible_rooms(theory_unit())] == ["R1"]
    assert [r.id for r in gen.eligible_rooms(lab_unit())] == ["LAB1"]


def test_theory_candidates_cover_every_free_slot():
    gen = generator([make_faculty("F1", ["S1"])], [make_room("R1")])
    candidates = gen.generate(theory_unit(), SearchState())
    assert len(candidates) == 48
    assert len({(c.day, c.period) for c in candidates}) == 48


def test_lab_blocks_never_run_past_the_last_period():
    gen = generator([make_faculty("F1", ["L1"])], [make_room("LAB1", "lab")])
    candidates = gen.generate(lab_unit(length=2), SearchState())
    assert len(candidates) == 6 * 7
    assert max(c.period for c in candidates) == 7


def test_declared_availability_limits_candidates():
    gen = generator([make_faculty("F1", ["S1"], availability=[("Monday", 1), ("Friday", 3)])], [make_room("R1")])
    candidates = gen.generate(theory_unit(), SearchState())
    assert sorted((c.day, c.period) for c in candidates) == [("Friday", 3), ("Monday", 1)]


def test_lab_block_needs_availability_for_every_period():
    gen = generator(
        [make_faculty("F1", ["L1"], availability=[("Monday", 1), ("Monday", 2), ("Tuesday", 1)])],
        [make_room("LAB1", "lab")],
    )
    candidates = gen.generate(lab_unit(), SearchState())
    assert [(c.day, c.period) for c in candidates] == [("Monday", 1)]


def test_busy_faculty_room_or_class_is_rejected():
    gen = generator([make_faculty("F1", ["S1", "S2"]), make_faculty("F2", ["S1"])],
                    [make_room("R1"), make_room("R2")])
    state = SearchState()
    state.commit(theory_unit("S2"), Assignment("Monday", 1, "F1", "R1"))

    other_class = theory_unit("S1", class_id="C2")
    assert not gen.accepts(other_class, Assignment("Monday", 1, "F1", "R2"), state)
    assert not gen.accepts(other_class, Assignment("Monday", 1, "F2", "R1"), state)
    assert gen.accepts(other_class, Assignment("Monday", 1, "F2", "R2"), state)
    assert not gen.accepts(theory_unit("S1"), Assignment("Monday", 1, "F2", "R2"), state)


def test_theory_subject_capped_per_day():
    gen = generator([make_faculty("F1", ["S1"])], [make_room("R1")])
    state = SearchState()
    state.commit(theory_unit(), Assignment("Monday", 1, "F1", "R1"))
    assert gen.accepts(theory_unit(), Assignment("Monday", 2, "F1", "R1"), state)

    state.commit(theory_unit(), Assignment("Monday", 2, "F1", "R1"))
    assert not gen.accepts(theory_unit(), Assignment("Monday", 3, "F1", "R1"), state)
    assert gen.accepts(theory_unit(), Assignment("Tuesday", 3, "F1", "R1"), state)
    assert all(c.day != "Monday" for c in gen.generate(theory_unit(), state))


def test_two_period_lab_fills_the_daily_cap():
    gen = generator([make_faculty("F1", ["L1"])], [make_room("LAB1", "lab")])
    state = SearchState()
    state.commit(lab_unit(), Assignment("Wednesday", 1, "F1", "LAB1"))

    assert not gen.accepts(lab_unit(), Assignment("Wednesday", 5, "F1", "LAB1"), state)
    assert gen.accepts(lab_unit(), Assignment("Thursday", 5, "F1", "LAB1"), state)


def test_single_period_lab_allows_two_sessions_per_day():
    gen = generator([make_faculty("F1", ["L1"])], [make_room("LAB1", "lab")])
    state = SearchState()
    state.commit(lab_unit(length=1), Assignment("Monday", 1, "F1", "LAB1"))
    assert gen.accepts(lab_unit(length=1), Assignment("Monday", 4, "F1", "LAB1"), state)

    state.commit(lab_unit(length=1), Assignment("Monday", 4, "F1", "LAB1"))
    assert not gen.accepts(lab_unit(length=1), Assignment("Monday", 6, "F1", "LAB1"), state)


def test_lab_longer_than_the_daily_cap_has_no_candidates():
    gen = generator([make_faculty("F1", ["L1"])], [make_room("LAB1", "lab")])
    assert gen.generate(lab_unit(length=3), SearchState()) == []


def test_same_seed_gives_same_candidate_order():
    faculty = [make_faculty("F1", ["S1"]), make_faculty("F2", ["S1"])]
    rooms = [make_room("R1"), make_room("R2")]
    first = generator(faculty, rooms, seed=11).generate(theory_unit(), SearchState())
    second = generator(faculty, rooms, seed=11).generate(theory_unit(), SearchState())
    assert first == second
    assert len(first) == 48 * 4
