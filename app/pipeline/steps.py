from pathlib import Path
from typing import Optional

from timetable_scheduler.utils.config import (
    OUTPUT_DIR, CLASSES_FILE, SUBJECTS_FILE, FACULTY_FILE, ROOMS_FILE,
    SCHEDULER_SEED, SCHEDULER_MAX_ATTEMPTS, SCHEDULER_TIME_BUDGET_SECONDS,
    get_run_output_dir
)
from timetable_scheduler.utils.file_io import load_json_file, save_json_file
from timetable_scheduler.utils.logger import DetailedLogger

# --- CORE ---
from timetable_scheduler.engine import BacktrackingScheduler
from timetable_scheduler.models.schemas import GenerationResult, InputSnapshot

# --- PROCESSING LOGIC ---
from timetable_scheduler.constraints import ScheduleValidator
from timetable_scheduler.processing import SnapshotLoader, TimetableFormatter

RESULT_FILE_NAME = "generation_result.json"
VALIDATION_REPORT_NAME = "validation_report.json"


def load_input_snapshot(data_dir: Optional[Path] = None) -> InputSnapshot:
    if data_dir is None:
        return SnapshotLoader.load(CLASSES_FILE, SUBJECTS_FILE, FACULTY_FILE, ROOMS_FILE)
    return SnapshotLoader.load(
        data_dir / "classes.json", data_dir / "subjects.json",
        data_dir / "faculty.json", data_dir / "rooms.json",
    )

def load_generation_result(run_dir: Path) -> GenerationResult:
    data = load_json_file(run_dir / RESULT_FILE_NAME, "Generation result")
    if data is None:
        raise FileNotFoundError(f"No generation result found in {run_dir}. Run the generator first.")
    return GenerationResult.model_validate(data)

def run_input_check_step(data_dir: Optional[Path] = None) -> InputSnapshot:
    print("\n--- Step: Input Check ---")
    snapshot = load_input_snapshot(data_dir)
    problem = SnapshotLoader.check_generation_inputs(snapshot)
    if problem:
        print(f"CRITICAL: {problem}")
        raise RuntimeError(problem)

    print(f"  Data loaded: {len(snapshot.classes)} classes, {len(snapshot.subjects)} subjects, "
          f"{len(snapshot.faculty)} faculty, {len(snapshot.rooms)} rooms")
    return snapshot

def run_generator(run_tag: str, snapshot: Optional[InputSnapshot] = None,
                  output_dir: Optional[Path] = None, seed: Optional[int] = None) -> Path:
    print("\n--- Step: Generator ---")
    if snapshot is None:
        snapshot = run_input_check_step()

    out_dir = get_run_output_dir(output_dir or OUTPUT_DIR, "generator", run_tag)
    logger = DetailedLogger(component="scheduler", run_name=out_dir.name)

    scheduler = BacktrackingScheduler(
        snapshot.classes, snapshot.subjects, snapshot.faculty, snapshot.rooms,
        seed=SCHEDULER_SEED if seed is None else seed,
        max_attempts=SCHEDULER_MAX_ATTEMPTS,
        time_budget_seconds=SCHEDULER_TIME_BUDGET_SECONDS,
        logger=logger,
    )
    result = scheduler.generate_timetable()

    save_json_file(out_dir / RESULT_FILE_NAME, result.to_dict(), "Generation result")
    print(f"  [Generator] success={result.success} entries={len(result.schedule)} -> {out_dir}")
    return out_dir

def run_validator(run_dir: Path, snapshot: Optional[InputSnapshot] = None) -> Path:
    print("\n--- Step: Hard Validator ---")
    result = load_generation_result(run_dir)
    if snapshot is None:
        snapshot = load_input_snapshot()

    v = ScheduleValidator(snapshot.faculty, snapshot.subjects)
    report = v.build_report(result.schedule, source=str(run_dir / RESULT_FILE_NAME))

    val_out_dir = run_dir / "validation_output"
    save_json_file(val_out_dir / VALIDATION_REPORT_NAME, report, "Validation report")
    print(f"  [Validator] Violations found: {report['total_unique_entries_violating']}")
    return val_out_dir

def run_formatter(run_dir: Path, snapshot: Optional[InputSnapshot] = None) -> Path:
    print("\n--- Step: Formatter ---")
    result = load_generation_result(run_dir)
    out_dir = run_dir / "formatted_output"

    if not result.success:
        print(f"WARNING: Nothing to format, generation failed: {result.message}")
        return out_dir

    schedule = result.schedule
    save_json_file(out_dir / "timetable_by_class.json", TimetableFormatter.by_class(schedule))
    save_json_file(out_dir / "timetable_by_faculty.json", TimetableFormatter.by_faculty(schedule))

    for group in TimetableFormatter.by_class(schedule):
        grid = TimetableFormatter.as_grid(schedule, group.entity_id)
        save_json_file(out_dir / "grids" / f"{group.entity_id}.json", {"classId": group.entity_id, "grid": grid})

    faculty_map = {f.id: f for f in snapshot.faculty} if snapshot else {}
    for group in TimetableFormatter.by_faculty(schedule):
        view = TimetableFormatter.faculty_timetable(schedule, group.entity_id, faculty_map.get(group.entity_id))
        save_json_file(out_dir / "faculty" / f"{group.entity_id}.json", view)

    print(f"  [Formatter] Saved views to: {out_dir}")
    return out_dir

def is_generation_successful(run_dir: Path) -> bool:
    return load_generation_result(run_dir).success

def is_schedule_fully_valid(validation_dir: Path) -> bool:
    """Checks if the validation report contains violations."""
    report = load_json_file(validation_dir / VALIDATION_REPORT_NAME, "Validation report")
    if not report: return False
    return report.get("total_unique_entries_violating", 0) == 0
