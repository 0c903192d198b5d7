from pathlib import Path
from typing import Optional, Union

from timetable_scheduler.models.schemas import InputSnapshot
from timetable_scheduler.utils.config import MAX_SAME_SUBJECT_PER_DAY
from timetable_scheduler.utils.file_io import load_json_file

PathLike = Union[str, Path]

class SnapshotLoader:
    @staticmethod
    def load(classes_file: PathLike, subjects_file: PathLike,
             faculty_file: PathLike, rooms_file: PathLike) -> InputSnapshot:
        """
        Reads the four entity files and validates them into one snapshot.
        Raises RuntimeError when a file is missing or unreadable, and
        pydantic.ValidationError when a record is malformed.
        """
        raw = {
            "classes": load_json_file(classes_file, "Classes"),
            "subjects": load_json_file(subjects_file, "Subjects"),
            "faculty": load_json_file(faculty_file, "Faculty"),
            "rooms": load_json_file(rooms_file, "Rooms"),
        }

        missing = [name for name, data in raw.items() if data is None]
        if missing:
            raise RuntimeError(f"Missing static data files ({' / '.join(missing)}).")

        return InputSnapshot.model_validate(raw)

    @staticmethod
    def check_generation_inputs(snapshot: InputSnapshot) -> Optional[str]:
        """
        Readiness checks done before a run. Returns the first problem found, or None.
        """
        if not snapshot.classes:
            return "No classes found. Please add classes before generating timetable."
        if not snapshot.subjects:
            return "No subjects found. Please add subjects before generating timetable."
        if not snapshot.faculty:
            return "No faculty found. Please add faculty before generating timetable."
        if not snapshot.rooms:
            return "No rooms found. Please add rooms before generating timetable."

        has_lab_subjects = any(s.is_lab for s in snapshot.subjects)
        has_lab_rooms = any(r.is_lab for r in snapshot.rooms)
        if has_lab_subjects and not has_lab_rooms:
            return "Lab subjects exist but no lab rooms found. Please add lab rooms."

        for subject in snapshot.subjects:
            if subject.is_lab and subject.lab_hours_per_session > MAX_SAME_SUBJECT_PER_DAY:
                return (f"Lab subject {subject.id} needs {subject.lab_hours_per_session} consecutive periods, "
                        f"but at most {MAX_SAME_SUBJECT_PER_DAY} periods of a subject fit in one day.")

        return None
