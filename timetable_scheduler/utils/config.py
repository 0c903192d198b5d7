import os
import datetime
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# --- Core Path Configuration ---
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

# Load environment variables from a .env file at the project root
dotenv_path = PROJECT_ROOT / '.env'
load_dotenv(dotenv_path=dotenv_path)


# --- Env helpers ---
def _env_int(name: str) -> Optional[int]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        print(f"WARNING: {name}={raw!r} is not an integer. Ignoring it.")
        return None

def _env_float(name: str) -> Optional[float]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        print(f"WARNING: {name}={raw!r} is not a number. Ignoring it.")
        return None

def _env_path(name: str, default: Path) -> Path:
    raw = os.environ.get(name, "").strip()
    return Path(raw) if raw else default


# --- Directory Paths ---
DATA_DIR = _env_path("TIMETABLE_DATA_DIR", PROJECT_ROOT / "data")
LOG_DIR = _env_path("TIMETABLE_LOG_DIR", PROJECT_ROOT / "log")
OUTPUT_DIR = _env_path("TIMETABLE_OUTPUT_DIR", PROJECT_ROOT / "output") # central directory for all generated outputs

# --- Static Data File Paths ---
# Entity snapshots handed to the scheduler. They are read-only for the whole run.
CLASSES_FILE = DATA_DIR / "classes.json"
SUBJECTS_FILE = DATA_DIR / "subjects.json"
FACULTY_FILE = DATA_DIR / "faculty.json"
ROOMS_FILE = DATA_DIR / "rooms.json"

# --- Search Settings ---
# Seed for the candidate shuffle. Unset means every run may find a different timetable.
SCHEDULER_SEED = _env_int("SCHEDULER_SEED")

# Optional budgets. Unset means the search runs until it succeeds or exhausts the tree.
SCHEDULER_MAX_ATTEMPTS = _env_int("SCHEDULER_MAX_ATTEMPTS")
SCHEDULER_TIME_BUDGET_SECONDS = _env_float("SCHEDULER_TIME_BUDGET_SECONDS")

# Attempts between two progress lines in search_trace.log
SCHEDULER_PROGRESS_INTERVAL = _env_int("SCHEDULER_PROGRESS_INTERVAL") or 5000

# --- Scheduling Policy (fixed) ---
MAX_SAME_SUBJECT_PER_DAY = 2
DEFAULT_LAB_HOURS_PER_SESSION = 2


# --- Helper to create a unique run directory ---
# The controller will use this to ensure each pipeline run saves to a new folder.
def get_run_output_dir(base_output_dir: Path, step_name: str, run_tag: str) -> Path:

    run_dir = base_output_dir / f"{step_name}_{run_tag}"

    # If the directory already exists, we append a timestamp to avoid data loss.
    if run_dir.exists():
        timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        original_run_dir = run_dir
        run_dir = base_output_dir / f"{step_name}_{run_tag}_{timestamp}"
        print(f"WARNING: Directory '{original_run_dir}' already exists. Using new timestamped name to avoid overwrite: '{run_dir}'")

    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir
