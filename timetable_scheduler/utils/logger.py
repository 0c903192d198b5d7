import json
import datetime
from pathlib import Path

from .config import LOG_DIR

# Message types that go to the search trace instead of the main run log
SEARCH_TRACE_TYPES = {"SEARCH_PROGRESS", "SEARCH_BUDGET"}

class DetailedLogger:
    """
    A centralized logger that saves logs to a structured directory.
    - Creates a main run log with one JSON entry per event.
    - Creates a separate trace log for high-volume search diagnostics.
    - Organizes logs into subdirectories for each component (scheduler, validator, formatter).
    """
    _instance = None

    def __new__(cls, *args, **kwargs):
        # Singleton, so all components of one run write to the same files.
        if not cls._instance:
            cls._instance = super(DetailedLogger, cls).__new__(cls)
        return cls._instance

    def __init__(self, component: str, run_name: str):
        # Check if the logger has already been initialized for this run
        if hasattr(self, 'log_dir') and self.run_name == run_name and self.component == component:
            return

        self.component = component
        self.run_name = run_name

        # Structured log directory: log/{component}/{run_name}/
        self.log_dir = LOG_DIR / component / run_name
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.log_file_main = self.log_dir / "run_main.log"
        self.log_file_search_trace = self.log_dir / "search_trace.log"

        print(f"Logger initialized for '{component}'. Logs will be saved in: {self.log_dir}")


    def log(self, message_type: str, data: dict):
        """
        Logs a message to the console and the appropriate log file.

        Args:
            message_type (str): The category of the log (e.g., "INFO", "ERROR", "SEARCH_PROGRESS").
            data (dict): The data to be logged. Should contain a 'summary' key for console output.
        """
        log_entry = {
            "timestamp": datetime.datetime.now().isoformat(),
            "type": message_type,
            "data": data
        }

        summary = data.get('summary', str(data))

        if message_type in SEARCH_TRACE_TYPES:
            # Progress lines are too frequent for the console.
            self._write_to_file(self.log_file_search_trace, self._format_trace_line(message_type, data))
            return

        print(f"LOG [{self.component.upper()}|{message_type}]: {summary}")
        self._write_to_file(self.log_file_main, json.dumps(log_entry, indent=2, default=str) + "\n---\n")

    def _format_trace_line(self, message_type: str, data: dict) -> str:
        """One line per trace event: timestamp, type, then key=value pairs."""
        timestamp = datetime.datetime.now().isoformat()
        fields = " ".join(f"{k}={v}" for k, v in data.items() if k != 'summary')
        return f"{timestamp} {message_type} {fields} | {data.get('summary', '')}\n"

    def _write_to_file(self, filepath: Path, content: str):
        """Appends content to a specified file."""
        try:
            with open(filepath, "a", encoding='utf-8') as f:
                f.write(content)
        except OSError as e:
            print(f"CRITICAL: Failed to write to log file {filepath}: {e}")
