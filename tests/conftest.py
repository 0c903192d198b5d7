import pytest

from timetable_scheduler.utils import logger as logger_module
from timetable_scheduler.utils.logger import DetailedLogger


@pytest.fixture(autouse=True)
def isolated_log_dir(tmp_path, monkeypatch):
    """Every test logs into its own temp dir and gets a fresh logger singleton."""
    log_dir = tmp_path / "log"
    monkeypatch.setattr(logger_module, "LOG_DIR", log_dir)
    monkeypatch.setattr(DetailedLogger, "_instance", None)
    return log_dir
