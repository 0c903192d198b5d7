from .validator import ScheduleValidator
