from .backtracking import BacktrackingScheduler, generate_timetable
from .candidates import CandidateGenerator
from .tracking import Assignment, Placement, SearchState, TrackingStore
from .units import SchedulingUnit, build_scheduling_units
