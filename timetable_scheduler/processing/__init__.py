from .formatter import TimetableFormatter
from .loader import SnapshotLoader
