"""Engine-Modul: Machbarkeits-Check, Greedy-Scheduler, Konflikt-Prüfung, Nachbearbeitung."""

from .conflicts import ConflictChecker, has_conflict
from .feasibility import FeasibilityValidator, FeasibilityReport
from .scheduler import GreedyScheduler, ScheduleResult, PlacementWarning
from .editing import ManualEditValidator, EditResult

__all__ = [
    "ConflictChecker",
    "has_conflict",
    "FeasibilityValidator",
    "FeasibilityReport",
    "GreedyScheduler",
    "ScheduleResult",
    "PlacementWarning",
    "ManualEditValidator",
    "EditResult",
]
