"""
Chronological backtracking search over the ordered unit list.

The search walks an explicit stack of frames, one per unit depth, instead of
recursing, so the depth is bounded by memory rather than the interpreter's
recursion limit. Each frame holds the unit's shuffled candidate list, a cursor
into it, and the placement currently committed at that depth.

Frame lifecycle at depth i:
    - opened: candidates generated against the current state
    - next candidate committed, frame i+1 opened
    - if frame i+1 runs out of candidates it is popped; frame i undoes its
      placement (one backtrack) and moves to its next candidate
    - when the last unit commits, the search succeeds and nothing is undone
"""

import random
import time
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel

from timetable_scheduler.engine.candidates import CandidateGenerator
from timetable_scheduler.engine.tracking import Assignment, Placement, SearchState
from timetable_scheduler.engine.units import SchedulingUnit, build_scheduling_units
from timetable_scheduler.models.schemas import (
    Faculty, FailureReason, GenerationMetadata, GenerationResult, Room, SchoolClass, Subject,
)
from timetable_scheduler.utils.config import SCHEDULER_PROGRESS_INTERVAL
from timetable_scheduler.utils.logger import DetailedLogger

SUCCESS_MESSAGE = "Timetable generated successfully"
EMPTY_INPUT_MESSAGE = "No units to schedule. Please check input data."
SEARCH_EXHAUSTED_MESSAGE = (
    "Unable to generate a valid timetable with given constraints. "
    "Try relaxing some constraints or adding more resources."
)
BUDGET_EXHAUSTED_MESSAGE = (
    "Search budget exhausted before a valid timetable was found. "
    "Increase the attempt or time budget, or relax some constraints."
)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _as_models(model: Type[ModelT], items: Optional[Sequence[Any]]) -> List[ModelT]:
    """Accepts pydantic models or raw dict records."""
    return [item if isinstance(item, model) else model.model_validate(item) for item in (items or [])]


@dataclass
class _Frame:
    unit: SchedulingUnit
    candidates: List[Assignment]
    cursor: int = 0
    placement: Optional[Placement] = field(default=None)


class BacktrackingScheduler:
    def __init__(
        self,
        classes: Sequence[Any],
        subjects: Sequence[Any],
        faculty: Sequence[Any],
        rooms: Sequence[Any],
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        max_attempts: Optional[int] = None,
        time_budget_seconds: Optional[float] = None,
        logger: Optional[DetailedLogger] = None,
        progress_interval: int = SCHEDULER_PROGRESS_INTERVAL,
    ):
        self.classes = _as_models(SchoolClass, classes)
        self.subjects = _as_models(Subject, subjects)
        self.faculty = _as_models(Faculty, faculty)
        self.rooms = _as_models(Room, rooms)

        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.max_attempts = max_attempts
        self.time_budget_seconds = time_budget_seconds
        self.logger = logger
        self.progress_interval = max(1, progress_interval)

        # Diagnostics, reset on every run
        self.attempts = 0
        self.backtracks = 0
        self.budget_exhausted = False

    def _log(self, message_type: str, data: dict):
        if self.logger is not None:
            self.logger.log(message_type, data)

    # ------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------

    def generate_timetable(self) -> GenerationResult:
        self._log("MILESTONE", {
            "summary": "--- Timetable generation started ---",
            "classes": len(self.classes),
            "subjects": len(self.subjects),
            "faculty": len(self.faculty),
            "rooms": len(self.rooms),
            "seed": self.seed,
        })
        started_at = time.perf_counter()
        self.attempts = 0
        self.backtracks = 0
        self.budget_exhausted = False

        units = build_scheduling_units(self.classes, self.subjects)
        self._log("INFO", {"summary": f"Units to schedule: {len(units)}", "total_units": len(units)})

        if not units:
            self._log("WARNING", {"summary": EMPTY_INPUT_MESSAGE})
            return GenerationResult(
                success=False,
                message=EMPTY_INPUT_MESSAGE,
                reason=FailureReason.EMPTY_INPUT,
                metadata=GenerationMetadata(generation_time_ms=_elapsed_ms(started_at)),
            )

        state = SearchState()
        generator = CandidateGenerator(self.faculty, self.rooms, self.rng)
        solved = self._search(units, state, generator, started_at)
        elapsed_ms = _elapsed_ms(started_at)

        if solved:
            self._log("SUCCESS", {
                "summary": f"Timetable generated in {elapsed_ms}ms "
                           f"({self.attempts} attempts, {self.backtracks} backtracks)",
                "generation_time_ms": elapsed_ms,
                "attempts": self.attempts,
                "backtracks": self.backtracks,
                "entries": len(state.schedule),
            })
            return GenerationResult(
                success=True,
                message=SUCCESS_MESSAGE,
                schedule=list(state.schedule),
                metadata=GenerationMetadata(
                    generation_time_ms=elapsed_ms,
                    attempts=self.attempts,
                    backtracks=self.backtracks,
                    total_units=len(units),
                    seed=self.seed,
                ),
            )

        message = BUDGET_EXHAUSTED_MESSAGE if self.budget_exhausted else SEARCH_EXHAUSTED_MESSAGE
        self._log("FAILURE", {
            "summary": f"Failed to generate timetable after {self.attempts} attempts",
            "generation_time_ms": elapsed_ms,
            "attempts": self.attempts,
            "backtracks": self.backtracks,
            "budget_exhausted": self.budget_exhausted,
        })
        return GenerationResult(
            success=False,
            message=message,
            reason=FailureReason.SEARCH_EXHAUSTED,
            metadata=GenerationMetadata(
                generation_time_ms=elapsed_ms,
                attempts=self.attempts,
                backtracks=self.backtracks,
                budget_exhausted=True if self.budget_exhausted else None,
            ),
        )

    # ------------------------------------------------------------
    # Search
    # ------------------------------------------------------------

    def _search(self, units: List[SchedulingUnit], state: SearchState,
                generator: CandidateGenerator, started_at: float) -> bool:
        stack: List[_Frame] = [_Frame(units[0], generator.generate(units[0], state))]

        while stack:
            frame = stack[-1]

            # Back from a failed subtree: revert this depth's commit.
            if frame.placement is not None:
                frame.placement.undo()
                frame.placement = None
                self.backtracks += 1

            if frame.cursor >= len(frame.candidates):
                stack.pop()
                continue

            if self._budget_spent(started_at):
                self.budget_exhausted = True
                self._log("SEARCH_BUDGET", {
                    "summary": "Search budget exhausted, unwinding",
                    "depth": len(stack) - 1,
                    "attempts": self.attempts,
                    "backtracks": self.backtracks,
                })
                self._unwind(stack)
                return False

            assignment = frame.candidates[frame.cursor]
            frame.cursor += 1
            self.attempts += 1
            frame.placement = state.commit(frame.unit, assignment)

            if self.attempts % self.progress_interval == 0:
                self._log("SEARCH_PROGRESS", {
                    "summary": f"depth {len(stack)}/{len(units)}",
                    "depth": len(stack),
                    "attempts": self.attempts,
                    "backtracks": self.backtracks,
                })

            if len(stack) == len(units):
                return True

            next_unit = units[len(stack)]
            stack.append(_Frame(next_unit, generator.generate(next_unit, state)))

        return False

    def _budget_spent(self, started_at: float) -> bool:
        if self.max_attempts is not None and self.attempts >= self.max_attempts:
            return True
        if self.time_budget_seconds is not None and time.perf_counter() - started_at >= self.time_budget_seconds:
            return True
        return False

    @staticmethod
    def _unwind(stack: List[_Frame]):
        """Undo every committed placement, deepest first."""
        for frame in reversed(stack):
            if frame.placement is not None:
                frame.placement.undo()
                frame.placement = None
        stack.clear()


def _elapsed_ms(started_at: float) -> int:
    return int(round((time.perf_counter() - started_at) * 1000))


def generate_timetable(classes: Sequence[Any], subjects: Sequence[Any], faculty: Sequence[Any],
                       rooms: Sequence[Any], **options) -> GenerationResult:
    """One-shot helper: build a scheduler for these snapshots and run it."""
    return BacktrackingScheduler(classes, subjects, faculty, rooms, **options).generate_timetable()
