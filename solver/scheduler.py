"""Greedy-Stundenplan-Generator (konstruktiv, ohne Backtracking).

Ablauf:
  - Klassen strikt nacheinander in Eingabereihenfolge
  - Anforderungen einer Klasse nach Wochenstunden absteigend (stabil)
  - Jede Einzelstunde bekommt den ersten freien (Tag, Stunde)-Slot in
    kanonischer Reihenfolge: Tage der Woche, Stunden 1..periods_per_day[Tag]
    (höchstens week.max_periods)
  - Mit scheduler.spread_first werden zuerst nur Tage probiert, an denen die
    Anforderung noch keine Stunde hat; erst danach wird aufgefüllt
  - Findet sich kein Slot, wird die Stunde verworfen (weiche Warnung)

Die Belegungsindizes leben nur für einen generate()-Aufruf. Der Lehrer-Index
wird über alle Klassen geteilt, weil eine Lehrkraft mehrere Klassen hat.
"""

import logging
import time
from functools import cached_property
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from config.schema import EngineConfig
from models.requirement import CurriculumRequirement
from models.schedule_slot import ScheduleSlot
from models.school_class import ClassGroup
from models.school_data import resolve_references
from models.teacher import Teacher
from solver.conflicts import ConflictChecker

logger = logging.getLogger(__name__)


# ─── Ergebnis-Modelle ─────────────────────────────────────────────────────────

class PlacementWarning(BaseModel):
    """Eine Anforderung, von der nicht alle Stunden platziert werden konnten."""

    requirement_id: str
    class_id: str
    teacher_id: str
    subject: str
    dropped: int


class ScheduleResult(BaseModel):
    """Fertiger Stundenplan plus Generierungs-Metadaten."""

    slots: list[ScheduleSlot]
    dropped_lessons: int = 0
    message: Optional[str] = None
    warnings: list[PlacementWarning] = []

    def get_class_schedule(self, class_id: str) -> list[ScheduleSlot]:
        """Alle Slots einer bestimmten Klasse."""
        return [s for s in self.slots if s.class_id == class_id]

    def get_teacher_schedule(self, teacher_id: str) -> list[ScheduleSlot]:
        """Alle Slots einer bestimmten Lehrkraft."""
        return [s for s in self.slots if s.teacher_id == teacher_id]

    @cached_property
    def slot_index(self) -> dict[tuple[str, int, int], ScheduleSlot]:
        """Beim ersten Zugriff aufgebautes grid(); slots danach nicht mehr verändern."""
        return self.grid()

    def slot_at(self, class_id: str, day: int, period: int) -> Optional[ScheduleSlot]:
        """Slot einer Klasse in (day, period) oder None (O(1) über slot_index)."""
        return self.slot_index.get((class_id, day, period))

    def grid(self) -> dict[tuple[str, int, int], ScheduleSlot]:
        """Lookup (class_id, day, period) → Slot für Rasterdarstellungen."""
        return {s.class_key: s for s in self.slots}

    def with_slots(self, slots: list[ScheduleSlot]) -> "ScheduleResult":
        """Kopie mit ersetzter Slot-Sammlung (nach manueller Bearbeitung)."""
        # slot_index der alten Instanz darf nicht mitkopiert werden
        return ScheduleResult(
            slots=list(slots),
            dropped_lessons=self.dropped_lessons,
            message=self.message,
            warnings=list(self.warnings),
        )

    def save_json(self, path: Path) -> None:
        """Speichert den Stundenplan als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "ScheduleResult":
        """Lädt einen gespeicherten Stundenplan aus JSON."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Stundenplan nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())


# ─── Haupt-Scheduler ──────────────────────────────────────────────────────────

class GreedyScheduler:
    """Deterministischer First-Fit-Scheduler.

    Verwendung:
        report = FeasibilityValidator(config).validate(teachers, classes, reqs)
        if report.is_feasible:
            result = GreedyScheduler(config).generate(teachers, classes, reqs)
    """

    def __init__(self, config: EngineConfig) -> None:
        self.config = config
        self.days = config.week.days
        self.spread_first = config.scheduler.spread_first
        self.max_periods = config.week.max_periods

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def generate(
        self,
        teachers: list[Teacher],
        classes: list[ClassGroup],
        requirements: list[CurriculumRequirement],
    ) -> ScheduleResult:
        """Platziert alle Anforderungen und gibt Stundenplan + Metadaten zurück."""
        teacher_map, _ = resolve_references(teachers, classes, requirements)

        t0 = time.time()
        booked = ConflictChecker()
        slots: list[ScheduleSlot] = []
        warnings: list[PlacementWarning] = []
        dropped_total = 0

        for cls in classes:
            class_reqs = [r for r in requirements if r.class_id == cls.id]
            # sorted() ist stabil: gleiche Stundenzahl behält die Eingabereihenfolge
            class_reqs = sorted(class_reqs, key=lambda r: r.lessons_per_week, reverse=True)

            for req in class_reqs:
                teacher = teacher_map[req.teacher_id]
                dropped = 0
                used_days: set[int] = set()
                for _ in range(req.lessons_per_week):
                    slot = self._place_unit(cls, teacher, req, booked, used_days)
                    if slot is None:
                        dropped += 1
                        continue
                    booked.book(slot)
                    used_days.add(slot.day)
                    slots.append(slot)

                if dropped:
                    logger.warning(
                        f"{cls.id}/{req.subject} ({teacher.name}): "
                        f"{dropped} von {req.lessons_per_week} Stunden nicht platzierbar"
                    )
                    warnings.append(PlacementWarning(
                        requirement_id=req.id,
                        class_id=cls.id,
                        teacher_id=teacher.id,
                        subject=req.subject,
                        dropped=dropped,
                    ))
                    dropped_total += dropped

        message = None
        if dropped_total > 0:
            message = (
                f"{dropped_total} Stunde(n) konnten ohne Konflikt nicht platziert werden "
                f"und fehlen im Stundenplan."
            )

        logger.info(
            f"Generierung beendet: {len(slots)} Stunden platziert | "
            f"verworfen: {dropped_total} | Zeit: {time.time() - t0:.3f}s"
        )

        return ScheduleResult(
            slots=slots,
            dropped_lessons=dropped_total,
            message=message,
            warnings=warnings,
        )

    # ─── Platzierung ──────────────────────────────────────────────────────────

    def _place_unit(
        self,
        cls: ClassGroup,
        teacher: Teacher,
        req: CurriculumRequirement,
        booked: ConflictChecker,
        used_days: set[int],
    ) -> Optional[ScheduleSlot]:
        """Erster gültiger (Tag, Stunde)-Slot für eine Einzelstunde, sonst None.

        used_days sind die Tage, an denen die Anforderung schon eine Stunde hat.
        """
        passes = [used_days, set()] if self.spread_first else [set()]
        for skip_days in passes:
            for day in self.days:
                if day in skip_days or not teacher.is_available(day, cls.shift):
                    continue
                last_period = min(cls.periods_on(day), self.max_periods)
                for period in range(1, last_period + 1):
                    if booked.is_free(cls.id, teacher.id, day, period):
                        return ScheduleSlot(
                            day=day,
                            period=period,
                            class_id=cls.id,
                            subject=req.subject,
                            teacher_id=teacher.id,
                            teacher_name=teacher.name,
                        )
        return None
