"""Manuelle Nachbearbeitung: Verschieben oder Tauschen von Stunden innerhalb einer Klasse.

Jede Bearbeitung ist atomar. Entweder werden beide Verlegungen übernommen,
oder die Eingabe bleibt unverändert und ein Ablehnungsgrund wird geliefert.
Erwartete Fachfehler werden nie als Exception geworfen.
"""

import logging
from typing import Literal, Optional

from pydantic import BaseModel

from models.schedule_slot import ScheduleSlot
from models.school_class import ClassGroup
from models.school_data import UnknownReferenceError
from models.teacher import Teacher
from solver.conflicts import ConflictChecker

logger = logging.getLogger(__name__)

EditKind = Literal["conflict", "not_found", "out_of_grid", "unavailable"]


class EditResult(BaseModel):
    """Ergebnis einer Bearbeitung: neue Slot-Sammlung oder strukturierte Ablehnung."""

    ok: bool
    slots: list[ScheduleSlot]
    kind: Optional[EditKind] = None
    reason: Optional[str] = None
    conflicting_class_id: Optional[str] = None


class ManualEditValidator:
    """Prüft und übernimmt Verschiebungen/Tausche im fertigen Stundenplan.

    Ohne classes/teachers prüft der Validator nur Konflikte (Klasse und
    Lehrkraft doppelt belegt). Mit ihnen werden zusätzlich das Stundenraster
    der Klasse und die Tagesverfügbarkeit der Lehrkräfte geprüft; unbekannte
    Klassen oder Lehrkräfte lösen dann UnknownReferenceError aus.
    """

    def __init__(
        self,
        classes: Optional[list[ClassGroup]] = None,
        teachers: Optional[list[Teacher]] = None,
    ) -> None:
        self._classes = {c.id: c for c in classes} if classes is not None else None
        self._teachers = {t.id: t for t in teachers} if teachers is not None else None

    def move(
        self,
        slots: list[ScheduleSlot],
        class_id: str,
        source_day: int,
        source_period: int,
        target_day: int,
        target_period: int,
    ) -> EditResult:
        """Verschiebt die Stunde in (source) nach (target); belegt target, wird getauscht."""
        if (source_day, source_period) == (target_day, target_period):
            return EditResult(ok=True, slots=list(slots))

        source_idx = self._find(slots, class_id, source_day, source_period)
        if source_idx is None:
            return self._reject(
                slots, "not_found",
                f"Klasse {class_id}: an Tag {source_day + 1}, Stunde {source_period} "
                f"liegt keine Stunde zum Verschieben.",
            )
        target_idx = self._find(slots, class_id, target_day, target_period)
        source_slot = slots[source_idx]
        target_slot = slots[target_idx] if target_idx is not None else None

        rejection = self._check_grid_and_availability(
            slots, class_id, source_slot, target_slot,
            source_day, target_day, target_period,
        )
        if rejection is not None:
            return rejection

        checker = ConflictChecker(slots)

        moved_source = source_slot.moved_to(target_day, target_period)
        busy = checker.find_conflict(moved_source, exclude=target_slot)
        if busy is not None:
            return self._reject(
                slots, "conflict",
                f"Konflikt: {source_slot.teacher_name} unterrichtet zu dieser Zeit "
                f"bereits in Klasse {busy.class_id}.",
                conflicting_class_id=busy.class_id,
            )

        moved_target = None
        if target_slot is not None:
            moved_target = target_slot.moved_to(source_day, source_period)
            busy = checker.find_conflict(moved_target, exclude=source_slot)
            if busy is not None:
                return self._reject(
                    slots, "conflict",
                    f"Konflikt beim Tausch: {target_slot.teacher_name} unterrichtet "
                    f"zur Ausgangszeit bereits in Klasse {busy.class_id}.",
                    conflicting_class_id=busy.class_id,
                )

        updated = list(slots)
        updated[source_idx] = moved_source
        if target_idx is not None:
            updated[target_idx] = moved_target

        logger.info(
            f"{class_id}: Tag {source_day + 1}/{source_period} → "
            f"Tag {target_day + 1}/{target_period}"
            f"{' (Tausch)' if target_slot is not None else ''}"
        )
        return EditResult(ok=True, slots=updated)

    # ─── Hilfsfunktionen ──────────────────────────────────────────────────────

    @staticmethod
    def _find(
        slots: list[ScheduleSlot], class_id: str, day: int, period: int
    ) -> Optional[int]:
        for idx, slot in enumerate(slots):
            if slot.class_id == class_id and slot.day == day and slot.period == period:
                return idx
        return None

    @staticmethod
    def _reject(
        slots: list[ScheduleSlot],
        kind: EditKind,
        reason: str,
        conflicting_class_id: Optional[str] = None,
    ) -> EditResult:
        logger.info(f"Bearbeitung abgelehnt ({kind}): {reason}")
        return EditResult(
            ok=False,
            slots=list(slots),
            kind=kind,
            reason=reason,
            conflicting_class_id=conflicting_class_id,
        )

    def _check_grid_and_availability(
        self,
        slots: list[ScheduleSlot],
        class_id: str,
        source_slot: ScheduleSlot,
        target_slot: Optional[ScheduleSlot],
        source_day: int,
        target_day: int,
        target_period: int,
    ) -> Optional[EditResult]:
        """Raster- und Verfügbarkeitsprüfung; nur aktiv wenn Stammdaten übergeben wurden."""
        if self._classes is not None:
            cls = self._classes.get(class_id)
            if cls is None:
                raise UnknownReferenceError(f"Bearbeitung: unbekannte Klasse '{class_id}'")
            if not 1 <= target_period <= cls.periods_on(target_day):
                return self._reject(
                    slots, "out_of_grid",
                    f"Klasse {class_id} hat an Tag {target_day + 1} keine "
                    f"Stunde {target_period}.",
                )

        if self._teachers is not None:
            moves = [(source_slot, target_day)]
            if target_slot is not None:
                moves.append((target_slot, source_day))
            for slot, new_day in moves:
                teacher = self._teachers.get(slot.teacher_id)
                if teacher is None:
                    raise UnknownReferenceError(
                        f"Bearbeitung: unbekannte Lehrkraft '{slot.teacher_id}'"
                    )
                if new_day not in teacher.available_days:
                    return self._reject(
                        slots, "unavailable",
                        f"{slot.teacher_name} ist an Tag {new_day + 1} nicht verfügbar.",
                    )
        return None
