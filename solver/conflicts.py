"""Konflikt-Prüfung über einer Slot-Sammlung.

Ein Konflikt liegt vor, wenn zwei Slots dieselbe (Klasse, Tag, Stunde) oder
dieselbe (Lehrkraft, Tag, Stunde) belegen. Die Indizes leben nur so lange wie
die ConflictChecker-Instanz; es gibt keinen globalen Zustand.
"""

from collections import defaultdict
from typing import Iterable, Optional

from models.schedule_slot import ScheduleSlot


class ConflictChecker:
    """Index über (class_id, day, period) und (teacher_id, day, period).

    Verwendung:
        checker = ConflictChecker(slots)
        other = checker.find_conflict(candidate, exclude=slot_being_swapped)
    """

    def __init__(self, slots: Iterable[ScheduleSlot] = ()) -> None:
        # Listen statt Einzelwerten: auch bereits ungültige Sammlungen werden korrekt indiziert
        self._by_class: dict[tuple, list[ScheduleSlot]] = defaultdict(list)
        self._by_teacher: dict[tuple, list[ScheduleSlot]] = defaultdict(list)
        for slot in slots:
            self.book(slot)

    def book(self, slot: ScheduleSlot) -> None:
        """Trägt einen Slot in beide Indizes ein."""
        self._by_class[slot.class_key].append(slot)
        self._by_teacher[slot.teacher_key].append(slot)

    def is_free(self, class_id: str, teacher_id: str, day: int, period: int) -> bool:
        """True wenn weder Klasse noch Lehrkraft in (day, period) belegt sind."""
        return (
            not self._by_class.get((class_id, day, period))
            and not self._by_teacher.get((teacher_id, day, period))
        )

    def find_conflict(
        self, candidate: ScheduleSlot, exclude: Optional[ScheduleSlot] = None
    ) -> Optional[ScheduleSlot]:
        """Erster bestehender Slot, mit dem candidate kollidieren würde (oder None).

        exclude wird beim Vergleich ignoriert (Tausch zweier Stunden).
        Klassen-Konflikte werden vor Lehrer-Konflikten gemeldet.
        """
        for index, key in (
            (self._by_class, candidate.class_key),
            (self._by_teacher, candidate.teacher_key),
        ):
            for existing in index.get(key, ()):
                if exclude is not None and existing == exclude:
                    continue
                return existing
        return None

    def has_conflict(
        self, candidate: ScheduleSlot, exclude: Optional[ScheduleSlot] = None
    ) -> bool:
        return self.find_conflict(candidate, exclude) is not None


def has_conflict(
    slots: Iterable[ScheduleSlot],
    candidate: ScheduleSlot,
    exclude: Optional[ScheduleSlot] = None,
) -> bool:
    """Kurzform: Index aufbauen und candidate prüfen."""
    return ConflictChecker(slots).has_conflict(candidate, exclude)
