"""Tests für Konflikt-Prüfung und manuelle Nachbearbeitung (Verschieben/Tauschen)."""

import pytest

from analysis.solution_validator import SolutionValidator
from config.defaults import default_engine_config
from config.schema import Shift
from data.fake_data import FakeDataGenerator
from models.schedule_slot import ScheduleSlot
from models.school_class import ClassGroup
from models.school_data import UnknownReferenceError
from models.teacher import Teacher
from solver.conflicts import ConflictChecker, has_conflict
from solver.editing import ManualEditValidator


# ─── Hilfsfunktionen ──────────────────────────────────────────────────────────

def slot(cid: str, day: int, period: int, tid: str, subject: str = "Mathematik") -> ScheduleSlot:
    return ScheduleSlot(day=day, period=period, class_id=cid, subject=subject,
                        teacher_id=tid, teacher_name=f"Lehrkraft {tid}")


@pytest.fixture
def two_class_slots() -> list[ScheduleSlot]:
    """5a und 5b teilen sich T1; T1 ist Montag Std. 2 in 5b."""
    return [
        slot("5a", 0, 1, "T1", "Mathematik"),
        slot("5a", 0, 2, "T2", "Deutsch"),
        slot("5b", 0, 2, "T1", "Mathematik"),
        slot("5b", 0, 1, "T3", "Englisch"),
    ]


# ─── ConflictChecker ──────────────────────────────────────────────────────────

class TestConflictChecker:
    def test_free_cell(self, two_class_slots):
        checker = ConflictChecker(two_class_slots)
        assert checker.is_free("5a", "T1", 1, 1)
        assert not checker.is_free("5a", "T9", 0, 1)   # Klasse belegt
        assert not checker.is_free("5c", "T1", 0, 2)   # Lehrkraft belegt

    def test_class_conflict_reported_first(self, two_class_slots):
        """Kandidat kollidiert mit Klasse und Lehrkraft → Klassen-Slot wird geliefert."""
        checker = ConflictChecker(two_class_slots)
        candidate = slot("5a", 0, 2, "T1")
        assert checker.find_conflict(candidate) == two_class_slots[1]

    def test_teacher_conflict(self, two_class_slots):
        checker = ConflictChecker(two_class_slots)
        candidate = slot("5c", 0, 2, "T1")
        assert checker.find_conflict(candidate).class_id == "5b"

    def test_exclude_ignores_swapped_slot(self, two_class_slots):
        checker = ConflictChecker(two_class_slots)
        candidate = slot("5a", 0, 2, "T2", "Physik")
        assert checker.has_conflict(candidate)
        assert not checker.has_conflict(candidate, exclude=two_class_slots[1])

    def test_book_updates_index(self):
        checker = ConflictChecker()
        assert checker.is_free("5a", "T1", 0, 1)
        checker.book(slot("5a", 0, 1, "T1"))
        assert not checker.is_free("5a", "T2", 0, 1)
        assert not checker.is_free("5b", "T1", 0, 1)

    def test_module_level_shortcut(self, two_class_slots):
        assert has_conflict(two_class_slots, slot("5c", 0, 1, "T3"))
        assert not has_conflict(two_class_slots, slot("5c", 0, 3, "T3"))


# ─── ManualEditValidator: Verschieben ─────────────────────────────────────────

class TestMove:
    def test_same_cell_is_noop(self, two_class_slots):
        result = ManualEditValidator().move(two_class_slots, "5a", 0, 1, 0, 1)
        assert result.ok
        assert result.slots == two_class_slots

    def test_source_not_found(self, two_class_slots):
        result = ManualEditValidator().move(two_class_slots, "5a", 3, 4, 0, 1)
        assert not result.ok
        assert result.kind == "not_found"
        assert result.slots == two_class_slots

    def test_move_into_empty_cell(self, two_class_slots):
        result = ManualEditValidator().move(two_class_slots, "5a", 0, 1, 2, 3)
        assert result.ok
        moved = [s for s in result.slots if s.class_id == "5a" and s.subject == "Mathematik"]
        assert [(s.day, s.period) for s in moved] == [(2, 3)]
        assert len(result.slots) == len(two_class_slots)

    def test_teacher_conflict_names_other_class(self, two_class_slots):
        """T1 ist Mo Std. 2 in 5b → Verschiebung von 5a Mo 1 nach Mo 3 ok, nach Mo 2 nicht.

        5a Mo 2 ist belegt (T2), d.h. es wäre ein Tausch; T1 kollidiert mit 5b.
        """
        before = [s.model_dump_json() for s in two_class_slots]
        result = ManualEditValidator().move(two_class_slots, "5a", 0, 1, 0, 2)
        assert not result.ok
        assert result.kind == "conflict"
        assert result.conflicting_class_id == "5b"
        assert "5b" in result.reason
        assert result.slots == two_class_slots
        assert [s.model_dump_json() for s in two_class_slots] == before

    def test_move_conflict_into_empty_cell(self):
        """Ziel der eigenen Klasse leer, Lehrkraft dort aber in anderer Klasse."""
        slots = [slot("5a", 0, 1, "T1"), slot("5b", 1, 1, "T1")]
        result = ManualEditValidator().move(slots, "5a", 0, 1, 1, 1)
        assert not result.ok
        assert result.conflicting_class_id == "5b"

    def test_input_list_not_mutated(self, two_class_slots):
        original = list(two_class_slots)
        result = ManualEditValidator().move(two_class_slots, "5a", 0, 1, 4, 1)
        assert result.ok
        assert two_class_slots == original
        assert result.slots is not two_class_slots


# ─── ManualEditValidator: Tauschen ────────────────────────────────────────────

class TestSwap:
    def test_swap_two_lessons(self):
        slots = [slot("5a", 0, 1, "T1", "Mathematik"), slot("5a", 1, 3, "T2", "Deutsch")]
        result = ManualEditValidator().move(slots, "5a", 0, 1, 1, 3)
        assert result.ok
        by_subject = {s.subject: (s.day, s.period) for s in result.slots}
        assert by_subject == {"Mathematik": (1, 3), "Deutsch": (0, 1)}

    def test_swap_same_teacher(self):
        """Beide Stunden bei derselben Lehrkraft → kein Selbstkonflikt."""
        slots = [slot("5a", 0, 1, "T1", "Mathematik"), slot("5a", 0, 2, "T1", "Physik")]
        result = ManualEditValidator().move(slots, "5a", 0, 1, 0, 2)
        assert result.ok

    def test_swap_inverse_restores_original(self):
        slots = [slot("5a", 0, 1, "T1", "Mathematik"), slot("5a", 1, 3, "T2", "Deutsch")]
        validator = ManualEditValidator()
        forward = validator.move(slots, "5a", 0, 1, 1, 3)
        back = validator.move(forward.slots, "5a", 1, 3, 0, 1)
        assert back.ok
        assert back.slots == slots

    def test_swap_target_teacher_conflict(self):
        """Zurückgetauschte Stunde kollidiert: T2 ist zur Ausgangszeit in 5b."""
        slots = [
            slot("5a", 0, 1, "T1", "Mathematik"),
            slot("5a", 1, 1, "T2", "Deutsch"),
            slot("5b", 0, 1, "T2", "Deutsch"),
        ]
        result = ManualEditValidator().move(slots, "5a", 0, 1, 1, 1)
        assert not result.ok
        assert result.kind == "conflict"
        assert result.conflicting_class_id == "5b"
        assert result.slots == slots


# ─── ManualEditValidator: Raster und Verfügbarkeit ────────────────────────────

class TestGridAndAvailability:
    @pytest.fixture
    def validator(self) -> ManualEditValidator:
        cls = ClassGroup(id="5a", name="Klasse 5a", shift=Shift.MORNING,
                         periods_per_day={0: 3, 1: 3, 2: 0, 3: 3, 4: 3})
        teacher = Teacher(id="T1", name="Lehrkraft T1", available_days=[0, 1, 2],
                          available_shifts=[Shift.MORNING])
        return ManualEditValidator(classes=[cls], teachers=[teacher])

    def test_target_period_outside_grid(self, validator):
        result = validator.move([slot("5a", 0, 1, "T1")], "5a", 0, 1, 0, 4)
        assert not result.ok
        assert result.kind == "out_of_grid"

    def test_target_day_without_periods(self, validator):
        result = validator.move([slot("5a", 0, 1, "T1")], "5a", 0, 1, 2, 1)
        assert result.kind == "out_of_grid"

    def test_teacher_unavailable_on_target_day(self, validator):
        result = validator.move([slot("5a", 0, 1, "T1")], "5a", 0, 1, 3, 1)
        assert not result.ok
        assert result.kind == "unavailable"

    def test_valid_move_within_grid(self, validator):
        result = validator.move([slot("5a", 0, 1, "T1")], "5a", 0, 1, 1, 3)
        assert result.ok

    def test_without_master_data_only_conflicts_checked(self):
        """Ohne Stammdaten sind Raster-/Verfügbarkeitsprüfungen aus."""
        result = ManualEditValidator().move([slot("5a", 0, 1, "T1")], "5a", 0, 1, 3, 9)
        assert result.ok

    def test_unknown_class_raises(self, validator):
        """Mit Stammdaten ist eine unbekannte Klasse ein Programmierfehler."""
        with pytest.raises(UnknownReferenceError, match="9z"):
            validator.move([slot("9z", 0, 1, "T1")], "9z", 0, 1, 4, 2)

    def test_unknown_teacher_raises(self, validator):
        with pytest.raises(UnknownReferenceError, match="TX"):
            validator.move([slot("5a", 0, 1, "TX")], "5a", 0, 1, 1, 2)


# ─── Bearbeitungsfolgen auf generierten Daten ─────────────────────────────────

class TestEditSequence:
    def test_edited_schedule_keeps_invariants(self):
        """Viele Verschiebungen/Tausche auf Demo-Daten → weiterhin keine Doppelbelegung.

        Jede Stunde der ersten drei Klassen wird um einen Tag und eine Stunde
        weitergeschoben; abgelehnte Bearbeitungen lassen den Plan unverändert.
        """
        data = FakeDataGenerator(default_engine_config(), seed=5).generate(
            num_classes=6, num_teachers=12
        )
        slots = data.generate().slots
        validator = ManualEditValidator(classes=data.classes, teachers=data.teachers)

        accepted = 0
        for cls in data.classes[:3]:
            for day in range(5):
                for period in range(1, 7):
                    result = validator.move(slots, cls.id, day, period,
                                            (day + 1) % 5, period % 6 + 1)
                    if result.ok:
                        if result.slots != slots:
                            accepted += 1
                    else:
                        assert result.slots == slots
                    slots = result.slots

        assert accepted > 0
        assert len(slots) == len(data.generate().slots)
        report = SolutionValidator().validate(slots, data)
        assert report.is_valid
        assert not any(v.constraint.endswith("double_booking") for v in report.violations)
