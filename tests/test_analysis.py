"""Tests für die Post-Generierungs-Validierung eines Stundenplans."""

import pytest

from analysis.solution_validator import SolutionValidator, ValidationReport, ValidationViolation
from config.schema import Shift
from models.requirement import CurriculumRequirement
from models.schedule_slot import ScheduleSlot
from models.school_class import ClassGroup
from models.school_data import SchoolData
from models.teacher import Teacher


# ─── Testdaten-Hilfsfunktionen ────────────────────────────────────────────────

def _make_mini_school_data() -> SchoolData:
    """Zwei Vormittagsklassen (je 3 Stunden/Tag), zwei Lehrkräfte."""
    classes = [
        ClassGroup(id=cid, name=f"Klasse {cid}", shift=Shift.MORNING,
                   periods_per_day={d: 3 for d in range(5)})
        for cid in ("5a", "5b")
    ]
    teachers = [
        Teacher(id="T1", name="Müller, Hans", available_days=[0, 1, 2, 3, 4],
                available_shifts=[Shift.MORNING]),
        Teacher(id="T2", name="Schmidt, Eva", available_days=[0, 1],
                available_shifts=[Shift.MORNING]),
    ]
    requirements = [
        CurriculumRequirement(id="R1", class_id="5a", teacher_id="T1",
                              subject="Mathematik", lessons_per_week=2),
        CurriculumRequirement(id="R2", class_id="5b", teacher_id="T2",
                              subject="Deutsch", lessons_per_week=1),
    ]
    return SchoolData(teachers=teachers, classes=classes, requirements=requirements)


def _slot(cid, day, period, tid, subject="Mathematik") -> ScheduleSlot:
    return ScheduleSlot(day=day, period=period, class_id=cid, subject=subject,
                        teacher_id=tid, teacher_name=tid)


@pytest.fixture(scope="module")
def school_data() -> SchoolData:
    return _make_mini_school_data()


def _constraints(report: ValidationReport) -> list[str]:
    return [v.constraint for v in report.violations]


# ─── SolutionValidator ────────────────────────────────────────────────────────

class TestSolutionValidator:
    def test_generated_schedule_is_valid(self, school_data):
        """Generierter Stundenplan → keine Verletzungen."""
        result = school_data.generate()
        report = SolutionValidator().validate(result.slots, school_data)
        assert report.is_valid
        assert report.violations == []

    def test_class_double_booking(self, school_data):
        slots = [_slot("5a", 0, 1, "T1"), _slot("5a", 0, 1, "T1", "Physik")]
        report = SolutionValidator().validate(slots, school_data)
        assert not report.is_valid
        assert "class_double_booking" in _constraints(report)

    def test_teacher_double_booking(self, school_data):
        slots = [_slot("5a", 0, 1, "T1"), _slot("5b", 0, 1, "T1")]
        report = SolutionValidator().validate(slots, school_data)
        violation = next(v for v in report.violations
                         if v.constraint == "teacher_double_booking")
        assert violation.entity == "T1"
        assert "5a" in violation.description and "5b" in violation.description

    def test_period_out_of_bounds(self, school_data):
        report = SolutionValidator().validate([_slot("5a", 0, 4, "T1")], school_data)
        assert "period_out_of_bounds" in _constraints(report)

    def test_unknown_class(self, school_data):
        report = SolutionValidator().validate([_slot("9z", 0, 1, "T1")], school_data)
        assert "unknown_class" in _constraints(report)
        assert not report.is_valid

    def test_teacher_unavailable(self, school_data):
        """T2 ist nur Mo/Di verfügbar."""
        slots = [_slot("5b", 3, 1, "T2", "Deutsch")]
        report = SolutionValidator().validate(slots, school_data)
        assert "teacher_unavailable" in _constraints(report)

    def test_lesson_shortfall_is_warning(self, school_data):
        """Fehlende Stunden sind nur eine Warnung, der Plan bleibt gültig."""
        slots = [_slot("5a", 0, 1, "T1"), _slot("5b", 0, 1, "T2", "Deutsch")]
        report = SolutionValidator().validate(slots, school_data)
        assert report.is_valid
        shortfall = [v for v in report.violations if v.constraint == "lesson_shortfall"]
        assert len(shortfall) == 1
        assert shortfall[0].severity == "warning"
        assert "fehlen 1h" in shortfall[0].description

    def test_print_rich_runs(self, capsys):
        """print_rich() wirft keine Exception."""
        report = ValidationReport(
            violations=[ValidationViolation(
                severity="error", constraint="class_double_booking",
                description="Testfehler", entity="5a",
            )],
            is_valid=False,
        )
        report.print_rich()
        assert "class_double_booking" in capsys.readouterr().out
