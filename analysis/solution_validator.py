"""Post-Generierungs-Validierung eines Stundenplans.

Prüft eine Slot-Sammlung (generiert, geladen oder manuell bearbeitet) auf
Verletzungen der harten Invarianten, als Sicherheitsnetz unabhängig vom
Scheduler.
"""

from collections import defaultdict
from typing import Literal

from pydantic import BaseModel

from models.schedule_slot import ScheduleSlot
from models.school_data import SchoolData


class ValidationViolation(BaseModel):
    """Eine einzelne Constraint-Verletzung."""

    severity: Literal["error", "warning"]
    constraint: str      # z.B. "teacher_double_booking"
    description: str
    entity: str          # teacher_id / class_id / requirement_id


class ValidationReport(BaseModel):
    """Ergebnis der Post-Generierungs-Validierung."""

    violations: list[ValidationViolation]
    is_valid: bool       # True wenn keine Errors (Warnings ok)

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        errors = [v for v in self.violations if v.severity == "error"]
        warnings = [v for v in self.violations if v.severity == "warning"]

        status = (
            "[bold green]✓ VALIDE[/bold green]"
            if self.is_valid
            else "[bold red]✗ VERLETZUNGEN GEFUNDEN[/bold red]"
        )
        lines = [status, f"Fehler: {len(errors)} | Warnungen: {len(warnings)}"]
        console.print(Panel("\n".join(lines), title="Stundenplan-Validierung", border_style="cyan"))

        if not self.violations:
            console.print("[dim]Keine Verletzungen gefunden.[/dim]")
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=8)
        table.add_column("Constraint", width=26)
        table.add_column("Entität", width=12)
        table.add_column("Beschreibung")

        for v in self.violations:
            color = "red" if v.severity == "error" else "yellow"
            table.add_row(
                f"[{color}]{v.severity.upper()}[/{color}]",
                v.constraint,
                v.entity,
                v.description,
            )
        console.print(table)


class SolutionValidator:
    """Prüft eine Slot-Sammlung gegen die Stammdaten eines SchoolData-Datensatzes."""

    def validate(
        self, slots: list[ScheduleSlot], school_data: SchoolData
    ) -> ValidationReport:
        """Führt alle Validierungschecks durch und gibt einen ValidationReport zurück."""
        violations: list[ValidationViolation] = []

        violations.extend(self._check_class_double_booking(slots))
        violations.extend(self._check_teacher_double_booking(slots))
        violations.extend(self._check_period_bounds(slots, school_data))
        violations.extend(self._check_teacher_availability(slots, school_data))
        violations.extend(self._check_lesson_shortfall(slots, school_data))

        has_errors = any(v.severity == "error" for v in violations)
        return ValidationReport(violations=violations, is_valid=not has_errors)

    # ── Einzelne Prüfungen ────────────────────────────────────────────────────

    def _check_class_double_booking(
        self, slots: list[ScheduleSlot]
    ) -> list[ValidationViolation]:
        """Eine Klasse hat pro (Tag, Stunde) höchstens einen Slot."""
        violations: list[ValidationViolation] = []
        by_slot: dict[tuple, list[str]] = defaultdict(list)
        for s in slots:
            by_slot[s.class_key].append(s.subject)

        for (class_id, day, period), subjects in by_slot.items():
            if len(subjects) > 1:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="class_double_booking",
                    entity=class_id,
                    description=(
                        f"Tag {day+1}, Stunde {period}: mehrere Einträge "
                        f"({', '.join(subjects)})."
                    ),
                ))
        return violations

    def _check_teacher_double_booking(
        self, slots: list[ScheduleSlot]
    ) -> list[ValidationViolation]:
        """Keine Lehrkraft darf zur selben Zeit in zwei Klassen sein."""
        violations: list[ValidationViolation] = []
        seen: dict[tuple, list[str]] = defaultdict(list)
        for s in slots:
            seen[s.teacher_key].append(s.class_id)

        for (teacher_id, day, period), classes in seen.items():
            if len(classes) > 1:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="teacher_double_booking",
                    entity=teacher_id,
                    description=(
                        f"Tag {day+1}, Stunde {period}: gleichzeitig in "
                        f"{', '.join(classes)} eingeplant."
                    ),
                ))
        return violations

    def _check_period_bounds(
        self, slots: list[ScheduleSlot], school_data: SchoolData
    ) -> list[ValidationViolation]:
        """Jede Stunde liegt im Tagesraster ihrer Klasse."""
        violations: list[ValidationViolation] = []
        class_map = school_data.class_map()

        for s in slots:
            cls = class_map.get(s.class_id)
            if cls is None:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="unknown_class",
                    entity=s.class_id,
                    description=f"Slot für unbekannte Klasse ({s.subject}).",
                ))
                continue
            if not 1 <= s.period <= cls.periods_on(s.day):
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="period_out_of_bounds",
                    entity=s.class_id,
                    description=(
                        f"Tag {s.day+1}, Stunde {s.period}: Klasse hat an diesem Tag "
                        f"nur {cls.periods_on(s.day)} Stunden."
                    ),
                ))
        return violations

    def _check_teacher_availability(
        self, slots: list[ScheduleSlot], school_data: SchoolData
    ) -> list[ValidationViolation]:
        """Lehrkraft ist am Tag und in der Schicht der Klasse verfügbar."""
        violations: list[ValidationViolation] = []
        teacher_map = school_data.teacher_map()
        class_map = school_data.class_map()

        for s in slots:
            teacher = teacher_map.get(s.teacher_id)
            cls = class_map.get(s.class_id)
            if teacher is None or cls is None:
                continue
            if not teacher.is_available(s.day, cls.shift):
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="teacher_unavailable",
                    entity=s.teacher_id,
                    description=(
                        f"Tag {s.day+1}, Stunde {s.period}: {s.subject} für {s.class_id} "
                        f"eingeplant, Lehrkraft ist nicht verfügbar ({cls.shift.value})."
                    ),
                ))
        return violations

    def _check_lesson_shortfall(
        self, slots: list[ScheduleSlot], school_data: SchoolData
    ) -> list[ValidationViolation]:
        """Vergleicht platzierte mit geforderten Wochenstunden (Warnung bei Fehlmenge)."""
        violations: list[ValidationViolation] = []
        actual: dict[tuple, int] = defaultdict(int)
        for s in slots:
            actual[(s.class_id, s.teacher_id, s.subject)] += 1

        required: dict[tuple, int] = defaultdict(int)
        for req in school_data.requirements:
            required[(req.class_id, req.teacher_id, req.subject)] += req.lessons_per_week

        for (class_id, teacher_id, subject), hours in required.items():
            got = actual.get((class_id, teacher_id, subject), 0)
            if got < hours:
                violations.append(ValidationViolation(
                    severity="warning",
                    constraint="lesson_shortfall",
                    entity=class_id,
                    description=(
                        f"Fach {subject} ({teacher_id}): Soll {hours}h, Ist {got}h "
                        f"(fehlen {hours - got}h)."
                    ),
                ))
        return violations
