"""Machbarkeits-Check: Bedarf vs. Kapazität, bevor eine Platzierung versucht wird.

Prüfungen (alle laufen, Fehler werden gesammelt):
  1. Pro Klasse: Stunden pro Tag ≤ max_periods, Summe Wochenstunden der
     Anforderungen ≤ Summe periods_per_day
  2. Pro Lehrkraft und Schicht: Schicht verfügbar, Bedarf ≤ Kapazität der Tage
  3. Pro Anforderung: Wochenstunden ≤ Stunden der Klasse an den Tagen der Lehrkraft
"""

import logging

from pydantic import BaseModel

from config.schema import EngineConfig, Shift
from models.requirement import CurriculumRequirement
from models.school_class import ClassGroup
from models.school_data import resolve_references
from models.teacher import Teacher

logger = logging.getLogger(__name__)


class FeasibilityReport(BaseModel):
    """Ergebnis des Machbarkeits-Checks."""

    is_feasible: bool
    errors: list[str]      # Verletzungen in Prüfreihenfolge (Generierung unmöglich)
    warnings: list[str]    # Hinweise (Generierung möglich, aber ohne Spielraum)

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel

        console = Console()
        if self.is_feasible:
            status = "[bold green]✓ MACHBAR[/bold green]"
        else:
            status = "[bold red]✗ NICHT MACHBAR[/bold red]"

        lines = [status]
        if self.errors:
            lines.append("\n[red bold]Fehler (kritisch):[/red bold]")
            for e in self.errors:
                lines.append(f"  [red]• {e}[/red]")
        if self.warnings:
            lines.append("\n[yellow bold]Warnungen:[/yellow bold]")
            for w in self.warnings:
                lines.append(f"  [yellow]• {w}[/yellow]")
        if not self.errors and not self.warnings:
            lines.append("[dim]Keine Probleme gefunden.[/dim]")

        console.print(Panel("\n".join(lines), title="Machbarkeits-Check", border_style="cyan"))


class FeasibilityValidator:
    """Statische Analyse von Bedarf und Kapazität. Seiteneffektfrei und deterministisch."""

    def __init__(self, config: EngineConfig) -> None:
        self.config = config
        self.week = config.week

    def validate(
        self,
        teachers: list[Teacher],
        classes: list[ClassGroup],
        requirements: list[CurriculumRequirement],
    ) -> FeasibilityReport:
        """Führt alle Prüfungen durch und gibt einen FeasibilityReport zurück."""
        teacher_map, class_map = resolve_references(teachers, classes, requirements)

        errors: list[str] = []
        warnings: list[str] = []

        class_errors, class_warnings = self._check_class_capacity(classes, requirements)
        errors.extend(class_errors)
        warnings.extend(class_warnings)
        errors.extend(self._check_teacher_shifts(teachers, class_map, requirements))
        errors.extend(self._check_requirement_squeeze(teacher_map, class_map, requirements))

        for e in errors:
            logger.debug(f"Machbarkeit verletzt: {e}")

        return FeasibilityReport(
            is_feasible=len(errors) == 0,
            errors=errors,
            warnings=warnings,
        )

    # ── Einzelne Prüfungen ────────────────────────────────────────────────────

    def _class_capacity(self, cls: ClassGroup) -> int:
        return sum(cls.periods_on(day) for day in self.week.days)

    def _teacher_days(self, teacher: Teacher) -> list[int]:
        """Verfügbare Tage der Lehrkraft, die in der Unterrichtswoche liegen."""
        return [d for d in teacher.available_days if d < self.week.days_per_week]

    def _check_class_capacity(
        self, classes: list[ClassGroup], requirements: list[CurriculumRequirement]
    ) -> tuple[list[str], list[str]]:
        """Tagesraster ≤ max_periods; Bedarf einer Klasse ≤ ihre Wochenstunden."""
        errors: list[str] = []
        warnings: list[str] = []

        demand: dict[str, int] = {}
        for req in requirements:
            demand[req.class_id] = demand.get(req.class_id, 0) + req.lessons_per_week

        for cls in classes:
            for day in self.week.days:
                if cls.periods_on(day) > self.week.max_periods:
                    errors.append(
                        f"Klasse '{cls.name}': {cls.periods_on(day)} Stunden am "
                        f"{self.week.day_name(day)}, erlaubt sind höchstens "
                        f"{self.week.max_periods} pro Tag."
                    )
            need = demand.get(cls.id, 0)
            capacity = self._class_capacity(cls)
            if need > capacity:
                errors.append(
                    f"Klasse '{cls.name}': {need} Stunden angefordert, aber die Woche "
                    f"hat nur {capacity} Stunden (Summe der Stunden pro Tag)."
                )
            elif need == capacity and need > 0:
                warnings.append(
                    f"Klasse '{cls.name}': voll ausgelastet ({need}/{capacity} Stunden) – "
                    f"kein Spielraum für die Platzierung."
                )
        return errors, warnings

    def _check_teacher_shifts(
        self,
        teachers: list[Teacher],
        class_map: dict[str, ClassGroup],
        requirements: list[CurriculumRequirement],
    ) -> list[str]:
        """Pro Lehrkraft und Schicht: Verfügbarkeit und Überlastung."""
        errors: list[str] = []

        for teacher in teachers:
            # Gruppierung nach Schicht der Klasse, Reihenfolge des ersten Auftretens
            shift_groups: dict[Shift, list[CurriculumRequirement]] = {}
            for req in requirements:
                if req.teacher_id != teacher.id:
                    continue
                shift = class_map[req.class_id].shift
                shift_groups.setdefault(shift, []).append(req)

            for shift, group in shift_groups.items():
                if shift not in teacher.available_shifts:
                    errors.append(
                        f"Verfügbarkeit: Lehrkraft '{teacher.name}' hat Stunden in der "
                        f"Schicht '{shift.value}', ist in dieser Schicht aber nicht verfügbar."
                    )
                    continue

                need = sum(r.lessons_per_week for r in group)
                group_classes = [class_map[r.class_id] for r in group]

                teacher_days = self._teacher_days(teacher)
                capacity = 0
                for day in teacher_days:
                    max_on_day = max((c.periods_on(day) for c in group_classes), default=0)
                    if max_on_day == 0:
                        max_on_day = self.week.standard_periods
                    capacity += max_on_day

                if need > capacity:
                    day_list = ", ".join(self.week.day_name(d) for d in teacher_days)
                    errors.append(
                        f"Überlastung ({shift.value}): Lehrkraft '{teacher.name}' hat {need} "
                        f"Stunden, an ihren {len(teacher_days)} verfügbaren Tagen "
                        f"({day_list}) aber nur Kapazität für {capacity} Stunden."
                    )
        return errors

    def _check_requirement_squeeze(
        self,
        teacher_map: dict[str, Teacher],
        class_map: dict[str, ClassGroup],
        requirements: list[CurriculumRequirement],
    ) -> list[str]:
        """Eine Anforderung muss in die gemeinsamen Tage von Klasse und Lehrkraft passen."""
        errors: list[str] = []
        for req in requirements:
            teacher = teacher_map[req.teacher_id]
            cls = class_map[req.class_id]
            max_possible = sum(cls.periods_on(day) for day in self._teacher_days(teacher))
            if req.lessons_per_week > max_possible:
                errors.append(
                    f"Zuordnung: Fach '{req.subject}' braucht {req.lessons_per_week} Stunden, "
                    f"aber Lehrkraft '{teacher.name}' hat mit Klasse '{cls.name}' nur "
                    f"{max_possible} gemeinsame Stunden."
                )
        return errors
