"""SchoolData: Vollständiger Eingabedatensatz der Engine (Pydantic v2)."""

from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, Field

from config.schema import EngineConfig
from models.requirement import CurriculumRequirement
from models.school_class import ClassGroup
from models.teacher import Teacher

if TYPE_CHECKING:
    from solver.feasibility import FeasibilityReport
    from solver.scheduler import ScheduleResult


class UnknownReferenceError(ValueError):
    """Eine Anforderung verweist auf eine unbekannte Klasse oder Lehrkraft.

    Programmierfehler der aufrufenden Datenschicht, kein Fachfehler.
    """


def resolve_references(
    teachers: list[Teacher],
    classes: list[ClassGroup],
    requirements: list[CurriculumRequirement],
) -> tuple[dict[str, Teacher], dict[str, ClassGroup]]:
    """Baut ID-Lookups und prüft, dass jede Anforderung auflösbar ist."""
    teacher_map = {t.id: t for t in teachers}
    class_map = {c.id: c for c in classes}
    for req in requirements:
        if req.class_id not in class_map:
            raise UnknownReferenceError(
                f"Anforderung {req.id} ({req.subject}): unbekannte Klasse '{req.class_id}'"
            )
        if req.teacher_id not in teacher_map:
            raise UnknownReferenceError(
                f"Anforderung {req.id} ({req.subject}): unbekannte Lehrkraft '{req.teacher_id}'"
            )
    return teacher_map, class_map


class SchoolData(BaseModel):
    """Vollständiger Datensatz: Lehrkräfte, Klassen, Stundentafel-Anforderungen."""

    teachers: list[Teacher]
    classes: list[ClassGroup]
    requirements: list[CurriculumRequirement]
    config: EngineConfig = Field(default_factory=EngineConfig)
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    data_version: str = "1.0"

    # ─── Übersicht ───

    def summary(self) -> str:
        """Kurze Übersicht über den Datensatz."""
        total_need = sum(r.lessons_per_week for r in self.requirements)
        total_capacity = sum(c.total_weekly_periods for c in self.classes)
        lines = [
            f"Schule: {self.config.school_name}",
            f"Klassen: {len(self.classes)}",
            f"Lehrkräfte: {len(self.teachers)}",
            f"Anforderungen: {len(self.requirements)}",
            f"Gesamtbedarf: {total_need} Stunden/Woche",
            f"Klassen-Kapazität: {total_capacity} Stunden/Woche",
        ]
        return "\n".join(lines)

    def teacher_map(self) -> dict[str, Teacher]:
        return {t.id: t for t in self.teachers}

    def class_map(self) -> dict[str, ClassGroup]:
        return {c.id: c for c in self.classes}

    def requirements_for_class(self, class_id: str) -> list[CurriculumRequirement]:
        """Alle Anforderungen einer Klasse in Eingabereihenfolge."""
        return [r for r in self.requirements if r.class_id == class_id]

    # ─── Engine ───

    def validate_feasibility(self) -> "FeasibilityReport":
        """Machbarkeits-Check vor der Generierung."""
        from solver.feasibility import FeasibilityValidator
        return FeasibilityValidator(self.config).validate(
            self.teachers, self.classes, self.requirements
        )

    def generate(self) -> "ScheduleResult":
        """Erzeugt den Stundenplan (ohne vorherigen Machbarkeits-Check)."""
        from solver.scheduler import GreedyScheduler
        return GreedyScheduler(self.config).generate(
            self.teachers, self.classes, self.requirements
        )

    # ─── Persistenz ────────────────────────────────────────────────────────

    def save_json(self, path: Path) -> None:
        """Speichert den kompletten Datensatz als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        now = datetime.now(timezone.utc)
        updated = self.model_copy(update={
            "modified_at": now,
            "created_at": self.created_at or now,
        })
        with open(path, "w", encoding="utf-8") as f:
            f.write(updated.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "SchoolData":
        """Lädt einen Datensatz aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
