"""Testdaten-Generator für die Stundenplan-Engine.

Erzeugt reproduzierbare Fake-Daten (Seed) für Demos und Tests.

Eigenschaften:
  - Klassen laufen überwiegend vormittags, ein Teil nachmittags
  - 5 oder 6 Stunden pro Tag → Klassen-Kapazität ≥ Stundentafel (25h)
  - Ca. ein Viertel der Lehrkräfte hat einen freien Wochentag
  - Anforderungen gehen an die am wenigsten ausgelastete passende Lehrkraft
"""

import random
import string

from rich.console import Console
from rich.table import Table
from rich import box

from config.defaults import SUBJECT_HOURS
from config.schema import EngineConfig, Shift
from models.requirement import CurriculumRequirement
from models.school_class import ClassGroup
from models.school_data import SchoolData
from models.teacher import Teacher

console = Console()

# ─── Namens-Listen ────────────────────────────────────────────────────────────

_FIRST_NAMES = [
    "Andreas", "Anna", "Birgit", "Christian", "Eva", "Hans", "Iris", "Klaus",
    "Lena", "Markus", "Maria", "Peter", "Sandra", "Stefan", "Tanja", "Ulrike",
]

_LAST_NAMES = [
    "Müller", "Schmidt", "Schneider", "Fischer", "Weber", "Meyer", "Wagner",
    "Becker", "Schulz", "Hoffmann", "Koch", "Bauer", "Richter", "Klein",
    "Wolf", "Neumann", "Braun", "Krüger", "Lange", "Vogel",
]


class FakeDataGenerator:
    """Erzeugt einen zufälligen, aber reproduzierbaren SchoolData-Datensatz."""

    def __init__(self, config: EngineConfig, seed: int = 42) -> None:
        self.config = config
        self.rng = random.Random(seed)

    def generate(self, num_classes: int = 4, num_teachers: int = 8) -> SchoolData:
        """Erzeugt Klassen, Lehrkräfte und Stundentafel-Anforderungen."""
        if num_classes < 1:
            raise ValueError("Mindestens eine Klasse nötig.")
        classes = self._generate_classes(num_classes)
        shifts_used = list(dict.fromkeys(c.shift for c in classes))
        if num_teachers < len(shifts_used):
            raise ValueError(
                f"Mindestens {len(shifts_used)} Lehrkräfte nötig (eine pro Schicht)."
            )
        teachers = self._generate_teachers(num_teachers, shifts_used)
        requirements = self._generate_requirements(classes, teachers)
        return SchoolData(
            teachers=teachers,
            classes=classes,
            requirements=requirements,
            config=self.config,
        )

    # ─── Klassen ──────────────────────────────────────────────────────────────

    def _generate_classes(self, num_classes: int) -> list[ClassGroup]:
        classes = []
        for i in range(num_classes):
            grade = 5 + i // len(string.ascii_lowercase)
            label = string.ascii_lowercase[i % len(string.ascii_lowercase)]
            # Jede dritte Klasse nachmittags
            shift = Shift.AFTERNOON if i % 3 == 2 else Shift.MORNING
            periods = {day: self.rng.choice([5, 6]) for day in self.config.week.days}
            classes.append(ClassGroup(
                id=f"{grade}{label}",
                name=f"Klasse {grade}{label}",
                shift=shift,
                periods_per_day=periods,
            ))
        return classes

    # ─── Lehrkräfte ───────────────────────────────────────────────────────────

    def _generate_teachers(self, num_teachers: int, shifts_used: list[Shift]) -> list[Teacher]:
        teachers = []
        days = self.config.week.days
        for i in range(num_teachers):
            available_days = list(days)
            if self.rng.random() < 0.25:
                available_days.remove(self.rng.choice(days))
            # Reihum eine Hauptschicht, gelegentlich eine zweite
            shifts = [shifts_used[i % len(shifts_used)]]
            if len(shifts_used) > 1 and self.rng.random() < 0.3:
                extra = self.rng.choice(shifts_used)
                if extra not in shifts:
                    shifts.append(extra)
            name = f"{self.rng.choice(_LAST_NAMES)}, {self.rng.choice(_FIRST_NAMES)}"
            teachers.append(Teacher(
                id=f"T{i + 1:02d}",
                name=name,
                available_days=available_days,
                available_shifts=shifts,
            ))
        return teachers

    # ─── Anforderungen ────────────────────────────────────────────────────────

    def _generate_requirements(
        self, classes: list[ClassGroup], teachers: list[Teacher]
    ) -> list[CurriculumRequirement]:
        requirements = []
        load: dict[str, int] = {t.id: 0 for t in teachers}
        for cls in classes:
            eligible = [t for t in teachers if cls.shift in t.available_shifts]
            for subject, hours in SUBJECT_HOURS.items():
                teacher = min(eligible, key=lambda t: load[t.id])
                load[teacher.id] += hours
                requirements.append(CurriculumRequirement(
                    id=f"R{len(requirements) + 1:03d}",
                    class_id=cls.id,
                    teacher_id=teacher.id,
                    subject=subject,
                    lessons_per_week=hours,
                ))
        return requirements

    def print_summary(self, data: SchoolData) -> None:
        """Gibt eine Übersicht der Lehrkräfte-Auslastung über Rich aus."""
        table = Table(title="Lehrkräfte", box=box.ROUNDED)
        table.add_column("ID")
        table.add_column("Name")
        table.add_column("Tage")
        table.add_column("Schichten")
        table.add_column("Stunden", justify="right")
        for t in data.teachers:
            hours = sum(r.lessons_per_week for r in data.requirements if r.teacher_id == t.id)
            table.add_row(
                t.id,
                t.name,
                ", ".join(self.config.week.day_name(d) for d in t.available_days),
                ", ".join(s.value for s in t.available_shifts),
                str(hours),
            )
        console.print(table)
