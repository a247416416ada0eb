from enum import Enum

from pydantic import BaseModel, Field, model_validator


class Shift(str, Enum):
    """Grobes Tagesband, auf das Klassen und Lehrer-Verfügbarkeit bezogen sind."""
    MORNING = "morning"
    AFTERNOON = "afternoon"
    NIGHT = "night"


# ─── WOCHENRASTER ───

class WeekConfig(BaseModel):
    """Wochenraster der Schule.

    Die Reihenfolge der Tage (0=Mo, 1=Di, ...) ist die kanonische
    Reihenfolge, in der der Scheduler Slots sucht.
    """
    # Anzahl Unterrichtstage pro Woche (5 oder 6)
    days_per_week: int = Field(5, ge=5, le=6,
        description="Unterrichtstage pro Woche")
    # Namen der Wochentage
    day_names: list[str] = Field(
        default=["Mo", "Di", "Mi", "Do", "Fr"],
        description="Namen der Wochentage")
    # Fallback-Stundenzahl, wenn keine Klasse einer Gruppe Stunden für einen Tag definiert
    standard_periods: int = Field(5, ge=1, le=12,
        description="Standard-Stundenzahl pro Tag")
    # Obergrenze für periods_per_day einer Klasse
    max_periods: int = Field(10, ge=1, le=16,
        description="Maximale Stunden pro Tag")

    @model_validator(mode='after')
    def validate_day_names(self):
        """Für jeden Unterrichtstag muss ein Name existieren."""
        if len(self.day_names) < self.days_per_week:
            raise ValueError(
                f"{self.days_per_week} Unterrichtstage, aber nur "
                f"{len(self.day_names)} Tagesnamen konfiguriert")
        if self.standard_periods > self.max_periods:
            raise ValueError(
                f"standard_periods ({self.standard_periods}) > "
                f"max_periods ({self.max_periods})")
        return self

    @property
    def days(self) -> list[int]:
        """Kanonische Tagesreihenfolge als Liste von Tagesindizes."""
        return list(range(self.days_per_week))

    def day_name(self, day: int) -> str:
        """Abgekürzter Tagesname (Fallback: Index als String)."""
        return self.day_names[day] if 0 <= day < len(self.day_names) else str(day)

    def parse_day(self, value: str) -> int:
        """Wandelt Tagesname oder Index ("Mo", "0") in einen Tagesindex um."""
        value = value.strip()
        if value.isdigit():
            day = int(value)
        else:
            lowered = [n.lower() for n in self.day_names[:self.days_per_week]]
            if value.lower() not in lowered:
                raise ValueError(f"Unbekannter Wochentag: {value!r}")
            day = lowered.index(value.lower())
        if day not in self.days:
            raise ValueError(f"Tag {day} liegt außerhalb der Woche (0..{self.days_per_week - 1})")
        return day


# ─── SCHEDULER ───

class SchedulerConfig(BaseModel):
    """Einstellungen des Greedy-Schedulers."""
    # Erst Tage ohne Stunde dieser Anforderung probieren, dann auffüllen
    spread_first: bool = Field(True,
        description="Stunden einer Anforderung zuerst auf verschiedene Tage verteilen")


# ─── GESAMT-CONFIG ───

class EngineConfig(BaseModel):
    """Gesamtkonfiguration der Stundenplan-Engine."""
    # Name der Schule
    school_name: str = Field("Muster-Schule",
        description="Name der Schule")
    # Wochenraster (Tage, Standard-Stundenzahl)
    week: WeekConfig = Field(default_factory=WeekConfig)
    # Scheduler-Einstellungen
    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)
