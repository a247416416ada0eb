"""Datenmodell für eine Schulklasse (Pydantic v2)."""

from pydantic import BaseModel, field_validator

from config.schema import Shift


class ClassGroup(BaseModel):
    """Repräsentiert eine Klasse mit Schicht und Stunden pro Tag (z.B. 7b, Vormittag)."""

    id: str                          # "7b"
    name: str                        # Anzeigename, "Klasse 7b"
    shift: Shift
    periods_per_day: dict[int, int]  # Tag → Anzahl Stunden (darf 0 sein oder je Tag variieren)

    @field_validator("periods_per_day")
    @classmethod
    def check_periods(cls, v: dict[int, int]) -> dict[int, int]:
        for day, periods in v.items():
            if not 0 <= day <= 6:
                raise ValueError(f"Ungültiger Wochentag: {day} (erlaubt: 0..6)")
            if periods < 0:
                raise ValueError(f"Negative Stundenzahl für Tag {day}: {periods}")
        return v

    def periods_on(self, day: int) -> int:
        """Stunden an diesem Tag (0 wenn nicht definiert)."""
        return self.periods_per_day.get(day, 0)

    @property
    def total_weekly_periods(self) -> int:
        """Summe aller Stunden der Woche."""
        return sum(self.periods_per_day.values())
