"""Datenmodell für eine Lehrkraft (Pydantic v2)."""

from pydantic import BaseModel, field_validator

from config.schema import Shift


class Teacher(BaseModel):
    """Repräsentiert eine einzelne Lehrkraft mit ihrer Verfügbarkeit."""

    id: str                                # Interne ID ("T01")
    name: str                              # "Müller, Hans"
    available_days: list[int] = []         # 0=Mo..4=Fr
    available_shifts: list[Shift] = []     # Schichten, in denen unterrichtet werden kann

    @field_validator("available_days")
    @classmethod
    def normalize_days(cls, v: list[int]) -> list[int]:
        for day in v:
            if not 0 <= day <= 6:
                raise ValueError(f"Ungültiger Wochentag: {day} (erlaubt: 0..6)")
        return sorted(set(v))

    def is_available(self, day: int, shift: Shift) -> bool:
        """True wenn die Lehrkraft an diesem Tag in dieser Schicht unterrichten kann."""
        return day in self.available_days and shift in self.available_shifts
