"""Datenmodell für eine einzelne Unterrichtsstunde im fertigen Stundenplan."""

from pydantic import BaseModel, ConfigDict


class ScheduleSlot(BaseModel):
    """Eine eingeplante Stunde. Immutable, damit sie als Dict-Key nutzbar ist."""

    model_config = ConfigDict(frozen=True)

    day: int              # 0-basiert (0=Mo, 4=Fr)
    period: int           # 1-basiert
    class_id: str
    subject: str
    teacher_id: str
    teacher_name: str

    @property
    def class_key(self) -> tuple[str, int, int]:
        """(class_id, day, period) — höchstens ein Slot pro Schlüssel."""
        return (self.class_id, self.day, self.period)

    @property
    def teacher_key(self) -> tuple[str, int, int]:
        """(teacher_id, day, period) — eine Lehrkraft ist nie doppelt belegt."""
        return (self.teacher_id, self.day, self.period)

    def moved_to(self, day: int, period: int) -> "ScheduleSlot":
        """Kopie dieses Slots an neuer Position."""
        return self.model_copy(update={"day": day, "period": period})
