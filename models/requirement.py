"""Datenmodell für eine Stundentafel-Anforderung (Pydantic v2)."""

from pydantic import BaseModel, Field


class CurriculumRequirement(BaseModel):
    """Bedarf: Klasse X braucht n Wochenstunden Fach Y bei Lehrkraft Z."""

    id: str
    class_id: str
    teacher_id: str
    subject: str
    lessons_per_week: int = Field(gt=0)
