from models.teacher import Teacher
from models.school_class import ClassGroup
from models.requirement import CurriculumRequirement
from models.schedule_slot import ScheduleSlot
from models.school_data import SchoolData, UnknownReferenceError

__all__ = [
    "Teacher",
    "ClassGroup",
    "CurriculumRequirement",
    "ScheduleSlot",
    "SchoolData",
    "UnknownReferenceError",
]
