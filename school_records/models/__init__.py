from ..extensions import db
from .people import Student, Teacher
from .academics import SchoolClass, Subject, ClassAssignment
from .enrollment import Enrollment, Grade
from .fee import Fee
from .user import User, ROLES

__all__ = [
    "Student", "Teacher", "SchoolClass", "Subject", "ClassAssignment",
    "Enrollment", "Grade", "Fee", "User", "ROLES",
]
