import logging

from sqlalchemy import delete, select, update

from ..errors import ConflictError, DependencyError, NotFoundError, ValidationError
from ..models import ClassAssignment, Enrollment, SchoolClass, Student, Subject, Teacher
from .validators import parse_class_fee, parse_id, required_text

logger = logging.getLogger(__name__)

STUDENT_STATUSES = ("active", "inactive")

_CHOICE_MODELS = {
    "students": Student,
    "teachers": Teacher,
    "classes": SchoolClass,
    "subjects": Subject,
}


class Records:
    """Admin create/update/delete for the reference entities."""

    def __init__(self, store):
        self.store = store

    def _create(self, instance, label, **errors):
        result = self.store.insert(instance, **errors)
        logger.info("created %s %s", label, result.generated_id)
        return result.generated_id

    def _update(self, model, ident, values, label, **errors):
        result = self.store.execute(update(model).where(model.id == ident).values(**values),
                                    **errors)
        if result.rows_affected == 0:
            raise NotFoundError(f"{label.capitalize()} with ID {ident} not found.")
        logger.info("updated %s %s", label, ident)

    def _delete(self, model, ident, label, hint):
        result = self.store.execute(
            delete(model).where(model.id == ident),
            on_foreign_key=DependencyError(f"Cannot delete {label} {ident}. {hint}".strip()))
        if result.rows_affected == 0:
            raise NotFoundError(f"{label.capitalize()} with ID {ident} not found.")
        logger.info("deleted %s %s", label, ident)

    # ---------- Students ----------
    def _student_values(self, name, grade_level, class_id, status):
        message = "Please fill in Name, Grade Level, and select a Class."
        status = (status or "active").strip().lower()
        if status not in STUDENT_STATUSES:
            raise ValidationError("Status must be 'active' or 'inactive'.")
        return dict(name=required_text(name, message),
                    grade_level=required_text(grade_level, message),
                    class_id=parse_id(class_id, message),
                    status=status)

    def create_student(self, name, grade_level, class_id, status="active"):
        values = self._student_values(name, grade_level, class_id, status)
        return self._create(Student(**values), "student", on_foreign_key=ValidationError(
            "Selected class is invalid. Please select a valid class."))

    def update_student(self, student_id, name, grade_level, class_id, status="active"):
        student_id = parse_id(student_id, "Please select a student.")
        values = self._student_values(name, grade_level, class_id, status)
        self._update(Student, student_id, values, "student", on_foreign_key=ValidationError(
            "Selected class is invalid. Please select a valid class."))

    def delete_student(self, student_id):
        self._delete(Student, parse_id(student_id, "Please select a student."), "student",
                     "This student may be linked to other records "
                     "(e.g., enrollments, grades, fees, user accounts). Delete those first.")

    # ---------- Teachers ----------
    def _teacher_values(self, name, subject):
        message = "Please fill in Name and Subject."
        return dict(name=required_text(name, message), subject=required_text(subject, message))

    def create_teacher(self, name, subject):
        return self._create(Teacher(**self._teacher_values(name, subject)), "teacher")

    def update_teacher(self, teacher_id, name, subject):
        teacher_id = parse_id(teacher_id, "Please select a teacher.")
        self._update(Teacher, teacher_id, self._teacher_values(name, subject), "teacher")

    def delete_teacher(self, teacher_id):
        self._delete(Teacher, parse_id(teacher_id, "Please select a teacher."), "teacher",
                     "This teacher may be linked to user accounts or class assignments. "
                     "Delete those first.")

    # ---------- Classes ----------
    def _class_values(self, name, grade_level, fee):
        message = "Please fill in Class Name, Grade Level, and Fee."
        return dict(name=required_text(name, message),
                    grade_level=required_text(grade_level, message),
                    fee=parse_class_fee(fee))

    def create_class(self, name, grade_level, fee):
        return self._create(SchoolClass(**self._class_values(name, grade_level, fee)), "class",
                            on_unique=ConflictError("A class with this name already exists."))

    def update_class(self, class_id, name, grade_level, fee):
        class_id = parse_id(class_id, "Please select a class.")
        self._update(SchoolClass, class_id, self._class_values(name, grade_level, fee), "class",
                     on_unique=ConflictError("A class with this name already exists."))

    def delete_class(self, class_id):
        self._delete(SchoolClass, parse_id(class_id, "Please select a class."), "class",
                     "This class may be linked to students, assignments, enrollments, or fees. "
                     "Delete those first.")

    # ---------- Subjects ----------
    def create_subject(self, name):
        name = required_text(name, "Please fill in Subject Name.")
        return self._create(Subject(name=name), "subject",
                            on_unique=ConflictError("A subject with this name already exists."))

    def update_subject(self, subject_id, name):
        subject_id = parse_id(subject_id, "Please select a subject.")
        name = required_text(name, "Please fill in Subject Name.")
        self._update(Subject, subject_id, dict(name=name), "subject",
                     on_unique=ConflictError("A subject with this name already exists."))

    def delete_subject(self, subject_id):
        self._delete(Subject, parse_id(subject_id, "Please select a subject."), "subject",
                     "This subject may be linked to class assignments or grades. "
                     "Delete those first.")

    # ---------- Class assignments ----------
    def create_assignment(self, class_id, teacher_id, subject_id):
        message = "Please select a Class, Teacher, and Subject."
        assignment = ClassAssignment(class_id=parse_id(class_id, message),
                                     teacher_id=parse_id(teacher_id, message),
                                     subject_id=parse_id(subject_id, message))
        return self._create(
            assignment, "assignment",
            on_unique=ConflictError(
                "This assignment (Class, Teacher, Subject combination) already exists."),
            on_foreign_key=ValidationError(
                "Invalid selections. Please select valid Class, Teacher, and Subject."))

    def delete_assignment(self, assignment_id):
        self._delete(ClassAssignment, parse_id(assignment_id, "Please select an assignment."),
                     "assignment", "")

    # ---------- Enrollments ----------
    def enroll(self, student_id, class_id):
        message = "Please select a Student and a Class."
        enrollment = Enrollment(student_id=parse_id(student_id, message),
                                class_id=parse_id(class_id, message))
        return self._create(
            enrollment, "enrollment",
            on_unique=ConflictError("This student is already enrolled in this class."),
            on_foreign_key=ValidationError(
                "Invalid selections. Please select a valid Student and Class."))

    def delete_enrollment(self, enrollment_id):
        self._delete(Enrollment, parse_id(enrollment_id, "Please select an enrollment."),
                     "enrollment", "Grades are recorded against this enrollment. "
                     "Delete those first.")

    # ---------- Pickers ----------
    def choices(self, kind):
        """Fresh (id, name) pairs ordered by name for a selection list."""
        model = _CHOICE_MODELS.get(kind)
        if model is None:
            raise ValidationError(f"Unknown choice list: {kind}")
        rows = self.store.query(select(model.id, model.name).order_by(model.name, model.id))
        return [tuple(r) for r in rows]
