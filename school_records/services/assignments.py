from typing import NamedTuple

from sqlalchemy import and_, select

from ..models import ClassAssignment, Enrollment, SchoolClass, Student


class StudentChoice(NamedTuple):
    student_id: int
    name: str
    enrollment_id: int
    class_id: int
    class_name: str


class AssignmentIndex:
    """Who teaches which subject in which class. Read-only."""

    def __init__(self, store):
        self.store = store

    def assignments_for(self, teacher_id):
        rows = self.store.query(
            select(ClassAssignment.class_id, ClassAssignment.subject_id)
            .where(ClassAssignment.teacher_id == teacher_id))
        return {(r.class_id, r.subject_id) for r in rows}

    def classes_for(self, teacher_id):
        return set(self.store.scalars(
            select(ClassAssignment.class_id).where(ClassAssignment.teacher_id == teacher_id)))

    def subjects_for(self, teacher_id, class_id=None):
        stmt = select(ClassAssignment.subject_id).where(ClassAssignment.teacher_id == teacher_id)
        if class_id is not None:
            stmt = stmt.where(ClassAssignment.class_id == class_id)
        return set(self.store.scalars(stmt))

    def is_assigned(self, teacher_id, class_id, subject_id):
        found = self.store.scalar(
            select(ClassAssignment.id).where(
                ClassAssignment.teacher_id == teacher_id,
                ClassAssignment.class_id == class_id,
                ClassAssignment.subject_id == subject_id,
            ).limit(1))
        return found is not None

    def students_in(self, class_id):
        return self.store.scalars(
            select(Student.id).where(Student.class_id == class_id).order_by(Student.name, Student.id))

    def students_for(self, teacher_id, subject_id=None):
        """Enrolled students a teacher may grade, one entry per qualifying enrollment."""
        on = and_(Enrollment.class_id == ClassAssignment.class_id,
                  ClassAssignment.teacher_id == teacher_id)
        if subject_id is not None:
            on = and_(on, ClassAssignment.subject_id == subject_id)
        stmt = (select(Student.id, Student.name, Enrollment.id, SchoolClass.id, SchoolClass.name)
                .join(Enrollment, Enrollment.student_id == Student.id)
                .join(ClassAssignment, on)
                .join(SchoolClass, SchoolClass.id == Enrollment.class_id)
                .distinct()
                .order_by(Student.name, Enrollment.id))
        return [StudentChoice(*row) for row in self.store.query(stmt)]
