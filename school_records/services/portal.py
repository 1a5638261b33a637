from sqlalchemy import select

from ..errors import NotFoundError
from ..models import ClassAssignment, Enrollment, Grade, SchoolClass, Student, Subject, Teacher
from .fees import FeeLedger


class StudentPortal:
    """Read-only views of a single student's own records."""

    def __init__(self, store, student_id):
        self.store = store
        self.student_id = student_id

    def profile(self):
        rows = self.store.query(
            select(Student.id, Student.name, Student.grade_level,
                   SchoolClass.name.label("class_name"), Student.status)
            .outerjoin(SchoolClass, Student.class_id == SchoolClass.id)
            .where(Student.id == self.student_id))
        if not rows:
            raise NotFoundError("Student information not found.")
        return dict(rows[0]._mapping)

    def classes(self):
        stmt = (select(SchoolClass.name.label("class_name"), SchoolClass.grade_level,
                       Teacher.name.label("teacher_name"), Subject.name.label("subject_name"))
                .select_from(Enrollment)
                .join(SchoolClass, Enrollment.class_id == SchoolClass.id)
                .outerjoin(ClassAssignment, ClassAssignment.class_id == SchoolClass.id)
                .outerjoin(Teacher, ClassAssignment.teacher_id == Teacher.id)
                .outerjoin(Subject, ClassAssignment.subject_id == Subject.id)
                .where(Enrollment.student_id == self.student_id)
                .distinct()
                .order_by(SchoolClass.name, Subject.name))
        return [dict(r._mapping) for r in self.store.query(stmt)]

    def _graded(self, *columns):
        return (select(*columns)
                .select_from(Grade)
                .join(Enrollment, Grade.enrollment_id == Enrollment.id)
                .where(Enrollment.student_id == self.student_id))

    def grades(self, subject_id=None, term=None):
        stmt = (self._graded(Subject.name.label("subject_name"), Grade.term, Grade.score,
                             Grade.comments, Grade.date_recorded)
                .join(Subject, Grade.subject_id == Subject.id))
        if subject_id is not None:
            stmt = stmt.where(Grade.subject_id == subject_id)
        if term:
            stmt = stmt.where(Grade.term == term)
        stmt = stmt.order_by(Subject.name, Grade.term)
        return [dict(r._mapping) for r in self.store.query(stmt)]

    def subject_options(self):
        stmt = (self._graded(Subject.id, Subject.name)
                .join(Subject, Grade.subject_id == Subject.id)
                .distinct()
                .order_by(Subject.name))
        return [tuple(r) for r in self.store.query(stmt)]

    def term_options(self):
        return self.store.scalars(self._graded(Grade.term).distinct().order_by(Grade.term))

    def fees(self):
        return FeeLedger(self.store).for_student(self.student_id)
