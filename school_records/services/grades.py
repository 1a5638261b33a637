import logging
from datetime import date

from sqlalchemy import and_, delete, select, update

from ..errors import ConflictError, NotFoundError, ValidationError
from ..models import ClassAssignment, Enrollment, Grade, SchoolClass, Student, Subject
from .assignments import AssignmentIndex
from .enrollment import EnrollmentResolver
from .validators import optional_text, parse_id, parse_score, required_text

logger = logging.getLogger(__name__)

DUPLICATE_GRADE = "A grade for this student, subject, and term already exists."
MISSING_FIELDS = "Please select Subject, Student, Term and enter a Score."
INVALID_SELECTION = "Invalid selections. Please select valid Subject, Student, and Term."


class GradeBook:
    """Grade writes for a teacher; every write goes through the enrollment resolver."""

    def __init__(self, store, resolver=None):
        self.store = store
        self.resolver = resolver or EnrollmentResolver(store)
        self.assignments = AssignmentIndex(store)

    def _clean(self, student_id, subject_id, term, score, comments):
        student_id = parse_id(student_id, MISSING_FIELDS)
        subject_id = parse_id(subject_id, MISSING_FIELDS)
        term = required_text(term, MISSING_FIELDS)
        score = parse_score(score)
        return student_id, subject_id, term, score, optional_text(comments)

    def record(self, teacher_id, student_id, subject_id, term, score, comments=None):
        student_id, subject_id, term, score, comments = self._clean(
            student_id, subject_id, term, score, comments)
        enrollment_id = self.resolver.resolve(student_id, subject_id, teacher_id)
        grade = Grade(enrollment_id=enrollment_id, subject_id=subject_id, score=score,
                      comments=comments, term=term, date_recorded=date.today())
        result = self.store.insert(grade,
                                   on_unique=ConflictError(DUPLICATE_GRADE),
                                   on_foreign_key=ValidationError(INVALID_SELECTION))
        logger.info("teacher %s recorded grade %s (enrollment %s, subject %s, %s)",
                    teacher_id, result.generated_id, enrollment_id, subject_id, term)
        return result.generated_id

    def _authorize(self, grade_id, teacher_id):
        """Load the stored grade; the teacher must teach its subject in its class."""
        grade_id = parse_id(grade_id, "Please select a grade.")
        rows = self.store.query(
            select(Grade.enrollment_id, Enrollment.student_id, Enrollment.class_id, Grade.subject_id)
            .join(Enrollment, Grade.enrollment_id == Enrollment.id)
            .where(Grade.id == grade_id))
        if not rows or not self.assignments.is_assigned(
                teacher_id, rows[0].class_id, rows[0].subject_id):
            raise NotFoundError(f"Grade with ID {grade_id} not found.")
        return grade_id, rows[0]

    def update(self, grade_id, teacher_id, student_id, subject_id, term, score, comments=None):
        student_id, subject_id, term, score, comments = self._clean(
            student_id, subject_id, term, score, comments)
        grade_id, stored = self._authorize(grade_id, teacher_id)
        if (student_id, subject_id) == (stored.student_id, stored.subject_id):
            enrollment_id = stored.enrollment_id
        else:
            enrollment_id = self.resolver.resolve(student_id, subject_id, teacher_id)
        result = self.store.execute(
            update(Grade).where(Grade.id == grade_id).values(
                enrollment_id=enrollment_id, subject_id=subject_id, score=score,
                comments=comments, term=term, date_recorded=date.today()),
            on_unique=ConflictError(DUPLICATE_GRADE),
            on_foreign_key=ValidationError(INVALID_SELECTION))
        if result.rows_affected == 0:
            raise NotFoundError(f"Grade with ID {grade_id} not found.")
        logger.info("teacher %s updated grade %s", teacher_id, grade_id)

    def delete(self, grade_id, teacher_id):
        grade_id, _ = self._authorize(grade_id, teacher_id)
        result = self.store.execute(delete(Grade).where(Grade.id == grade_id))
        if result.rows_affected == 0:
            raise NotFoundError(f"Grade with ID {grade_id} not found.")
        logger.info("teacher %s deleted grade %s", teacher_id, grade_id)

    def grades_for_teacher(self, teacher_id):
        stmt = (select(Grade.id, Student.id.label("student_id"), Student.name.label("student_name"),
                       SchoolClass.name.label("class_name"), Subject.id.label("subject_id"),
                       Subject.name.label("subject_name"), Grade.term, Grade.score,
                       Grade.comments, Grade.date_recorded)
                .join(Enrollment, Grade.enrollment_id == Enrollment.id)
                .join(Student, Enrollment.student_id == Student.id)
                .join(SchoolClass, Enrollment.class_id == SchoolClass.id)
                .join(Subject, Grade.subject_id == Subject.id)
                .join(ClassAssignment, and_(ClassAssignment.class_id == Enrollment.class_id,
                                            ClassAssignment.subject_id == Grade.subject_id))
                .where(ClassAssignment.teacher_id == teacher_id)
                .order_by(SchoolClass.name, Subject.name, Student.name, Grade.term))
        return [dict(r._mapping) for r in self.store.query(stmt)]

    def terms(self, student_id=None, subject_id=None, teacher_id=None):
        stmt = (select(Grade.term).distinct().order_by(Grade.term)
                .join(Enrollment, Grade.enrollment_id == Enrollment.id))
        if teacher_id is not None:
            stmt = (stmt.join(ClassAssignment, and_(ClassAssignment.class_id == Enrollment.class_id,
                                                    ClassAssignment.subject_id == Grade.subject_id))
                    .where(ClassAssignment.teacher_id == teacher_id))
        if student_id is not None:
            stmt = stmt.where(Enrollment.student_id == student_id)
        if subject_id is not None:
            stmt = stmt.where(Grade.subject_id == subject_id)
        return self.store.scalars(stmt)
