import logging

from sqlalchemy import case, select

from ..errors import NotFoundError
from ..models import ClassAssignment, Enrollment, Student

logger = logging.getLogger(__name__)

NO_ENROLLMENT = "No enrollment found for this teacher/subject/student combination."


class EnrollmentResolver:
    """Finds the enrollment that authorizes a teacher to grade a student in a subject.

    A qualifying enrollment places the student in a class where the teacher
    is assigned that subject. When several qualify (a student carrying older
    enrollments into classes with the same teacher/subject pair), the one in
    the student's current class wins, then the lowest enrollment id.
    """

    def __init__(self, store):
        self.store = store

    def candidates(self, student_id, subject_id, teacher_id):
        stmt = (select(Enrollment.id)
                .join(ClassAssignment, ClassAssignment.class_id == Enrollment.class_id)
                .join(Student, Student.id == Enrollment.student_id)
                .where(Enrollment.student_id == student_id,
                       ClassAssignment.subject_id == subject_id,
                       ClassAssignment.teacher_id == teacher_id)
                .order_by(case((Enrollment.class_id == Student.class_id, 0), else_=1),
                          Enrollment.id))
        return self.store.scalars(stmt)

    def resolve(self, student_id, subject_id, teacher_id):
        found = self.candidates(student_id, subject_id, teacher_id)
        if not found:
            logger.warning("teacher %s has no enrollment for student %s in subject %s",
                           teacher_id, student_id, subject_id)
            raise NotFoundError(NO_ENROLLMENT)
        if len(found) > 1:
            logger.warning("student %s has %d enrollments for subject %s under teacher %s; using %s",
                           student_id, len(found), subject_id, teacher_id, found[0])
        return found[0]
