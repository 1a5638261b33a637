"""Per-(class, subject, term) performance reports and their filter chain.

Filters narrow class -> subject -> term to values that actually co-occur,
so a caller can never offer a combination that yields an empty report
only because it was never valid.
"""
from typing import List, NamedTuple, Optional

from sqlalchemy import and_, select

from ..models import ClassAssignment, Enrollment, Grade, SchoolClass, Student, Subject
from .validators import parse_id, required_text

NO_DATA = "no data"
MISSING_SELECTION = "Please select a Class, Subject, and Term to generate a report."


class ReportRow(NamedTuple):
    student_id: int
    student_name: str
    score: float
    comments: Optional[str]


class Report(NamedTuple):
    class_id: int
    subject_id: int
    term: str
    rows: List[ReportRow]
    average: Optional[float]

    @property
    def average_display(self):
        return NO_DATA if self.average is None else f"{self.average:.2f}"

    def to_dict(self):
        return {
            "class_id": self.class_id, "subject_id": self.subject_id, "term": self.term,
            "rows": [r._asdict() for r in self.rows],
            "average": self.average_display,
        }


def _assigned_to(teacher_id):
    return and_(ClassAssignment.class_id == Enrollment.class_id,
                ClassAssignment.subject_id == Grade.subject_id,
                ClassAssignment.teacher_id == teacher_id)


class ReportAggregator:
    def __init__(self, store):
        self.store = store

    def generate(self, class_id, subject_id, term, teacher_id=None):
        class_id = parse_id(class_id, MISSING_SELECTION)
        subject_id = parse_id(subject_id, MISSING_SELECTION)
        term = required_text(term, MISSING_SELECTION)

        stmt = (select(Student.id, Student.name, Grade.score, Grade.comments)
                .select_from(Grade)
                .join(Enrollment, Grade.enrollment_id == Enrollment.id)
                .join(Student, Enrollment.student_id == Student.id)
                .where(Enrollment.class_id == class_id,
                       Grade.subject_id == subject_id,
                       Grade.term == term)
                .order_by(Student.name, Grade.id))
        if teacher_id is not None:
            stmt = stmt.join(ClassAssignment, _assigned_to(teacher_id))

        rows = [ReportRow(*r) for r in self.store.query(stmt)]
        average = sum(r.score for r in rows) / len(rows) if rows else None
        return Report(class_id, subject_id, term, rows, average)

    # ---------- cascading filters ----------
    def class_options(self, teacher_id=None):
        stmt = select(SchoolClass.id, SchoolClass.name).order_by(SchoolClass.name)
        if teacher_id is not None:
            stmt = (stmt.join(ClassAssignment, ClassAssignment.class_id == SchoolClass.id)
                    .where(ClassAssignment.teacher_id == teacher_id)
                    .distinct())
        return [tuple(r) for r in self.store.query(stmt)]

    def subject_options(self, class_id, teacher_id=None):
        class_id = parse_id(class_id, "Please select a Class.")
        stmt = (select(Subject.id, Subject.name)
                .join(ClassAssignment, ClassAssignment.subject_id == Subject.id)
                .where(ClassAssignment.class_id == class_id)
                .distinct()
                .order_by(Subject.name))
        if teacher_id is not None:
            stmt = stmt.where(ClassAssignment.teacher_id == teacher_id)
        return [tuple(r) for r in self.store.query(stmt)]

    def term_options(self, class_id, subject_id, teacher_id=None):
        class_id = parse_id(class_id, "Please select a Class.")
        subject_id = parse_id(subject_id, "Please select a Subject.")
        stmt = (select(Grade.term)
                .join(Enrollment, Grade.enrollment_id == Enrollment.id)
                .where(Enrollment.class_id == class_id, Grade.subject_id == subject_id)
                .distinct()
                .order_by(Grade.term))
        if teacher_id is not None:
            stmt = stmt.join(ClassAssignment, _assigned_to(teacher_id))
        return self.store.scalars(stmt)


def render_text(report, class_name, subject_name):
    lines = [
        f"--- Performance Report for {class_name} - {subject_name} ({report.term}) ---",
        "",
        f"{'ID':<5} {'Student Name':<20} {'Score':<10} Comments",
        "-" * 56,
    ]
    for row in report.rows:
        lines.append(f"{row.student_id:<5d} {row.student_name:<20} {row.score:<10.2f} "
                     f"{row.comments or ''}".rstrip())
    if report.rows:
        lines.append("-" * 56)
        lines.append(f"Average Score: {report.average_display}")
    else:
        lines.append("No grades recorded for this criteria.")
    return "\n".join(lines) + "\n"
