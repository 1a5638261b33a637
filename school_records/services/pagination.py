"""Offset pagination shared by every entity table.

The total is an independent COUNT query, so under concurrent writes the
count and the page contents are not guaranteed to agree.
"""
from sqlalchemy import func, select

from ..models import (ClassAssignment, Enrollment, Fee, Grade, SchoolClass,
                      Student, Subject, Teacher)
from .validators import parse_positive_int


class Page:
    def __init__(self, rows, total_count, page, page_size):
        self.rows = rows
        self.total_count = total_count
        self.page = page
        self.page_size = page_size

    @property
    def total_pages(self):
        return (self.total_count + self.page_size - 1) // self.page_size

    @property
    def has_prev(self):
        return self.page > 1

    @property
    def has_next(self):
        return self.page < self.total_pages

    def to_dict(self):
        return {
            "rows": self.rows, "total_count": self.total_count,
            "page": self.page, "page_size": self.page_size,
            "total_pages": self.total_pages,
        }


def clamp_page(page, total_pages):
    return min(max(page, 1), max(1, total_pages))


def paginate(store, statement, count_statement, page, page_size, shape=None):
    page = parse_positive_int(page, "Page number must be a positive integer.")
    page_size = parse_positive_int(page_size, "Page size must be a positive integer.")

    total = store.scalar(count_statement) or 0
    result = store.query(statement.offset((page - 1) * page_size).limit(page_size))
    shape = shape or (lambda row: dict(row._mapping))
    return Page([shape(r) for r in result], total, page, page_size)


def _count(model):
    return select(func.count()).select_from(model)


def list_students(store, page, page_size):
    stmt = (select(Student.id, Student.name, Student.grade_level, Student.class_id,
                   SchoolClass.name.label("class_name"), Student.status)
            .outerjoin(SchoolClass, Student.class_id == SchoolClass.id)
            .order_by(Student.id))
    return paginate(store, stmt, _count(Student), page, page_size)


def list_teachers(store, page, page_size):
    stmt = select(Teacher.id, Teacher.name, Teacher.subject).order_by(Teacher.id)
    return paginate(store, stmt, _count(Teacher), page, page_size)


def list_classes(store, page, page_size):
    stmt = (select(SchoolClass.id, SchoolClass.name, SchoolClass.grade_level, SchoolClass.fee)
            .order_by(SchoolClass.id))
    return paginate(store, stmt, _count(SchoolClass), page, page_size)


def list_subjects(store, page, page_size):
    stmt = select(Subject.id, Subject.name).order_by(Subject.id)
    return paginate(store, stmt, _count(Subject), page, page_size)


def list_assignments(store, page, page_size):
    stmt = (select(ClassAssignment.id, ClassAssignment.class_id,
                   SchoolClass.name.label("class_name"),
                   ClassAssignment.teacher_id, Teacher.name.label("teacher_name"),
                   ClassAssignment.subject_id, Subject.name.label("subject_name"))
            .join(SchoolClass, ClassAssignment.class_id == SchoolClass.id)
            .join(Teacher, ClassAssignment.teacher_id == Teacher.id)
            .join(Subject, ClassAssignment.subject_id == Subject.id)
            .order_by(ClassAssignment.id))
    return paginate(store, stmt, _count(ClassAssignment), page, page_size)


def list_enrollments(store, page, page_size):
    stmt = (select(Enrollment.id, Enrollment.student_id, Student.name.label("student_name"),
                   Enrollment.class_id, SchoolClass.name.label("class_name"))
            .join(Student, Enrollment.student_id == Student.id)
            .join(SchoolClass, Enrollment.class_id == SchoolClass.id)
            .order_by(Enrollment.id))
    return paginate(store, stmt, _count(Enrollment), page, page_size)


def fee_row(row):
    data = dict(row._mapping)
    data["balance"] = data["amount_due"] - data["amount_paid"]
    return data


def list_fees(store, page, page_size):
    stmt = (select(Fee.id, Fee.student_id, Student.name.label("student_name"),
                   Fee.class_id, SchoolClass.name.label("class_name"), Fee.term,
                   Fee.amount_due, Fee.amount_paid, Fee.date_last_paid)
            .join(Student, Fee.student_id == Student.id)
            .join(SchoolClass, Fee.class_id == SchoolClass.id)
            .order_by(Fee.id))
    return paginate(store, stmt, _count(Fee), page, page_size, shape=fee_row)


def list_grades(store, page, page_size):
    stmt = (select(Grade.id, Grade.enrollment_id, Student.name.label("student_name"),
                   SchoolClass.name.label("class_name"), Subject.name.label("subject_name"),
                   Grade.term, Grade.score, Grade.comments, Grade.date_recorded)
            .join(Enrollment, Grade.enrollment_id == Enrollment.id)
            .join(Student, Enrollment.student_id == Student.id)
            .join(SchoolClass, Enrollment.class_id == SchoolClass.id)
            .join(Subject, Grade.subject_id == Subject.id)
            .order_by(Grade.id))
    return paginate(store, stmt, _count(Grade), page, page_size)
