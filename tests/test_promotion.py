import pytest
from sqlalchemy import select

from school_records.errors import NotFoundError, ValidationError
from school_records.models import ClassAssignment, Enrollment, Grade, Student
from school_records.services import GradeBook, PromotionTransaction


def class_of(store, student_id):
    return store.scalar(select(Student.class_id).where(Student.id == student_id))


def test_promote_moves_every_member(store, school):
    GradeBook(store).record(school.t_math, school.alice, school.math, "Term 1", 80)
    enrollments_before = store.query(select(Enrollment.id, Enrollment.class_id).order_by(Enrollment.id))
    grades_before = store.query(select(Grade.id, Grade.enrollment_id))
    assignments_before = store.query(select(ClassAssignment.id, ClassAssignment.class_id))

    moved = PromotionTransaction(store).promote(school.c5a, school.c6a)

    assert moved == 2
    assert class_of(store, school.alice) == school.c6a
    assert class_of(store, school.bob) == school.c6a
    assert class_of(store, school.carol) == school.c6a
    assert store.scalars(select(Student.id).where(Student.class_id == school.c5a)) == []

    # history stays with the old class
    assert store.query(select(Enrollment.id, Enrollment.class_id).order_by(Enrollment.id)) == enrollments_before
    assert store.query(select(Grade.id, Grade.enrollment_id)) == grades_before
    assert store.query(select(ClassAssignment.id, ClassAssignment.class_id)) == assignments_before


def test_promote_empty_class_moves_nobody(store, school, records):
    empty = records.create_class("7A", "Grade 7", 150)
    assert PromotionTransaction(store).promote(empty, school.c6a) == 0
    assert class_of(store, school.carol) == school.c6a


def test_promote_rejects_same_class(store, school):
    with pytest.raises(ValidationError) as exc:
        PromotionTransaction(store).promote(school.c5a, str(school.c5a))
    assert "cannot be the same" in exc.value.message


def test_promote_rejects_unknown_class(store, school):
    with pytest.raises(NotFoundError):
        PromotionTransaction(store).promote(school.c5a, 999)
    assert class_of(store, school.alice) == school.c5a
