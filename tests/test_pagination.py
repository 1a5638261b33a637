import pytest

from school_records.errors import ValidationError
from school_records.services import clamp_page
from school_records.services import pagination


@pytest.fixture
def subjects(records):
    return [records.create_subject(f"Subject {i:02d}") for i in range(45)]


def test_pages_cover_table_without_overlap(store, subjects):
    first = pagination.list_subjects(store, 1, 20)
    assert first.total_count == 45
    assert first.total_pages == 3

    seen = []
    for page in range(1, first.total_pages + 1):
        seen.extend(row["id"] for row in pagination.list_subjects(store, page, 20).rows)
    assert seen == sorted(subjects)
    assert len(set(seen)) == 45


def test_last_page_is_partial_and_past_end_is_empty(store, subjects):
    last = pagination.list_subjects(store, 3, 20)
    assert len(last.rows) == 5
    assert not last.has_next and last.has_prev

    beyond = pagination.list_subjects(store, 7, 20)
    assert beyond.rows == []
    assert beyond.total_count == 45


def test_empty_table(store):
    page = pagination.list_teachers(store, 1, 10)
    assert page.rows == []
    assert page.total_pages == 0
    assert clamp_page(5, page.total_pages) == 1


@pytest.mark.parametrize("page,size", [(0, 10), (-1, 10), (1, 0), ("x", 10)])
def test_invalid_page_arguments(store, page, size):
    with pytest.raises(ValidationError):
        pagination.list_subjects(store, page, size)


def test_clamp_page():
    assert clamp_page(0, 3) == 1
    assert clamp_page(9, 3) == 3
    assert clamp_page(2, 3) == 2


def test_entity_listers_join_names(store, school):
    students = pagination.list_students(store, 1, 20).rows
    assert [(r["name"], r["class_name"]) for r in students] == [
        ("Alice", "5A"), ("Bob", "5A"), ("Carol", "6A")]

    assignments = pagination.list_assignments(store, 1, 2)
    assert assignments.total_count == 3
    assert assignments.rows[0]["teacher_name"] == "Ms Math"

    enrollments = pagination.list_enrollments(store, 2, 2).rows
    assert [(r["student_name"], r["class_name"]) for r in enrollments] == [("Carol", "6A")]
