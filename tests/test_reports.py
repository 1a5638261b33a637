import pytest

from school_records.errors import ValidationError
from school_records.services import (EnrollmentResolver, GradeBook, Records, ReportAggregator,
                                     render_text)


@pytest.fixture
def graded(store, school):
    book = GradeBook(store)
    book.record(school.t_math, school.bob, school.math, "Term 1", 70, "steady")
    book.record(school.t_math, school.alice, school.math, "Term 1", 91)
    book.record(school.t_math, school.alice, school.math, "Term 2", 40)
    book.record(school.t_math, school.carol, school.math, "Term 1", 10)
    book.record(school.t_words, school.alice, school.english, "Term 1", 55)
    return school


def test_report_rows_and_average(store, graded):
    report = ReportAggregator(store).generate(graded.c5a, graded.math, "Term 1")
    assert [(r.student_name, r.score, r.comments) for r in report.rows] == [
        ("Alice", 91, None), ("Bob", 70, "steady")]
    assert report.average == pytest.approx(80.5)
    assert report.average_display == "80.50"


def test_report_without_rows_says_no_data(store, graded):
    report = ReportAggregator(store).generate(graded.c6a, graded.math, "Term 9")
    assert report.rows == []
    assert report.average is None
    assert report.average_display == "no data"
    assert report.to_dict()["average"] == "no data"


def test_teacher_scoped_report(store, graded):
    aggregator = ReportAggregator(store)
    scoped = aggregator.generate(graded.c5a, graded.math, "Term 1", teacher_id=graded.t_math)
    assert [r.student_name for r in scoped.rows] == ["Alice", "Bob"]
    # Mr Words does not teach Math in 5A
    other = aggregator.generate(graded.c5a, graded.math, "Term 1", teacher_id=graded.t_words)
    assert other.rows == [] and other.average_display == "no data"


def test_report_requires_selection(store, graded):
    with pytest.raises(ValidationError):
        ReportAggregator(store).generate(graded.c5a, graded.math, "  ")
    with pytest.raises(ValidationError):
        ReportAggregator(store).generate(None, graded.math, "Term 1")


def test_admin_filter_chain_narrows(store, graded):
    aggregator = ReportAggregator(store)
    assert aggregator.class_options() == [(graded.c5a, "5A"), (graded.c6a, "6A")]
    assert aggregator.subject_options(graded.c5a) == [(graded.english, "English"), (graded.math, "Math")]
    assert aggregator.subject_options(graded.c6a) == [(graded.math, "Math")]
    assert aggregator.term_options(graded.c5a, graded.math) == ["Term 1", "Term 2"]
    assert aggregator.term_options(graded.c5a, graded.english) == ["Term 1"]
    assert aggregator.term_options(graded.c6a, graded.english) == []


def test_teacher_filter_chain_narrows(store, graded):
    aggregator = ReportAggregator(store)
    assert aggregator.class_options(graded.t_words) == [(graded.c5a, "5A")]
    assert aggregator.subject_options(graded.c5a, graded.t_words) == [(graded.english, "English")]
    assert aggregator.term_options(graded.c5a, graded.math, graded.t_words) == []
    assert aggregator.term_options(graded.c6a, graded.math, graded.t_math) == ["Term 1"]


def test_render_text(store, graded):
    report = ReportAggregator(store).generate(graded.c5a, graded.math, "Term 1")
    text = render_text(report, "5A", "Math")
    assert text.startswith("--- Performance Report for 5A - Math (Term 1) ---")
    assert "Alice" in text and "steady" in text
    assert text.rstrip().endswith("Average Score: 80.50")

    empty = ReportAggregator(store).generate(graded.c6a, graded.math, "Term 2")
    assert "No grades recorded for this criteria." in render_text(empty, "6A", "Math")


def test_end_to_end_single_student_report(store):
    records = Records(store)
    c5a = records.create_class("5A", "Grade 5", 100)
    math = records.create_subject("Math")
    t1 = records.create_teacher("T1", "Math")
    records.create_assignment(c5a, t1, math)
    alice = records.create_student("Alice", "Grade 5", c5a)
    records.enroll(alice, c5a)

    enrollment_id = EnrollmentResolver(store).resolve(alice, math, t1)
    assert enrollment_id > 0

    GradeBook(store).record(t1, alice, math, "T1", 95)
    report = ReportAggregator(store).generate(c5a, math, "T1")
    assert [(r.student_id, r.student_name, r.score) for r in report.rows] == [(alice, "Alice", 95)]
    assert report.average_display == "95.00"
