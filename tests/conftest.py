from types import SimpleNamespace

import pytest

from config import TestConfig
from school_records import create_app
from school_records.extensions import db
from school_records.services import Records, Store


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return Store(db.session)


@pytest.fixture
def records(store):
    return Records(store)


@pytest.fixture
def school(records):
    """Two classes, two subjects, two teachers.

    Ms Math teaches Math in 5A and 6A; Mr Words teaches English in 5A.
    Alice and Bob are in 5A, Carol is in 6A, each enrolled in their class.
    """
    s = SimpleNamespace()
    s.c5a = records.create_class("5A", "Grade 5", 100)
    s.c6a = records.create_class("6A", "Grade 6", 120)
    s.math = records.create_subject("Math")
    s.english = records.create_subject("English")
    s.t_math = records.create_teacher("Ms Math", "Mathematics")
    s.t_words = records.create_teacher("Mr Words", "English")
    s.a_math_5a = records.create_assignment(s.c5a, s.t_math, s.math)
    s.a_math_6a = records.create_assignment(s.c6a, s.t_math, s.math)
    s.a_eng_5a = records.create_assignment(s.c5a, s.t_words, s.english)
    s.alice = records.create_student("Alice", "Grade 5", s.c5a)
    s.bob = records.create_student("Bob", "Grade 5", s.c5a)
    s.carol = records.create_student("Carol", "Grade 6", s.c6a)
    s.e_alice = records.enroll(s.alice, s.c5a)
    s.e_bob = records.enroll(s.bob, s.c5a)
    s.e_carol = records.enroll(s.carol, s.c6a)
    return s
