import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from school_records.errors import ConflictError, DependencyError, StoreError
from school_records.models import Subject
from school_records.services import ErrorKind, classify_integrity_error


class DriverError(Exception):
    def __init__(self, message, **attrs):
        super().__init__(message)
        for key, value in attrs.items():
            setattr(self, key, value)


def wrap(orig):
    return IntegrityError("INSERT ...", {}, orig)


@pytest.mark.parametrize("orig,kind", [
    (DriverError("x", pgcode="23505"), ErrorKind.UNIQUE),
    (DriverError("x", sqlstate="23503"), ErrorKind.FOREIGN_KEY),
    (DriverError("x", pgcode="23502"), ErrorKind.OTHER),
    (DriverError("x", sqlite_errorname="SQLITE_CONSTRAINT_UNIQUE"), ErrorKind.UNIQUE),
    (DriverError("x", sqlite_errorname="SQLITE_CONSTRAINT_FOREIGNKEY"), ErrorKind.FOREIGN_KEY),
    (DriverError("x", sqlite_errorname="SQLITE_CONSTRAINT_CHECK"), ErrorKind.OTHER),
])
def test_classify_by_driver_code(orig, kind):
    assert classify_integrity_error(wrap(orig)) is kind


def test_classify_mysql_errno():
    assert classify_integrity_error(wrap(Exception(1062, "Duplicate entry"))) is ErrorKind.UNIQUE
    assert classify_integrity_error(wrap(Exception(1451, "Cannot delete"))) is ErrorKind.FOREIGN_KEY


def test_codes_win_over_message_text():
    orig = DriverError("duplicate entry", pgcode="23503")
    assert classify_integrity_error(wrap(orig)) is ErrorKind.FOREIGN_KEY


def test_real_sqlite_errors_are_classified(store, records, school):
    with pytest.raises(ConflictError):
        store.insert(Subject(name="Math"))
    with pytest.raises(DependencyError):
        records.delete_subject(school.math)
    # session is usable again after the rollback
    assert store.get(Subject, school.math).name == "Math"


def test_other_failures_become_store_error(store):
    with pytest.raises(StoreError) as exc:
        store.query(text("SELECT * FROM no_such_table"))
    assert "no_such_table" in exc.value.message
