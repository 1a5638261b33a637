"""Synchronous query/command executor over the records schema.

All SQLAlchemy failures are rolled back and converted to the error kinds
in ``school_records.errors`` here, so services never see driver exceptions.
"""
import enum
import logging
from typing import NamedTuple

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..errors import ConflictError, DependencyError, NotFoundError, StoreError

logger = logging.getLogger(__name__)


class ErrorKind(enum.Enum):
    UNIQUE = "unique"
    FOREIGN_KEY = "foreign_key"
    OTHER = "other"


_SQLSTATE = {"23505": ErrorKind.UNIQUE, "23503": ErrorKind.FOREIGN_KEY}
_MYSQL_ERRNO = {1062: ErrorKind.UNIQUE, 1451: ErrorKind.FOREIGN_KEY, 1452: ErrorKind.FOREIGN_KEY}
_SQLITE_NAMES = {
    "SQLITE_CONSTRAINT_UNIQUE": ErrorKind.UNIQUE,
    "SQLITE_CONSTRAINT_PRIMARYKEY": ErrorKind.UNIQUE,
    "SQLITE_CONSTRAINT_FOREIGNKEY": ErrorKind.FOREIGN_KEY,
}


def classify_integrity_error(exc):
    """Map a DBAPI integrity error to an ErrorKind using driver error codes."""
    orig = getattr(exc, "orig", None) or exc

    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate:
        return _SQLSTATE.get(sqlstate, ErrorKind.OTHER)

    sqlite_name = getattr(orig, "sqlite_errorname", None)
    if sqlite_name:
        return _SQLITE_NAMES.get(sqlite_name, ErrorKind.OTHER)

    args = getattr(orig, "args", ())
    if args and isinstance(args[0], int):
        return _MYSQL_ERRNO.get(args[0], ErrorKind.OTHER)

    # drivers that expose no code at all
    text = str(orig).lower()
    if "unique" in text or "duplicate" in text:
        return ErrorKind.UNIQUE
    if "foreign key" in text:
        return ErrorKind.FOREIGN_KEY
    return ErrorKind.OTHER


class ExecResult(NamedTuple):
    rows_affected: int
    generated_id: int = None


class Store:
    def __init__(self, session):
        self.session = session

    # ---------- reads ----------
    def query(self, statement):
        try:
            return self.session.execute(statement).all()
        except SQLAlchemyError as exc:
            self._fail(exc)

    def scalar(self, statement):
        try:
            return self.session.execute(statement).scalar()
        except SQLAlchemyError as exc:
            self._fail(exc)

    def scalars(self, statement):
        try:
            return self.session.execute(statement).scalars().all()
        except SQLAlchemyError as exc:
            self._fail(exc)

    def get(self, model, ident):
        try:
            return self.session.get(model, ident)
        except SQLAlchemyError as exc:
            self._fail(exc)

    def require(self, model, ident, message="Record not found."):
        obj = self.get(model, ident)
        if obj is None:
            raise NotFoundError(message)
        return obj

    def count(self, model):
        return self.scalar(select(func.count()).select_from(model))

    # ---------- writes ----------
    def insert(self, instance, on_unique=None, on_foreign_key=None):
        """Add one ORM row and commit; returns the store-assigned id."""
        try:
            self.session.add(instance)
            self.session.commit()
        except SQLAlchemyError as exc:
            self._fail(exc, on_unique, on_foreign_key)
        return ExecResult(1, instance.id)

    def execute(self, statement, on_unique=None, on_foreign_key=None):
        """Run one UPDATE/DELETE statement and commit."""
        try:
            result = self.session.execute(statement)
            self.session.commit()
        except SQLAlchemyError as exc:
            self._fail(exc, on_unique, on_foreign_key)
        return ExecResult(result.rowcount)

    def _fail(self, exc, on_unique=None, on_foreign_key=None):
        self.session.rollback()
        if isinstance(exc, IntegrityError):
            kind = classify_integrity_error(exc)
            if kind is ErrorKind.UNIQUE:
                raise (on_unique or ConflictError("This record already exists.")) from exc
            if kind is ErrorKind.FOREIGN_KEY:
                raise (on_foreign_key or DependencyError(
                    "This record is linked to other records. Delete those first.")) from exc
        orig = getattr(exc, "orig", None) or exc
        logger.error("store failure: %s", orig)
        raise StoreError(str(orig)) from exc
