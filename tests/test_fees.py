from datetime import date
from decimal import Decimal

import pytest

from school_records.errors import ConflictError, NotFoundError, ValidationError
from school_records.models import Fee
from school_records.services import FeeLedger
from school_records.services import pagination


class ExplodingStore:
    """Fails the test if the ledger reaches the store."""

    def __getattr__(self, name):
        raise AssertionError(f"store.{name} called")


@pytest.mark.parametrize("due,paid", [
    (100, 150), (-1, 0), (100, -5), ("ten", 5), ("", 5), ("10.005", 0), (100, "0.001"),
])
def test_invalid_amounts_never_reach_store(due, paid):
    with pytest.raises(ValidationError):
        FeeLedger(ExplodingStore()).record(1, 1, "Term 1", due, paid)


def test_paid_over_due_message():
    with pytest.raises(ValidationError) as exc:
        FeeLedger(ExplodingStore()).record(1, 1, "Term 1", 100, 150)
    assert exc.value.message == "Amount Paid cannot exceed Amount Due."


def test_record_sets_payment_date_only_when_paid(store, school):
    ledger = FeeLedger(store)
    paid = ledger.record(school.alice, school.c5a, "Term 1", "100", "40.50")
    unpaid = ledger.record(school.bob, school.c5a, "Term 1", 100, 0)

    view = ledger.get(paid)
    assert view["date_last_paid"] == date.today()
    assert view["balance"] == Decimal("59.50")
    assert ledger.get(unpaid)["date_last_paid"] is None
    assert ledger.get(unpaid)["balance"] == Decimal("100")


def test_update_to_zero_paid_clears_date(store, school):
    ledger = FeeLedger(store)
    fid = ledger.record(school.alice, school.c5a, "Term 1", 100, 100)
    assert ledger.get(fid)["date_last_paid"] == date.today()

    ledger.update(fid, school.alice, school.c5a, "Term 1", 100, 0)
    view = ledger.get(fid)
    assert view["date_last_paid"] is None
    assert view["balance"] == Decimal("100")


def test_balance_is_not_stored(store):
    assert "balance" not in Fee.__table__.columns


def test_duplicate_fee_is_conflict(store, school):
    ledger = FeeLedger(store)
    ledger.record(school.alice, school.c5a, "Term 1", 100, 10)
    with pytest.raises(ConflictError) as exc:
        ledger.record(school.alice, school.c5a, "Term 1", 200, 20)
    assert exc.value.message == "A fee record for this student, class, and term already exists."


def test_update_and_delete_unknown_fee(store, school):
    ledger = FeeLedger(store)
    with pytest.raises(NotFoundError):
        ledger.update(404, school.alice, school.c5a, "Term 1", 10, 0)
    with pytest.raises(NotFoundError):
        ledger.delete(404)


def test_invalid_student_is_validation_error(store, school):
    with pytest.raises(ValidationError):
        FeeLedger(store).record(999, school.c5a, "Term 1", 10, 0)


def test_fee_listing_and_student_view(store, school):
    ledger = FeeLedger(store)
    ledger.record(school.alice, school.c5a, "Term 2", 100, 25)
    ledger.record(school.alice, school.c5a, "Term 1", 100, 100)
    ledger.record(school.carol, school.c6a, "Term 1", 120, 0)

    page = pagination.list_fees(store, 1, 20)
    assert page.total_count == 3
    for row in page.rows:
        assert row["balance"] == row["amount_due"] - row["amount_paid"]

    mine = ledger.for_student(school.alice)
    assert [r["term"] for r in mine] == ["Term 1", "Term 2"]
    assert [r["balance"] for r in mine] == [Decimal("0"), Decimal("75")]

    ledger.delete(mine[0]["id"])
    assert len(ledger.for_student(school.alice)) == 1


def test_amount_precision_is_two_places(store, school):
    with pytest.raises(ValidationError) as exc:
        FeeLedger(ExplodingStore()).record(1, 1, "Term 1", "10.005", 0)
    assert exc.value.message == "Amount Due cannot have more than two decimal places."

    fid = FeeLedger(store).record(school.alice, school.c5a, "Term 1", "10.50", "10.000")
    assert FeeLedger(store).get(fid)["amount_paid"] == Decimal("10.00")
