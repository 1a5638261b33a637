import logging
from datetime import date

from sqlalchemy import delete, select, update

from ..errors import ConflictError, NotFoundError, ValidationError
from ..models import Fee, SchoolClass, Student
from .pagination import fee_row
from .validators import parse_amount, parse_id, required_text

logger = logging.getLogger(__name__)

DUPLICATE_FEE = "A fee record for this student, class, and term already exists."
MISSING_FIELDS = "Please select a Student, Class, Term, and enter Amount Due and Amount Paid."
INVALID_SELECTION = "Invalid selections. Please select a valid Student and Class."


def check_amounts(amount_due, amount_paid):
    amount_due = parse_amount(amount_due, "Amount Due")
    amount_paid = parse_amount(amount_paid, "Amount Paid")
    if amount_due < 0 or amount_paid < 0:
        raise ValidationError("Amounts cannot be negative.")
    if amount_paid > amount_due:
        raise ValidationError("Amount Paid cannot exceed Amount Due.")
    return amount_due, amount_paid


def last_paid_date(amount_paid, today=None):
    # only a positive payment stamps the date; zero clears it
    return (today or date.today()) if amount_paid > 0 else None


class FeeLedger:
    def __init__(self, store):
        self.store = store

    def _clean(self, student_id, class_id, term, amount_due, amount_paid):
        student_id = parse_id(student_id, MISSING_FIELDS)
        class_id = parse_id(class_id, MISSING_FIELDS)
        term = required_text(term, MISSING_FIELDS)
        amount_due, amount_paid = check_amounts(amount_due, amount_paid)
        return dict(student_id=student_id, class_id=class_id, term=term,
                    amount_due=amount_due, amount_paid=amount_paid,
                    date_last_paid=last_paid_date(amount_paid))

    def record(self, student_id, class_id, term, amount_due, amount_paid):
        values = self._clean(student_id, class_id, term, amount_due, amount_paid)
        result = self.store.insert(Fee(**values),
                                   on_unique=ConflictError(DUPLICATE_FEE),
                                   on_foreign_key=ValidationError(INVALID_SELECTION))
        logger.info("fee %s recorded for student %s (%s): due %s, paid %s",
                    result.generated_id, values["student_id"], values["term"],
                    values["amount_due"], values["amount_paid"])
        return result.generated_id

    def update(self, fee_id, student_id, class_id, term, amount_due, amount_paid):
        fee_id = parse_id(fee_id, "Please select a fee record.")
        values = self._clean(student_id, class_id, term, amount_due, amount_paid)
        result = self.store.execute(
            update(Fee).where(Fee.id == fee_id).values(**values),
            on_unique=ConflictError(DUPLICATE_FEE),
            on_foreign_key=ValidationError(INVALID_SELECTION))
        if result.rows_affected == 0:
            raise NotFoundError(f"Fee record with ID {fee_id} not found.")
        logger.info("fee %s updated: due %s, paid %s", fee_id,
                    values["amount_due"], values["amount_paid"])

    def delete(self, fee_id):
        fee_id = parse_id(fee_id, "Please select a fee record.")
        result = self.store.execute(delete(Fee).where(Fee.id == fee_id))
        if result.rows_affected == 0:
            raise NotFoundError(f"Fee record with ID {fee_id} not found.")
        logger.info("fee %s deleted", fee_id)

    def _select(self):
        return (select(Fee.id, Fee.student_id, Student.name.label("student_name"),
                       Fee.class_id, SchoolClass.name.label("class_name"), Fee.term,
                       Fee.amount_due, Fee.amount_paid, Fee.date_last_paid)
                .join(Student, Fee.student_id == Student.id)
                .join(SchoolClass, Fee.class_id == SchoolClass.id))

    def get(self, fee_id):
        fee_id = parse_id(fee_id, "Please select a fee record.")
        rows = self.store.query(self._select().where(Fee.id == fee_id))
        if not rows:
            raise NotFoundError(f"Fee record with ID {fee_id} not found.")
        return fee_row(rows[0])

    def for_student(self, student_id):
        stmt = (self._select().where(Fee.student_id == student_id)
                .order_by(SchoolClass.name, Fee.term))
        return [fee_row(r) for r in self.store.query(stmt)]
