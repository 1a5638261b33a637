from decimal import Decimal, InvalidOperation

from ..errors import ValidationError

CENTS = Decimal("0.01")


def required_text(value, message):
    value = "" if value is None else str(value).strip()
    if not value:
        raise ValidationError(message)
    return value


def optional_text(value):
    value = "" if value is None else str(value).strip()
    return value or None


def parse_id(value, message="Invalid selection."):
    if value is None or value == "" or isinstance(value, bool):
        raise ValidationError(message)
    try:
        ident = int(value)
    except (TypeError, ValueError):
        raise ValidationError(message) from None
    if ident <= 0:
        raise ValidationError(message)
    return ident


def parse_score(value):
    if value is None or (isinstance(value, str) and not value.strip()) or isinstance(value, bool):
        raise ValidationError("Please enter a Score.")
    try:
        score = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Invalid score format. Please enter a valid number.") from None
    if score != score or not (0 <= score <= 100):
        raise ValidationError("Score must be between 0 and 100.")
    return score


def parse_amount(value, label="Amount"):
    if value is None or (isinstance(value, str) and not value.strip()) or isinstance(value, bool):
        raise ValidationError(f"Please enter {label}.")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError("Invalid amount format. Please enter valid numbers "
                              "for Amount Due and Amount Paid.") from None
    if not amount.is_finite():
        raise ValidationError("Invalid amount format. Please enter valid numbers "
                              "for Amount Due and Amount Paid.")
    try:
        exact = amount == amount.quantize(CENTS)
    except InvalidOperation:
        exact = False
    if not exact:
        raise ValidationError(f"{label} cannot have more than two decimal places.")
    return amount


def parse_class_fee(value):
    if value is None or (isinstance(value, str) and not value.strip()) or isinstance(value, bool):
        raise ValidationError("Please fill in Class Name, Grade Level, and Fee.")
    try:
        fee = int(str(value).strip())
    except ValueError:
        raise ValidationError("Invalid Fee format. Please enter a valid number.") from None
    if fee < 0:
        raise ValidationError("Fee cannot be negative.")
    return fee


def parse_positive_int(value, message):
    if isinstance(value, bool):
        raise ValidationError(message)
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(message) from None
    if number < 1:
        raise ValidationError(message)
    return number
