import logging

from sqlalchemy import update

from ..errors import ValidationError
from ..models import SchoolClass, Student
from .validators import parse_id

logger = logging.getLogger(__name__)


class PromotionTransaction:
    """Moves every current member of one class into another in one statement.

    Only ``Student.class_id`` changes; enrollments, grades and assignments
    stay attached to the old class.
    """

    def __init__(self, store):
        self.store = store

    def promote(self, from_class_id, to_class_id):
        message = "Please select both a 'From' class and a 'To' class."
        from_class_id = parse_id(from_class_id, message)
        to_class_id = parse_id(to_class_id, message)
        if from_class_id == to_class_id:
            raise ValidationError("'From' class and 'To' class cannot be the same.")
        for class_id in (from_class_id, to_class_id):
            self.store.require(SchoolClass, class_id,
                               "Invalid class selections. Please select valid classes.")

        result = self.store.execute(
            update(Student)
            .where(Student.class_id == from_class_id)
            .values(class_id=to_class_id)
            .execution_options(synchronize_session=False))
        logger.info("promoted %d student(s) from class %s to class %s",
                    result.rows_affected, from_class_id, to_class_id)
        return result.rows_affected
