import logging

from sqlalchemy import select, update
from werkzeug.security import check_password_hash, generate_password_hash

from ..errors import ConflictError, ValidationError
from ..models import ROLES, User
from .validators import parse_id, required_text

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def normalize_role(role):
    role = (role or "").strip().lower()
    if role not in ROLES:
        raise ValidationError("Role must be one of: " + ", ".join(ROLES) + ".")
    return role


class Accounts:
    def __init__(self, store):
        self.store = store

    def create_user(self, username, password, role, teacher_id=None, student_id=None):
        username = required_text(username, "Please enter username and password.")
        password = required_text(password, "Please enter username and password.")
        role = normalize_role(role)
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError("Password must be at least 6 characters")
        if role == "teacher":
            teacher_id = parse_id(teacher_id, "A teacher account must be linked to a teacher.")
        if role == "student":
            student_id = parse_id(student_id, "A student account must be linked to a student.")

        user = User(username=username, password_hash=generate_password_hash(password), role=role,
                    teacher_id=teacher_id if role == "teacher" else None,
                    student_id=student_id if role == "student" else None)
        result = self.store.insert(
            user,
            on_unique=ConflictError("A user with this username already exists."),
            on_foreign_key=ValidationError("The linked teacher or student does not exist."))
        logger.info("created %s account %r", role, username)
        return result.generated_id

    def authenticate(self, username, password, role):
        """Return the matching user, or None when the credentials or role do not match."""
        username = required_text(username, "Please enter username, password, and select a role.")
        required_text(password, "Please enter username, password, and select a role.")
        role = normalize_role(role)
        user = self.store.scalar(select(User).where(User.username == username))
        if user is None or user.role != role or not check_password_hash(user.password_hash, password):
            logger.warning("failed login for %r as %s", username, role)
            return None
        return user

    def change_password(self, user_id, old, new, confirm):
        user = self.store.require(User, user_id, "User not found.")
        if not check_password_hash(user.password_hash, old or ""):
            raise ValidationError("Current password is incorrect")
        if len(new or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError("New password must be at least 6 characters")
        if new != confirm:
            raise ValidationError("Passwords do not match")
        self.store.execute(update(User).where(User.id == user.id)
                           .values(password_hash=generate_password_hash(new)))
        logger.info("password changed for user %s", user.id)
