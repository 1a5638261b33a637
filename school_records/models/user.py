from flask_login import UserMixin
from ..extensions import db

ROLES = ("admin", "teacher", "student")

class User(UserMixin, db.Model):
    __tablename__ = "users"
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.String(16), nullable=False)
    teacher_id = db.Column(db.Integer, db.ForeignKey("teachers.id"))
    student_id = db.Column(db.Integer, db.ForeignKey("students.id"))
    __table_args__ = (
        db.CheckConstraint("role IN ('admin', 'teacher', 'student')", name="ck_user_role"),
    )

    teacher = db.relationship("Teacher", backref=db.backref("auth", uselist=False))
    student = db.relationship("Student", backref=db.backref("auth", uselist=False))
