from ..extensions import db

class Enrollment(db.Model):
    __tablename__ = "enrollments"
    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("students.id"), nullable=False)
    class_id = db.Column(db.Integer, db.ForeignKey("classes.id"), nullable=False)
    __table_args__ = (
        db.UniqueConstraint("student_id", "class_id", name="uq_student_class"),
    )

    student = db.relationship("Student", back_populates="enrollments")
    school_class = db.relationship("SchoolClass")
    grades = db.relationship("Grade", back_populates="enrollment",
                             passive_deletes="all")

class Grade(db.Model):
    __tablename__ = "grades"
    id = db.Column(db.Integer, primary_key=True)
    enrollment_id = db.Column(db.Integer, db.ForeignKey("enrollments.id"), nullable=False)
    subject_id = db.Column(db.Integer, db.ForeignKey("subjects.id"), nullable=False)
    score = db.Column(db.Float, nullable=False)
    comments = db.Column(db.String(255))
    term = db.Column(db.String(32), nullable=False)      # e.g. "Term 1"
    date_recorded = db.Column(db.Date, nullable=False)
    __table_args__ = (
        db.UniqueConstraint("enrollment_id", "subject_id", "term",
                            name="uq_enrollment_subject_term"),
        db.CheckConstraint("score >= 0 AND score <= 100", name="ck_score_0_100"),
    )

    enrollment = db.relationship("Enrollment", back_populates="grades")
    subject = db.relationship("Subject")
