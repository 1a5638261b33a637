from ..extensions import db

class SchoolClass(db.Model):
    __tablename__ = "classes"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), unique=True, nullable=False)
    grade_level = db.Column(db.String(32), nullable=False)
    fee = db.Column(db.Integer, nullable=False, default=0)
    __table_args__ = (
        db.CheckConstraint("fee >= 0", name="ck_class_fee_non_negative"),
    )

    students = db.relationship("Student", back_populates="school_class",
                               passive_deletes="all")
    assignments = db.relationship("ClassAssignment", back_populates="school_class",
                                  passive_deletes="all")

class Subject(db.Model):
    __tablename__ = "subjects"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), unique=True, nullable=False)

class ClassAssignment(db.Model):
    __tablename__ = "class_assignments"
    id = db.Column(db.Integer, primary_key=True)
    class_id = db.Column(db.Integer, db.ForeignKey("classes.id"), nullable=False)
    teacher_id = db.Column(db.Integer, db.ForeignKey("teachers.id"), nullable=False)
    subject_id = db.Column(db.Integer, db.ForeignKey("subjects.id"), nullable=False)
    __table_args__ = (
        db.UniqueConstraint("class_id", "teacher_id", "subject_id",
                            name="uq_class_teacher_subject"),
    )

    school_class = db.relationship("SchoolClass", back_populates="assignments")
    teacher = db.relationship("Teacher", back_populates="assignments")
    subject = db.relationship("Subject")
