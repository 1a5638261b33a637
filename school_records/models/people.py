from ..extensions import db

class Student(db.Model):
    __tablename__ = "students"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    grade_level = db.Column(db.String(32), nullable=False)
    # authoritative current class; enrollments keep the history
    class_id = db.Column(db.Integer, db.ForeignKey("classes.id"))
    status = db.Column(db.String(16), nullable=False, default="active")

    school_class = db.relationship("SchoolClass", back_populates="students")
    enrollments = db.relationship("Enrollment", back_populates="student",
                                  passive_deletes="all")

class Teacher(db.Model):
    __tablename__ = "teachers"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    subject = db.Column(db.String(100))     # legacy free-text label

    assignments = db.relationship("ClassAssignment", back_populates="teacher",
                                  passive_deletes="all")
