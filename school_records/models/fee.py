from ..extensions import db

class Fee(db.Model):
    __tablename__ = "fees"
    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("students.id"), nullable=False)
    class_id = db.Column(db.Integer, db.ForeignKey("classes.id"), nullable=False)
    term = db.Column(db.String(32), nullable=False)
    amount_due = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    amount_paid = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    date_last_paid = db.Column(db.Date)
    __table_args__ = (
        db.UniqueConstraint("student_id", "class_id", "term", name="uq_fee_student_class_term"),
        db.CheckConstraint("amount_due >= 0 AND amount_paid >= 0 AND amount_paid <= amount_due",
                           name="ck_fee_amounts"),
    )

    student = db.relationship("Student")
    school_class = db.relationship("SchoolClass")

    @property
    def balance(self):
        return self.amount_due - self.amount_paid
