from flask import jsonify, request
from flask_login import login_required

from ...services import (Accounts, FeeLedger, PromotionTransaction, ReportAggregator, Records,
                         get_store)
from ...services import pagination
from .. import paged, report_response, request_data
from ..auth.routes import role_required
from . import bp


@bp.before_request
@login_required
@role_required("admin")
def require_admin():
    pass


# ---------- Students ----------
@bp.get("/students")
def students():
    return jsonify(paged(pagination.list_students))

@bp.post("/students")
def create_student():
    f = request_data()
    sid = Records(get_store()).create_student(
        f.get("name"), f.get("grade_level"), f.get("class_id"), f.get("status") or "active")
    return jsonify({"id": sid, "message": "Student added"}), 201

@bp.post("/students/<int:sid>/update")
def update_student(sid):
    f = request_data()
    Records(get_store()).update_student(
        sid, f.get("name"), f.get("grade_level"), f.get("class_id"), f.get("status") or "active")
    return jsonify({"message": "Student updated"})

@bp.post("/students/<int:sid>/delete")
def delete_student(sid):
    Records(get_store()).delete_student(sid)
    return jsonify({"message": "Student deleted"})

# ---------- Teachers ----------
@bp.get("/teachers")
def teachers():
    return jsonify(paged(pagination.list_teachers))

@bp.post("/teachers")
def create_teacher():
    f = request_data()
    tid = Records(get_store()).create_teacher(f.get("name"), f.get("subject"))
    return jsonify({"id": tid, "message": "Teacher added"}), 201

@bp.post("/teachers/<int:tid>/update")
def update_teacher(tid):
    f = request_data()
    Records(get_store()).update_teacher(tid, f.get("name"), f.get("subject"))
    return jsonify({"message": "Teacher updated"})

@bp.post("/teachers/<int:tid>/delete")
def delete_teacher(tid):
    Records(get_store()).delete_teacher(tid)
    return jsonify({"message": "Teacher deleted"})

# ---------- Classes ----------
@bp.get("/classes")
def classes():
    return jsonify(paged(pagination.list_classes))

@bp.post("/classes")
def create_class():
    f = request_data()
    cid = Records(get_store()).create_class(f.get("name"), f.get("grade_level"), f.get("fee"))
    return jsonify({"id": cid, "message": "Class added"}), 201

@bp.post("/classes/<int:cid>/update")
def update_class(cid):
    f = request_data()
    Records(get_store()).update_class(cid, f.get("name"), f.get("grade_level"), f.get("fee"))
    return jsonify({"message": "Class updated"})

@bp.post("/classes/<int:cid>/delete")
def delete_class(cid):
    Records(get_store()).delete_class(cid)
    return jsonify({"message": "Class deleted"})

# ---------- Subjects ----------
@bp.get("/subjects")
def subjects():
    return jsonify(paged(pagination.list_subjects))

@bp.post("/subjects")
def create_subject():
    sid = Records(get_store()).create_subject(request_data().get("name"))
    return jsonify({"id": sid, "message": "Subject added"}), 201

@bp.post("/subjects/<int:sid>/update")
def update_subject(sid):
    Records(get_store()).update_subject(sid, request_data().get("name"))
    return jsonify({"message": "Subject updated"})

@bp.post("/subjects/<int:sid>/delete")
def delete_subject(sid):
    Records(get_store()).delete_subject(sid)
    return jsonify({"message": "Subject deleted"})

# ---------- Class assignments ----------
@bp.get("/assignments")
def assignments():
    return jsonify(paged(pagination.list_assignments))

@bp.post("/assignments")
def create_assignment():
    f = request_data()
    aid = Records(get_store()).create_assignment(
        f.get("class_id"), f.get("teacher_id"), f.get("subject_id"))
    return jsonify({"id": aid, "message": "Assignment added"}), 201

@bp.post("/assignments/<int:aid>/delete")
def delete_assignment(aid):
    Records(get_store()).delete_assignment(aid)
    return jsonify({"message": "Assignment deleted"})

# ---------- Enrollments ----------
@bp.get("/enrollments")
def enrollments():
    return jsonify(paged(pagination.list_enrollments))

@bp.post("/enrollments")
def create_enrollment():
    f = request_data()
    eid = Records(get_store()).enroll(f.get("student_id"), f.get("class_id"))
    return jsonify({"id": eid, "message": "Student enrolled"}), 201

@bp.post("/enrollments/<int:eid>/delete")
def delete_enrollment(eid):
    Records(get_store()).delete_enrollment(eid)
    return jsonify({"message": "Enrollment deleted"})

@bp.get("/grades")
def grades():
    return jsonify(paged(pagination.list_grades))

# ---------- Fees ----------
@bp.get("/fees")
def fees():
    return jsonify(paged(pagination.list_fees))

@bp.post("/fees")
def create_fee():
    f = request_data()
    fid = FeeLedger(get_store()).record(
        f.get("student_id"), f.get("class_id"), f.get("term"),
        f.get("amount_due"), f.get("amount_paid"))
    return jsonify({"id": fid, "message": "Fee record added"}), 201

@bp.get("/fees/<int:fid>")
def fee_detail(fid):
    return jsonify(FeeLedger(get_store()).get(fid))

@bp.post("/fees/<int:fid>/update")
def update_fee(fid):
    f = request_data()
    FeeLedger(get_store()).update(
        fid, f.get("student_id"), f.get("class_id"), f.get("term"),
        f.get("amount_due"), f.get("amount_paid"))
    return jsonify({"message": "Fee record updated"})

@bp.post("/fees/<int:fid>/delete")
def delete_fee(fid):
    FeeLedger(get_store()).delete(fid)
    return jsonify({"message": "Fee record deleted"})

# ---------- Promotion ----------
@bp.post("/promotions")
def promote():
    f = request_data()
    moved = PromotionTransaction(get_store()).promote(f.get("from_class_id"), f.get("to_class_id"))
    return jsonify({"promoted": moved,
                    "message": f"{moved} student(s) promoted successfully."})

# ---------- Reports ----------
@bp.get("/reports")
def report():
    store = get_store()
    a = request.args
    result = ReportAggregator(store).generate(a.get("class_id"), a.get("subject_id"), a.get("term"))
    return report_response(store, result)

@bp.get("/reports/classes")
def report_classes():
    return jsonify(ReportAggregator(get_store()).class_options())

@bp.get("/reports/subjects")
def report_subjects():
    return jsonify(ReportAggregator(get_store()).subject_options(request.args.get("class_id")))

@bp.get("/reports/terms")
def report_terms():
    a = request.args
    return jsonify(ReportAggregator(get_store()).term_options(a.get("class_id"), a.get("subject_id")))

# ---------- Pickers & accounts ----------
@bp.get("/choices/<kind>")
def choices(kind):
    return jsonify(Records(get_store()).choices(kind))

@bp.post("/users")
def create_user():
    f = request_data()
    uid = Accounts(get_store()).create_user(
        f.get("username"), f.get("password"), f.get("role"),
        teacher_id=f.get("teacher_id"), student_id=f.get("student_id"))
    return jsonify({"id": uid, "message": "User created"}), 201
