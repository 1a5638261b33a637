from flask import abort, jsonify, request
from flask_login import current_user, login_required

from ...services import AssignmentIndex, GradeBook, ReportAggregator, get_store
from .. import report_response, request_data
from ..auth.routes import role_required
from . import bp


def get_current_teacher_id():
    if current_user.teacher_id is None:
        abort(403)
    return current_user.teacher_id


@bp.before_request
@login_required
@role_required("teacher")
def require_teacher():
    pass


@bp.get("/assignments")
def my_assignments():
    index = AssignmentIndex(get_store())
    tid = get_current_teacher_id()
    pairs = sorted(index.assignments_for(tid))
    return jsonify({
        "assignments": [{"class_id": c, "subject_id": s} for c, s in pairs],
        "classes": sorted(index.classes_for(tid)),
        "subjects": sorted(index.subjects_for(tid)),
    })


@bp.get("/students")
def my_students():
    subject_id = request.args.get("subject_id", type=int)
    choices = AssignmentIndex(get_store()).students_for(get_current_teacher_id(), subject_id)
    return jsonify([c._asdict() for c in choices])


@bp.get("/grades")
def my_grades():
    return jsonify(GradeBook(get_store()).grades_for_teacher(get_current_teacher_id()))


@bp.post("/grades")
def add_grade():
    f = request_data()
    gid = GradeBook(get_store()).record(
        get_current_teacher_id(), f.get("student_id"), f.get("subject_id"),
        f.get("term"), f.get("score"), f.get("comments"))
    return jsonify({"id": gid, "message": "Grade added successfully."}), 201


@bp.post("/grades/<int:gid>/update")
def update_grade(gid):
    f = request_data()
    GradeBook(get_store()).update(
        gid, get_current_teacher_id(), f.get("student_id"), f.get("subject_id"),
        f.get("term"), f.get("score"), f.get("comments"))
    return jsonify({"message": "Grade updated successfully."})


@bp.post("/grades/<int:gid>/delete")
def delete_grade(gid):
    GradeBook(get_store()).delete(gid, get_current_teacher_id())
    return jsonify({"message": "Grade deleted successfully."})


@bp.get("/terms")
def terms():
    a = request.args
    return jsonify(GradeBook(get_store()).terms(a.get("student_id", type=int),
                                                a.get("subject_id", type=int),
                                                get_current_teacher_id()))


@bp.get("/reports")
def report():
    store = get_store()
    a = request.args
    result = ReportAggregator(store).generate(
        a.get("class_id"), a.get("subject_id"), a.get("term"), teacher_id=get_current_teacher_id())
    return report_response(store, result)


@bp.get("/reports/classes")
def report_classes():
    return jsonify(ReportAggregator(get_store()).class_options(get_current_teacher_id()))


@bp.get("/reports/subjects")
def report_subjects():
    return jsonify(ReportAggregator(get_store()).subject_options(
        request.args.get("class_id"), get_current_teacher_id()))


@bp.get("/reports/terms")
def report_terms():
    a = request.args
    return jsonify(ReportAggregator(get_store()).term_options(
        a.get("class_id"), a.get("subject_id"), get_current_teacher_id()))
