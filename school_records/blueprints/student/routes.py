from flask import abort, jsonify, request
from flask_login import current_user, login_required

from ...services import StudentPortal, get_store
from ..auth.routes import role_required
from . import bp


def get_portal():
    if current_user.student_id is None:
        abort(403)
    return StudentPortal(get_store(), current_user.student_id)


@bp.before_request
@login_required
@role_required("student")
def require_student():
    pass


@bp.get("/profile")
def profile():
    return jsonify(get_portal().profile())


@bp.get("/classes")
def my_classes():
    return jsonify(get_portal().classes())


@bp.get("/grades")
def my_grades():
    subject_id = request.args.get("subject_id", type=int)
    term = (request.args.get("term") or "").strip() or None
    return jsonify(get_portal().grades(subject_id, term))


@bp.get("/grades/subjects")
def grade_subjects():
    return jsonify(get_portal().subject_options())


@bp.get("/grades/terms")
def grade_terms():
    return jsonify(get_portal().term_options())


@bp.get("/fees")
def my_fees():
    return jsonify(get_portal().fees())
