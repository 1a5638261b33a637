from functools import wraps

from flask import abort, jsonify
from flask_login import current_user, login_required, login_user, logout_user

from ...services import Accounts, get_store
from .. import request_data
from . import bp


def role_required(*roles):
    def deco(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            if not current_user.is_authenticated or current_user.role not in roles:
                abort(403)
            return f(*args, **kwargs)
        return wrapper
    return deco


@bp.post("/login")
def login():
    data = request_data()
    u = Accounts(get_store()).authenticate(
        data.get("username"), data.get("password"), data.get("role"))
    if u is None:
        return jsonify({"error": "unauthorized", "message": "Incorrect username or password"}), 401
    login_user(u)
    return jsonify({"id": u.id, "username": u.username, "role": u.role,
                    "teacher_id": u.teacher_id, "student_id": u.student_id})


@bp.get("/logout")
@login_required
def logout():
    logout_user()
    return jsonify({"message": "Logged out"})


@bp.post("/password")
@login_required
def change_password():
    data = request_data()
    Accounts(get_store()).change_password(
        current_user.id, data.get("old_password"), data.get("new_password"),
        data.get("confirm_password"))
    return jsonify({"message": "Password updated"})
