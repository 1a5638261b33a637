from flask import Response, current_app, jsonify, request

from ..models import SchoolClass, Subject
from ..services import clamp_page, get_store, render_text


def request_data():
    """Form fields or a JSON body, whichever the caller sent."""
    return request.get_json(silent=True) or request.form


def page_args():
    page = max(request.args.get("page", type=int) or 1, 1)
    per = request.args.get("per_page", type=int) or current_app.config.get("PAGE_SIZE", 20)
    return page, min(max(per, 1), 100)


def paged(lister):
    store = get_store()
    page, per = page_args()
    result = lister(store, page, per)
    # clamp past-the-end requests back onto the last page
    if result.total_pages and page > result.total_pages:
        result = lister(store, clamp_page(page, result.total_pages), per)
    return result.to_dict()


def report_response(store, report):
    if request.args.get("format") != "text":
        return jsonify(report.to_dict())
    school_class = store.require(SchoolClass, report.class_id, "Class not found.")
    subject = store.require(Subject, report.subject_id, "Subject not found.")
    return Response(render_text(report, school_class.name, subject.name), mimetype="text/plain")
