from ..extensions import db
from .store import Store, ErrorKind, ExecResult, classify_integrity_error
from .assignments import AssignmentIndex, StudentChoice
from .enrollment import EnrollmentResolver
from .grades import GradeBook
from .pagination import Page, paginate, clamp_page
from .reports import Report, ReportRow, ReportAggregator, render_text
from .promotion import PromotionTransaction
from .fees import FeeLedger
from .records import Records
from .accounts import Accounts
from .portal import StudentPortal


def get_store():
    """Store bound to the current app context's session."""
    return Store(db.session)


__all__ = [
    "Store", "ErrorKind", "ExecResult", "classify_integrity_error", "get_store",
    "AssignmentIndex", "StudentChoice", "EnrollmentResolver", "GradeBook",
    "Page", "paginate", "clamp_page", "Report", "ReportRow", "ReportAggregator",
    "render_text", "PromotionTransaction", "FeeLedger", "Records", "Accounts",
    "StudentPortal",
]
