"""Error kinds handed from the records core to its callers.

Every service operation raises one of these and nothing else; raw
SQLAlchemy exceptions are converted inside ``services.store.Store``.
"""


class RecordsError(Exception):
    status_code = 500
    kind = "error"

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.kind, "message": self.message}


class ValidationError(RecordsError):
    """Rejected locally, before any store round-trip."""
    status_code = 400
    kind = "validation"


class NotFoundError(RecordsError):
    status_code = 404
    kind = "not_found"


class ConflictError(RecordsError):
    """Duplicate-key violation reported by the store."""
    status_code = 409
    kind = "conflict"


class DependencyError(RecordsError):
    """Foreign-key violation, usually a delete blocked by dependent rows."""
    status_code = 409
    kind = "dependency"


class StoreError(RecordsError):
    status_code = 500
    kind = "store"
