"""Error kinds that may cross the API boundary.

Anything raised inside the engine or the store is translated into exactly one
of these before it reaches a caller.
"""
from typing import Any, Dict, Iterable, Optional


class ApiError(Exception):
    status = 500
    code = "InternalError"
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "code": self.code}


class MissingParameters(ApiError):
    status = 400
    code = "MissingParameters"
    message = "Missing input parameters"

    def __init__(self, missing: Iterable[str] = ()):
        super().__init__()
        self.missing = list(missing)

    def to_dict(self) -> Dict[str, Any]:
        out = super().to_dict()
        out["missing"] = self.missing
        return out


class StoreUnavailable(ApiError):
    status = 501
    code = "StoreUnavailable"
    message = "Database not configured"


class InternalError(ApiError):
    pass
