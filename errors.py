# errors.py
from typing import Dict, List, Optional


class GatewayError(Exception):
    """Base class for every failure surfaced by the gateway or the client."""
    kind = "error"
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def to_dict(self) -> dict:
        return {"kind": self.kind, "detail": self.detail}


class ValidationError(GatewayError):
    kind = "validation"
    status_code = 422

    def __init__(self, errors: List[Dict[str, str]], detail: Optional[str] = None):
        self.errors = errors
        if detail is None:
            fields = ", ".join(e["field"] for e in errors)
            detail = f"Invalid value for: {fields}" if fields else "Invalid input"
        super().__init__(detail)

    def field_errors(self) -> Dict[str, str]:
        # First message per field
        result = {}
        for error in self.errors:
            result.setdefault(error["field"], error["message"])
        return result

    def to_dict(self) -> dict:
        return {"kind": self.kind, "detail": self.detail, "errors": self.errors}


class NotFoundError(GatewayError):
    kind = "not_found"
    status_code = 404


class StorageError(GatewayError):
    kind = "storage"
    status_code = 503


class RemoteError(GatewayError):
    """Raised by the client for transport failures and server-side failures."""

    def __init__(self, detail: str, kind: str = "transport", status_code: Optional[int] = None):
        super().__init__(detail)
        self.kind = kind
        self.status_code = status_code
