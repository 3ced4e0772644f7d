from typing import Any, Dict, List, Optional


class StorefrontError(Exception):
    """Base for errors the API boundary knows how to turn into a response."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Dict[str, Any]]] = None):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)


class ValidationError(StorefrontError):
    status_code = 400
    default_message = "Invalid request"


class UnauthorizedError(StorefrontError):
    status_code = 401
    default_message = "Unauthorized"


class PaymentDeclinedError(StorefrontError):
    status_code = 402
    default_message = "Payment declined"


class ForbiddenError(StorefrontError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(StorefrontError):
    status_code = 404
    default_message = "Not found"


class ConflictError(StorefrontError):
    status_code = 409
    default_message = "Conflict"


class InternalError(StorefrontError):
    pass


def field_errors(pydantic_errors) -> List[Dict[str, Any]]:
    """Flatten pydantic error dicts into [{"field": "minPrice", "message": "..."}]."""
    out = []
    for err in pydantic_errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        out.append({"field": ".".join(loc), "message": err.get("msg", "invalid value")})
    return out
