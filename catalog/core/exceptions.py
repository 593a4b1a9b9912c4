"""Error types and the helpers that turn validation failures into field errors."""

from typing import Any, Dict, Iterable, List

from fastapi import status
from fastapi.responses import JSONResponse


class CurrencyRateNotFoundException(Exception):
    """Raised when the source currency has no entry in the rate table."""


class LoginRequired(Exception):
    """An HTML route was hit without a principal; answered with a redirect to the login page."""

    def __init__(self, next_path: str = "/products"):
        super().__init__("Login required")
        self.next_path = next_path


_SKIPPED_LOC_PARTS = ("body", "query", "path", "form")


def _field_from_loc(loc: Iterable[Any]) -> str:
    parts = [str(part) for part in loc if part not in _SKIPPED_LOC_PARTS]
    return ".".join(parts) or "body"


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _format_bound(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _message_for(field: str, error: Dict[str, Any]) -> str:
    label = field.replace("_", " ")
    error_type = error.get("type", "")
    ctx = error.get("ctx") or {}

    if error_type == "missing" or _is_blank(error.get("input")):
        return f"The {label} field is required."
    if error_type == "string_too_short":
        return f"The {label} field must be at least {ctx.get('min_length')} characters."
    if error_type == "string_too_long":
        return f"The {label} field must not be greater than {ctx.get('max_length')} characters."
    if error_type == "string_type":
        return f"The {label} field must be a string."
    if error_type in ("float_parsing", "float_type", "finite_number"):
        return f"The {label} field must be a number."
    if error_type == "greater_than_equal":
        return f"The {label} field must be at least {_format_bound(ctx.get('ge'))}."
    if error_type == "less_than_equal":
        return f"The {label} field must not be greater than {_format_bound(ctx.get('le'))}."
    if error_type == "value_error" and field == "email":
        return f"The {label} field must be a valid email address."
    return error.get("msg", "Invalid value.")


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> Dict[str, List[str]]:
    """Group pydantic error dicts by field name.

    Only invalid fields appear in the result; each maps to a list of
    human readable messages.
    """
    formatted: Dict[str, List[str]] = {}
    for error in errors:
        field = _field_from_loc(error.get("loc", ()))
        formatted.setdefault(field, []).append(_message_for(field, error))
    return formatted


def validation_summary(errors: Dict[str, List[str]]) -> str:
    messages = [message for field_messages in errors.values() for message in field_messages]
    if not messages:
        return "The given data was invalid."
    summary = messages[0]
    if len(messages) > 1:
        others = len(messages) - 1
        summary += f" (and {others} more error{'s' if others > 1 else ''})"
    return summary


def validation_error_response(errors: Dict[str, List[str]]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"message": validation_summary(errors), "errors": errors},
    )
