"""Helpers for the server-rendered pages: templates, session flash and redirects."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from fastapi import Request, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from catalog.core.config import settings
from catalog.services.currency_service import convert

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def format_money(amount: float) -> str:
    return f"{amount:.2f}"


def usd_to_eur(amount: float) -> str:
    return format_money(convert(amount, "usd", "eur"))


templates.env.filters["money"] = format_money
templates.env.filters["eur"] = usd_to_eur
templates.env.globals["app_name"] = settings.APP_NAME

FLASH_FORM_KEY = "_form"
FLASH_STATUS_KEY = "_status"


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)


def flash_status(request: Request, message: str) -> None:
    request.session[FLASH_STATUS_KEY] = message


# signed session cookies must stay under the browsers' 4 KB limit
MAX_FLASHED_VALUE_LENGTH = 1000
MAX_FLASHED_INPUT_LENGTH = 2000


def _flashable_input(old_input: Dict[str, Any]) -> Dict[str, Any]:
    kept = {}
    budget = MAX_FLASHED_INPUT_LENGTH
    for key, value in old_input.items():
        size = len(str(value))
        if size > MAX_FLASHED_VALUE_LENGTH or size > budget:
            continue
        kept[key] = value
        budget -= size
    return kept


def redirect_back_with_errors(
    request: Request,
    url: str,
    errors: Dict[str, List[str]],
    old_input: Optional[Dict[str, Any]] = None,
) -> RedirectResponse:
    """Store field errors and the submitted input for the next render of ``url``.

    Oversized input values are not flashed; the errors always are.
    """
    request.session[FLASH_FORM_KEY] = {
        "url": url,
        "errors": errors,
        "old": _flashable_input(old_input or {}),
    }
    return redirect(url)


def pop_flash(request: Request) -> Tuple[Dict[str, List[str]], Dict[str, Any], Optional[str]]:
    """Consume the flashed form state and status message.

    Form state flashed for another page is discarded, not applied.
    """
    form = request.session.pop(FLASH_FORM_KEY, None) or {}
    status_message = request.session.pop(FLASH_STATUS_KEY, None)
    if form.get("url") != request.url.path:
        return {}, {}, status_message
    return form.get("errors", {}), form.get("old", {}), status_message
