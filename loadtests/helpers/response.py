"""Response error extraction for load test observability.

Turns pick-session API error bodies into one-line messages:

- Pydantic request validation (422): {"detail": [{"loc": [...], "msg": "..."}]}
- Domain errors (400/404): {"error": "msg"} or {"error": {"field": ["msg", ...]}}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response

_MAX_DETAIL = 300


def _pydantic_detail(errors: list) -> str:
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", []))
        msg = err.get("msg", str(err))
        parts.append(f"{loc}: {msg}" if loc else msg)
    return " | ".join(parts)


def _domain_detail(error) -> str:
    if not isinstance(error, dict):
        return str(error)
    parts = []
    for field_name, messages in error.items():
        if isinstance(messages, list):
            messages = "; ".join(str(m) for m in messages)
        parts.append(f"{field_name}: {messages}")
    return " | ".join(parts)


def extract_error_detail(response: Response) -> str:
    """Human-readable message for a failed API call, for Locust failures and logs."""
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:_MAX_DETAIL] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:_MAX_DETAIL]
    if isinstance(body.get("detail"), list):
        return _pydantic_detail(body["detail"])
    if "error" in body:
        return _domain_detail(body["error"])
    return str(body)[:_MAX_DETAIL]
