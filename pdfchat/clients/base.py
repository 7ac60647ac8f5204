"""Shared HTTP plumbing for the external AI service clients."""

import httpx

ERROR_FIELDS = ("error", "detail", "message")


def auth_headers(api_key: str | None) -> dict[str, str]:
    return {"Authorization": f"Bearer {api_key}"} if api_key else {}


def describe_http_error(response: httpx.Response) -> str:
    """Build a readable message for a non-success response.

    Uses the body's `error`, `detail`, or `message` field when the service
    sent one, falling back to the status code.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for field in ERROR_FIELDS:
            value = body.get(field)
            if isinstance(value, str) and value.strip():
                return value.strip()
            if isinstance(value, dict) and isinstance(value.get("message"), str):
                return value["message"]

    return f"HTTP {response.status_code}"
