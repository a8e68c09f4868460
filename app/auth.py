"""API key guard shared by the /supergoals and /reminders routers."""

from fastapi import Header, HTTPException

from app.config import settings


def _presented_key(x_api_key: str | None, authorization: str | None) -> str | None:
    if x_api_key is not None:
        return x_api_key
    if authorization and authorization.startswith("Bearer "):
        return authorization[7:].strip()
    return None


async def verify_api_key(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    authorization: str | None = Header(default=None),
) -> str:
    """Reject Super Goal and reminder calls that do not carry settings.api_key.

    The key may come as X-API-Key or as a Bearer token. Leaving API_KEY
    unset turns the guard off, e.g. for a local single-user client.
    """
    if settings.api_key is None:
        return ""

    key = _presented_key(x_api_key, authorization)
    if key != settings.api_key:
        raise HTTPException(status_code=401, detail="Invalid or missing API key")
    return key
