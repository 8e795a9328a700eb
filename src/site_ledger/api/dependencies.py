"""Shared FastAPI dependencies."""

from fastapi import HTTPException, Request, status

from site_ledger.config import parse_site_ids


def require_known_site(site_id: str, request: Request) -> str:
    """Reject sites outside the configured allow-list."""
    allowed = parse_site_ids(request.app.state.container.settings.site_ids)
    if allowed is not None and site_id not in allowed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return site_id
