from fastapi import Query

from agenda.core.db import get_session

__all__ = ["get_session", "provider_scope"]


def provider_scope(provider_id: int = Query(..., gt=0)) -> int:
    """Provider the request acts for. There is no session auth, so callers name it explicitly."""
    return provider_id
