# app/core/auth.py
"""
Shared-secret check for mutating blog and taxonomy requests.
"""
import logging
import secrets
from typing import Optional

from fastapi import HTTPException

from app.core.config import settings

logger = logging.getLogger(__name__)

# Status returned on a bad `auth` value; clients of the blog API expect 408
NOT_AUTHORIZED_STATUS = 408


def verify_auth_key(auth: Optional[str], expected: Optional[str] = None) -> bool:
    """
    Compare a request's `auth` field with AUTH_KEY in constant time.

    An empty AUTH_KEY rejects every request.
    """
    expected = settings.AUTH_KEY if expected is None else expected
    if not expected or not auth:
        return False
    return secrets.compare_digest(auth.encode("utf-8"), expected.encode("utf-8"))


def require_auth_key(auth: Optional[str]) -> None:
    """
    Raise the "Not Authorized" error unless `auth` matches AUTH_KEY.

    Raises:
        HTTPException: 408 with detail "Not Authorized"
    """
    if not verify_auth_key(auth):
        logger.warning("Rejected request with invalid auth key")
        raise HTTPException(status_code=NOT_AUTHORIZED_STATUS, detail="Not Authorized")
