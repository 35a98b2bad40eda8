import secrets
from typing import Optional

from fastapi import Header

from app.config import require_env
from app.errors import UnauthorizedError


def verify_callback_token(token: Optional[str]) -> None:
    """Check Xendit's ``x-callback-token`` against XENDIT_CALLBACK_TOKEN."""
    expected = require_env("XENDIT_CALLBACK_TOKEN")
    if not token or not secrets.compare_digest(token.encode(), expected.encode()):
        raise UnauthorizedError("Invalid callback token")


def require_callback_token(
    x_callback_token: Optional[str] = Header(default=None),
) -> str:
    verify_callback_token(x_callback_token)
    return x_callback_token
