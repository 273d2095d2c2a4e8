# app/auth.py
import hmac
from typing import Optional

from fastapi import Request

from .exceptions import AuthenticationError

API_KEY_HEADER = "x-api-key"


def check_api_key(presented: Optional[bytes], expected: Optional[str]) -> None:
    """
    Raise AuthenticationError unless the raw header bytes equal the UTF-8
    encoding of `expected`.
    """
    if not presented or not expected:
        raise AuthenticationError()
    if not hmac.compare_digest(presented, expected.encode("utf-8")):
        raise AuthenticationError()


def raw_header(request: Request, name: str) -> Optional[bytes]:
    # Starlette decodes header values as latin-1; compare the bytes as sent
    key = name.lower().encode("latin-1")
    for k, v in request.headers.raw:
        if k.lower() == key:
            return v
    return None


async def require_api_key(request: Request) -> None:
    """Dependency for mutating routes. Runs before body validation."""
    check_api_key(raw_header(request, API_KEY_HEADER), request.app.state.settings.API_KEY)
