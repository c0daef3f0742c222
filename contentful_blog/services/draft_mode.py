"""Draft (preview) mode carried by a signed, request-scoped cookie.

There is no process-wide flag: a request is in draft mode when it presents a
``draft_mode`` cookie whose value is the HMAC of a fixed marker keyed by the
preview secret.  Enabling draft mode means handing the client that cookie.
"""

import hashlib
import hmac
from typing import Optional
from urllib.parse import urlparse

from fastapi import Request, Response

DRAFT_COOKIE = "draft_mode"
_MARKER = b"contentful-blog:draft-mode:v1"


def is_valid_secret(candidate: Optional[str], secret: str) -> bool:
    """Return *True* when *candidate* equals the configured preview *secret*.

    An unconfigured (empty) secret never matches.
    """
    if not secret or candidate is None:
        return False
    return hmac.compare_digest(candidate.encode(), secret.encode())


def draft_cookie_value(secret: str) -> str:
    return hmac.new(secret.encode(), _MARKER, hashlib.sha256).hexdigest()


def is_draft_mode(request: Request, secret: str) -> bool:
    """Return *True* when *request* carries a correctly signed draft cookie."""
    value = request.cookies.get(DRAFT_COOKIE)
    if not secret or not value:
        return False
    return hmac.compare_digest(value.encode(), draft_cookie_value(secret).encode())


def enable_draft_mode(response: Response, secret: str) -> None:
    """Attach the draft cookie to *response* for the rest of the browser session."""
    response.set_cookie(
        DRAFT_COOKIE,
        draft_cookie_value(secret),
        path="/",
        httponly=True,
        samesite="lax",
    )


def safe_redirect_target(target: Optional[str]) -> str:
    """Return *target* if it is a site-relative path, otherwise ``"/"``."""
    if not target or not target.startswith("/") or target.startswith("//"):
        return "/"
    parsed = urlparse(target)
    if parsed.scheme or parsed.netloc or "\\" in target:
        return "/"
    return target
