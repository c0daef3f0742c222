"""Draft-mode activation endpoint."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse, RedirectResponse, Response
from slowapi import Limiter
from slowapi.util import get_remote_address

from contentful_blog.config import Settings, get_settings
from contentful_blog.services.draft_mode import (
    enable_draft_mode,
    is_valid_secret,
    safe_redirect_target,
)

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter(prefix="/api", tags=["Draft mode"])


@router.get(
    "/draft",
    summary="Enable draft mode",
    description=(
        "Checks `previewSecret` against the server's preview secret. On a match "
        "the response sets the draft-mode cookie and redirects to `redirect` "
        "(default `/`); otherwise it answers `401`."
    ),
    response_class=Response,
    responses={307: {"description": "Draft mode enabled"}, 401: {"description": "Bad secret"}},
)
@limiter.limit("10/minute")
async def enable_draft(
    request: Request,
    preview_secret: Optional[str] = Query(default=None, alias="previewSecret"),
    redirect: Optional[str] = Query(default=None),
    settings: Settings = Depends(get_settings),
) -> Response:
    if not is_valid_secret(preview_secret, settings.preview_secret):
        logger.warning("Rejected draft mode activation from %s", get_remote_address(request))
        return PlainTextResponse("Invalid Token For Preview", status_code=401)

    target = safe_redirect_target(redirect)
    if redirect and target != redirect:
        logger.warning("Refusing off-site redirect target %r", redirect)

    response = RedirectResponse(url=target, status_code=307)
    enable_draft_mode(response, settings.preview_secret)
    logger.info("Draft mode enabled", extra={"redirect": target})
    return response
