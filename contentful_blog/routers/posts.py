"""Blog post endpoints consumed by the page renderers."""

import logging
from typing import List

import httpx
from fastapi import APIRouter, Depends, HTTPException

from contentful_blog.config import Settings, get_settings
from contentful_blog.dependencies import draft_mode_enabled, get_clients
from contentful_blog.models.blog_post import BlogPost
from contentful_blog.services.blog_posts import fetch_blog_posts, fetch_single_blog_post
from contentful_blog.services.contentful_client import ContentfulClients

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.get("", response_model=List[BlogPost], summary="List all blog posts")
async def list_posts(
    clients: ContentfulClients = Depends(get_clients),
    settings: Settings = Depends(get_settings),
    preview: bool = Depends(draft_mode_enabled),
) -> List[BlogPost]:
    """Return every blog post ordered by title, including drafts in draft mode."""
    try:
        return await fetch_blog_posts(
            clients, preview=preview, content_type=settings.blog_post_content_type
        )
    except httpx.HTTPError as exc:
        raise _backend_error(exc)


@router.get("/{slug}", response_model=BlogPost, summary="Get one blog post by slug")
async def get_post(
    slug: str,
    clients: ContentfulClients = Depends(get_clients),
    settings: Settings = Depends(get_settings),
    preview: bool = Depends(draft_mode_enabled),
) -> BlogPost:
    try:
        post = await fetch_single_blog_post(
            clients, preview=preview, slug=slug, content_type=settings.blog_post_content_type
        )
    except httpx.HTTPError as exc:
        raise _backend_error(exc)

    if post is None:
        raise HTTPException(status_code=404, detail="Blog post not found.")
    return post


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _backend_error(exc: httpx.HTTPError) -> HTTPException:
    """Translate a Contentful failure into the HTTP error returned to the caller."""
    if isinstance(exc, httpx.TimeoutException):
        logger.error("Timeout talking to Contentful: %s", exc)
        return HTTPException(status_code=504, detail="The content backend timed out.")
    if isinstance(exc, httpx.HTTPStatusError):
        logger.error("Contentful returned an error: %s", exc)
        return HTTPException(
            status_code=502,
            detail=f"Content backend returned HTTP {exc.response.status_code}.",
        )
    logger.error("Error talking to Contentful: %s", exc)
    return HTTPException(status_code=502, detail="Content backend unavailable.")
