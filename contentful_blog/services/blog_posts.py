"""Fetching blog posts from Contentful and mapping them onto :class:`BlogPost`."""

import logging
from typing import List, Optional

from pydantic import ValidationError

from contentful_blog.config import DEFAULT_BLOG_POST_CONTENT_TYPE
from contentful_blog.models.blog_post import BlogPost
from contentful_blog.models.contentful import BlogPostEntry
from contentful_blog.services.content_image import image_from_asset
from contentful_blog.services.contentful_client import ContentfulClients, select_client

logger = logging.getLogger(__name__)

# Deep enough for post -> image/author -> author's avatar.
INCLUDE_DEPTH = 2


def parse_blog_post(raw_entry: Optional[dict]) -> Optional[BlogPost]:
    """Convert a raw Contentful blog-post entry to a :class:`BlogPost`.

    Returns *None* for a missing entry, and for an entry that cannot form a
    post at all (no slug), which happens with half-written drafts.
    """
    if not raw_entry:
        return None
    try:
        entry = BlogPostEntry.model_validate(raw_entry)
    except ValidationError as exc:
        logger.warning("Skipping malformed blog post entry %s: %s", _entry_id(raw_entry), exc)
        return None

    fields = entry.fields
    return BlogPost(
        title=fields.title or "",
        slug=fields.slug,
        body=fields.body or None,
        image=image_from_asset(fields.image),
    )


def _entry_id(raw_entry: dict) -> str:
    sys = raw_entry.get("sys")
    return str(sys.get("id", "?")) if isinstance(sys, dict) else "?"


async def fetch_blog_posts(
    clients: ContentfulClients,
    *,
    preview: bool,
    content_type: str = DEFAULT_BLOG_POST_CONTENT_TYPE,
) -> List[BlogPost]:
    """Fetch every blog post, ordered by title.

    Backend errors propagate to the caller unchanged.
    """
    source = select_client(clients, preview)
    items = await source.get_entries(
        content_type,
        include=INCLUDE_DEPTH,
        order=["fields.title"],
    )
    logger.info("Fetched %d blog post entries", len(items), extra={"preview": preview})

    posts: List[BlogPost] = []
    for item in items:
        post = parse_blog_post(item)
        if post is not None:
            posts.append(post)
    return posts


async def fetch_single_blog_post(
    clients: ContentfulClients,
    *,
    preview: bool,
    slug: str,
    content_type: str = DEFAULT_BLOG_POST_CONTENT_TYPE,
) -> Optional[BlogPost]:
    """Fetch the blog post whose slug is exactly *slug*, or *None*.

    Should several entries share the slug, the oldest one that forms a valid
    post wins.
    """
    source = select_client(clients, preview)
    items = await source.get_entries(
        content_type,
        filters={"fields.slug": slug},
        include=INCLUDE_DEPTH,
        order=["sys.createdAt"],
    )
    if not items:
        logger.info("No blog post found for slug %r", slug, extra={"preview": preview})
        return None
    if len(items) > 1:
        logger.warning("Slug %r matches %d entries; using the oldest usable one", slug, len(items))
    for item in items:
        post = parse_blog_post(item)
        if post is not None:
            return post
    return None
