"""Runtime configuration read from the hosting environment."""

import os
from functools import lru_cache

from pydantic import BaseModel

DELIVERY_HOST = "cdn.contentful.com"
PREVIEW_HOST = "preview.contentful.com"
DEFAULT_ENVIRONMENT = "master"
DEFAULT_BLOG_POST_CONTENT_TYPE = "blogPostMaxSchmitt"


class Settings(BaseModel):
    space_id: str = ""
    access_token: str = ""
    preview_access_token: str = ""
    preview_secret: str = ""
    environment: str = DEFAULT_ENVIRONMENT
    blog_post_content_type: str = DEFAULT_BLOG_POST_CONTENT_TYPE
    delivery_host: str = DELIVERY_HOST
    preview_host: str = PREVIEW_HOST


def load_settings(environ=None) -> Settings:
    """Build :class:`Settings` from *environ* (defaults to ``os.environ``).

    Unset variables fall back to the model defaults; credentials are not
    checked here, the Contentful API rejects bad ones on first use.
    """
    env = os.environ if environ is None else environ
    return Settings(
        space_id=env.get("CONTENTFUL_SPACE_ID", ""),
        access_token=env.get("CONTENTFUL_ACCESS_TOKEN", ""),
        preview_access_token=env.get("CONTENTFUL_PREVIEW_ACCESS_TOKEN", ""),
        preview_secret=env.get("CONTENTFUL_PREVIEW_SECRET", ""),
        environment=env.get("CONTENTFUL_ENVIRONMENT") or DEFAULT_ENVIRONMENT,
        blog_post_content_type=(
            env.get("CONTENTFUL_BLOG_POST_CONTENT_TYPE") or DEFAULT_BLOG_POST_CONTENT_TYPE
        ),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
