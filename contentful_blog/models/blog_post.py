from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

from contentful_blog.models.content_image import ContentImage


class BlogPost(BaseModel):
    """Unified internal model representing one blog post."""

    model_config = ConfigDict(frozen=True)

    title: str
    slug: str  # routing key
    body: Optional[Dict[str, Any]] = None  # rich-text document, left unrendered
    image: Optional[ContentImage] = None
