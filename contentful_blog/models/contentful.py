"""Raw Contentful payload shapes, validated at the normalization boundary.

A reference field holds either the resolved object or, when the include
depth was exhausted or the target is missing, a bare ``Link``.  The two are
told apart once, by the presence of a ``fields`` payload, so callers only
ever see an :class:`Asset` or a :class:`Link`.
"""

import logging
from typing import Annotated, Any, Dict, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    ValidationError,
    field_validator,
)

logger = logging.getLogger(__name__)


class Sys(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = ""
    type: str = ""
    link_type: Optional[str] = Field(default=None, alias="linkType")


class Link(BaseModel):
    """Unresolved reference: identifier only, no fields."""

    sys: Sys


class ImageDetails(BaseModel):
    width: Optional[int] = None
    height: Optional[int] = None


class FileDetails(BaseModel):
    size: Optional[int] = None
    image: Optional[ImageDetails] = None


class AssetFile(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: Optional[str] = None
    file_name: Optional[str] = Field(default=None, alias="fileName")
    content_type: Optional[str] = Field(default=None, alias="contentType")
    details: Optional[FileDetails] = None


class AssetFields(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    file: Optional[AssetFile] = None


class Asset(BaseModel):
    sys: Sys = Field(default_factory=Sys)
    fields: AssetFields


def _resolution_tag(value: Any) -> str:
    if isinstance(value, dict):
        return "resolved" if "fields" in value else "unresolved"
    return "resolved" if isinstance(value, Asset) else "unresolved"


AssetOrLink = Annotated[
    Union[Annotated[Asset, Tag("resolved")], Annotated[Link, Tag("unresolved")]],
    Discriminator(_resolution_tag),
]


class BlogPostFields(BaseModel):
    title: Optional[str] = None
    slug: str
    body: Optional[Dict[str, Any]] = None
    image: Optional[AssetOrLink] = None

    @field_validator("image", mode="wrap")
    @classmethod
    def _drop_malformed_image(cls, value, handler):
        # Malformed references collapse to "no image".
        try:
            return handler(value)
        except ValidationError as exc:
            logger.warning("Ignoring malformed image reference: %s", exc)
            return None


class BlogPostEntry(BaseModel):
    sys: Sys = Field(default_factory=Sys)
    fields: BlogPostFields
