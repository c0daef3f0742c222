"""Mapping of Contentful image assets onto :class:`ContentImage`."""

import logging
from typing import Optional, Union

from pydantic import TypeAdapter, ValidationError

from contentful_blog.models.content_image import ContentImage
from contentful_blog.models.contentful import Asset, AssetOrLink, Link

logger = logging.getLogger(__name__)

_ASSET_ADAPTER = TypeAdapter(AssetOrLink)


def image_from_asset(asset: Optional[Union[Asset, Link]]) -> Optional[ContentImage]:
    """Return the image for a validated asset, or *None* for no/unresolved asset."""
    if asset is None or isinstance(asset, Link):
        return None

    file = asset.fields.file
    image_details = file.details.image if file and file.details else None
    return ContentImage(
        src=(file.url if file else None) or "",
        alt=asset.fields.description or "",
        width=(image_details.width if image_details else None) or 0,
        height=(image_details.height if image_details else None) or 0,
    )


def parse_content_image(raw_asset: Optional[dict]) -> Optional[ContentImage]:
    """Convert a raw asset payload (or bare link) to a :class:`ContentImage`.

    Missing sub-fields default to ``""`` / ``0``; an unresolved link or an
    unusable payload yields *None* rather than a partial image.
    """
    if not raw_asset:
        return None
    try:
        asset = _ASSET_ADAPTER.validate_python(raw_asset)
    except ValidationError as exc:
        logger.warning("Ignoring malformed image asset: %s", exc)
        return None
    return image_from_asset(asset)
