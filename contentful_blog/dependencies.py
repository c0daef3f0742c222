from fastapi import Depends, Request

from contentful_blog.config import Settings, get_settings
from contentful_blog.services.contentful_client import ContentfulClients
from contentful_blog.services.draft_mode import is_draft_mode


def get_clients(request: Request) -> ContentfulClients:
    """Return the client pair built at startup."""
    return request.app.state.contentful_clients


def draft_mode_enabled(request: Request, settings: Settings = Depends(get_settings)) -> bool:
    return is_draft_mode(request, settings.preview_secret)
