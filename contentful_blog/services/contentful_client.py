"""HTTP client for the Contentful Delivery and Preview APIs."""

import logging
from typing import Dict, List, NamedTuple, Optional, Protocol

import httpx

from contentful_blog.config import Settings
from contentful_blog.services.links import resolve_links

logger = logging.getLogger(__name__)

_API_TIMEOUT = 15
MAX_INCLUDE_DEPTH = 10


class EntrySource(Protocol):
    async def get_entries(
        self,
        content_type: str,
        *,
        filters: Optional[Dict[str, str]] = None,
        include: int = 0,
        order: Optional[List[str]] = None,
    ) -> List[dict]: ...


class ContentfulClient:
    """Read-only client for one space/environment on one API host.

    ``cdn.contentful.com`` serves published content only;
    ``preview.contentful.com`` serves published and draft content and needs
    the preview access token.
    """

    def __init__(
        self,
        space_id: str,
        access_token: str,
        *,
        host: str,
        environment: str = "master",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.host = host
        self.space_id = space_id
        self.environment = environment
        self._http = httpx.AsyncClient(
            base_url=f"https://{host}/spaces/{space_id}/environments/{environment}",
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=_API_TIMEOUT,
            transport=transport,
        )

    async def get_entries(
        self,
        content_type: str,
        *,
        filters: Optional[Dict[str, str]] = None,
        include: int = 0,
        order: Optional[List[str]] = None,
    ) -> List[dict]:
        """Query entries of *content_type* and return them with links resolved.

        Raises:
            ValueError: if *include* is outside the range the API accepts.
            httpx.HTTPError: on network or HTTP errors.
        """
        if not 0 <= include <= MAX_INCLUDE_DEPTH:
            raise ValueError(f"include must be between 0 and {MAX_INCLUDE_DEPTH}, got {include}.")

        params: Dict[str, str] = {"content_type": content_type, "include": str(include)}
        if order:
            params["order"] = ",".join(order)
        if filters:
            params.update(filters)

        logger.debug("Querying %s entries on %s", content_type, self.host, extra={"params": params})
        resp = await self._http.get("/entries", params=params)
        resp.raise_for_status()
        return resolve_links(resp.json(), include)

    async def aclose(self) -> None:
        await self._http.aclose()


class ContentfulClients(NamedTuple):
    """The two long-lived entry sources: published-only and published+draft."""

    delivery: EntrySource
    preview: EntrySource


def build_clients(settings: Settings) -> ContentfulClients:
    """Construct both clients once; they are shared read-only afterwards."""
    delivery = ContentfulClient(
        settings.space_id,
        settings.access_token,
        host=settings.delivery_host,
        environment=settings.environment,
    )
    preview = ContentfulClient(
        settings.space_id,
        settings.preview_access_token,
        host=settings.preview_host,
        environment=settings.environment,
    )
    return ContentfulClients(delivery=delivery, preview=preview)


def select_client(clients: ContentfulClients, preview: bool) -> EntrySource:
    if preview:
        return clients.preview
    return clients.delivery
