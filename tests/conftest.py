from typing import List

import pytest
from factories import FakeEntrySource, make_asset, make_entry, make_link

from contentful_blog.services.contentful_client import ContentfulClients


@pytest.fixture
def published_entries() -> List[dict]:
    # Deliberately not in title order.
    return [
        make_entry("e-gamma", "gamma", "Gamma"),
        make_entry("e-alpha", "alpha", "Alpha", image=make_asset()),
        make_entry("e-beta", "beta", "Beta", image=make_link()),
    ]


@pytest.fixture
def draft_entries(published_entries) -> List[dict]:
    return published_entries + [make_entry("e-draft", "draft-post", "Draft Post")]


@pytest.fixture
def fake_clients(published_entries, draft_entries) -> ContentfulClients:
    return ContentfulClients(
        delivery=FakeEntrySource(published_entries),
        preview=FakeEntrySource(draft_entries),
    )
