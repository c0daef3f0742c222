"""Tests for contentful_blog.services.links.resolve_links."""

import copy

from factories import make_asset, make_link

from contentful_blog.services.links import resolve_links


def _entry(entry_id: str, **fields) -> dict:
    return {"sys": {"id": entry_id, "type": "Entry"}, "fields": fields}


def _entity_depth(node, seen=None) -> int:
    """Longest chain of resolved entities below *node*, counting *node* itself."""
    if seen is None:
        seen = {}
    if isinstance(node, list):
        return max((_entity_depth(value, seen) for value in node), default=0)
    if not isinstance(node, dict):
        return 0
    if id(node) in seen:
        return seen[id(node)]
    below = max((_entity_depth(value, seen) for value in node.values()), default=0)
    depth = below + (1 if "fields" in node else 0)
    seen[id(node)] = depth
    return depth


class TestResolveLinks:
    def test_empty_payload(self):
        assert resolve_links({}, 2) == []
        assert resolve_links({"items": []}, 2) == []

    def test_asset_link_is_replaced(self):
        asset = make_asset("img-1")
        payload = {
            "items": [_entry("p1", slug="p1", image=make_link("img-1"))],
            "includes": {"Asset": [asset]},
        }
        [item] = resolve_links(payload, 2)
        assert item["fields"]["image"] == asset

    def test_missing_target_stays_a_link(self):
        payload = {"items": [_entry("p1", slug="p1", image=make_link("gone"))]}
        [item] = resolve_links(payload, 2)
        assert item["fields"]["image"] == make_link("gone")

    def test_nested_entry_links_are_resolved(self):
        author = _entry("a1", name="Ada", avatar=make_link("img-1"))
        payload = {
            "items": [_entry("p1", slug="p1", author=make_link("a1", "Entry"))],
            "includes": {"Entry": [author], "Asset": [make_asset("img-1")]},
        }
        [item] = resolve_links(payload, 2)
        resolved_author = item["fields"]["author"]
        assert resolved_author["fields"]["name"] == "Ada"
        assert resolved_author["fields"]["avatar"]["fields"]["description"] == "A photo"

    def test_links_inside_lists_are_resolved(self):
        payload = {
            "items": [_entry("p1", slug="p1", gallery=[make_link("img-1"), make_link("img-2")])],
            "includes": {"Asset": [make_asset("img-1"), make_asset("img-2")]},
        }
        [item] = resolve_links(payload, 2)
        assert [a["sys"]["id"] for a in item["fields"]["gallery"]] == ["img-1", "img-2"]

    def test_links_between_items_are_resolved(self):
        payload = {
            "items": [
                _entry("p1", slug="p1", related=make_link("p2", "Entry")),
                _entry("p2", slug="p2"),
            ]
        }
        first, _ = resolve_links(payload, 2)
        assert first["fields"]["related"]["fields"]["slug"] == "p2"

    def test_cycles_unroll_only_to_include_depth(self):
        payload = {
            "items": [_entry("p1", slug="p1", related=make_link("p2", "Entry"))],
            "includes": {"Entry": [_entry("p2", slug="p2", related=make_link("p1", "Entry"))]},
        }
        [item] = resolve_links(payload, 2)
        p2 = item["fields"]["related"]
        assert p2["fields"]["slug"] == "p2"
        p1_again = p2["fields"]["related"]
        assert p1_again["fields"]["slug"] == "p1"
        assert p1_again["fields"]["related"] == make_link("p2", "Entry")

    def test_include_zero_leaves_every_link(self):
        payload = {
            "items": [_entry("p1", slug="p1", image=make_link("img-1"))],
            "includes": {"Asset": [make_asset("img-1")]},
        }
        [item] = resolve_links(payload, 0)
        assert item["fields"]["image"] == make_link("img-1")

    def test_link_past_include_depth_stays_a_link(self):
        author = _entry("a1", name="Ada", avatar=make_link("img-1"))
        payload = {
            "items": [_entry("p1", slug="p1", author=make_link("a1", "Entry"))],
            "includes": {"Entry": [author], "Asset": [make_asset("img-1")]},
        }
        [item] = resolve_links(payload, 1)
        resolved_author = item["fields"]["author"]
        assert resolved_author["fields"]["name"] == "Ada"
        assert resolved_author["fields"]["avatar"] == make_link("img-1")

    def test_densely_cross_linked_items_stay_bounded(self):
        ids = [f"p{i}" for i in range(12)]
        items = []
        for entry_id in ids:
            body = {
                "nodeType": "document",
                "content": [
                    {
                        "nodeType": "entry-hyperlink",
                        "data": {"target": make_link(other, "Entry")},
                    }
                    for other in ids
                    if other != entry_id
                ],
            }
            items.append(_entry(entry_id, slug=entry_id, body=body))

        resolved = resolve_links({"items": items}, 10)

        assert len(resolved) == len(ids)
        for item in resolved:
            assert _entity_depth(item) == 11

    def test_same_target_is_shared(self):
        payload = {
            "items": [
                _entry("p1", slug="p1", image=make_link("img-1")),
                _entry("p2", slug="p2", image=make_link("img-1")),
            ],
            "includes": {"Asset": [make_asset("img-1")]},
        }
        first, second = resolve_links(payload, 2)
        assert first["fields"]["image"] is second["fields"]["image"]

    def test_link_type_is_respected(self):
        payload = {
            "items": [_entry("p1", slug="p1", image=make_link("x", "Asset"))],
            "includes": {"Entry": [_entry("x", slug="not-an-asset")]},
        }
        [item] = resolve_links(payload, 2)
        assert item["fields"]["image"] == make_link("x", "Asset")

    def test_payload_is_not_mutated(self):
        payload = {
            "items": [_entry("p1", slug="p1", image=make_link("img-1"))],
            "includes": {"Asset": [make_asset("img-1")]},
        }
        before = copy.deepcopy(payload)
        resolve_links(payload, 2)
        assert payload == before
