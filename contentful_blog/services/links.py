"""Inline resolution of Contentful ``Link`` objects.

The Delivery and Preview APIs return linked entries and assets once, in the
``includes`` section of a collection response, and reference them from
``items`` by ``{"sys": {"type": "Link", "linkType": ..., "id": ...}}``.
"""

from typing import Any, Dict, List, Tuple

_Key = Tuple[str, str]

_INCLUDED_TYPES = ("Entry", "Asset")


def _is_link(node: dict) -> bool:
    sys = node.get("sys")
    return isinstance(sys, dict) and sys.get("type") == "Link" and "fields" not in node


def _entity_key(entity: dict) -> _Key:
    sys = entity.get("sys") or {}
    return str(sys.get("type", "")), str(sys.get("id", ""))


def _link_key(link: dict) -> _Key:
    sys = link["sys"]
    return str(sys.get("linkType", "")), str(sys.get("id", ""))


class _Resolver:
    """Replaces links with their targets, at most *include* levels deep.

    Each ``(entity, remaining depth)`` pair is expanded once and the result
    shared, so dense link graphs stay cheap.
    """

    def __init__(self, index: Dict[_Key, dict]) -> None:
        self.index = index
        self._resolved: Dict[Tuple[_Key, int], dict] = {}

    def entity(self, entity: dict, key: _Key, depth: int) -> dict:
        memo_key = (key, depth)
        if memo_key not in self._resolved:
            self._resolved[memo_key] = self.node(entity, depth)
        return self._resolved[memo_key]

    def node(self, node: Any, depth: int) -> Any:
        if isinstance(node, list):
            return [self.node(value, depth) for value in node]
        if not isinstance(node, dict):
            return node
        if _is_link(node):
            key = _link_key(node)
            target = self.index.get(key)
            # Missing targets and links past the include depth stay as links.
            if target is None or depth <= 0:
                return node
            return self.entity(target, key, depth - 1)
        return {name: self.node(value, depth) for name, value in node.items()}


def resolve_links(payload: dict, include: int) -> List[dict]:
    """Return ``payload["items"]`` with links resolved up to *include* levels.

    Level 1 is a link held by an item, level 2 a link held by that target, and
    so on, matching the API's ``include`` parameter.  Reference cycles unroll
    only until the depth runs out.  The payload is left untouched; resolved
    objects are fresh copies, shared wherever the same entity recurs at the
    same depth.
    """
    items = payload.get("items") or []
    includes = payload.get("includes") or {}

    index: Dict[_Key, dict] = {}
    for entity_type in _INCLUDED_TYPES:
        for entity in includes.get(entity_type) or []:
            index[_entity_key(entity)] = entity
    for item in items:
        index[_entity_key(item)] = item

    resolver = _Resolver(index)
    return [resolver.node(item, include) for item in items]
