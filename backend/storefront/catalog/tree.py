"""Category hierarchy: build a sorted forest from flat records and walk it."""

import logging
from collections import defaultdict
from typing import Iterable, Iterator

from storefront.catalog.collation import collation_key
from storefront.schemas.category import CategoryNode, CategoryRecord

logger = logging.getLogger(__name__)


def build_tree(records: Iterable[CategoryRecord], locale: str | None = None) -> list[CategoryNode]:
    """Convert flat category records into a forest sorted by name at every level.

    Duplicate ids: the last record wins. A parent id that does not exist
    makes the node a root. Nodes caught in a parent cycle are promoted to
    roots (lowest id first) so every id appears exactly once.
    """
    by_id: dict[int, CategoryRecord] = {}
    for record in records:
        by_id[record.id] = record

    children_of: dict[int, list[int]] = defaultdict(list)
    root_ids: list[int] = []
    for cid, record in by_id.items():
        parent_id = record.parent_id
        if parent_id is not None and parent_id != cid and parent_id in by_id:
            children_of[parent_id].append(cid)
        else:
            root_ids.append(cid)

    reached = _reachable(root_ids, children_of)
    if len(reached) < len(by_id):
        for cid in sorted(by_id):
            if cid in reached:
                continue
            # Break the cycle at this node
            children_of[by_id[cid].parent_id].remove(cid)
            root_ids.append(cid)
            reached |= _reachable([cid], children_of)
            logger.warning("Category %s is part of a parent cycle, treating it as a root", cid)

    key = collation_key(locale)

    def order(cid: int) -> tuple:
        return (key(by_id[cid].name), cid)

    root_ids.sort(key=order)
    for kids in children_of.values():
        kids.sort(key=order)

    # Post-order assembly so every child exists before its parent
    built: dict[int, CategoryNode] = {}
    stack: list[tuple[int, bool]] = [(cid, False) for cid in reversed(root_ids)]
    while stack:
        cid, children_done = stack.pop()
        if not children_done:
            stack.append((cid, True))
            stack.extend((child, False) for child in children_of.get(cid, ()))
            continue
        record = by_id[cid]
        built[cid] = CategoryNode(
            id=record.id,
            name=record.name,
            parent_id=record.parent_id,
            slug=record.slug,
            image=record.image,
            children=tuple(built[child] for child in children_of.get(cid, ())),
        )

    return [built[cid] for cid in root_ids]


def _reachable(start: Iterable[int], children_of: dict[int, list[int]]) -> set[int]:
    seen: set[int] = set()
    stack = list(start)
    while stack:
        cid = stack.pop()
        if cid in seen:
            continue
        seen.add(cid)
        stack.extend(children_of.get(cid, ()))
    return seen


def collect_descendant_ids(node: CategoryNode) -> list[int]:
    """Return every id strictly below ``node``."""
    out: list[int] = []
    seen = {node.id}
    stack = list(node.children)
    while stack:
        current = stack.pop()
        if current.id in seen:
            continue
        seen.add(current.id)
        out.append(current.id)
        stack.extend(current.children)
    return out


def iter_tree(roots: Iterable[CategoryNode]) -> Iterator[tuple[CategoryNode, int]]:
    """Depth-first walk yielding ``(node, depth)`` in display order."""
    stack = [(node, 0) for node in reversed(list(roots))]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        stack.extend((child, depth + 1) for child in reversed(node.children))


def index_tree(roots: Iterable[CategoryNode]) -> dict[int, CategoryNode]:
    return {node.id: node for node, _ in iter_tree(roots)}


def find_category(roots: Iterable[CategoryNode], key: int | str) -> CategoryNode | None:
    """Look a category up by numeric id or, failing that, by slug."""
    nodes = index_tree(roots)
    if isinstance(key, int):
        return nodes.get(key)

    key = key.strip()
    if key.isdigit() and str(int(key)) == key:
        return nodes.get(int(key))
    return next((node for node in nodes.values() if node.slug == key), None)


def category_path(roots: Iterable[CategoryNode], node_id: int) -> list[int]:
    """Ids from the root down to ``node_id`` inclusive; empty if absent."""
    parent_of: dict[int, int | None] = {}
    for node, depth in iter_tree(roots):
        if depth == 0:
            parent_of[node.id] = None
        for child in node.children:
            parent_of[child.id] = node.id

    if node_id not in parent_of:
        return []

    path = [node_id]
    current = parent_of[node_id]
    while current is not None:
        path.append(current)
        current = parent_of[current]
    path.reverse()
    return path
