"""Bookmark tree parsing and flattening into rankable documents."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from bookmark_search.errors import InvalidInputError
from bookmark_search.types import BookmarkDocument, BookmarkFolder, BookmarkLeaf, BookmarkNode

logger = logging.getLogger(__name__)

FOLDER_SEPARATOR = " > "
_PROFILE_ROOTS = ("bookmark_bar", "other", "synced")


def parse_bookmark_tree(raw_nodes: Sequence[dict[str, Any]]) -> list[BookmarkNode]:
    """Convert host-API style node dicts into `BookmarkLeaf`/`BookmarkFolder`.

    A node carrying a `url` is a leaf; anything else is a folder, with an
    absent `children` list meaning an empty folder.
    """

    if not isinstance(raw_nodes, list):
        raise InvalidInputError(
            f"bookmark tree must be a list of nodes, got {type(raw_nodes).__name__}"
        )
    return [_parse_node(node) for node in raw_nodes]


@dataclass(slots=True)
class _PendingFolder:
    title: str
    node_id: str | None
    remaining: list[Any]
    children: list[BookmarkNode] = field(default_factory=list)

    def build(self) -> BookmarkFolder:
        return BookmarkFolder(
            title=self.title, children=tuple(self.children), node_id=self.node_id
        )


def _parse_node(raw: Any) -> BookmarkNode:
    """Parse one node and its subtree with an explicit stack of open folders."""

    root = _open_node(raw)
    if isinstance(root, BookmarkLeaf):
        return root

    stack = [root]
    while True:
        folder = stack[-1]
        if folder.remaining:
            child = _open_node(folder.remaining.pop())
            if isinstance(child, BookmarkLeaf):
                folder.children.append(child)
            else:
                stack.append(child)
            continue

        stack.pop()
        built = folder.build()
        if not stack:
            return built
        stack[-1].children.append(built)


def _open_node(raw: Any) -> BookmarkLeaf | _PendingFolder:
    if not isinstance(raw, dict):
        raise InvalidInputError(f"bookmark node must be an object, got {type(raw).__name__}")

    title = str(raw.get("title") or raw.get("name") or "")
    node_id = raw.get("id")
    node_id = str(node_id) if node_id is not None else None

    url = raw.get("url")
    if url:
        return BookmarkLeaf(title=title, url=str(url), node_id=node_id)

    children = raw.get("children") or []
    if not isinstance(children, list):
        raise InvalidInputError(f"children of node {node_id!r} must be a list")
    # reversed so that pop() yields children in host order
    return _PendingFolder(title=title, node_id=node_id, remaining=children[::-1])


def flatten_bookmarks(nodes: Sequence[BookmarkNode]) -> list[BookmarkDocument]:
    """Flatten a bookmark tree into documents, preserving host order.

    Each document's `folder` is the titles of its ancestor folders joined by
    `FOLDER_SEPARATOR`; untitled ancestors such as the host root are skipped.
    """

    documents: list[BookmarkDocument] = []
    stack: list[tuple[BookmarkNode, tuple[str, ...]]] = [
        (node, ()) for node in reversed(nodes)
    ]

    while stack:
        node, ancestry = stack.pop()
        if isinstance(node, BookmarkLeaf):
            documents.append(
                BookmarkDocument(
                    title=node.title,
                    url=node.url,
                    folder=FOLDER_SEPARATOR.join(ancestry),
                    bookmark_id=node.node_id,
                )
            )
            continue

        child_ancestry = ancestry + (node.title,) if node.title else ancestry
        stack.extend((child, child_ancestry) for child in reversed(node.children))

    return documents


def load_bookmarks_file(path: str | Path) -> list[BookmarkNode]:
    """Read a browser profile `Bookmarks` file or an exported node list."""

    file_path = Path(path)
    payload: Any = json.loads(file_path.read_text(encoding="utf-8"))

    if isinstance(payload, dict) and isinstance(payload.get("roots"), dict):
        roots = payload["roots"]
        raw_nodes = [roots[name] for name in _PROFILE_ROOTS if isinstance(roots.get(name), dict)]
    elif isinstance(payload, dict):
        raw_nodes = [payload]
    else:
        raw_nodes = payload

    nodes = parse_bookmark_tree(raw_nodes)
    logger.info("Loaded %d top-level bookmark nodes from %s", len(nodes), file_path)
    return nodes
