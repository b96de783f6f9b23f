"""Depth-first traversal over a ``ContentNode`` tree that tolerates in-place edits.

A visitor is called as ``visitor(node, index, parent)`` for every node matching
the test, parents before children and siblings left to right. It may mutate
``parent.children`` and then tell the walker where to resume:

* ``None`` / ``CONTINUE`` - descend into the node, then move to ``index + 1``
* ``SKIP`` - do not descend into the node
* ``EXIT`` - stop the whole traversal
* ``(action, resume_index)`` - apply ``action``, then continue the parent's
  children at ``resume_index``

Table cells are visited too, row by row, with the table as parent and no
index; they live in ``table.rows``, so a visitor cannot splice them.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any

from openapi_review.models import ContentNode

CONTINUE = "continue"
SKIP = "skip"
EXIT = "exit"

Predicate = Callable[[ContentNode], bool]
Test = str | Mapping[str, Any] | Predicate | None
VisitResult = str | tuple[str, int] | None
Visitor = Callable[[ContentNode, int | None, ContentNode | None], VisitResult]

_EMBEDDED_HEADING = re.compile(r"<h([1-6])(?:\s[^>]*)?>.*</h\1\s*>", re.IGNORECASE)


def heading_depth(node: ContentNode, embedded: bool = False) -> int | None:
    """Return the heading depth of *node*, or ``None`` when it is not a heading.

    With *embedded*, a raw-markup node holding a single-line ``<hN>...</hN>``
    element counts as a heading of depth N.
    """
    if node.type == "heading":
        return node.depth
    if embedded and node.type == "html" and node.value:
        match = _EMBEDDED_HEADING.fullmatch(node.value.strip())
        if match:
            return int(match.group(1))
    return None


def is_heading(depth: int | None = None, max_depth: int | None = None, embedded: bool = False) -> Predicate:
    def check(node: ContentNode) -> bool:
        found = heading_depth(node, embedded)
        if found is None:
            return False
        if depth is not None and found != depth:
            return False
        return max_depth is None or found <= max_depth

    return check


def convert(test: Test) -> Predicate:
    if test is None:
        return lambda _node: True
    if isinstance(test, str):
        return lambda node: node.type == test
    if isinstance(test, Mapping):
        expected = dict(test)
        return lambda node: all(getattr(node, key, None) == value for key, value in expected.items())
    return test


def _normalize(result: VisitResult) -> tuple[str, int | None]:
    if result is None:
        return CONTINUE, None
    if isinstance(result, tuple):
        return result[0], result[1]
    return result, None


def visit(tree: ContentNode, test: Test, visitor: Visitor) -> None:
    check = convert(test)

    def walk(node: ContentNode, index: int | None, parent: ContentNode | None) -> tuple[str, int | None]:
        action, resume = CONTINUE, None
        if check(node):
            action, resume = _normalize(visitor(node, index, parent))
            if action == EXIT:
                return EXIT, None

        if action != SKIP and node.rows:
            for row in node.rows:
                for cell in row:
                    if walk(cell, None, node)[0] == EXIT:
                        return EXIT, None

        if action != SKIP and node.children:
            position = 0
            while position < len(node.children):
                child_action, child_resume = walk(node.children[position], position, node)
                if child_action == EXIT:
                    return EXIT, None
                position = child_resume if child_resume is not None else position + 1

        return action, resume

    walk(tree, None, None)


def find(tree: ContentNode, test: Test) -> ContentNode | None:
    """Return the first node matching *test* in document order, *tree* included."""
    found: list[ContentNode] = []

    def collect(node: ContentNode, _index: int | None, _parent: ContentNode | None) -> VisitResult:
        found.append(node)
        return EXIT

    visit(tree, test, collect)
    return found[0] if found else None


def first_text(node: ContentNode) -> str | None:
    text_node = find(node, "text")
    return text_node.value if text_node else None


def node_at(parent: ContentNode, index: int) -> ContentNode | None:
    children = parent.children or []
    return children[index] if 0 <= index < len(children) else None
