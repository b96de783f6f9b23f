from __future__ import annotations

import asyncio
import logging
import re

from bs4 import BeautifulSoup

from openapi_review.core.tree import VisitResult, visit
from openapi_review.models import ContentNode

logger = logging.getLogger(__name__)

MAX_DEPTH = 6

_HEADING_TAG = re.compile(r"^h([1-6])$")


def shift_markup_headings(markup: str) -> str | None:
    """Rename every ``<hN>`` element in *markup* to ``<hN+1>``.

    Returns the re-serialized markup, or ``None`` when nothing was renamed.
    """
    soup = BeautifulSoup(markup, "html.parser")
    renamed = 0
    for element in soup.find_all(_HEADING_TAG):
        level = int(element.name[1])
        if level >= MAX_DEPTH:
            continue
        element.name = f"h{level + 1}"
        renamed += 1
    return str(soup) if renamed else None


async def _rewrite_markup(node: ContentNode) -> None:
    rewritten = await asyncio.to_thread(shift_markup_headings, node.value or "")
    if rewritten is not None:
        node.value = rewritten


async def increment_heading_depths(tree: ContentNode) -> ContentNode:
    """Push every heading, structural or embedded in raw markup, one level down.

    Raw-markup nodes are reparsed concurrently; a node that fails to reparse is
    left as it was.
    """
    markup_nodes: list[ContentNode] = []

    def bump(node: ContentNode, _index: int | None, _parent: ContentNode | None) -> VisitResult:
        if node.type == "heading":
            node.depth = min((node.depth or 1) + 1, MAX_DEPTH)
        elif node.type == "html":
            markup_nodes.append(node)
        return None

    visit(tree, None, bump)

    results = await asyncio.gather(*(_rewrite_markup(node) for node in markup_nodes), return_exceptions=True)
    for node, result in zip(markup_nodes, results, strict=True):
        if isinstance(result, Exception):
            logger.debug("Left markup unchanged after rewrite failure: %r (%s)", node.value, result)
    return tree
