import logging

from openapi_review.core.tree import SKIP, Predicate, VisitResult, first_text, visit
from openapi_review.models import ContentNode

logger = logging.getLogger(__name__)

SCROLL_HINT_PREFIX = "Scroll down for"
AUTHENTICATION_HEADING = "Authentication"


def _remove_matching(tree: ContentNode, node_type: str, matches: Predicate) -> int:
    removed = 0

    def remove(node: ContentNode, index: int | None, parent: ContentNode | None) -> VisitResult:
        nonlocal removed
        if parent is None or index is None or parent.children is None or not matches(node):
            return None
        del parent.children[index]
        removed += 1
        return SKIP, index

    visit(tree, node_type, remove)
    return removed


def _is_generator_title(node: ContentNode) -> bool:
    return (node.value or "").startswith("<h1")


def _is_scroll_hint(node: ContentNode) -> bool:
    return (first_text(node) or "").startswith(SCROLL_HINT_PREFIX)


def _is_authentication_heading(node: ContentNode) -> bool:
    return first_text(node) == AUTHENTICATION_HEADING


def remove_unwanted_nodes(tree: ContentNode, strip_authentication: bool = False) -> ContentNode:
    """Drop the generator's own title markup and the "Scroll down for ..." hint.

    With *strip_authentication* the ``Authentication`` heading is dropped too.
    """
    removed = _remove_matching(tree, "html", _is_generator_title)
    removed += _remove_matching(tree, "blockquote", _is_scroll_hint)
    if strip_authentication:
        removed += _remove_matching(tree, "heading", _is_authentication_heading)
    logger.debug("Removed %d boilerplate node(s)", removed)
    return tree
