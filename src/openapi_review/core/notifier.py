"""Insert change markers under each documented operation."""

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

from openapi_review.core.correlate import find_matching_difference, get_operation_location
from openapi_review.core.tree import SKIP, VisitResult, is_heading, node_at, visit
from openapi_review.models import ContentNode, DiffOutcome, SpecDocument, text

logger = logging.getLogger(__name__)

_OPERATION_ID = re.compile(r'"opId([^"]*)"')

BREAKING = "breaking"
CHANGED = "changed"

_MARKERS = {
    BREAKING: ("BREAKING CHANGES", "🚨"),
    CHANGED: ("CHANGES", "⚠"),
}


def extract_operation_id(anchor: ContentNode | None) -> str | None:
    """Read the operation id from the ``<a id="opId...">`` node that follows an operation heading."""
    if anchor is None or not anchor.children:
        return None
    match = _OPERATION_ID.search(anchor.children[0].value or "")
    return match.group(1) if match else None


def create_notifier_node(severity: str) -> ContentNode:
    message, emoji = _MARKERS[severity]
    return ContentNode(
        type="paragraph",
        children=[
            text(f"{emoji} "),
            ContentNode(type="strong", children=[text(message)]),
            text(f" {emoji}"),
        ],
        data={"notifier": severity},
    )


def is_change_notifier(node: ContentNode | None) -> bool:
    return node is not None and "notifier" in node.data


def classify_operation(outcome: DiffOutcome, operation_location: str) -> str | None:
    if outcome.breaking_differences_found and find_matching_difference(
        outcome.breaking_differences, operation_location
    ):
        return BREAKING
    if find_matching_difference(outcome.non_breaking_differences, operation_location) or find_matching_difference(
        outcome.unclassified_differences, operation_location
    ):
        return CHANGED
    return None


def insert_change_notifiers(
    tree: ContentNode,
    specs: Iterable[SpecDocument | Mapping[str, Any]],
    outcome: DiffOutcome,
    embedded_headings: bool = False,
) -> ContentNode:
    spec_list = list(specs)

    def insert(node: ContentNode, index: int | None, parent: ContentNode | None) -> VisitResult:
        if parent is None or index is None or parent.children is None:
            return None
        operation_id = extract_operation_id(node_at(parent, index + 1))
        if operation_id is None:
            return None
        location = get_operation_location(spec_list, operation_id)
        if location is None:
            logger.debug("Operation %s not found in any spec", operation_id)
            return None
        severity = classify_operation(outcome, location)
        if severity is None:
            return None

        logger.debug("Marking %s as %s", location, severity)
        parent.children.insert(index + 1, create_notifier_node(severity))
        return SKIP, index + 2

    visit(tree, is_heading(depth=2, embedded=embedded_headings), insert)
    return tree
