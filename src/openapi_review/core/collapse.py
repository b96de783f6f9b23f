from openapi_review.core.notifier import extract_operation_id, is_change_notifier
from openapi_review.core.tree import SKIP, VisitResult, is_heading, node_at, visit
from openapi_review.models import ContentNode, html

DETAILS_OPEN = "<details>\n<summary>Docs</summary>"
DETAILS_CLOSE = "</details>"


def wrap_operations_with_details(tree: ContentNode, embedded_headings: bool = False) -> ContentNode:
    """Fold the body of every second-level section into a ``<details>`` block.

    The heading, its change marker and its operation anchor stay outside; the
    block closes before the next heading of depth 1 or 2, or at the end.
    """
    boundary = is_heading(max_depth=2, embedded=embedded_headings)

    def wrap(node: ContentNode, index: int | None, parent: ContentNode | None) -> VisitResult:
        if parent is None or index is None or parent.children is None:
            return None
        children = parent.children

        start = index + 1
        if is_change_notifier(node_at(parent, start)):
            start += 1
        if extract_operation_id(node_at(parent, start)) is not None:
            start += 1
        children.insert(start, html(DETAILS_OPEN))

        end = next(
            (position for position in range(start + 1, len(children)) if boundary(children[position])),
            len(children),
        )
        children.insert(end, html(DETAILS_CLOSE))
        return SKIP, end + 1

    visit(tree, is_heading(depth=2, embedded=embedded_headings), wrap)
    return tree
