"""Summary block placed above the generated docs in a review comment."""

from openapi_review.models import ContentNode, DiffOutcome, html, text

TITLE = "OpenAPI review"
DIFF_ENGINE_URL = "https://github.com/Atlassian/openapi-diff"
DOCS_ENGINE_URL = "https://github.com/Mermade/widdershins"
RAW_DIFF_SUMMARY = "Raw diff"

CLASSIFICATIONS = (
    ("Breaking", "breaking"),
    ("Non-breaking", "non_breaking"),
    ("Unclassified", "unclassified"),
)


def _heading(depth: int, label: str) -> ContentNode:
    return ContentNode(type="heading", depth=depth, children=[text(label)])


def _paragraph(*children: ContentNode) -> ContentNode:
    return ContentNode(type="paragraph", children=list(children))


def _blockquote(*children: ContentNode) -> ContentNode:
    return ContentNode(type="blockquote", children=[_paragraph(*children)])


def _credit(name: str, url: str) -> ContentNode:
    return _blockquote(text("Generated by "), ContentNode(type="link", url=url, children=[text(name)]))


def _cell(value: str) -> ContentNode:
    return ContentNode(type="tableCell", children=[text(value)])


def build_counts_table(outcome: DiffOutcome) -> ContentNode:
    counts = outcome.counts()
    rows = [[_cell("Classification"), _cell("Count")]]
    rows += [[_cell(label), _cell(str(counts[key]))] for label, key in CLASSIFICATIONS]
    return ContentNode(type="table", rows=rows, align=[None, None])


def build_summary_header(spec_path: str, outcome: DiffOutcome) -> list[ContentNode]:
    nodes = [
        _heading(1, TITLE),
        _blockquote(text("Spec: "), ContentNode(type="inlineCode", value=spec_path)),
        _heading(2, "Diff"),
        _credit("openapi-diff", DIFF_ENGINE_URL),
    ]
    if outcome.breaking_differences_found:
        nodes.append(
            _paragraph(
                text("🚨 "),
                ContentNode(type="strong", children=[text("BREAKING CHANGES FOUND")]),
                text(" 🚨"),
            )
        )
    nodes += [
        build_counts_table(outcome),
        html(f"<details>\n<summary>{RAW_DIFF_SUMMARY}</summary>"),
        ContentNode(type="code", lang="json", value=outcome.to_json()),
        html("</details>"),
        _heading(2, "Docs"),
        _credit("widdershins", DOCS_ENGINE_URL),
    ]
    return nodes


def prepend_summary_header(tree: ContentNode, spec_path: str, outcome: DiffOutcome) -> ContentNode:
    tree.children = [*build_summary_header(spec_path, outcome), *(tree.children or [])]
    return tree
