"""Unit tests for Markdown parsing and serialization."""

import pytest

from openapi_review.core.markdown import parse_markdown, render_inline, to_markdown
from openapi_review.models import ContentNode
from tests.helpers import PETSTORE_DOCS, texts


def _types(tree: ContentNode) -> list[str]:
    return [child.type for child in tree.children or []]


def _texts(tree: ContentNode) -> str:
    return "".join(texts(tree))


class TestParseMarkdown:
    def test_heading_depth_and_text(self) -> None:
        tree = parse_markdown("## List Pets\n")
        (node,) = tree.children or []
        assert node.type == "heading"
        assert node.depth == 2
        assert node.children is not None
        assert node.children[0].value == "List Pets"

    def test_operation_anchor_is_paragraph_with_inline_html(self) -> None:
        tree = parse_markdown('<a id="opIdlistPets"></a>\n')
        (node,) = tree.children or []
        assert node.type == "paragraph"
        assert node.children is not None
        assert node.children[0].type == "html"
        assert node.children[0].value == '<a id="opIdlistPets">'

    def test_html_heading_is_raw_markup_block(self) -> None:
        tree = parse_markdown('<h1 id="pet-store">Pet Store</h1>\n\nText\n')
        assert _types(tree) == ["html", "paragraph"]
        assert tree.children is not None
        assert tree.children[0].value == '<h1 id="pet-store">Pet Store</h1>'

    def test_blockquote_contains_paragraph(self) -> None:
        tree = parse_markdown("> Scroll down for example requests.\n")
        (node,) = tree.children or []
        assert node.type == "blockquote"
        assert node.children is not None
        assert node.children[0].type == "paragraph"

    def test_fenced_code(self) -> None:
        tree = parse_markdown('```json\n{"a": 1}\n```\n')
        (node,) = tree.children or []
        assert node.type == "code"
        assert node.lang == "json"
        assert node.value == '{"a": 1}'

    def test_table_rows_and_cells(self) -> None:
        tree = parse_markdown("|Name|Type|\n|---|---|\n|id|integer|\n")
        (node,) = tree.children or []
        assert node.type == "table"
        assert node.rows is not None
        assert len(node.rows) == 2
        assert [cell.children[0].value for cell in node.rows[1] if cell.children] == ["id", "integer"]

    def test_tight_list(self) -> None:
        tree = parse_markdown("* one\n* two\n")
        (node,) = tree.children or []
        assert node.type == "list"
        assert node.tight is True
        assert node.ordered is False
        assert len(node.children or []) == 2

    def test_inline_strong_and_link(self) -> None:
        tree = parse_markdown("**bold** and [docs](https://example.com)\n")
        (node,) = tree.children or []
        assert [child.type for child in node.children or []] == ["strong", "text", "link"]
        assert node.children is not None
        assert node.children[2].url == "https://example.com"


class TestToMarkdown:
    def test_heading_and_paragraph(self) -> None:
        assert to_markdown(parse_markdown("## Create Pet\n\nSome text\n")) == "## Create Pet\n\nSome text\n"

    def test_anchor_round_trips(self) -> None:
        assert to_markdown(parse_markdown('<a id="opIdcreatePet"></a>\n')) == '<a id="opIdcreatePet"></a>\n'

    def test_blockquote_prefixes_lines(self) -> None:
        assert to_markdown(parse_markdown("> Example responses\n")) == "> Example responses\n"

    def test_code_block(self) -> None:
        source = "```json\n[]\n```\n"
        assert to_markdown(parse_markdown(source)) == source

    def test_table(self) -> None:
        source = "|Name|Type|\n|---|---|\n|id|integer|\n"
        assert to_markdown(parse_markdown(source)) == source

    def test_list(self) -> None:
        assert to_markdown(parse_markdown("* one\n* two\n")) == "- one\n- two\n"

    def test_ordered_loose_list(self) -> None:
        assert to_markdown(parse_markdown("1. one\n\n2. two\n")) == "1. one\n\n2. two\n"

    def test_empty_document(self) -> None:
        assert to_markdown(parse_markdown("")) == ""

    def test_text_escapes_markdown_syntax(self) -> None:
        node = ContentNode(type="text", value="a*b_c")
        assert render_inline([node]) == "a\\*b\\_c"

    @pytest.mark.parametrize(
        "source",
        [
            "1\\. not a list\n",
            "3\\) not a list either\n",
            "\\- not a list\n",
            "\\+ not a list\n",
            "\\# not a heading\n",
            "\\> not a quote\n",
            "\\| not a table\n",
            "first line\n\\- second line\n",
        ],
        ids=["ordered", "ordered-paren", "dash", "plus", "hash", "quote", "pipe", "after-softbreak"],
    )
    def test_escaped_block_markers_stay_paragraphs(self, source: str) -> None:
        tree = parse_markdown(source)
        rendered = to_markdown(tree)

        assert _types(parse_markdown(rendered)) == ["paragraph"]
        assert _texts(parse_markdown(rendered)) == _texts(tree)

    def test_marker_in_middle_of_line_not_escaped(self) -> None:
        assert to_markdown(parse_markdown("Returns 1. the pet - or # nothing\n")) == (
            "Returns 1. the pet - or # nothing\n"
        )

    def test_heading_text_not_escaped(self) -> None:
        assert to_markdown(parse_markdown("## 1. Pets\n")) == "## 1. Pets\n"

    def test_table_cells_escape_pipes(self) -> None:
        node = ContentNode(type="text", value="a|b")
        assert render_inline([node], in_table=True) == "a\\|b"

    def test_code_fence_grows_around_backticks(self) -> None:
        node = ContentNode(type="root", children=[ContentNode(type="code", lang=None, value="```\nx\n```")])
        assert to_markdown(node) == "````\n```\nx\n```\n````\n"


def test_reparsing_rendered_docs_is_stable() -> None:
    once = to_markdown(parse_markdown(PETSTORE_DOCS))
    twice = to_markdown(parse_markdown(once))
    assert once == twice
