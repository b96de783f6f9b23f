"""Markdown <-> ``ContentNode`` conversion backed by markdown-it-py."""

from __future__ import annotations

import re
from collections.abc import Sequence

from markdown_it import MarkdownIt
from markdown_it.token import Token

from openapi_review.models import ContentNode

_ESCAPED = re.compile(r"([\\`*_\[\]<])")
_ORDERED_MARKER = re.compile(r"( {0,3}\d{1,9})[.)]")
_BLOCK_MARKERS = "#>+-=|~"
_ALIGN = re.compile(r"text-align:\s*(left|right|center)")


def _parser() -> MarkdownIt:
    return MarkdownIt("commonmark", {"html": True}).enable(["table", "strikethrough"])


def _block(type_: str, **fields: object) -> ContentNode:
    return ContentNode(type=type_, children=[], **fields)  # type: ignore[arg-type]


def _inline_to_nodes(tokens: Sequence[Token]) -> list[ContentNode]:
    root = _block("root")
    stack = [root]

    for token in tokens:
        parent = stack[-1]
        assert parent.children is not None
        kind = token.type

        if kind == "text":
            parent.children.append(ContentNode(type="text", value=token.content))
        elif kind == "softbreak":
            parent.children.append(ContentNode(type="text", value="\n"))
        elif kind == "hardbreak":
            parent.children.append(ContentNode(type="break"))
        elif kind == "code_inline":
            parent.children.append(ContentNode(type="inlineCode", value=token.content))
        elif kind == "html_inline":
            parent.children.append(ContentNode(type="html", value=token.content))
        elif kind == "image":
            parent.children.append(
                ContentNode(
                    type="image",
                    url=str(token.attrGet("src") or ""),
                    title=_optional_str(token.attrGet("title")),
                    value=token.content,
                )
            )
        elif kind in ("strong_open", "em_open", "s_open"):
            node = _block({"strong_open": "strong", "em_open": "emphasis", "s_open": "delete"}[kind])
            parent.children.append(node)
            stack.append(node)
        elif kind == "link_open":
            node = _block(
                "link",
                url=str(token.attrGet("href") or ""),
                title=_optional_str(token.attrGet("title")),
            )
            if token.markup == "autolink":
                node.data["autolink"] = True
            parent.children.append(node)
            stack.append(node)
        elif kind in ("strong_close", "em_close", "s_close", "link_close"):
            stack.pop()
        elif token.content:
            parent.children.append(ContentNode(type="text", value=token.content))

    return root.children or []


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)


def _cell_align(token: Token) -> str | None:
    style = token.attrGet("style")
    match = _ALIGN.search(str(style)) if style else None
    return match.group(1) if match else None


def parse_markdown(source: str) -> ContentNode:
    """Parse Markdown text into a ``root`` ContentNode."""
    tokens = _parser().parse(source)
    root = _block("root")
    stack = [root]

    for token in tokens:
        parent = stack[-1]
        kind = token.type

        if kind == "inline":
            assert parent.children is not None
            parent.children.extend(_inline_to_nodes(token.children or []))
            continue

        if kind in ("thead_open", "thead_close", "tbody_open", "tbody_close"):
            continue
        if kind == "tr_open":
            assert parent.rows is not None
            parent.rows.append([])
            continue
        if kind == "tr_close":
            continue
        if kind in ("th_open", "td_open"):
            cell = _block("tableCell")
            assert parent.rows is not None and parent.align is not None
            parent.rows[-1].append(cell)
            if kind == "th_open":
                parent.align.append(_cell_align(token))
            stack.append(cell)
            continue

        if kind.endswith("_close"):
            stack.pop()
            continue

        node: ContentNode | None = None
        opens = kind.endswith("_open")
        if kind == "heading_open":
            node = _block("heading", depth=int(token.tag[1:]))
        elif kind == "paragraph_open":
            node = _block("paragraph")
            if token.hidden and len(stack) >= 2 and stack[-2].type == "list":
                stack[-2].tight = True
        elif kind == "blockquote_open":
            node = _block("blockquote")
        elif kind == "bullet_list_open":
            node = _block("list", ordered=False, tight=False)
        elif kind == "ordered_list_open":
            node = _block("list", ordered=True, start=int(token.attrGet("start") or 1), tight=False)
        elif kind == "list_item_open":
            node = _block("listItem")
        elif kind == "table_open":
            node = ContentNode(type="table", rows=[], align=[])
        elif kind in ("fence", "code_block"):
            info = token.info.strip().split()
            node = ContentNode(
                type="code",
                lang=info[0] if info else None,
                value=token.content[:-1] if token.content.endswith("\n") else token.content,
            )
        elif kind == "html_block":
            node = ContentNode(type="html", value=token.content.rstrip("\n"))
        elif kind == "hr":
            node = ContentNode(type="thematicBreak")

        if node is None:
            continue
        assert parent.children is not None
        parent.children.append(node)
        if opens:
            stack.append(node)

    return root


def _escape_line_start(line: str) -> str:
    ordered = _ORDERED_MARKER.match(line)
    if ordered:
        return f"{ordered.group(1)}\\{line[ordered.end(1):]}"
    stripped = line.lstrip(" ")
    if stripped and stripped[0] in _BLOCK_MARKERS:
        return f"{line[: len(line) - len(stripped)]}\\{stripped}"
    return line


def _escape(value: str, in_table: bool = False, line_start: bool = False) -> str:
    """Escape *value* so it reads back as the same text.

    Lines that begin a new Markdown line (all but the first, and the first
    when *line_start*) also get their block marker escaped.
    """
    escaped = _ESCAPED.sub(r"\\\1", value)
    if in_table:
        return escaped.replace("|", "\\|")
    lines = escaped.split("\n")
    return "\n".join(
        line if index == 0 and not line_start else _escape_line_start(line) for index, line in enumerate(lines)
    )


def _destination(url: str) -> str:
    return f"<{url}>" if any(ch in url for ch in " ()") else url


def render_inline(nodes: Sequence[ContentNode], in_table: bool = False, line_start: bool = True) -> str:
    parts: list[str] = []
    for node in nodes:
        rendered = "".join(parts)
        at_line_start = rendered.endswith("\n") if rendered else line_start
        inner = render_inline(node.children or [], in_table, line_start=False)
        if node.type == "text":
            parts.append(_escape(node.value or "", in_table, at_line_start))
        elif node.type == "inlineCode":
            value = node.value or ""
            parts.append(f"`` {value} ``" if "`" in value else f"`{value}`")
        elif node.type == "strong":
            parts.append(f"**{inner}**")
        elif node.type == "emphasis":
            parts.append(f"*{inner}*")
        elif node.type == "delete":
            parts.append(f"~~{inner}~~")
        elif node.type == "link":
            if node.data.get("autolink"):
                parts.append(f"<{node.url}>")
            else:
                title = f' "{node.title}"' if node.title else ""
                parts.append(f"[{inner}]({_destination(node.url or '')}{title})")
        elif node.type == "image":
            title = f' "{node.title}"' if node.title else ""
            parts.append(f"![{_escape(node.value or '')}]({_destination(node.url or '')}{title})")
        elif node.type == "break":
            parts.append("\\\n")
        elif node.type == "html":
            parts.append(node.value or "")
        else:
            parts.append(render_inline(node.children or [], in_table, at_line_start))
    return "".join(parts)


def _prefix_lines(body: str, prefix: str, blank: str) -> str:
    return "\n".join(f"{prefix}{line}" if line else blank for line in body.split("\n"))


def _hang(body: str, marker: str) -> str:
    pad = " " * len(marker)
    lines = body.split("\n")
    rest = [f"{pad}{line}" if line else "" for line in lines[1:]]
    return "\n".join([f"{marker}{lines[0]}", *rest])


def _render_code(node: ContentNode) -> str:
    value = node.value or ""
    fence = "```"
    while fence in value:
        fence += "`"
    body = f"{value}\n" if value else ""
    return f"{fence}{node.lang or ''}\n{body}{fence}"


def _render_table(node: ContentNode) -> str:
    rows = node.rows or []
    if not rows:
        return ""
    align = list(node.align or [])
    width = max(len(row) for row in rows)
    align += [None] * (width - len(align))

    def line(cells: list[ContentNode]) -> str:
        rendered = [render_inline(cell.children or [], in_table=True, line_start=False) for cell in cells]
        rendered += [""] * (width - len(rendered))
        return "|" + "|".join(rendered) + "|"

    rule = {None: "---", "left": ":---", "right": "---:", "center": ":---:"}
    separator = "|" + "|".join(rule.get(a, "---") for a in align) + "|"
    return "\n".join([line(rows[0]), separator, *(line(row) for row in rows[1:])])


def _render_list(node: ContentNode) -> str:
    separator = "\n" if node.tight else "\n\n"
    first = node.start if node.start is not None else 1
    items = []
    for offset, item in enumerate(node.children or []):
        marker = f"{first + offset}. " if node.ordered else "- "
        body = render_blocks(item.children or [], separator)
        items.append(_hang(body, marker))
    return separator.join(items)


def render_block(node: ContentNode) -> str:
    kind = node.type
    if kind == "heading":
        return f"{'#' * (node.depth or 1)} {render_inline(node.children or [], line_start=False)}"
    if kind in ("paragraph", "tableCell"):
        return render_inline(node.children or [])
    if kind == "blockquote":
        return _prefix_lines(render_blocks(node.children or []), "> ", ">")
    if kind == "code":
        return _render_code(node)
    if kind == "html":
        return node.value or ""
    if kind == "thematicBreak":
        return "---"
    if kind == "table":
        return _render_table(node)
    if kind == "list":
        return _render_list(node)
    if kind in ("root", "listItem"):
        return render_blocks(node.children or [])
    return render_inline([node])


def render_blocks(nodes: Sequence[ContentNode], separator: str = "\n\n") -> str:
    return separator.join(render_block(node) for node in nodes)


def to_markdown(tree: ContentNode) -> str:
    """Serialize a tree back to Markdown text."""
    body = render_block(tree)
    return f"{body}\n" if body else ""
