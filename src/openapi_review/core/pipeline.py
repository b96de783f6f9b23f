import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel

from openapi_review.core.collapse import wrap_operations_with_details
from openapi_review.core.header import prepend_summary_header
from openapi_review.core.headings import increment_heading_depths
from openapi_review.core.markdown import parse_markdown, to_markdown
from openapi_review.core.notifier import insert_change_notifiers
from openapi_review.core.strip import remove_unwanted_nodes
from openapi_review.models import ContentNode, DiffOutcome, SpecDocument

logger = logging.getLogger(__name__)


class PipelineOptions(BaseModel):
    insert_header: bool = False
    recognize_embedded_headings: bool = False
    strip_authentication: bool = False


async def annotate_tree(
    tree: ContentNode,
    specs: Iterable[SpecDocument | Mapping[str, Any]],
    outcome: DiffOutcome,
    spec_path: str | None = None,
    options: PipelineOptions | None = None,
) -> ContentNode:
    """Run every annotation stage over *tree*, in place and in order."""
    opts = options or PipelineOptions()
    header_path: str | None = None
    if opts.insert_header:
        if spec_path is None:
            raise ValueError("spec_path is required when insert_header is enabled.")
        header_path = spec_path

    embedded = opts.recognize_embedded_headings
    remove_unwanted_nodes(tree, strip_authentication=opts.strip_authentication)
    insert_change_notifiers(tree, specs, outcome, embedded_headings=embedded)
    wrap_operations_with_details(tree, embedded_headings=embedded)
    if header_path is not None:
        await increment_heading_depths(tree)
        prepend_summary_header(tree, header_path, outcome)
    return tree


async def process_docs(
    contents: str,
    specs: Iterable[SpecDocument | Mapping[str, Any]],
    outcome: DiffOutcome,
    spec_path: str | None = None,
    options: PipelineOptions | None = None,
) -> str:
    """Annotate generated Markdown docs with change markers and return the new text."""
    tree = parse_markdown(contents)
    await annotate_tree(tree, specs, outcome, spec_path=spec_path, options=options)
    rendered = to_markdown(tree)
    logger.info("Annotated docs%s (%d chars)", f" for {spec_path}" if spec_path else "", len(rendered))
    return rendered
