import asyncio
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.markup import escape

from openapi_review.cli.console import console, print_error
from openapi_review.core.pipeline import PipelineOptions, process_docs
from openapi_review.core.specs import load_spec
from openapi_review.engines.openapi_diff import OpenApiDiffEngine
from openapi_review.errors import OpenApiReviewError
from openapi_review.models import DiffOutcome


def annotate(
    docs: Annotated[Path, typer.Argument(help="Generated Markdown docs to annotate.")],
    base: Annotated[Path, typer.Option(help="Base (old) version of the spec.")],
    head: Annotated[Path, typer.Option(help="Head (new) version of the spec.")],
    diff: Annotated[
        Path | None, typer.Option(help="openapi-diff JSON result. Runs openapi-diff when omitted.")
    ] = None,
    header: Annotated[bool, typer.Option(help="Prepend the diff summary header.")] = False,
    spec_path: Annotated[str | None, typer.Option(help="Spec path shown in the header (defaults to --head).")] = None,
    embedded_headings: Annotated[
        bool, typer.Option(help="Treat <h1>..<h6> raw HTML lines as section headings.")
    ] = False,
    strip_authentication: Annotated[bool, typer.Option(help="Drop the 'Authentication' heading.")] = False,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Write to a file instead of stdout.")] = None,
) -> None:
    """Annotate generated docs with change markers from a spec diff."""
    options = PipelineOptions(
        insert_header=header,
        recognize_embedded_headings=embedded_headings,
        strip_authentication=strip_authentication,
    )

    async def _run() -> str:
        source = load_spec(base.read_text(encoding="utf-8"), str(base))
        destination = load_spec(head.read_text(encoding="utf-8"), str(head))
        if diff is not None:
            outcome = DiffOutcome.model_validate_json(diff.read_text(encoding="utf-8"))
        else:
            outcome = await OpenApiDiffEngine().diff_specs(source, destination)
        return await process_docs(
            docs.read_text(encoding="utf-8"),
            [source, destination],
            outcome,
            spec_path=spec_path or str(head),
            options=options,
        )

    try:
        annotated = asyncio.run(_run())
    except (OSError, OpenApiReviewError, ValidationError) as exc:
        print_error(exc)
        raise typer.Exit(1) from None

    if output is None:
        typer.echo(annotated, nl=False)
        return
    output.write_text(annotated, encoding="utf-8")
    console.print(f"[green]Wrote[/green] annotated docs to {escape(str(output))}")
