import asyncio
import json
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.markup import escape

from openapi_review.cli.console import ConsoleIoManager, console, print_error
from openapi_review.core.pipeline import PipelineOptions
from openapi_review.core.review import OpenApiReview, PullRequest, PullRequestVersion, ReviewContext
from openapi_review.engines.openapi_diff import OpenApiDiffEngine
from openapi_review.engines.widdershins import WiddershinsGenerator
from openapi_review.git.local import LocalGitClient


def _load_converter_options(path: Path | None) -> dict[str, Any]:
    if path is None:
        return {}
    try:
        options = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        print_error(f"Could not read converter options from {path}: {exc}")
        raise typer.Exit(1) from None
    if not isinstance(options, dict):
        print_error(f"Converter options in {path} must be a JSON object.")
        raise typer.Exit(1)
    return options


def review(
    spec: Annotated[list[str], typer.Option(help="Spec path or pathspec to review. Repeatable.")],
    base_ref: Annotated[str, typer.Option(help="Git ref of the pull request base.")] = "origin/main",
    head_ref: Annotated[str, typer.Option(help="Git ref of the pull request head.")] = "HEAD",
    repo: Annotated[Path, typer.Option(help="Local git checkout.")] = Path("."),
    pr_id: Annotated[str, typer.Option(help="Pull request id, used to name comment files.")] = "local",
    output_dir: Annotated[
        Path | None, typer.Option(help="Write comment bodies here instead of printing them.")
    ] = None,
    converter_options: Annotated[
        Path | None, typer.Option(help="JSON file with widdershins options (omitHeader, tocSummary, ...).")
    ] = None,
    fail_on_breaking: Annotated[bool, typer.Option(help="Exit with status 1 when breaking changes are found.")] = True,
    header: Annotated[bool, typer.Option(help="Prepend the diff summary header.")] = True,
    embedded_headings: Annotated[
        bool, typer.Option(help="Treat <h1>..<h6> raw HTML lines as section headings.")
    ] = False,
    strip_authentication: Annotated[bool, typer.Option(help="Drop the 'Authentication' heading.")] = False,
) -> None:
    """Review spec changes between two refs and produce one annotated comment per spec."""
    repo_name = repo.resolve().name
    context = ReviewContext(
        pull_request=PullRequest(
            base=PullRequestVersion(repo_owner="local", repo_name=repo_name, ref=base_ref),
            head=PullRequestVersion(repo_owner="local", repo_name=repo_name, ref=head_ref),
            id=pr_id,
        ),
        spec_paths=spec,
        converter_options=_load_converter_options(converter_options),
        fail_on_breaking_changes=fail_on_breaking,
        pipeline=PipelineOptions(
            insert_header=header,
            recognize_embedded_headings=embedded_headings,
            strip_authentication=strip_authentication,
        ),
    )
    git_client = LocalGitClient(repo, base_ref, head_ref, comments_dir=output_dir)
    io_manager = ConsoleIoManager()
    reviewer = OpenApiReview(git_client, io_manager, context, OpenApiDiffEngine(), WiddershinsGenerator())

    asyncio.run(reviewer.run())

    if output_dir is None:
        for comment in git_client.comments:
            typer.echo(comment)
    console.print(
        f"[green]Reviewed[/green] {len(git_client.comments)} spec(s) "
        f"between {escape(base_ref)} and {escape(head_ref)}"
    )

    if io_manager.failed:
        raise typer.Exit(1)
