import logging
from typing import Annotated

import typer

from openapi_review.cli.annotate import annotate
from openapi_review.cli.review import review

app = typer.Typer(
    name="openapi-review",
    help="OpenAPI review: annotate generated API docs with spec changes.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure(
    log_level: Annotated[
        str, typer.Option(envvar="OPENAPI_REVIEW_LOG_LEVEL", help="Logging level (DEBUG, INFO, WARNING, ...).")
    ] = "WARNING",
) -> None:
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


app.command("annotate")(annotate)
app.command("review")(review)


def main() -> None:
    app()
