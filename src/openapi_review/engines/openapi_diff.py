"""``DiffEngine`` backed by the ``openapi-diff`` command line tool."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from openapi_review.engines.process import run_command
from openapi_review.errors import EngineError
from openapi_review.models import DiffOutcome, SpecDocument


def _suffix(spec: SpecDocument) -> str:
    suffix = Path(spec.location).suffix.lower()
    return suffix if suffix in (".json", ".yaml", ".yml") else ".yaml"


def parse_diff_output(output: str) -> DiffOutcome:
    """Extract the JSON outcome from openapi-diff's stdout."""
    start = output.find("{")
    if start == -1:
        raise EngineError("openapi-diff", 0, "no JSON result in output")
    try:
        return DiffOutcome.model_validate(json.loads(output[start:]))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise EngineError("openapi-diff", 0, f"unreadable result: {exc}") from exc


class OpenApiDiffEngine:
    def __init__(self, executable: str | None = None) -> None:
        self._executable = executable or os.getenv("OPENAPI_DIFF_BIN", "openapi-diff")

    async def diff_specs(self, source: SpecDocument, destination: SpecDocument) -> DiffOutcome:
        with tempfile.TemporaryDirectory(prefix="openapi-review-") as tmp:
            source_path = Path(tmp) / f"source{_suffix(source)}"
            destination_path = Path(tmp) / f"destination{_suffix(destination)}"
            source_path.write_text(source.content, encoding="utf-8")
            destination_path.write_text(destination.content, encoding="utf-8")
            # exits 1 when breaking differences are found
            output = await run_command(self._executable, str(source_path), str(destination_path), ok_codes=(0, 1))
        return parse_diff_output(output)
