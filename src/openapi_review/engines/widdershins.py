"""``DocGenerator`` backed by the ``widdershins`` command line tool."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from openapi_review.engines.process import run_command


class WiddershinsGenerator:
    def __init__(self, executable: str | None = None) -> None:
        self._executable = executable or os.getenv("WIDDERSHINS_BIN", "widdershins")

    async def convert(self, spec: dict[str, Any], options: dict[str, Any]) -> str:
        with tempfile.TemporaryDirectory(prefix="openapi-review-") as tmp:
            spec_path = Path(tmp) / "spec.json"
            environment_path = Path(tmp) / "environment.json"
            output_path = Path(tmp) / "docs.md"
            spec_path.write_text(json.dumps(spec, default=str), encoding="utf-8")
            environment_path.write_text(json.dumps(options), encoding="utf-8")
            await run_command(
                self._executable,
                "--environment",
                str(environment_path),
                str(spec_path),
                "-o",
                str(output_path),
            )
            return output_path.read_text(encoding="utf-8")
