from typing import Any, Protocol

from openapi_review.models import DiffOutcome, SpecDocument


class DiffEngine(Protocol):
    async def diff_specs(self, source: SpecDocument, destination: SpecDocument) -> DiffOutcome: ...


class DocGenerator(Protocol):
    async def convert(self, spec: dict[str, Any], options: dict[str, Any]) -> str: ...
