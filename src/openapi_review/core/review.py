"""Review the OpenAPI specs changed by a pull request and comment annotated docs on it."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Literal

from pydantic import BaseModel, Field

from openapi_review.core.pipeline import PipelineOptions, process_docs
from openapi_review.core.ports.engines import DiffEngine, DocGenerator
from openapi_review.core.ports.git import GitClient
from openapi_review.core.ports.io import IoManager
from openapi_review.core.specs import load_spec
from openapi_review.errors import OpenApiReviewError
from openapi_review.models import ConverterOptions, DiffOutcome, SpecDocument

logger = logging.getLogger(__name__)


class PullRequestVersion(BaseModel):
    repo_owner: str
    repo_name: str
    ref: str


class PullRequest(BaseModel):
    base: PullRequestVersion
    head: PullRequestVersion
    id: str


class ReviewContext(BaseModel):
    pull_request: PullRequest | None = None
    spec_paths: list[str] = Field(default_factory=list)
    converter_options: dict[str, Any] = Field(default_factory=dict)
    fail_on_breaking_changes: bool | None = None
    pipeline: PipelineOptions = Field(default_factory=lambda: PipelineOptions(insert_header=True))


class OpenApiReview:
    def __init__(
        self,
        git_client: GitClient,
        io_manager: IoManager,
        context: ReviewContext,
        diff_engine: DiffEngine,
        doc_generator: DocGenerator,
    ) -> None:
        self._git = git_client
        self._io = io_manager
        self._context = context
        self._diff_engine = diff_engine
        self._doc_generator = doc_generator

    def _pull_request(self) -> PullRequest:
        if self._context.pull_request is None:
            raise OpenApiReviewError("Missing PR context")
        return self._context.pull_request

    async def get_spec_version(self, path: str, version: Literal["base", "head"]) -> SpecDocument:
        pr_version: PullRequestVersion = getattr(self._pull_request(), version)
        content = await self._git.get_file_content(
            path=path,
            owner=pr_version.repo_owner,
            repo=pr_version.repo_name,
            ref=pr_version.ref,
        )
        return load_spec(content, f"{version}/{path}")

    def fail_on_breaking_changes(self, spec_path: str, outcome: DiffOutcome) -> None:
        should_fail = self._context.fail_on_breaking_changes
        if should_fail is None:
            should_fail = True

        if outcome.breaking_differences_found and should_fail:
            details = json.dumps(
                [d.model_dump(by_alias=True) for d in outcome.breaking_differences or []],
                indent=2,
            )
            self._io.set_failed(OpenApiReviewError(f"Breaking changes were found in {spec_path}:\n{details}"))

    async def get_spec_docs(
        self, source: SpecDocument, destination: SpecDocument, outcome: DiffOutcome, spec_path: str
    ) -> str:
        options = ConverterOptions.model_validate(self._context.converter_options)
        docs = await self._doc_generator.convert(destination.spec, options.as_generator_options())
        return await process_docs(
            docs,
            [source, destination],
            outcome,
            spec_path=spec_path,
            options=self._context.pipeline,
        )

    async def process_spec(self, spec_path: str) -> None:
        logger.info("Processing %s", spec_path)
        path = spec_path.removeprefix("./")

        source, destination = await asyncio.gather(
            self.get_spec_version(path, "base"),
            self.get_spec_version(path, "head"),
        )
        outcome = await self._diff_engine.diff_specs(source, destination)
        self.fail_on_breaking_changes(spec_path, outcome)

        docs = await self.get_spec_docs(source, destination, outcome, spec_path)

        pr = self._pull_request()
        await self._git.create_pull_request_comment(
            owner=pr.base.repo_owner,
            repo=pr.base.repo_name,
            pull_request_id=pr.id,
            comment=docs,
        )

    async def run(self) -> None:
        try:
            pr = self._pull_request()
            changed_specs = await self._git.get_changed_files(
                owner=pr.base.repo_owner,
                repo=pr.base.repo_name,
                pull_request_id=pr.id,
                paths=self._context.spec_paths,
            )
            logger.info("Found %d changed spec(s)", len(changed_specs))
        except Exception as exc:
            logger.debug("Review failed", exc_info=True)
            self._io.set_failed(exc)
            return

        results = await asyncio.gather(
            *(self.process_spec(spec) for spec in changed_specs),
            return_exceptions=True,
        )
        for spec, result in zip(changed_specs, results, strict=True):
            if isinstance(result, Exception):
                logger.debug("Review of %s failed", spec, exc_info=result)
                self._io.set_failed(result)
