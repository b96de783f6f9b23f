"""``GitClient`` over a local checkout: refs stand in for the pull request's base and head."""

from __future__ import annotations

import asyncio
import logging
import subprocess
from pathlib import Path

from openapi_review.errors import EngineError

logger = logging.getLogger(__name__)


def run_git(repo_dir: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", "-C", str(repo_dir), *args],
        check=False,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        raise EngineError(f"git {args[0]}", result.returncode, result.stderr)
    return result.stdout


class LocalGitClient:
    def __init__(
        self,
        repo_dir: str | Path,
        base_ref: str,
        head_ref: str,
        comments_dir: str | Path | None = None,
    ) -> None:
        self._repo_dir = Path(repo_dir)
        self._base_ref = base_ref
        self._head_ref = head_ref
        self._comments_dir = Path(comments_dir) if comments_dir else None
        self.comments: list[str] = []

    async def get_changed_files(self, owner: str, repo: str, pull_request_id: str, paths: list[str]) -> list[str]:
        output = await asyncio.to_thread(
            run_git,
            self._repo_dir,
            "diff",
            "--name-only",
            "--diff-filter=M",
            f"{self._base_ref}...{self._head_ref}",
            "--",
            *paths,
        )
        return [line for line in output.splitlines() if line.strip()]

    async def get_file_content(self, path: str, owner: str, repo: str, ref: str) -> str:
        return await asyncio.to_thread(run_git, self._repo_dir, "show", f"{ref}:{path}")

    async def create_pull_request_comment(self, owner: str, repo: str, pull_request_id: str, comment: str) -> None:
        self.comments.append(comment)
        if self._comments_dir is None:
            return
        self._comments_dir.mkdir(parents=True, exist_ok=True)
        target = self._comments_dir / f"{pull_request_id}-{len(self.comments):02d}.md"
        target.write_text(comment, encoding="utf-8")
        logger.info("Wrote comment to %s", target)
