from typing import Protocol


class GitClient(Protocol):
    async def get_changed_files(self, owner: str, repo: str, pull_request_id: str, paths: list[str]) -> list[str]: ...

    async def get_file_content(self, path: str, owner: str, repo: str, ref: str) -> str: ...

    async def create_pull_request_comment(self, owner: str, repo: str, pull_request_id: str, comment: str) -> None: ...
