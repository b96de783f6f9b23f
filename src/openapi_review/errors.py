class OpenApiReviewError(Exception):
    """Base class for errors raised by openapi-review."""


class SpecLoadError(OpenApiReviewError):
    def __init__(self, location: str, reason: str) -> None:
        super().__init__(f"Could not load spec {location}: {reason}")
        self.location = location


class EngineError(OpenApiReviewError):
    """An external engine (git, openapi-diff, widdershins) failed."""

    def __init__(self, command: str, returncode: int, stderr: str = "") -> None:
        detail = f": {stderr.strip()}" if stderr.strip() else ""
        super().__init__(f"{command} exited with status {returncode}{detail}")
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
