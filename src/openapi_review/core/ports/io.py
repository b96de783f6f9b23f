from typing import Protocol


class IoManager(Protocol):
    def set_failed(self, error: BaseException) -> None: ...
