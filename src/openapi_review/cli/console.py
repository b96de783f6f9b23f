from rich.console import Console
from rich.markup import escape

console = Console()
err_console = Console(stderr=True)


def print_error(message: object) -> None:
    err_console.print(f"[red]{escape(str(message))}[/red]")


class ConsoleIoManager:
    """``IoManager`` that reports failures on stderr and remembers them for the exit code."""

    def __init__(self) -> None:
        self.errors: list[BaseException] = []

    @property
    def failed(self) -> bool:
        return bool(self.errors)

    def set_failed(self, error: BaseException) -> None:
        self.errors.append(error)
        print_error(error)
