from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console

from git_commit_ai._engine.console import err_console


@contextmanager
def spinner(message: str, output: Optional[Console] = None) -> Iterator[None]:
    """Show a spinner on stderr while the wrapped block runs."""
    output = output if output is not None else err_console
    with output.status(f"[bold green]{message}", spinner="moon"):
        yield
