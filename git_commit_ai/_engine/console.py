from typing import Optional

from rich.console import Console
from rich.theme import Theme

# Custom theme for consistent styling
custom_theme = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "bold red",
        "highlight": "magenta",
        "debug": "dim",
    }
)

# Results go to stdout, everything else (status, errors, traces) to stderr
console = Console(theme=custom_theme)
err_console = Console(theme=custom_theme, stderr=True)


class DebugChannel:
    """
    Verbose trace sink handed to the transport and the response buffer.

    Messages are printed verbatim (no rich markup) so that text coming back
    from the API can never be interpreted as styling.
    """

    def __init__(self, enabled: bool = False, output: Optional[Console] = None):
        self.enabled = enabled
        self.console = output if output is not None else err_console

    def __call__(self, message: str) -> None:
        if not self.enabled:
            return
        self.console.print(
            f"[DEBUG] {message}", style="debug", markup=False, highlight=False
        )


# Shared no-op channel for callers that don't care about tracing
SILENT = DebugChannel(enabled=False)
