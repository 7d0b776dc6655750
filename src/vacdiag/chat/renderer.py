"""Rich terminal rendering for vacdiag chat output."""

from __future__ import annotations

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel


class ChatRenderer:
    """Renders chat output with rich formatting."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def render_welcome(self, model: str) -> None:
        """Render the welcome panel."""
        self.console.print(
            Panel(
                "[bold]Industrial Intelligence[/bold] — vacuum pump diagnostic assistant\n"
                f"Model: [cyan]{model}[/cyan]  "
                "Pick an option by number, or describe the issue.  /help: commands",
                border_style="cyan",
            )
        )

    def render_options(self, options: list[str]) -> None:
        """Render numbered guided options."""
        if not options:
            return
        for i, option in enumerate(options, start=1):
            self.console.print(f"  [bold cyan]{i}[/bold cyan]  {option}")

    def render_assistant_message(self, text: str) -> None:
        """Render an assistant response as Markdown."""
        self.console.print()
        self.console.print(Markdown(text))
        self.console.print()

    def render_context(self, chunks: list[str]) -> None:
        """Render retrieved knowledge chunks (debug view)."""
        for chunk in chunks:
            self.console.print(Panel(chunk.rstrip(), title="Knowledge", border_style="blue", expand=False))

    def render_error(self, message: str) -> None:
        """Render an error message."""
        self.console.print(f"[bold red]Error:[/bold red] {message}")

    def render_info(self, message: str) -> None:
        """Render an informational message."""
        self.console.print(f"[dim]{message}[/dim]")
