"""
Rich console diagnostics for ptrsweep
"""

from typing import Optional
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from ..stats import StatsSnapshot


class ConsoleOutput:
    """
    Diagnostic stream on stderr.

    Results go to the OutputSink; everything for the operator
    (warnings, progress, summary) goes here.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True, highlight=False)

    def print_error(self, message: str):
        """Print error message"""
        self.console.print(f"[bold red]Error:[/] {escape(message)}")

    def print_warning(self, message: str):
        """Print warning message"""
        self.console.print(f"[yellow]Warning:[/] {escape(message)}")

    def print_info(self, message: str):
        self.console.print(f"[dim]{escape(message)}[/]")

    def print_setup(self, resolvers: int, workers: int):
        self.print_info(f"Using {resolvers} resolvers with {workers} threads")

    def print_progress(self, snapshot: StatsSnapshot, rate: float):
        """Print one progress sample"""
        line = Text()
        line.append("Progress: ", style="bold cyan")
        line.append(f"{snapshot.processed}/{snapshot.total} processed, ")
        line.append(f"{snapshot.resolved} resolved", style="green")
        line.append(f", {rate:.1f} IPs/sec", style="dim")
        self.console.print(line)

    def print_summary(self, snapshot: StatsSnapshot):
        """Print final summary panel"""
        content = Text()
        content.append("Completed: ", style="bold")
        content.append(f"{snapshot.total} total, ")
        content.append(f"{snapshot.resolved} resolved", style="green")
        content.append(", ")
        content.append(f"{snapshot.failed} failed",
                       style="red" if snapshot.failed else "dim")

        panel = Panel(
            content,
            title=Text("Summary", style="bold"),
            border_style="green" if not snapshot.failed else "yellow",
            padding=(0, 1)
        )
        self.console.print()
        self.console.print(panel)
