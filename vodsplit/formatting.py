"""Rich-based console output for the vodsplit CLI

Log records go through the logging module; this module only prints the
run header, fatal errors and the end-of-batch summary.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

console = Console()

STATUS_STYLES = {
    "split": "bold green",
    "failed": "bold red",
}


def print_header(title: str, width: int = 80) -> None:
    """Print a decorative header."""
    separator = Text("=" * width, style="bold blue")
    console.print(separator)
    console.print(title.center(width).rstrip(), style="bold blue")
    console.print(separator)


def print_error(message: str) -> None:
    """Print a fatal error in bold red."""
    console.print(Text("✗ ", style="bold red") + Text(message, style="bold"))


def print_batch_summary(summary) -> None:
    """Print the outcome of one batch.

    Args:
        summary: ``BatchSummary`` returned by ``SplitterClient.split_videos``
    """
    if summary.total == 0:
        console.print(Text("ℹ ", style="bold blue") + Text("No downloaded videos waiting to be split", style="blue"))
        return

    table = Table(title="Batch summary", show_header=False, title_style="bold")
    table.add_column("Result", style="bold")
    table.add_column("Count", justify="right")
    table.add_row("Selected", str(summary.total))
    table.add_row(Text("Split", style=STATUS_STYLES["split"]), str(summary.split))
    table.add_row(Text("Failed", style=STATUS_STYLES["failed"] if summary.failed else ""), str(summary.failed))
    table.add_row("Parts written", str(summary.parts))
    console.print(table)

    if summary.failed:
        console.print(
            Text("⚠ ", style="bold yellow")
            + Text(f"{summary.failed} videos failed, see the log for details", style="bold")
        )
