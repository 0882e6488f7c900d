"""Rich console output for statistics reports."""

from typing import Any

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table


class Console:
    """Wrapper for rich console output."""

    def __init__(self, verbose: bool = False, quiet: bool = False):
        self.console = RichConsole()
        self.verbose = verbose
        self.quiet = quiet

    def print(self, *args, **kwargs):
        """Print to console (respects quiet mode)."""
        if not self.quiet:
            self.console.print(*args, **kwargs)

    def print_error(self, message: str):
        """Print error message."""
        self.console.print(f"[red]Error:[/red] {message}")

    def print_warning(self, message: str):
        """Print warning message."""
        self.console.print(f"[yellow]Warning:[/yellow] {message}")

    def print_success(self, message: str):
        """Print success message."""
        if not self.quiet:
            self.console.print(f"[green]{message}[/green]")

    def print_header(self, repository: str, contributor: str, start: str, end: str):
        """Print run header."""
        if self.quiet:
            return

        self.console.print()
        self.console.print(
            Panel(
                f"[bold blue]Contributor Statistics[/bold blue]\n"
                f"[dim]{contributor} in {repository}, {start} to {end}[/dim]",
                expand=False,
            )
        )
        self.console.print()

    def print_summary(self, report: dict[str, Any]):
        """Print category counts, plus item titles in verbose mode."""
        if self.quiet:
            return

        table = Table(title="Activity", expand=False)
        table.add_column("Category")
        table.add_column("Count", justify="right")

        categories = [("Pull requests", "prs_count"), ("Issues", "issues_count")]
        if "commits_count" in report:
            categories.append(("Commits", "commits_count"))
        for label, key in categories:
            table.add_row(label, str(report[key]))

        self.console.print(table)

        if self.verbose:
            for label, key in (
                ("Pull requests", "pr_stats"),
                ("Issues", "issue_stats"),
                ("Commits", "commit_stats"),
            ):
                for item in report.get(key, []):
                    self.console.print(
                        f"[dim]{label}:[/dim] {escape(item['title'])} ({item['url']})"
                    )

    def print_output_path(self, path: str):
        """Print where the report was written."""
        if not self.quiet:
            self.console.print(f"\n[dim]Report saved to:[/dim] {path}")
