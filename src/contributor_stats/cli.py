"""CLI interface for contributor-stats."""

import asyncio
import logging
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Optional

import httpx
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from contributor_stats import __version__
from contributor_stats.config import Config, get_config
from contributor_stats.exceptions import ContributorStatsError, GitHubAPIError
from contributor_stats.models.activity import StatisticsRecord
from contributor_stats.models.window import DateWindow
from contributor_stats.output.console import Console as OutputConsole
from contributor_stats.output.html_report import write_html_report
from contributor_stats.output.json_writer import build_report, write_json_report
from contributor_stats.sdk import ContributorStats
from contributor_stats.utils.dates import months_before

app = typer.Typer(
    name="contributor-stats",
    help="Report a contributor's pull requests, issues and commits in a GitHub repository",
    add_completion=False,
)

console = Console()


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"contributor-stats version {__version__}")
        raise typer.Exit()


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def split_repository(repository: str) -> tuple[str, str]:
    """Split ``owner/name`` into its two parts."""
    owner, sep, name = repository.partition("/")
    if not sep or not owner or not name or "/" in name:
        raise typer.BadParameter(f"Expected OWNER/REPO, got {repository!r}")
    return owner, name


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """contributor-stats - Report a contributor's activity in a GitHub repository."""
    pass


@app.command()
def stats(
    repository: str = typer.Argument(..., help="Repository as OWNER/REPO"),
    contributor: str = typer.Argument(..., help="GitHub username of the contributor"),
    start_date: Optional[str] = typer.Option(
        None,
        "--start-date",
        help="Start date (YYYY-MM-DD, default: one month ago)",
    ),
    end_date: Optional[str] = typer.Option(
        None,
        "--end-date",
        help="End date (YYYY-MM-DD, default: today)",
    ),
    include_commits: bool = typer.Option(
        False,
        "--include-commits",
        help="Include commit data in statistics",
    ),
    search: bool = typer.Option(
        False,
        "--search",
        help="Use the Search API instead of repository listings",
    ),
    token: Optional[str] = typer.Option(
        None,
        "--token",
        help="GitHub token (default: CONTRIBUTOR_STATS_TOKEN or GITHUB_TOKEN)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path (default: statistics.html for html)",
    ),
    fmt: str = typer.Option(
        "html",
        "--format",
        "-f",
        help="Report format: html or json",
    ),
    summary_only: bool = typer.Option(
        False,
        "--summary-only",
        help="Print summary only, don't write a report",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Log HTTP request URLs",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose output",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Minimal output",
    ),
):
    """Collect a contributor's activity in one repository and write a report.

    Examples:
        contributor-stats stats psf/requests alice
        contributor-stats stats psf/requests alice --start-date 2024-01-01 --end-date 2024-01-31
        contributor-stats stats psf/requests alice --include-commits --format json
    """
    setup_logging(verbose=verbose, debug=debug)
    owner, name = split_repository(repository)

    if fmt not in ("html", "json"):
        console.print(f"[red]Unknown format: {fmt}. Use html or json[/red]")
        raise typer.Exit(1)

    today = date.today()
    start = start_date or months_before(today).isoformat()
    end = end_date or today.isoformat()

    # Validate before any request is made
    try:
        window = DateWindow.from_strings(start, end)
    except ContributorStatsError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    # Local copy so flags do not leak into the shared config
    config = get_config()
    if token:
        config = replace(config, github_token=token)
    if search:
        config = replace(config, use_search=True)

    output_console = OutputConsole(verbose=verbose, quiet=quiet)
    output_console.print_header(repository, contributor, window.start_date, window.end_date)

    if not config.is_authenticated:
        output_console.print_warning(
            "No GitHub token found. Using unauthenticated access (60 requests/hour).\n"
            "Set GITHUB_TOKEN or pass --token for higher rate limits."
        )

    try:
        statistics = asyncio.run(
            _collect(config, owner, name, contributor, window, include_commits, debug)
        )
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled[/yellow]")
        raise typer.Exit(1)
    except GitHubAPIError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if e.status_code in (403, 429) and not config.is_authenticated:
            console.print("[dim]Tip: supply a GitHub token with --token[/dim]")
        raise typer.Exit(1)
    except (ContributorStatsError, httpx.HTTPError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    report = build_report(repository, contributor, window, statistics)
    output_console.print_summary(report)

    if summary_only:
        return

    if fmt == "json":
        output_file = write_json_report(report, output)
    else:
        output_file = write_html_report(report, output)
    output_console.print_output_path(str(output_file))
    output_console.print_success("Statistics generated successfully")


async def _collect(
    config: Config,
    owner: str,
    name: str,
    contributor: str,
    window: DateWindow,
    include_commits: bool,
    debug: bool,
) -> StatisticsRecord:
    """Run the aggregation asynchronously."""
    async with ContributorStats(config=config, debug=debug) as client:
        return await client.get_statistics(
            owner, name, contributor, window, include_commits=include_commits
        )


@app.command()
def check_token():
    """Check GitHub token configuration and rate limits."""
    from contributor_stats.utils.rate_limiter import (
        check_and_report_rate_limit,
        check_rate_limit_from_api,
    )

    config = get_config()

    if config.is_authenticated:
        console.print("[green]GitHub token is configured[/green]")
    else:
        console.print("[yellow]No GitHub token configured[/yellow]")
    console.print(f"Nominal rate limit: {config.effective_rate_limit} requests/hour")

    try:
        rate_info = asyncio.run(
            check_rate_limit_from_api(
                api_url=config.github_api_url,
                token=config.github_token,
                timeout=config.request_timeout,
            )
        )
    except httpx.HTTPError as e:
        console.print(f"[red]Could not check rate limit: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    core = rate_info["core"]
    console.print(f"Remaining: {core['remaining']}/{core['limit']} requests")
    if not check_and_report_rate_limit(rate_info, config.is_authenticated):
        raise typer.Exit(1)

    if not config.is_authenticated:
        console.print()
        console.print("To configure a token:")
        console.print("  export GITHUB_TOKEN=your_token_here")
        console.print()
        console.print("Create a token at: https://github.com/settings/tokens")
        console.print("No special scopes needed for public repositories.")


if __name__ == "__main__":
    app()
