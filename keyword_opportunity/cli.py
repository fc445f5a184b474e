"""Typer CLI application for keyword opportunity analysis.

Provides commands to analyse keyword research exports, score a single
keyword, and check configuration.
"""

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from keyword_opportunity.utils.helpers import format_number

console = Console()
app = typer.Typer(
    name="keyword-opportunity",
    help="Keyword opportunity analysis -- clustering, scoring, quick wins & action plans.",
    add_completion=False,
    no_args_is_help=True,
)


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging level and format."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _get_app(config: Optional[str]):
    """Lazy-import and return an initialised KeywordOpportunityApp."""
    from keyword_opportunity.app import KeywordOpportunityApp
    kw_app = KeywordOpportunityApp(config_path=config)
    kw_app.initialize()
    return kw_app


def _print_clusters(clusters, title: str) -> None:
    """Pretty-print a list of clusters using Rich."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Main Keyword", style="cyan", min_width=25)
    table.add_column("Theme")
    table.add_column("Keywords", justify="right")
    table.add_column("Volume", justify="right")
    table.add_column("Avg CPC", justify="right")
    table.add_column("Difficulty", justify="right")
    table.add_column("Score", justify="right")
    for index, cluster in enumerate(clusters, start=1):
        table.add_row(
            str(index),
            cluster.main_keyword,
            cluster.theme.value,
            str(cluster.keyword_count),
            format_number(cluster.total_search_volume),
            f"${cluster.avg_cpc:.2f}",
            f"{round(cluster.avg_difficulty)}/100",
            format_number(cluster.total_commercial_score),
        )
    console.print(table)


def _print_report(report) -> None:
    """Pretty-print summary, opportunity subsets, competitors, and plan."""
    summary = report.summary
    cards = "\n".join(f"[bold]{card.title}:[/bold] {card.value}" for card in report.summary_cards)
    console.print(Panel(cards, title="Summary"))

    if report.quick_wins:
        _print_clusters(report.quick_wins, "Quick Wins")
    else:
        console.print("[yellow]No quick wins found.[/yellow]")
    if report.high_value:
        _print_clusters(report.high_value, "High-Value Targets")
    else:
        console.print("[yellow]No high-value targets found.[/yellow]")
    if report.top_clusters:
        _print_clusters(report.top_clusters, "Top Keyword Clusters")

    if report.competitors:
        comp_table = Table(title="Main Competitors", show_header=True, header_style="bold magenta")
        comp_table.add_column("Domain", style="cyan")
        comp_table.add_column("Clusters", justify="right")
        for entry in report.competitors:
            comp_table.add_row(entry.domain, str(entry.frequency))
        console.print(comp_table)

    for index, step in enumerate(report.action_plan, start=1):
        console.print(f"[bold]{index}. {step.title}[/bold] [dim]({step.category})[/dim]")
        console.print("   " + step.description)

    console.print(
        f"\n[bold]{summary.total_keywords} keywords in {summary.total_clusters} clusters, "
        f"{summary.total_search_volume:,} monthly searches.[/bold]"
    )


# ------------------------------------------------------------------
# analyze
# ------------------------------------------------------------------
@app.command()
def analyze(
    records_file: str = typer.Argument(..., help="JSON or CSV file of keyword metric records."),
    related: Optional[str] = typer.Option(None, "--related", "-r", help="JSON or CSV file of expansion keywords."),
    ranking_pages: Optional[str] = typer.Option(None, "--ranking-pages", "-p", help="JSON or CSV file of ranking pages per keyword."),
    business_type: Optional[str] = typer.Option(None, "--business-type", "-b", help="Business type (e.g. E-commerce, SaaS)."),
    website: Optional[str] = typer.Option(None, "--website", "-w", help="Website the keywords were researched for."),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to settings YAML."),
    json_out: Optional[str] = typer.Option(None, "--json-out", help="Write the JSON report to this path."),
    csv_out: Optional[str] = typer.Option(None, "--csv-out", help="Write keyword rows as CSV to this path."),
    text: bool = typer.Option(False, "--text", help="Print the plain-text report instead of tables."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Cluster and prioritise keyword research data."""
    _setup_logging(verbose)
    try:
        kw_app = _get_app(config)
        report = kw_app.analyze_files(
            records_file,
            related_path=related,
            ranking_pages_path=ranking_pages,
            business_type=business_type,
            source_website=website,
        )
    except (ValueError, FileNotFoundError) as exc:
        console.print(f"[red]✘ {exc}[/red]")
        raise typer.Exit(code=1)

    if text:
        from keyword_opportunity.modules.reporting import ReportTextRenderer
        console.print(ReportTextRenderer().render_text(report), markup=False, highlight=False)
    else:
        _print_report(report)

    if json_out or csv_out:
        from keyword_opportunity.modules.reporting import ReportExporter
        exporter = ReportExporter()
        if json_out:
            path = exporter.export_to_json(report, json_out)
            console.print(f"[green]✔[/green] JSON report written to {path}")
        if csv_out:
            path = exporter.export_to_csv(report, csv_out)
            console.print(f"[green]✔[/green] CSV written to {path}")

    console.print("[green]✔[/green] Analysis complete.")


# ------------------------------------------------------------------
# score
# ------------------------------------------------------------------
@app.command()
def score(
    keyword: str = typer.Argument(..., help="Keyword to score."),
    volume: int = typer.Option(..., "--volume", help="Monthly search volume."),
    cpc: Optional[float] = typer.Option(None, "--cpc", help="Cost per click (configured default when omitted)."),
    competition: Optional[float] = typer.Option(None, "--competition", help="Numeric competition 0-1."),
    level: Optional[str] = typer.Option(None, "--level", help="Competition level (LOW, MEDIUM, HIGH)."),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to settings YAML."),
) -> None:
    """Score a single keyword: commercial score, difficulty, and theme."""
    from keyword_opportunity.modules.keyword_research.difficulty import estimate_difficulty
    from keyword_opportunity.modules.keyword_research.intent import identify_theme
    from keyword_opportunity.modules.keyword_research.normalizer import normalize_record
    from keyword_opportunity.modules.keyword_research.scoring import calculate_commercial_score

    try:
        settings = _get_app(config).settings
    except ValueError as exc:
        console.print(f"[red]✘ {exc}[/red]")
        raise typer.Exit(code=1)

    record = normalize_record(
        {
            "keyword": keyword,
            "search_volume": volume,
            "cpc": cpc,
            "competition": competition,
            "competition_level": level,
        },
        default_cpc=settings.default_cpc,
        min_search_volume=settings.min_search_volume,
    )
    if record is None:
        console.print(
            f"[red]✘ Keyword dropped: search volume must be at least "
            f"{max(1, settings.min_search_volume)}.[/red]"
        )
        raise typer.Exit(code=1)

    table = Table(title="Keyword Score: " + record.keyword, show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")
    table.add_row("Commercial score", str(calculate_commercial_score(
        record.keyword, record.search_volume, record.cpc, record.competition,
    )))
    table.add_row("Difficulty", f"{estimate_difficulty(record, settings.high_authority_domains)}/100")
    table.add_row("Theme", identify_theme(record.keyword).value)
    table.add_row("CPC", f"${record.cpc:.2f}")
    table.add_row("Competition", f"{record.competition:.2f} ({record.competition_level})")
    console.print(table)


# ------------------------------------------------------------------
# status
# ------------------------------------------------------------------
@app.command()
def status(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to settings YAML."),
) -> None:
    """Show configuration status."""
    try:
        kw_app = _get_app(config)
    except ValueError as exc:
        console.print(f"[red]✘ {exc}[/red]")
        raise typer.Exit(code=1)

    table = Table(title="Status", show_header=True, header_style="bold magenta")
    table.add_column("Component", style="cyan")
    table.add_column("Status")
    table.add_column("Details")
    for name, info in kw_app.get_status().items():
        colour = "green" if info["status"] == "ok" else "yellow"
        table.add_row(name, f"[{colour}]{info['status']}[/{colour}]", info["details"])
    console.print(table)


def main() -> None:
    """Entry point for the ``keyword-opportunity`` console script."""
    app()


if __name__ == "__main__":
    main()
