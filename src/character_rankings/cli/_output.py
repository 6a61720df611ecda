from rich.console import Console
from rich.table import Table

from character_rankings.domain.character import Character
from character_rankings.domain.generation import GenerationSummary
from character_rankings.domain.ranking import RankedCharacter, RankHistoryPoint, RankingChange
from character_rankings.domain.trend_series import TrendSeries
from character_rankings.domain.validation import DatasetIssue
from character_rankings.domain.vote_trends import VoteGrowth, VoteTotalsSummary
from character_rankings.repos.ranking_repo import UNKNOWN_CHARACTER_NAME

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

_DIRECTION_MARKERS = {
    "new": "[cyan]NEW[/cyan]",
    "up": "[green]↑[/green]",
    "down": "[red]↓[/red]",
    "same": "→",
}


def _pct(value: float | None) -> str:
    return "-" if value is None else f"{value:+.1f}%"


def _name(character: Character | None) -> str:
    return character.name if character else UNKNOWN_CHARACTER_NAME


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def print_years(years: list[int]) -> None:
    if not years:
        console.print("No ranking years available.")
        return
    console.print(", ".join(str(y) for y in years))


def print_characters(characters: list[Character]) -> None:
    if not characters:
        console.print("No characters in catalog.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Debut", justify="right")
    for character in characters:
        table.add_row(str(character.id), character.name, str(character.debut_year))
    console.print(table)


def print_top_characters(year: int, ranked: list[RankedCharacter]) -> None:
    if not ranked:
        console.print(f"No rankings found for {year}.")
        return
    table = Table(title=f"{year} ranking", show_edge=False, pad_edge=False)
    table.add_column("Rank", justify="right")
    table.add_column("Character")
    table.add_column("Votes", justify="right")
    for item in ranked:
        table.add_row(str(item.rank), _name(item.character), f"{item.votes:,}")
    console.print(table)


def print_history(name: str, history: list[RankHistoryPoint]) -> None:
    if not history:
        console.print(f"No ranking history for {name}.")
        return
    table = Table(title=name, show_edge=False, pad_edge=False)
    table.add_column("Year", justify="right")
    table.add_column("Rank", justify="right")
    table.add_column("Votes", justify="right")
    for point in history:
        table.add_row(str(point.year), str(point.rank), f"{point.votes:,}")
    console.print(table)


def print_ranking_changes(current_year: int, previous_year: int, changes: list[RankingChange]) -> None:
    if not changes:
        console.print("No ranking changes to show.")
        return
    table = Table(title=f"{previous_year} → {current_year}", show_edge=False, pad_edge=False)
    table.add_column("Rank", justify="right")
    table.add_column("Character")
    table.add_column("Prev", justify="right")
    table.add_column("Move", justify="right")
    for item in changes:
        marker = _DIRECTION_MARKERS[item.direction]
        if item.change:
            marker = f"{marker} {abs(item.change)}"
        previous = "-" if item.previous_rank is None else str(item.previous_rank)
        table.add_row(str(item.rank), _name(item.character), previous, marker)
    console.print(table)


def print_vote_trends(rows: list[VoteGrowth], summary: VoteTotalsSummary | None) -> None:
    if not rows:
        console.print("No vote totals available.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Year", justify="right")
    table.add_column("Total votes", justify="right")
    table.add_column("YoY", justify="right")
    for row in rows:
        total = "-" if row.total_votes is None else f"{row.total_votes:,}"
        table.add_row(str(row.year), total, _pct(row.growth_rate))
    console.print(table)
    if summary is None:
        return
    console.print(f"  Total growth: {_pct(summary.total_growth)}")
    console.print(f"  Average growth: {_pct(summary.average_growth)}")
    console.print(f"  Max votes: {summary.max_votes:,}  Min votes: {summary.min_votes:,}")
    console.print(
        f"  Best year-over-year: {_pct(summary.max_growth_rate)}  Worst: {_pct(summary.min_growth_rate)}"
    )


def print_generation_summaries(year: int, summaries: list[GenerationSummary]) -> None:
    table = Table(title=f"{year} generations", show_edge=False, pad_edge=False)
    table.add_column("Generation")
    table.add_column("Characters", justify="right")
    table.add_column("Avg rank", justify="right")
    table.add_column("Votes", justify="right")
    for summary in summaries:
        average = "-" if summary.average_rank is None else f"{summary.average_rank:.1f}"
        table.add_row(summary.generation.label, str(summary.count), average, f"{summary.total_votes:,}")
    console.print(table)


def print_trend_series(series: list[TrendSeries], metric: str) -> None:
    if not series or not series[0].years:
        console.print("No trend data available.")
        return
    table = Table(title=metric, show_edge=False, pad_edge=False)
    table.add_column("Character")
    for year in series[0].years:
        table.add_column(str(year), justify="right")
    for line in series:
        table.add_row(line.name, *("-" if v is None else str(v) for v in line.values))
    console.print(table)


def print_dataset_issues(issues: list[DatasetIssue]) -> None:
    if not issues:
        console.print("[bold green]Dataset OK[/bold green] - no issues found.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Kind")
    table.add_column("Year", justify="right")
    table.add_column("Detail")
    for issue in issues:
        table.add_row(issue.kind.value, "" if issue.year is None else str(issue.year), issue.message)
    console.print(table)
    console.print(f"[yellow]{len(issues)} issue(s) found[/yellow]")
