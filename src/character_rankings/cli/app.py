from typing import Annotated

import typer

from character_rankings.cli._logging import configure_logging
from character_rankings.cli._output import (
    print_characters,
    print_dataset_issues,
    print_error,
    print_generation_summaries,
    print_history,
    print_ranking_changes,
    print_top_characters,
    print_trend_series,
    print_vote_trends,
    print_years,
)
from character_rankings.cli.factory import QueryContext, build_query_context
from character_rankings.config import RankingSettings, create_config, load_settings
from character_rankings.domain.character import CharacterId
from character_rankings.domain.validation import validate_dataset
from character_rankings.exceptions import RankingsException
from character_rankings.ingest.dataset_loader import read_documents

app = typer.Typer(name="crank", help="Character popularity rankings - yearly results explorer")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
    config_path: Annotated[str, typer.Option("--config", help="YAML configuration file")] = "rankings.yaml",
    characters: Annotated[str | None, typer.Option("--characters", help="Character catalog JSON")] = None,
    rankings: Annotated[str | None, typer.Option("--rankings", help="Ranking data JSON")] = None,
) -> None:
    """Character popularity rankings - yearly results explorer."""
    configure_logging(verbose=verbose)
    try:
        cfg = create_config(yaml_path=config_path, characters_path=characters, rankings_path=rankings)
        ctx.obj = load_settings(cfg)
    except RankingsException as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


def _settings(ctx: typer.Context) -> RankingSettings:
    return ctx.find_root().obj


def _query_context(ctx: typer.Context) -> QueryContext:
    try:
        return build_query_context(_settings(ctx))
    except RankingsException as e:
        print_error(str(e))
        raise typer.Exit(code=1)


def _parse_character_id(raw: str) -> CharacterId:
    try:
        return int(raw)
    except ValueError:
        return raw


_TopOpt = Annotated[int | None, typer.Option("--top", min=1, help="Number of entries to show")]


@app.command()
def years(ctx: typer.Context) -> None:
    """List the years with ranking results."""
    qc = _query_context(ctx)
    print_years(qc.repo.get_available_years())


@app.command()
def characters(ctx: typer.Context) -> None:
    """List the character catalog."""
    qc = _query_context(ctx)
    print_characters(qc.repo.get_characters())


@app.command()
def ranking(
    ctx: typer.Context,
    year: Annotated[int, typer.Argument(help="Ranking year")],
    top: _TopOpt = None,
) -> None:
    """Show the top characters for a year."""
    qc = _query_context(ctx)
    top_n = top if top is not None else qc.settings.top_n
    print_top_characters(year, qc.repo.get_top_characters(year, top_n))


@app.command()
def history(
    ctx: typer.Context,
    character_id: Annotated[str, typer.Argument(help="Character id")],
) -> None:
    """Show a character's rank and votes for every year it placed."""
    qc = _query_context(ctx)
    cid = _parse_character_id(character_id)
    print_history(qc.repo.get_character_name(cid), qc.repo.get_character_ranking_history(cid))


@app.command()
def changes(
    ctx: typer.Context,
    year: Annotated[int | None, typer.Option("--year", help="Current year (default: latest)")] = None,
    previous: Annotated[int | None, typer.Option("--previous", help="Year to compare against")] = None,
    limit: Annotated[int | None, typer.Option("--limit", min=1, help="Maximum rows to show")] = None,
) -> None:
    """Compare ranks between two years."""
    qc = _query_context(ctx)
    row_limit = limit if limit is not None else qc.settings.changes_limit
    if year is None and previous is None:
        available = qc.repo.get_available_years()
        if len(available) < 2:
            print_error("at least two ranking years are needed to compare")
            raise typer.Exit(code=1)
        print_ranking_changes(available[-1], available[-2], qc.trends.latest_changes(row_limit))
        return
    if year is None or previous is None:
        print_error("--year and --previous must be given together")
        raise typer.Exit(code=1)
    print_ranking_changes(year, previous, qc.repo.calculate_ranking_changes(year, previous)[:row_limit])


@app.command()
def votes(ctx: typer.Context) -> None:
    """Show total votes per year with year-over-year growth."""
    qc = _query_context(ctx)
    print_vote_trends(qc.vote_trends.growth_rates(), qc.vote_trends.summary())


@app.command()
def generations(
    ctx: typer.Context,
    year: Annotated[int, typer.Argument(help="Ranking year")],
    top: _TopOpt = None,
) -> None:
    """Break a year's top characters down by debut generation."""
    qc = _query_context(ctx)
    top_n = top if top is not None else qc.settings.analysis_top_n
    print_generation_summaries(year, qc.generations.summarize(year, top_n))


@app.command()
def trends(
    ctx: typer.Context,
    character_ids: Annotated[list[str] | None, typer.Argument(help="Character ids (default: latest top)")] = None,
    by_votes: Annotated[bool, typer.Option("--votes", help="Show votes instead of ranks")] = False,
) -> None:
    """Show rank (or vote) trends across all years for selected characters."""
    qc = _query_context(ctx)
    if character_ids:
        selected = [_parse_character_id(raw) for raw in character_ids]
    else:
        selected = qc.trends.default_selection(qc.settings.trend_count)
    if by_votes:
        print_trend_series(qc.trends.vote_series(selected), "Votes")
    else:
        print_trend_series(qc.trends.rank_series(selected), "Rank")


@app.command()
def validate(ctx: typer.Context) -> None:
    """Check the dataset for data-quality issues."""
    settings = _settings(ctx)
    try:
        catalog, dataset = read_documents(settings.characters_path, settings.rankings_path)
    except RankingsException as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    issues = validate_dataset(catalog, dataset)
    print_dataset_issues(issues)
    if issues:
        raise typer.Exit(code=1)
