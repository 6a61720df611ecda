import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from character_rankings.domain.character import Character, CharacterId
from character_rankings.domain.ranking import RankingDataset, YearlyRankingEntry, parse_year
from character_rankings.domain.validation import format_issues, validate_dataset
from character_rankings.ingest.errors import DatasetLoadError
from character_rankings.ingest.json_source import JsonDocumentSource
from character_rankings.repos.ranking_repo import RankingRepository

logger = logging.getLogger(__name__)


def _require_field(raw: Mapping[str, Any], field: str, source: str, context: str) -> Any:
    if not isinstance(raw, Mapping):
        raise DatasetLoadError(source, f"{context}: expected an object, got {type(raw).__name__}")
    if field not in raw:
        raise DatasetLoadError(source, f"{context}: missing required field '{field}'")
    return raw[field]


def _require_id(raw: Mapping[str, Any], field: str, source: str, context: str) -> CharacterId:
    value = _require_field(raw, field, source, context)
    if isinstance(value, bool) or not isinstance(value, int | str):
        raise DatasetLoadError(source, f"{context}: '{field}' must be an integer or string, got {value!r}")
    return value


def _require_int(raw: Mapping[str, Any], field: str, source: str, context: str) -> int:
    value = _require_field(raw, field, source, context)
    if isinstance(value, bool) or not isinstance(value, int):
        raise DatasetLoadError(source, f"{context}: '{field}' must be an integer, got {value!r}")
    return value


def parse_catalog(document: Mapping[str, Any], source: str = "<characters>") -> list[Character]:
    raw_characters = _require_field(document, "characters", source, "catalog")
    if not isinstance(raw_characters, list):
        raise DatasetLoadError(source, "catalog: 'characters' must be a list")
    characters: list[Character] = []
    for index, raw in enumerate(raw_characters):
        context = f"characters[{index}]"
        characters.append(
            Character(
                id=_require_id(raw, "id", source, context),
                name=str(_require_field(raw, "name", source, context)),
                debut_year=_require_int(raw, "debut_year", source, context),
            )
        )
    return characters


def _parse_year_key(key: str, seen: Mapping[int, object], source: str, context: str) -> int:
    year = parse_year(key)
    if year is None:
        raise DatasetLoadError(source, f"{context}: year key {key!r} is not an integer")
    if year in seen:
        raise DatasetLoadError(source, f"{context}: year key {key!r} duplicates year {year}")
    return year


def parse_rankings(document: Mapping[str, Any], source: str = "<rankings>") -> RankingDataset:
    raw_yearly = _require_field(document, "yearly_rankings", source, "rankings")
    raw_totals = _require_field(document, "total_votes_by_year", source, "rankings")
    if not isinstance(raw_yearly, Mapping) or not isinstance(raw_totals, Mapping):
        raise DatasetLoadError(source, "rankings: 'yearly_rankings' and 'total_votes_by_year' must be objects")

    yearly: dict[int, tuple[YearlyRankingEntry, ...]] = {}
    for key, raw_entries in raw_yearly.items():
        year = _parse_year_key(key, yearly, source, "yearly_rankings")
        if not isinstance(raw_entries, list):
            raise DatasetLoadError(source, f"yearly_rankings[{key}]: expected a list")
        entries: list[YearlyRankingEntry] = []
        for index, raw in enumerate(raw_entries):
            context = f"yearly_rankings[{key}][{index}]"
            entries.append(
                YearlyRankingEntry(
                    character_id=_require_id(raw, "character_id", source, context),
                    rank=_require_int(raw, "rank", source, context),
                    votes=_require_int(raw, "votes", source, context),
                )
            )
        yearly[year] = tuple(sorted(entries, key=lambda e: e.rank))

    totals: dict[int, int] = {}
    for key, total in raw_totals.items():
        year = _parse_year_key(key, totals, source, "total_votes_by_year")
        if isinstance(total, bool) or not isinstance(total, int):
            raise DatasetLoadError(source, f"total_votes_by_year[{key}]: must be an integer, got {total!r}")
        totals[year] = total

    return RankingDataset(yearly_rankings=yearly, total_votes_by_year=totals)


def build_repository(
    characters: list[Character], dataset: RankingDataset, *, validate: bool = True
) -> RankingRepository:
    if validate:
        issues = validate_dataset(characters, dataset)
        if issues:
            logger.warning(format_issues(issues))
        else:
            logger.debug("Dataset validation found no issues")
    return RankingRepository(characters, dataset)


def read_documents(characters_path: str | Path, rankings_path: str | Path) -> tuple[list[Character], RankingDataset]:
    catalog_source = JsonDocumentSource(characters_path)
    rankings_source = JsonDocumentSource(rankings_path)
    characters = parse_catalog(catalog_source.fetch(), catalog_source.source_detail)
    dataset = parse_rankings(rankings_source.fetch(), rankings_source.source_detail)
    logger.info(
        "Loaded %d characters and %d ranking years",
        len(characters),
        len(dataset.yearly_rankings),
    )
    return characters, dataset


def load_dataset(
    characters_path: str | Path, rankings_path: str | Path, *, validate: bool = True
) -> RankingRepository:
    """Load both static documents from disk and build the query repository.

    Raises ``DatasetLoadError`` when a document is missing or structurally
    unreadable. Data-quality defects only produce a single warning.
    """
    characters, dataset = read_documents(characters_path, rankings_path)
    return build_repository(characters, dataset, validate=validate)
