"""Shared pytest fixtures for test modules."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

from character_rankings.domain.character import Character
from character_rankings.domain.ranking import RankingDataset, YearlyRankingEntry
from character_rankings.repos.ranking_repo import RankingRepository

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


CHARACTERS_DOC: dict[str, Any] = {
    "characters": [
        {"id": 1, "name": "Ribbon Cat", "debut_year": 1974},
        {"id": 2, "name": "Hooded Rabbit", "debut_year": 1975},
        {"id": 3, "name": "Cloud Puppy", "debut_year": 2001},
        {"id": 4, "name": "Pudding Dog", "debut_year": 1996},
        {"id": 5, "name": "Jester Imp", "debut_year": 2005},
        {"id": 6, "name": "Wandering Pup", "debut_year": 1989},
    ]
}

# Year keys deliberately out of chronological order.
RANKINGS_DOC: dict[str, Any] = {
    "yearly_rankings": {
        "2025": [
            {"character_id": 3, "rank": 1, "votes": 900},
            {"character_id": 5, "rank": 2, "votes": 800},
            {"character_id": 1, "rank": 3, "votes": 700},
            {"character_id": 2, "rank": 4, "votes": 650},
        ],
        "2023": [
            {"character_id": 1, "rank": 1, "votes": 500},
            {"character_id": 2, "rank": 2, "votes": 400},
            {"character_id": 4, "rank": 3, "votes": 300},
        ],
        "2024": [
            {"character_id": 3, "rank": 1, "votes": 600},
            {"character_id": 1, "rank": 2, "votes": 550},
            {"character_id": 2, "rank": 3, "votes": 450},
            {"character_id": 4, "rank": 4, "votes": 100},
        ],
    },
    "total_votes_by_year": {"2023": 1200, "2024": 1700, "2025": 3050},
}


def make_dataset(
    rankings: dict[int, list[tuple[int | str, int, int]]],
    totals: dict[int, int] | None = None,
) -> RankingDataset:
    """Build a dataset from ``{year: [(character_id, rank, votes), ...]}``."""
    return RankingDataset(
        yearly_rankings={
            year: tuple(YearlyRankingEntry(character_id=c, rank=r, votes=v) for c, r, v in entries)
            for year, entries in rankings.items()
        },
        total_votes_by_year=totals or {},
    )


@pytest.fixture
def characters() -> list[Character]:
    return [Character(id=c["id"], name=c["name"], debut_year=c["debut_year"]) for c in CHARACTERS_DOC["characters"]]


@pytest.fixture
def dataset() -> RankingDataset:
    return make_dataset(
        {
            year: [(e["character_id"], e["rank"], e["votes"]) for e in entries]
            for year, entries in ((int(k), v) for k, v in RANKINGS_DOC["yearly_rankings"].items())
        },
        {int(k): v for k, v in RANKINGS_DOC["total_votes_by_year"].items()},
    )


@pytest.fixture
def repo(characters: list[Character], dataset: RankingDataset) -> RankingRepository:
    return RankingRepository(characters, dataset)


@pytest.fixture
def data_files(tmp_path: Path) -> tuple[Path, Path]:
    """Write the sample documents to disk and return ``(characters, rankings)`` paths."""
    characters_path = tmp_path / "characters.json"
    rankings_path = tmp_path / "ranking_data.json"
    characters_path.write_text(json.dumps(CHARACTERS_DOC), encoding="utf-8")
    rankings_path.write_text(json.dumps(RANKINGS_DOC), encoding="utf-8")
    return characters_path, rankings_path


@pytest.fixture
def build_dataset() -> Callable[..., RankingDataset]:
    return make_dataset
