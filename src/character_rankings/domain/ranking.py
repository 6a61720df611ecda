from collections.abc import Mapping
from dataclasses import dataclass, field

from character_rankings.domain.character import Character, CharacterId


def parse_year(year: int | str) -> int | None:
    """Canonical year conversion shared by the loader and the query surface.

    Returns ``None`` for anything that is not an integer or a string-encoded
    integer, which callers treat as an unknown year.
    """
    if isinstance(year, bool):
        return None
    if isinstance(year, int):
        return year
    text = str(year).strip()
    if not (text.isascii() and text.isdigit()):
        return None
    return int(text)


@dataclass(frozen=True)
class YearlyRankingEntry:
    character_id: CharacterId
    rank: int
    votes: int


@dataclass(frozen=True)
class RankedCharacter:
    character_id: CharacterId
    rank: int
    votes: int
    character: Character | None


@dataclass(frozen=True)
class RankHistoryPoint:
    year: int
    rank: int
    votes: int


@dataclass(frozen=True)
class RankingChange:
    character_id: CharacterId
    rank: int
    votes: int
    character: Character | None
    previous_rank: int | None
    change: int | None

    @property
    def direction(self) -> str:
        if self.change is None:
            return "new"
        if self.change > 0:
            return "up"
        if self.change < 0:
            return "down"
        return "same"


@dataclass(frozen=True)
class RankingDataset:
    yearly_rankings: Mapping[int, tuple[YearlyRankingEntry, ...]] = field(default_factory=dict)
    total_votes_by_year: Mapping[int, int] = field(default_factory=dict)
