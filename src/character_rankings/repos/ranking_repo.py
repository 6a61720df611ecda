from collections.abc import Sequence

from character_rankings.domain.character import Character, CharacterId
from character_rankings.domain.ranking import (
    RankedCharacter,
    RankHistoryPoint,
    RankingChange,
    RankingDataset,
    YearlyRankingEntry,
    parse_year,
)

UNKNOWN_CHARACTER_NAME = "Unknown"


class RankingRepository:
    """Read-only queries over the character catalog and the yearly rankings.

    Every lookup is total: unknown years and character ids produce empty lists
    or ``None`` rather than exceptions.
    """

    def __init__(self, characters: Sequence[Character], dataset: RankingDataset) -> None:
        self._characters = tuple(characters)
        self._dataset = dataset
        self._by_id: dict[CharacterId, Character] = {}
        for character in self._characters:
            self._by_id.setdefault(character.id, character)

    def get_available_years(self) -> list[int]:
        return sorted(set(self._dataset.yearly_rankings))

    def get_characters(self) -> list[Character]:
        return list(self._characters)

    def get_character_info(self, character_id: CharacterId) -> Character | None:
        return self._by_id.get(character_id)

    def get_character_name(self, character_id: CharacterId) -> str:
        character = self.get_character_info(character_id)
        return character.name if character else UNKNOWN_CHARACTER_NAME

    def get_ranking_by_year(self, year: int | str) -> list[YearlyRankingEntry]:
        return list(self._entries_for(year) or ())

    def get_top_characters(self, year: int | str, top_n: int = 10) -> list[RankedCharacter]:
        entries = self._entries_for(year)
        if not entries or top_n <= 0:
            return []
        return [
            RankedCharacter(
                character_id=entry.character_id,
                rank=entry.rank,
                votes=entry.votes,
                character=self.get_character_info(entry.character_id),
            )
            for entry in entries[:top_n]
        ]

    def get_character_ranking_history(self, character_id: CharacterId) -> list[RankHistoryPoint]:
        history: list[RankHistoryPoint] = []
        for year, entries in self._dataset.yearly_rankings.items():
            entry = next((e for e in entries if e.character_id == character_id), None)
            if entry is not None:
                history.append(RankHistoryPoint(year=year, rank=entry.rank, votes=entry.votes))
        history.sort(key=lambda h: h.year)
        return history

    def get_total_votes_by_year(self) -> dict[int, int]:
        return dict(self._dataset.total_votes_by_year)

    def calculate_ranking_changes(self, current_year: int | str, previous_year: int | str) -> list[RankingChange]:
        # Characters ranked only in previous_year are not reported.
        current = self._entries_for(current_year)
        previous = self._entries_for(previous_year)
        if current is None or previous is None:
            return []

        previous_ranks: dict[CharacterId, int] = {}
        for entry in previous:
            previous_ranks.setdefault(entry.character_id, entry.rank)

        changes: list[RankingChange] = []
        for entry in current:
            previous_rank = previous_ranks.get(entry.character_id)
            changes.append(
                RankingChange(
                    character_id=entry.character_id,
                    rank=entry.rank,
                    votes=entry.votes,
                    character=self.get_character_info(entry.character_id),
                    previous_rank=previous_rank,
                    change=previous_rank - entry.rank if previous_rank is not None else None,
                )
            )
        return changes

    def _entries_for(self, year: int | str) -> tuple[YearlyRankingEntry, ...] | None:
        parsed = parse_year(year)
        if parsed is None:
            return None
        return self._dataset.yearly_rankings.get(parsed)
