from typing import Protocol, runtime_checkable

from character_rankings.domain.character import Character, CharacterId
from character_rankings.domain.ranking import RankedCharacter, RankHistoryPoint, RankingChange, YearlyRankingEntry


@runtime_checkable
class RankingRepo(Protocol):
    def get_available_years(self) -> list[int]: ...

    def get_characters(self) -> list[Character]: ...

    def get_character_info(self, character_id: CharacterId) -> Character | None: ...

    def get_character_name(self, character_id: CharacterId) -> str: ...

    def get_ranking_by_year(self, year: int | str) -> list[YearlyRankingEntry]: ...

    def get_top_characters(self, year: int | str, top_n: int = 10) -> list[RankedCharacter]: ...

    def get_character_ranking_history(self, character_id: CharacterId) -> list[RankHistoryPoint]: ...

    def get_total_votes_by_year(self) -> dict[int, int]: ...

    def calculate_ranking_changes(self, current_year: int | str, previous_year: int | str) -> list[RankingChange]: ...
