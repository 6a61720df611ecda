from dataclasses import dataclass

from character_rankings.domain.character import CharacterId


@dataclass(frozen=True)
class TrendSeries:
    character_id: CharacterId
    name: str
    years: tuple[int, ...]
    values: tuple[int | None, ...]
