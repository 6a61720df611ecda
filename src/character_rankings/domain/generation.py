from dataclasses import dataclass
from enum import Enum

from character_rankings.domain.ranking import RankedCharacter


class Generation(Enum):
    NEW = "new"
    MIDDLE = "middle"
    VETERAN = "veteran"
    LEGEND = "legend"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def for_age(cls, age: int) -> "Generation":
        if age <= 10:
            return cls.NEW
        if age <= 25:
            return cls.MIDDLE
        if age <= 40:
            return cls.VETERAN
        return cls.LEGEND


_LABELS = {
    Generation.NEW: "New (0-10 yrs)",
    Generation.MIDDLE: "Middle (11-25 yrs)",
    Generation.VETERAN: "Veteran (26-40 yrs)",
    Generation.LEGEND: "Legend (41+ yrs)",
}


@dataclass(frozen=True)
class CharacterAge:
    ranked: RankedCharacter
    age: int
    generation: Generation


@dataclass(frozen=True)
class GenerationSummary:
    generation: Generation
    count: int
    average_rank: float | None
    total_votes: int
