from dataclasses import dataclass


@dataclass(frozen=True)
class VoteGrowth:
    year: int
    total_votes: int | None
    growth_rate: float | None


@dataclass(frozen=True)
class VoteTotalsSummary:
    total_growth: float | None
    average_growth: float | None
    max_votes: int
    min_votes: int
    max_growth_rate: float | None
    min_growth_rate: float | None
