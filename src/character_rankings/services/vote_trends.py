import statistics

from character_rankings.domain.vote_trends import VoteGrowth, VoteTotalsSummary
from character_rankings.repos.protocols import RankingRepo


def growth_rate(current: int | None, previous: int | None) -> float | None:
    """Percent change from ``previous`` to ``current``; ``None`` when undefined."""
    if current is None or previous is None or previous == 0:
        return None
    return (current - previous) / previous * 100


class VoteTrendService:
    def __init__(self, repo: RankingRepo) -> None:
        self._repo = repo

    def growth_rates(self) -> list[VoteGrowth]:
        totals = self._repo.get_total_votes_by_year()
        rows: list[VoteGrowth] = []
        previous_total: int | None = None
        for index, year in enumerate(self._repo.get_available_years()):
            total = totals.get(year)
            rate = growth_rate(total, previous_total) if index > 0 else None
            rows.append(VoteGrowth(year=year, total_votes=total, growth_rate=rate))
            previous_total = total
        return rows

    def summary(self) -> VoteTotalsSummary | None:
        rows = self.growth_rates()
        totals = [r.total_votes for r in rows if r.total_votes is not None]
        if not totals:
            return None
        rates = [r.growth_rate for r in rows if r.growth_rate is not None]
        return VoteTotalsSummary(
            total_growth=growth_rate(totals[-1], totals[0]),
            average_growth=statistics.fmean(rates) if rates else None,
            max_votes=max(totals),
            min_votes=min(totals),
            max_growth_rate=max(rates) if rates else None,
            min_growth_rate=min(rates) if rates else None,
        )
