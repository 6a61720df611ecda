from collections.abc import Callable, Sequence

from character_rankings.domain.character import CharacterId
from character_rankings.domain.ranking import RankHistoryPoint, RankingChange
from character_rankings.domain.trend_series import TrendSeries
from character_rankings.repos.protocols import RankingRepo


class RankingTrendService:
    def __init__(self, repo: RankingRepo) -> None:
        self._repo = repo

    def default_selection(self, count: int = 5) -> list[CharacterId]:
        years = self._repo.get_available_years()
        if not years or count <= 0:
            return []
        return [entry.character_id for entry in self._repo.get_ranking_by_year(years[-1])[:count]]

    def latest_changes(self, limit: int = 30) -> list[RankingChange]:
        years = self._repo.get_available_years()
        if len(years) < 2:
            return []
        return self._repo.calculate_ranking_changes(years[-1], years[-2])[:limit]

    def rank_series(self, character_ids: Sequence[CharacterId]) -> list[TrendSeries]:
        return self._series(character_ids, lambda point: point.rank)

    def vote_series(self, character_ids: Sequence[CharacterId]) -> list[TrendSeries]:
        return self._series(character_ids, lambda point: point.votes)

    def _series(
        self, character_ids: Sequence[CharacterId], pick: Callable[[RankHistoryPoint], int]
    ) -> list[TrendSeries]:
        years = tuple(self._repo.get_available_years())
        series: list[TrendSeries] = []
        for character_id in character_ids:
            by_year = {p.year: pick(p) for p in self._repo.get_character_ranking_history(character_id)}
            series.append(
                TrendSeries(
                    character_id=character_id,
                    name=self._repo.get_character_name(character_id),
                    years=years,
                    values=tuple(by_year.get(year) for year in years),
                )
            )
        return series
