from character_rankings.domain.generation import CharacterAge, Generation, GenerationSummary
from character_rankings.domain.ranking import parse_year
from character_rankings.repos.protocols import RankingRepo


class GenerationAnalysisService:
    """Groups a year's top characters by how long they have been around."""

    def __init__(self, repo: RankingRepo) -> None:
        self._repo = repo

    def character_ages(self, year: int | str, top_n: int = 30) -> list[CharacterAge]:
        parsed = parse_year(year)
        if parsed is None:
            return []
        ages: list[CharacterAge] = []
        for ranked in self._repo.get_top_characters(parsed, top_n):
            if ranked.character is None:
                continue
            age = ranked.character.age_in(parsed)
            ages.append(CharacterAge(ranked=ranked, age=age, generation=Generation.for_age(age)))
        return ages

    def summarize(self, year: int | str, top_n: int = 30) -> list[GenerationSummary]:
        grouped: dict[Generation, list[CharacterAge]] = {g: [] for g in Generation}
        for item in self.character_ages(year, top_n):
            grouped[item.generation].append(item)

        summaries: list[GenerationSummary] = []
        for generation, members in grouped.items():
            ranks = [m.ranked.rank for m in members]
            summaries.append(
                GenerationSummary(
                    generation=generation,
                    count=len(members),
                    average_rank=sum(ranks) / len(ranks) if ranks else None,
                    total_votes=sum(m.ranked.votes for m in members),
                )
            )
        return summaries
