from dataclasses import dataclass

from character_rankings.config import RankingSettings
from character_rankings.ingest.dataset_loader import load_dataset
from character_rankings.repos.ranking_repo import RankingRepository
from character_rankings.services.generation_analysis import GenerationAnalysisService
from character_rankings.services.ranking_trends import RankingTrendService
from character_rankings.services.vote_trends import VoteTrendService


@dataclass(frozen=True)
class QueryContext:
    settings: RankingSettings
    repo: RankingRepository
    vote_trends: VoteTrendService
    generations: GenerationAnalysisService
    trends: RankingTrendService


def build_query_context(settings: RankingSettings) -> QueryContext:
    """Composition root for the read-only query commands."""
    repo = load_dataset(settings.characters_path, settings.rankings_path, validate=settings.validate)
    return QueryContext(
        settings=settings,
        repo=repo,
        vote_trends=VoteTrendService(repo),
        generations=GenerationAnalysisService(repo),
        trends=RankingTrendService(repo),
    )
