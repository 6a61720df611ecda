from pathlib import Path

from character_rankings.exceptions import RankingsException


class DatasetLoadError(RankingsException):
    def __init__(self, source: str | Path, detail: str) -> None:
        self.source = str(source)
        self.detail = detail
        super().__init__(f"{self.source}: {detail}")
