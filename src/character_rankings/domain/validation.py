from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from character_rankings.domain.character import Character
from character_rankings.domain.ranking import RankingDataset


class IssueKind(Enum):
    DUPLICATE_CATALOG_ID = "duplicate_catalog_id"
    DUPLICATE_CHARACTER = "duplicate_character"
    DUPLICATE_RANK = "duplicate_rank"
    RANK_VOTE_ORDER = "rank_vote_order"
    UNKNOWN_CHARACTER = "unknown_character"
    YEAR_MISMATCH = "year_mismatch"
    TOTAL_MISMATCH = "total_mismatch"
    OUT_OF_RANGE = "out_of_range"


@dataclass(frozen=True)
class DatasetIssue:
    kind: IssueKind
    message: str
    year: int | None = None


def validate_dataset(characters: Sequence[Character], dataset: RankingDataset) -> list[DatasetIssue]:
    """Collect every data-quality defect in the loaded tables.

    Never raises; an empty list means the dataset is consistent.
    """
    issues: list[DatasetIssue] = []

    known_ids: set[object] = set()
    for character in characters:
        if character.id in known_ids:
            issues.append(
                DatasetIssue(IssueKind.DUPLICATE_CATALOG_ID, f"character id {character.id!r} appears more than once")
            )
        known_ids.add(character.id)

    for year in sorted(dataset.yearly_rankings):
        entries = dataset.yearly_rankings[year]
        seen_ids: set[object] = set()
        seen_ranks: set[int] = set()
        for entry in entries:
            if entry.character_id in seen_ids:
                issues.append(
                    DatasetIssue(
                        IssueKind.DUPLICATE_CHARACTER,
                        f"character id {entry.character_id!r} ranked more than once",
                        year,
                    )
                )
            seen_ids.add(entry.character_id)
            if entry.rank in seen_ranks:
                issues.append(
                    DatasetIssue(IssueKind.DUPLICATE_RANK, f"rank {entry.rank} assigned more than once", year)
                )
            seen_ranks.add(entry.rank)
            if entry.rank < 1:
                issues.append(DatasetIssue(IssueKind.OUT_OF_RANGE, f"rank {entry.rank} is below 1", year))
            if entry.votes < 0:
                issues.append(
                    DatasetIssue(
                        IssueKind.OUT_OF_RANGE,
                        f"character id {entry.character_id!r} has negative votes ({entry.votes})",
                        year,
                    )
                )
            if entry.character_id not in known_ids:
                issues.append(
                    DatasetIssue(
                        IssueKind.UNKNOWN_CHARACTER,
                        f"character id {entry.character_id!r} is not in the catalog",
                        year,
                    )
                )

        ordered = sorted(entries, key=lambda e: e.rank)
        for better, worse in zip(ordered, ordered[1:]):
            if worse.rank > better.rank and worse.votes > better.votes:
                issues.append(
                    DatasetIssue(
                        IssueKind.RANK_VOTE_ORDER,
                        f"rank {worse.rank} has {worse.votes} votes, more than rank {better.rank} ({better.votes})",
                        year,
                    )
                )

        total = dataset.total_votes_by_year.get(year)
        if total is None:
            issues.append(DatasetIssue(IssueKind.YEAR_MISMATCH, "ranking list has no total-votes figure", year))
        else:
            entry_sum = sum(e.votes for e in entries)
            if entry_sum != total:
                issues.append(
                    DatasetIssue(
                        IssueKind.TOTAL_MISMATCH,
                        f"total votes {total} differ from sum of entries {entry_sum}",
                        year,
                    )
                )

    for year in sorted(set(dataset.total_votes_by_year) - set(dataset.yearly_rankings)):
        issues.append(DatasetIssue(IssueKind.YEAR_MISMATCH, "total-votes figure has no ranking list", year))

    for year, total in sorted(dataset.total_votes_by_year.items()):
        if total < 0:
            issues.append(DatasetIssue(IssueKind.OUT_OF_RANGE, f"total votes {total} is negative", year))

    return issues


def format_issues(issues: Sequence[DatasetIssue]) -> str:
    lines = [f"{len(issues)} dataset issue(s):"]
    for issue in issues:
        where = f"[{issue.year}] " if issue.year is not None else ""
        lines.append(f"  - {issue.kind.value}: {where}{issue.message}")
    return "\n".join(lines)
