"""Global search across assets, tasks and competitors."""

from typing import Sequence

from ..models import AssetRecord, Competitor, SearchResult, TaskRecord
from .predicate import plain_value


def _contains(query: str, *values: object) -> bool:
    return any(
        isinstance(value, str) and query in value.lower()
        for value in (plain_value(v) for v in values)
    )


def global_search(
    query: str,
    assets: Sequence[AssetRecord] = (),
    tasks: Sequence[TaskRecord] = (),
    competitors: Sequence[Competitor] = (),
) -> list[SearchResult]:
    """Case-insensitive search; results are grouped assets, tasks, competitors."""
    query = (query or "").strip().lower()
    if not query:
        return []

    results: list[SearchResult] = []

    for asset in assets:
        if _contains(query, asset.name, asset.type):
            asset_type = str(plain_value(asset.type))
            results.append(
                SearchResult(
                    id=asset.id,
                    title=asset.name,
                    description=f"{asset_type.replace('_', ' ')} • {plain_value(asset.status)}",
                    type="asset",
                    category="Assets",
                )
            )

    for task in tasks:
        if _contains(query, task.title, task.description):
            results.append(
                SearchResult(
                    id=task.id,
                    title=task.title,
                    description=task.description,
                    type="task",
                    category="Tasks",
                )
            )

    for competitor in competitors:
        if _contains(query, competitor.name, competitor.category):
            results.append(
                SearchResult(
                    id=competitor.id,
                    title=competitor.name,
                    description=f"{competitor.category} • {competitor.rating}★",
                    type="competitor",
                    category="Competitors",
                )
            )

    return results
