"""Orchestrator: wires the schema adapter and the match engine.

Data flow:
  1. Shape detection + per-record conversion → canonical candidates
  2. Scoring + hard-filter gate
  3. Free-text post-filter
  4. Sort by policy
"""

import json
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict

from src.core.config import Settings
from src.core.schemas import Candidate, Filters, SortPolicy
from src.ingest.adapter import SchemaAdapter
from src.ingest.shapes import Shape
from src.pipeline.matcher import rank, resolve_sort_policy

logger = logging.getLogger(__name__)


class SearchResult(BaseModel):
    """Summary of a single ranking run over one payload."""

    model_config = ConfigDict(frozen=True)

    shape: Shape
    sort_policy: SortPolicy
    raw_count: int
    matched_count: int
    candidates: list[Candidate]


def search(
    payload: Any,
    filters: Filters,
    settings: Settings | None = None,
    sort_policy: SortPolicy | str = SortPolicy.RELEVANCE,
    free_text: str | None = None,
    adapter: SchemaAdapter | None = None,
) -> SearchResult:
    """Convert a raw payload and rank it against the recruiter query.

    Raises:
        SchemaError: If the payload matches no known shape.
    """
    settings = settings or Settings()
    adapter = adapter or SchemaAdapter(settings)

    shape, candidates = adapter.convert_with_shape(payload)
    ranked = rank(candidates, filters, sort_policy, free_text, settings.scoring)

    policy = resolve_sort_policy(sort_policy)
    logger.info(
        "Search over shape %s: %d candidates, %d matched (%s)",
        shape.value, len(candidates), len(ranked), policy.value,
    )
    return SearchResult(
        shape=shape,
        sort_policy=policy,
        raw_count=len(candidates),
        matched_count=len(ranked),
        candidates=ranked,
    )


def export_candidates_json(candidates: list[Candidate]) -> str:
    """Export candidates as canonical (Shape C) JSON."""
    data = [c.model_dump(by_alias=True) for c in candidates]
    return json.dumps(data, indent=2)


def export_results_json(result: SearchResult) -> str:
    """Export a search result as a JSON string."""
    data = {
        "shape": result.shape.value,
        "sort": result.sort_policy.value,
        "raw_count": result.raw_count,
        "matched_count": result.matched_count,
        "candidates": [
            {"rank": i, **c.model_dump(by_alias=True)}
            for i, c in enumerate(result.candidates, start=1)
        ],
    }
    return json.dumps(data, indent=2)


def format_results_table(result: SearchResult) -> str:
    """Render a plain-text summary, one line per ranked candidate."""
    lines = [
        f"{result.matched_count} of {result.raw_count} candidates match "
        f"(shape {result.shape.value}, sort {result.sort_policy.value})",
    ]
    for i, c in enumerate(result.candidates, start=1):
        skills = ", ".join(c.skills) or "-"
        lines.append(
            f"  {i:>3}. {c.name} | {c.title} @ {c.company} | {c.location} | "
            f"{c.years_experience}y | {skills}",
        )
    return "\n".join(lines)

