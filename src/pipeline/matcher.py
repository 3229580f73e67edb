"""Match engine: score, gate, post-filter and sort a candidate batch.

Order:
  1. score_candidate per candidate: Rejected outcomes are dropped
  2. FreeTextFilter: optional, name/title/company/skills, no score effect
  3. sort_scored: stable sort by the selected policy

``rank`` is pure: same inputs, same output, no state kept between calls.
"""

import logging
from collections import Counter
from collections.abc import Callable

from src.core.config import ScoringConfig
from src.core.schemas import Accepted, Candidate, Filters, ScoredCandidate, SortPolicy
from src.pipeline.scorer import score_candidate

logger = logging.getLogger(__name__)

# A filter is a callable that takes candidates and returns a subset.
Filter = Callable[[list[ScoredCandidate]], list[ScoredCandidate]]


class FreeTextFilter:
    """Keep candidates whose name, title, company or skills contain the text.

    If the text is empty, the filter is a no-op (passes all candidates through).
    """

    def __init__(self, text: str | None) -> None:
        self._text = (text or "").lower()

    def __call__(self, scored: list[ScoredCandidate]) -> list[ScoredCandidate]:
        if not self._text:
            return scored
        result = [s for s in scored if self._matches(s.candidate)]
        excluded = len(scored) - len(result)
        if excluded:
            logger.debug("FreeTextFilter: removed %d candidates", excluded)
        return result

    def _matches(self, candidate: Candidate) -> bool:
        text = " ".join(
            [candidate.name, candidate.title, candidate.company, " ".join(candidate.skills)],
        ).lower()
        return self._text in text


def score_all(
    candidates: list[Candidate],
    filters: Filters,
    config: ScoringConfig | None = None,
) -> list[ScoredCandidate]:
    """Score every candidate, keeping only accepted ones in input order."""
    scored: list[ScoredCandidate] = []
    rejections: Counter[str] = Counter()
    for c in candidates:
        outcome = score_candidate(c, filters, config)
        if isinstance(outcome, Accepted):
            scored.append(ScoredCandidate(candidate=c, score=outcome.score))
        else:
            rejections[outcome.reason] += 1
    if rejections:
        logger.debug("Rejected by hard filters: %s", dict(rejections))
    return scored


def sort_scored(
    scored: list[ScoredCandidate],
    policy: SortPolicy | str = SortPolicy.RELEVANCE,
) -> list[ScoredCandidate]:
    """Return a stably sorted copy; ties keep their incoming order."""
    policy = resolve_sort_policy(policy)
    if policy is SortPolicy.EXP_DESC:
        return sorted(scored, key=lambda s: s.candidate.years_experience, reverse=True)
    if policy is SortPolicy.EXP_ASC:
        return sorted(scored, key=lambda s: s.candidate.years_experience)
    return sorted(scored, key=lambda s: s.score, reverse=True)


def run_filter_chain(
    scored: list[ScoredCandidate],
    filters: list[Filter],
) -> list[ScoredCandidate]:
    """Apply filters in order, returning the surviving candidates."""
    result = scored
    for f in filters:
        result = f(result)
    return result


def rank(
    candidates: list[Candidate],
    filters: Filters,
    sort_policy: SortPolicy | str = SortPolicy.RELEVANCE,
    free_text: str | None = None,
    config: ScoringConfig | None = None,
) -> list[Candidate]:
    """Rank a candidate batch against a recruiter query.

    Args:
        candidates: Canonical candidates (input order breaks ties).
        filters: Recruiter query.
        sort_policy: relevance, exp-desc or exp-asc.
        free_text: Optional in-results search; affects inclusion only.
        config: Scoring weights.

    Returns:
        Matching candidates in ranked order.
    """
    scored = score_all(candidates, filters, config)
    scored = run_filter_chain(scored, [FreeTextFilter(free_text)])
    ranked = sort_scored(scored, sort_policy)
    logger.debug("Ranked %d of %d candidates", len(ranked), len(candidates))
    return [s.candidate for s in ranked]


def resolve_sort_policy(policy: SortPolicy | str) -> SortPolicy:
    """Map a policy name to SortPolicy, falling back to relevance."""
    if isinstance(policy, SortPolicy):
        return policy
    try:
        return SortPolicy(policy)
    except ValueError:
        logger.debug("Unknown sort policy %r, using relevance", policy)
        return SortPolicy.RELEVANCE
