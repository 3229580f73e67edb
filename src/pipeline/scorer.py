"""Rule-based relevance scoring for canonical candidates.

Soft criteria (query, preferred skills) add to the score. Hard criteria
(required skills, titles, industries, locations, companies, open-to-work,
year bounds) reject the candidate outright. All string matching is
case-insensitive substring search.
"""

import logging

from src.core.config import ScoringConfig
from src.core.schemas import Accepted, Candidate, Filters, MatchOutcome, Rejected

logger = logging.getLogger(__name__)


def score_candidate(
    candidate: Candidate,
    filters: Filters,
    config: ScoringConfig | None = None,
) -> MatchOutcome:
    """Score a single candidate against a recruiter query.

    Args:
        candidate: The canonical candidate to score.
        filters: Recruiter query; empty fields are unconstrained.
        config: Scoring weights (defaults when omitted).

    Returns:
        Accepted with the relevance score, or Rejected naming the failed criterion.
    """
    config = config or ScoringConfig()
    score = 0

    # Query bonuses are additive
    query = filters.query.lower()
    if query:
        if query in candidate.name.lower():
            score += config.query_name_bonus
        if query in candidate.title.lower():
            score += config.query_title_bonus
        if query in candidate.summary.lower():
            score += config.query_summary_bonus

    skills = {s.lower() for s in candidate.skills}

    # Required skills: all-or-nothing
    if filters.required_skills:
        if not all(rs.lower() in skills for rs in filters.required_skills):
            return Rejected(reason="required_skills")
        score += config.required_skill_bonus * len(filters.required_skills)

    score += config.preferred_skill_bonus * sum(
        1 for ps in filters.preferred_skills if ps.lower() in skills
    )

    reason = _hard_filter_failure(candidate, filters)
    if reason is not None:
        return Rejected(reason=reason)

    return Accepted(score=score)


def _hard_filter_failure(candidate: Candidate, filters: Filters) -> str | None:
    """Return the name of the first unsatisfied hard filter, or None."""
    if not _contains_any(candidate.title, filters.titles):
        return "titles"
    if not _contains_any(candidate.industry, filters.industries):
        return "industries"
    if not _contains_any(candidate.location, filters.locations):
        return "locations"
    if not _contains_any(candidate.company, filters.companies):
        return "companies"
    if filters.open_to_work_only and not candidate.open_to_work:
        return "open_to_work"
    if filters.min_years > 0 and candidate.years_experience < filters.min_years:
        return "min_years"
    if filters.max_years > 0 and candidate.years_experience > filters.max_years:
        return "max_years"
    return None


def _contains_any(value: str, terms: list[str]) -> bool:
    """True when no terms are given or any term is a substring of value."""
    if not terms:
        return True
    value_lower = value.lower()
    return any(term.lower() in value_lower for term in terms)
