"""Tests for the match engine: free-text filter, sorting, and rank."""

from src.core.schemas import Candidate, Filters, ScoredCandidate, SortPolicy
from src.pipeline.matcher import (
    FreeTextFilter,
    rank,
    resolve_sort_policy,
    run_filter_chain,
    score_all,
    sort_scored,
)


def _candidate(
    *,
    id: str = "1",
    name: str = "Ava Thompson",
    title: str = "Senior Frontend Engineer",
    company: str = "NimbusAI",
    years_experience: int = 8,
    skills: list[str] | None = None,
    open_to_work: bool = True,
    summary: str = "",
) -> Candidate:
    return Candidate(
        id=id,
        name=name,
        title=title,
        company=company,
        location="Remote",
        industry="Software",
        years_experience=years_experience,
        skills=["React", "TypeScript"] if skills is None else skills,
        open_to_work=open_to_work,
        summary=summary,
    )


def _batch() -> list[Candidate]:
    return [
        _candidate(id="1", name="Ava Thompson", years_experience=8, skills=["React", "TypeScript"]),
        _candidate(id="2", name="Mateo Rossi", title="Data Scientist", company="Quantica",
                   years_experience=6, skills=["Python", "SQL"], open_to_work=False),
        _candidate(id="3", name="Kenji Sato", title="Platform Engineer", company="Orbit Cloud",
                   years_experience=10, skills=["Kubernetes", "AWS"]),
        _candidate(id="4", name="Diego Carvalho", title="Full-Stack Engineer", company="Nova Labs",
                   years_experience=5, skills=["React", "Python", "Docker"]),
    ]


def _ids(candidates: list[Candidate]) -> list[str]:
    return [c.id for c in candidates]


# ---------------------------------------------------------------------------
# FreeTextFilter
# ---------------------------------------------------------------------------


class TestFreeTextFilter:
    def _scored(self) -> list[ScoredCandidate]:
        return [ScoredCandidate(candidate=c) for c in _batch()]

    def test_blank_passes_all(self) -> None:
        assert len(FreeTextFilter("")(self._scored())) == 4
        assert len(FreeTextFilter(None)(self._scored())) == 4

    def test_matches_name(self) -> None:
        result = FreeTextFilter("kenji")(self._scored())
        assert [s.candidate.id for s in result] == ["3"]

    def test_matches_company(self) -> None:
        result = FreeTextFilter("QUANTICA")(self._scored())
        assert [s.candidate.id for s in result] == ["2"]

    def test_matches_skills(self) -> None:
        result = FreeTextFilter("python")(self._scored())
        assert [s.candidate.id for s in result] == ["2", "4"]

    def test_whitespace_text_is_searched(self) -> None:
        assert FreeTextFilter("   ")(self._scored()) == []

    def test_ignores_summary(self) -> None:
        scored = [ScoredCandidate(candidate=_candidate(summary="secret keyword"))]
        assert FreeTextFilter("secret")(scored) == []

    def test_preserves_score(self) -> None:
        scored = [ScoredCandidate(candidate=_candidate(), score=7)]
        assert FreeTextFilter("ava")(scored)[0].score == 7


# ---------------------------------------------------------------------------
# Scoring pass and sorting
# ---------------------------------------------------------------------------


class TestScoreAll:
    def test_rejected_dropped(self) -> None:
        scored = score_all(_batch(), Filters(required_skills=["React"]))
        assert [s.candidate.id for s in scored] == ["1", "4"]
        assert all(s.score == 10 for s in scored)

    def test_input_order_kept(self) -> None:
        scored = score_all(_batch(), Filters())
        assert [s.candidate.id for s in scored] == ["1", "2", "3", "4"]


class TestSortScored:
    def _scored(self) -> list[ScoredCandidate]:
        return [
            ScoredCandidate(candidate=_candidate(id="a", years_experience=3), score=5),
            ScoredCandidate(candidate=_candidate(id="b", years_experience=9), score=10),
            ScoredCandidate(candidate=_candidate(id="c", years_experience=3), score=10),
            ScoredCandidate(candidate=_candidate(id="d", years_experience=1), score=5),
        ]

    def test_relevance_stable(self) -> None:
        result = sort_scored(self._scored(), SortPolicy.RELEVANCE)
        assert [s.candidate.id for s in result] == ["b", "c", "a", "d"]

    def test_exp_desc_stable(self) -> None:
        result = sort_scored(self._scored(), SortPolicy.EXP_DESC)
        assert [s.candidate.id for s in result] == ["b", "a", "c", "d"]

    def test_exp_asc_stable(self) -> None:
        result = sort_scored(self._scored(), "exp-asc")
        assert [s.candidate.id for s in result] == ["d", "a", "c", "b"]

    def test_does_not_mutate_input(self) -> None:
        scored = self._scored()
        sort_scored(scored, SortPolicy.EXP_ASC)
        assert [s.candidate.id for s in scored] == ["a", "b", "c", "d"]


class TestResolveSortPolicy:
    def test_known(self) -> None:
        assert resolve_sort_policy("exp-desc") is SortPolicy.EXP_DESC
        assert resolve_sort_policy(SortPolicy.EXP_ASC) is SortPolicy.EXP_ASC

    def test_unknown_falls_back_to_relevance(self) -> None:
        assert resolve_sort_policy("alphabetical") is SortPolicy.RELEVANCE


class TestRunFilterChain:
    def test_applies_in_order(self) -> None:
        scored = [ScoredCandidate(candidate=c) for c in _batch()]
        result = run_filter_chain(scored, [FreeTextFilter("engineer"), FreeTextFilter("react")])
        assert [s.candidate.id for s in result] == ["1", "4"]

    def test_empty_chain(self) -> None:
        scored = [ScoredCandidate(candidate=c) for c in _batch()]
        assert run_filter_chain(scored, []) == scored


# ---------------------------------------------------------------------------
# rank
# ---------------------------------------------------------------------------


class TestRank:
    def test_empty_filters_returns_input_unchanged(self) -> None:
        batch = _batch()
        assert rank(batch, Filters()) == batch

    def test_empty_batch(self) -> None:
        assert rank([], Filters(required_skills=["Go"])) == []

    def test_idempotent(self) -> None:
        filters = Filters(query="engineer", preferred_skills=["React", "AWS"])
        batch = _batch()
        assert rank(batch, filters, "exp-desc") == rank(batch, filters, "exp-desc")
        assert rank(batch, filters) == rank(batch, filters)

    def test_relevance_order(self) -> None:
        filters = Filters(preferred_skills=["React", "Python", "Docker"])
        # scores: 1→3, 2→3, 3→0, 4→9
        assert _ids(rank(_batch(), filters)) == ["4", "1", "2", "3"]

    def test_required_skill_gate(self) -> None:
        filters = Filters(query="Ava", required_skills=["Python"])
        assert _ids(rank(_batch(), filters)) == ["2", "4"]

    def test_exp_policies_are_reverses_without_ties(self) -> None:
        batch = _batch()
        desc = rank(batch, Filters(), SortPolicy.EXP_DESC)
        asc = rank(batch, Filters(), SortPolicy.EXP_ASC)
        assert _ids(desc) == ["3", "1", "2", "4"]
        assert desc == list(reversed(asc))

    def test_exp_sort_ignores_score(self) -> None:
        filters = Filters(preferred_skills=["React", "Python", "Docker"])
        assert _ids(rank(_batch(), filters, "exp-asc")) == ["4", "2", "1", "3"]

    def test_free_text_post_filter(self) -> None:
        result = rank(_batch(), Filters(), free_text="engineer")
        assert _ids(result) == ["1", "3", "4"]

    def test_free_text_applies_after_hard_filters(self) -> None:
        result = rank(_batch(), Filters(open_to_work_only=True), free_text="python")
        assert _ids(result) == ["4"]

    def test_unknown_policy_uses_relevance(self) -> None:
        filters = Filters(preferred_skills=["Docker"])
        assert _ids(rank(_batch(), filters, "bogus")) == ["4", "1", "2", "3"]

    def test_concrete_scenario_retained(self) -> None:
        c = _candidate(title="Senior Frontend Engineer", skills=["React", "TypeScript"], years_experience=8)
        filters = Filters(required_skills=["React"], preferred_skills=["TypeScript"], min_years=5)
        assert rank([c], filters) == [c]

    def test_concrete_scenario_excluded(self) -> None:
        c = _candidate(title="Senior Frontend Engineer", skills=["React", "TypeScript"], years_experience=8)
        assert rank([c], Filters(required_skills=["Go"])) == []
