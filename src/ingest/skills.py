"""Heuristic skill tagging from free-text summaries.

Plain case-insensitive substring search against an ordered vocabulary.
No tokenization: "ML" also matches inside "HTML".
"""

from src.core.config import SkillVocabulary
from src.core.schemas import MAX_SKILLS


class SkillExtractor:
    """Tags a summary with vocabulary terms, in vocabulary order."""

    def __init__(self, vocabulary: SkillVocabulary | None = None, max_skills: int = MAX_SKILLS) -> None:
        self._vocabulary = vocabulary or SkillVocabulary()
        self._terms = [(term, term.lower()) for term in self._vocabulary.terms]
        self._max_skills = max(0, min(max_skills, MAX_SKILLS))

    @property
    def version(self) -> str:
        return self._vocabulary.version

    def extract(self, text: str | None) -> list[str]:
        if not text:
            return []
        haystack = text.lower()
        found = [term for term, needle in self._terms if needle in haystack]
        return found[: self._max_skills]
