"""Configuration models and YAML loader for the candidate search engine."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from src.core.schemas import MAX_SKILLS

# Ordered: extraction emits matches in this order, not in text order.
DEFAULT_SKILL_TERMS: tuple[str, ...] = (
    "Machine Learning", "ML", "AI", "Artificial Intelligence", "Deep Learning",
    "Python", "TensorFlow", "PyTorch", "Scikit-learn", "Pandas", "NumPy",
    "React", "JavaScript", "TypeScript", "Node.js", "Java", "C++", "C#",
    "SQL", "MongoDB", "PostgreSQL", "AWS", "Azure", "GCP", "Docker",
    "Kubernetes", "Git", "CI/CD", "REST API", "GraphQL",
)


class SkillVocabulary(BaseModel):
    """Versioned, ordered list of terms the skill extractor looks for."""

    version: str = "1"
    terms: list[str] = Field(default_factory=lambda: list(DEFAULT_SKILL_TERMS))

    @field_validator("terms")
    @classmethod
    def terms_unique_non_empty(cls, v: list[str]) -> list[str]:
        terms = [t.strip() for t in v if t.strip()]
        if not terms:
            msg = "skill vocabulary must not be empty"
            raise ValueError(msg)
        lowered = [t.lower() for t in terms]
        if len(set(lowered)) != len(lowered):
            msg = "skill vocabulary must not contain duplicate terms"
            raise ValueError(msg)
        return terms


class ExtractionConfig(BaseModel):
    """Limits for summary-based skill extraction."""

    max_skills: int = Field(default=MAX_SKILLS, ge=1, le=MAX_SKILLS)


class ExperienceConfig(BaseModel):
    """Constants for years-of-experience estimation."""

    days_per_year: float = Field(default=365.25, gt=0.0)
    year_range_floor: int = Field(default=1, ge=0)


class ScoringConfig(BaseModel):
    """Weights for rule-based relevance scoring."""

    query_name_bonus: int = Field(default=3, ge=0)
    query_title_bonus: int = Field(default=3, ge=0)
    query_summary_bonus: int = Field(default=2, ge=0)
    required_skill_bonus: int = Field(default=10, ge=0)
    preferred_skill_bonus: int = Field(default=3, ge=0)


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    skills: SkillVocabulary = Field(default_factory=SkillVocabulary)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    experience: ExperienceConfig = Field(default_factory=ExperienceConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
