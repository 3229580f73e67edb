"""Core data models for the candidate search engine."""

from enum import Enum
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

MAX_SKILLS = 8
UNKNOWN = "Unknown"
REJECTED_SCORE = -1


class Candidate(BaseModel):
    """Canonical candidate record, the only shape ranking ever sees.

    Frozen, built once per ingestion pass.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    title: str
    company: str
    location: str
    industry: str
    years_experience: int = Field(ge=0)
    skills: list[str] = Field(default_factory=list)
    preferred_skills: list[str] | None = None
    open_to_work: bool = True
    summary: str = ""
    avatar_url: str | None = None

    @field_validator("skills")
    @classmethod
    def skills_unique_and_bounded(cls, v: list[str]) -> list[str]:
        if len(v) > MAX_SKILLS:
            msg = f"skills must have at most {MAX_SKILLS} entries, got {len(v)}"
            raise ValueError(msg)
        lowered = [s.lower() for s in v]
        if len(set(lowered)) != len(lowered):
            msg = "skills must not contain duplicates"
            raise ValueError(msg)
        return v


class Filters(BaseModel):
    """Recruiter query. Empty fields and zero year bounds are unconstrained."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    query: str = ""
    required_skills: list[str] = Field(default_factory=list)
    preferred_skills: list[str] = Field(default_factory=list)
    titles: list[str] = Field(default_factory=list)
    industries: list[str] = Field(default_factory=list)
    locations: list[str] = Field(default_factory=list)
    companies: list[str] = Field(default_factory=list)
    open_to_work_only: bool = False
    min_years: int = 0
    max_years: int = 0

    @field_validator("query", mode="before")
    @classmethod
    def none_is_empty_query(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator(
        "required_skills", "preferred_skills", "titles", "industries", "locations", "companies",
        mode="before",
    )
    @classmethod
    def drop_empty_terms(cls, v: Any) -> Any:
        # Terms are matched verbatim, surrounding whitespace included
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        if isinstance(v, (list, tuple)):
            return [t for t in v if isinstance(t, str) and t]
        return v

    @field_validator("min_years", "max_years", mode="before")
    @classmethod
    def none_is_unbounded(cls, v: Any) -> Any:
        return 0 if v is None else v

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Filters":
        """Load a saved filter set from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Filters file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)


class SortPolicy(str, Enum):
    RELEVANCE = "relevance"
    EXP_DESC = "exp-desc"
    EXP_ASC = "exp-asc"


class Accepted(BaseModel):
    """Candidate passed every hard filter with the given relevance score."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["accepted"] = "accepted"
    score: int = Field(default=0, ge=0)

    @property
    def accepted(self) -> bool:
        return True


class Rejected(BaseModel):
    """Candidate failed a hard filter; ``reason`` names the criterion."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["rejected"] = "rejected"
    reason: str

    @property
    def accepted(self) -> bool:
        return False

    @property
    def score(self) -> int:
        return REJECTED_SCORE


MatchOutcome = Accepted | Rejected


class ScoredCandidate(BaseModel):
    """Wrapper that pairs a frozen Candidate with its relevance score."""

    model_config = ConfigDict(frozen=True)

    candidate: Candidate
    score: int = Field(default=0, ge=0)
