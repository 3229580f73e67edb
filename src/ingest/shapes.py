"""Raw upstream record shapes accepted by the schema adapter.

Every field is optional and coerced leniently: a value of the wrong type
is treated as absent (None / empty list) instead of failing validation,
so a single bad field never aborts a batch.
"""

import math
from enum import Enum
from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


class Shape(str, Enum):
    A = "A"  # {data: [...], pagination: {...}}
    B = "B"  # {search_metadata: {...}, candidates: [...]}
    C = "C"  # bare list of canonical records


def _as_text(v: Any) -> str | None:
    if isinstance(v, bool):
        return None
    if isinstance(v, str):
        return v
    if isinstance(v, (int, float)):
        return str(v)
    return None


def _as_number(v: Any) -> float | None:
    if isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        number = float(v)
    elif isinstance(v, str):
        try:
            number = float(v.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _as_bool(v: Any) -> bool | None:
    return v if isinstance(v, bool) else None


def _as_record(v: Any) -> dict[str, Any] | None:
    return v if isinstance(v, dict) else None


def _as_records(v: Any) -> list[dict[str, Any]]:
    if not isinstance(v, list):
        return []
    return [item for item in v if isinstance(item, dict)]


def _as_texts(v: Any) -> list[str]:
    if not isinstance(v, list):
        return []
    return [s for s in (_as_text(item) for item in v) if s is not None]


def _as_optional_texts(v: Any) -> list[str] | None:
    return _as_texts(v) if isinstance(v, list) else None


LooseStr = Annotated[str | None, BeforeValidator(_as_text)]
LooseNumber = Annotated[float | None, BeforeValidator(_as_number)]
LooseBool = Annotated[bool | None, BeforeValidator(_as_bool)]
LooseStrList = Annotated[list[str], BeforeValidator(_as_texts)]


class _Raw(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


# --- Shape A ---


class MonthYear(_Raw):
    month: LooseNumber = None
    year: LooseNumber = None


class ShapeAPosition(_Raw):
    title_name: LooseStr = Field(default=None, alias="titleName")
    description: LooseStr = None
    company_name: LooseStr = Field(default=None, alias="companyName")
    location_name: LooseStr = Field(default=None, alias="locationName")
    start_month_year: Annotated[MonthYear | None, BeforeValidator(_as_record)] = Field(
        default=None, alias="startMonthYear",
    )
    end_month_year: Annotated[MonthYear | None, BeforeValidator(_as_record)] = Field(
        default=None, alias="endMonthYear",
    )
    is_current: LooseBool = Field(default=None, alias="isCurrentCompany")
    start_time: LooseNumber = Field(default=None, alias="startTime")
    end_time: LooseNumber = Field(default=None, alias="endTime")


class ShapeAEducation(_Raw):
    school_name: LooseStr = Field(default=None, alias="schoolName")
    degree_name: LooseStr = Field(default=None, alias="degreeName")
    fields_of_study_name: LooseStr = Field(default=None, alias="fieldsOfStudyName")
    start_time: LooseNumber = Field(default=None, alias="startTime")
    end_time: LooseNumber = Field(default=None, alias="endTime")


class ShapeARecord(_Raw):
    shape: ClassVar[Shape] = Shape.A
    first_name: LooseStr = Field(default=None, alias="firstName")
    last_name: LooseStr = Field(default=None, alias="lastName")
    summary: LooseStr = None
    positions: Annotated[list[ShapeAPosition], BeforeValidator(_as_records)] = Field(
        default_factory=list,
    )
    educations: Annotated[list[ShapeAEducation], BeforeValidator(_as_records)] = Field(
        default_factory=list,
    )
    current_position: Annotated[ShapeAPosition | None, BeforeValidator(_as_record)] = Field(
        default=None, alias="currentPosition",
    )
    latest_education: Annotated[ShapeAEducation | None, BeforeValidator(_as_record)] = Field(
        default=None, alias="latestEducation",
    )
    geographic_state_name: LooseStr = None
    city_name: LooseStr = None
    industry: LooseStr = None
    public_profile_url: LooseStr = None
    seniority_2_name: LooseStr = None
    occupation_name: LooseStr = None
    score: LooseNumber = None


# --- Shape B ---


class ShapeBCurrentPosition(_Raw):
    title: LooseStr = None
    company: LooseStr = None
    start_date: LooseStr = None
    is_current: LooseBool = None


class ShapeBLocation(_Raw):
    state: LooseStr = None
    city: LooseStr = None


class ShapeBExperience(_Raw):
    title: LooseStr = None
    company: LooseStr = None
    duration: LooseStr = None
    description: LooseStr = None


class ShapeBRecord(_Raw):
    shape: ClassVar[Shape] = Shape.B
    id: LooseStr = None
    name: LooseStr = None
    current_position: Annotated[ShapeBCurrentPosition | None, BeforeValidator(_as_record)] = None
    location: Annotated[ShapeBLocation | None, BeforeValidator(_as_record)] = None
    education: Annotated[dict[str, Any] | None, BeforeValidator(_as_record)] = None
    summary: LooseStr = None
    key_experience: Annotated[list[ShapeBExperience], BeforeValidator(_as_records)] = Field(
        default_factory=list,
    )
    industry: LooseStr = None
    linkedin_url: LooseStr = None
    score: LooseNumber = None


# --- Shape C ---


class ShapeCRecord(_Raw):
    shape: ClassVar[Shape] = Shape.C
    id: LooseStr = None
    name: LooseStr = None
    title: LooseStr = None
    company: LooseStr = None
    location: LooseStr = None
    industry: LooseStr = None
    years_experience: LooseNumber = Field(default=None, alias="yearsExperience")
    skills: LooseStrList = Field(default_factory=list)
    preferred_skills: Annotated[list[str] | None, BeforeValidator(_as_optional_texts)] = Field(
        default=None, alias="preferredSkills",
    )
    open_to_work: LooseBool = Field(default=None, alias="openToWork")
    summary: LooseStr = None
    avatar_url: LooseStr = Field(default=None, alias="avatarUrl")


RawProfile = ShapeARecord | ShapeBRecord | ShapeCRecord

RECORD_MODELS: dict[Shape, type[ShapeARecord] | type[ShapeBRecord] | type[ShapeCRecord]] = {
    Shape.A: ShapeARecord,
    Shape.B: ShapeBRecord,
    Shape.C: ShapeCRecord,
}
