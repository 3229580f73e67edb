"""Schema adapter: detects the upstream payload shape and emits canonical Candidates.

Detection is structural and tried in a fixed order (first match wins):
  A: object with a ``data`` list and a ``pagination`` object
  B: object with a ``search_metadata`` object and a ``candidates`` list
  C: bare list of already-canonical records

Every canonical field resolves through a fallback chain, ending in
"Unknown", so field-level gaps never abort a batch. Only structural
problems (unknown shape, missing top-level array, non-object record)
raise SchemaError.
"""

import json
import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from src.core.config import Settings
from src.core.errors import SchemaError
from src.core.schemas import MAX_SKILLS, UNKNOWN, Candidate
from src.ingest.experience import round_half_up, years_from_intervals, years_from_year_ranges
from src.ingest.shapes import (
    RECORD_MODELS,
    RawProfile,
    Shape,
    ShapeARecord,
    ShapeBRecord,
    ShapeCRecord,
)
from src.ingest.skills import SkillExtractor

logger = logging.getLogger(__name__)

# Marker object and record array for each keyed shape.
_SHAPE_FIELDS: dict[Shape, tuple[str, str]] = {
    Shape.A: ("pagination", "data"),
    Shape.B: ("search_metadata", "candidates"),
}


def load_payload(path: str | Path) -> Any:
    """Read and parse a JSON payload file."""
    path = Path(path)
    if not path.exists():
        msg = f"Payload file not found: {path}"
        raise FileNotFoundError(msg)
    return _parse_json(path.read_text(), source=str(path))


def detect_shape(payload: Any) -> Shape:
    """Return the first shape whose marker fields the payload carries."""
    if isinstance(payload, dict):
        for shape, (marker, array) in _SHAPE_FIELDS.items():
            if isinstance(payload.get(marker), dict) and isinstance(payload.get(array), list):
                return shape
        for shape, (marker, array) in _SHAPE_FIELDS.items():
            if isinstance(payload.get(marker), dict):
                msg = (
                    f"Shape {shape.value} payload has '{marker}' but '{array}' "
                    f"is missing or not a list"
                )
                raise SchemaError(msg)
        keys = ", ".join(sorted(str(k) for k in payload)) or "<none>"
        msg = f"Payload matches no known shape (top-level keys: {keys})"
        raise SchemaError(msg)
    if isinstance(payload, list):
        return Shape.C
    msg = f"Payload matches no known shape (got {type(payload).__name__})"
    raise SchemaError(msg)


class SchemaAdapter:
    """Converts any supported payload into a list of canonical Candidates."""

    def __init__(
        self,
        settings: Settings | None = None,
        now: datetime | None = None,
    ) -> None:
        settings = settings or Settings()
        self._experience = settings.experience
        self._extractor = SkillExtractor(settings.skills, settings.extraction.max_skills)
        self._now = now
        self._converters: dict[Shape, Callable[[Any, str], Candidate]] = {
            Shape.A: self._convert_a,
            Shape.B: self._convert_b,
            Shape.C: self._convert_c,
        }

    def convert(self, payload: Any) -> list[Candidate]:
        return self.convert_with_shape(payload)[1]

    def convert_with_shape(self, payload: Any) -> tuple[Shape, list[Candidate]]:
        """Convert a payload, also reporting which shape it was detected as."""
        if isinstance(payload, (str, bytes, bytearray)):
            payload = _parse_json(payload, source="payload")

        shape = detect_shape(payload)
        records = payload if shape is Shape.C else payload[_SHAPE_FIELDS[shape][1]]
        logger.info("Detected shape %s with %d records", shape.value, len(records))

        parsed = [
            self._parse_record(shape, raw, index) for index, raw in enumerate(records, start=1)
        ]
        # Positional fallback ids never take an id the payload supplies
        reserved = {rid for rid in map(_explicit_id, parsed) if rid}
        converter = self._converters[shape]
        candidates = [
            converter(record, _unused_id(str(index), reserved))
            for index, record in enumerate(parsed, start=1)
        ]
        return shape, _unique_ids(candidates)

    # --- Per-shape converters ---

    def _convert_a(self, record: ShapeARecord, fallback_id: str) -> Candidate:
        current = record.current_position
        first = record.positions[0] if record.positions else None
        summary = record.summary or ""
        return Candidate(
            id=fallback_id,
            name=_join_name(record.first_name, record.last_name),
            title=_first_text(current and current.title_name, first and first.title_name),
            company=_first_text(current and current.company_name, first and first.company_name),
            location=_first_text(
                current and current.location_name,
                first and first.location_name,
                record.city_name,
                record.geographic_state_name,
            ),
            industry=_first_text(record.industry),
            years_experience=years_from_intervals(
                record.positions, now=self._now, days_per_year=self._experience.days_per_year,
            ),
            skills=self._extractor.extract(summary),
            preferred_skills=[],
            open_to_work=True,
            summary=summary,
        )

    def _convert_b(self, record: ShapeBRecord, fallback_id: str) -> Candidate:
        current = record.current_position
        first = record.key_experience[0] if record.key_experience else None
        loc = record.location
        summary = record.summary or ""

        durations = [exp.duration for exp in record.key_experience]
        if not durations and current is not None:
            durations = [current.start_date]

        return Candidate(
            id=_first_text(record.id, default=fallback_id),
            name=_first_text(record.name),
            title=_first_text(current and current.title, first and first.title),
            company=_first_text(current and current.company, first and first.company),
            location=_join_location(loc.city, loc.state) if loc else UNKNOWN,
            industry=_first_text(record.industry),
            years_experience=years_from_year_ranges(
                durations,
                current_year=self._now.year if self._now else None,
                floor=self._experience.year_range_floor,
            ),
            skills=self._extractor.extract(summary),
            preferred_skills=[],
            open_to_work=True,
            summary=summary,
        )

    def _convert_c(self, record: ShapeCRecord, fallback_id: str) -> Candidate:
        years = record.years_experience
        return Candidate(
            id=record.id if record.id else fallback_id,
            name=_first_text(record.name),
            title=_first_text(record.title),
            company=_first_text(record.company),
            location=_first_text(record.location),
            industry=_first_text(record.industry),
            years_experience=max(0, round_half_up(years)) if years is not None else 0,
            skills=_dedupe(record.skills)[:MAX_SKILLS],
            preferred_skills=record.preferred_skills,
            open_to_work=True if record.open_to_work is None else record.open_to_work,
            summary=record.summary or "",
            avatar_url=record.avatar_url or None,
        )

    @staticmethod
    def _parse_record(shape: Shape, raw: Any, index: int) -> RawProfile:
        if not isinstance(raw, dict):
            msg = f"Shape {shape.value} record {index} is not an object (got {type(raw).__name__})"
            raise SchemaError(msg)
        try:
            return RECORD_MODELS[shape].model_validate(raw)
        except ValidationError as e:
            msg = f"Shape {shape.value} record {index} is malformed: {e}"
            raise SchemaError(msg) from e


def convert(payload: Any, settings: Settings | None = None) -> list[Candidate]:
    """Convert a raw payload into canonical Candidates."""
    return SchemaAdapter(settings).convert(payload)


# --- Helpers ---


def _parse_json(text: str | bytes | bytearray, source: str) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        msg = f"Invalid JSON in {source}: {e}"
        raise SchemaError(msg) from e


def _first_text(*values: str | None, default: str = UNKNOWN) -> str:
    """Return the first non-blank value, stripped, or ``default``."""
    for value in values:
        if value and value.strip():
            return value.strip()
    return default


def _join_name(first: str | None, last: str | None) -> str:
    parts = [p.strip() for p in (first, last) if p and p.strip()]
    return " ".join(parts) if parts else UNKNOWN


def _join_location(city: str | None, state: str | None) -> str:
    parts = [p.strip() for p in (city, state) if p and p.strip()]
    return ", ".join(parts) if parts else UNKNOWN


def _dedupe(values: list[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        value = value.strip()
        key = value.lower()
        if value and key not in seen:
            seen.add(key)
            result.append(value)
    return result


def _explicit_id(record: RawProfile) -> str | None:
    """The id a record carries itself, as its converter would emit it."""
    if isinstance(record, ShapeBRecord):
        return _first_text(record.id, default="") or None
    if isinstance(record, ShapeCRecord):
        return record.id or None
    return None


def _unused_id(base: str, taken: set[str]) -> str:
    """Return ``base``, or ``base-2``, ``base-3``... whichever is free first."""
    if base not in taken:
        return base
    n = 2
    while f"{base}-{n}" in taken:
        n += 1
    return f"{base}-{n}"


def _unique_ids(candidates: list[Candidate]) -> list[Candidate]:
    """Keep the first holder of each id and suffix later repeats."""
    used = {c.id for c in candidates}
    seen: set[str] = set()
    result: list[Candidate] = []
    for c in candidates:
        if c.id in seen:
            new_id = _unused_id(c.id, used)
            logger.warning("Duplicate candidate id '%s' in batch, renamed to '%s'", c.id, new_id)
            used.add(new_id)
            c = c.model_copy(update={"id": new_id})
        seen.add(c.id)
        result.append(c)
    return result
