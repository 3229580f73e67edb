"""Tests for configuration models and YAML loading."""

from pathlib import Path
from textwrap import dedent

import pytest
from pydantic import ValidationError

from src.core.config import (
    DEFAULT_SKILL_TERMS,
    ExperienceConfig,
    ExtractionConfig,
    ScoringConfig,
    Settings,
    SkillVocabulary,
)


class TestSkillVocabulary:
    def test_defaults(self) -> None:
        v = SkillVocabulary()
        assert v.version == "1"
        assert v.terms == list(DEFAULT_SKILL_TERMS)

    def test_default_order_python_before_react(self) -> None:
        terms = SkillVocabulary().terms
        assert terms.index("Python") < terms.index("React")

    def test_empty_terms_rejected(self) -> None:
        with pytest.raises(ValidationError, match="must not be empty"):
            SkillVocabulary(terms=[])

    def test_blank_terms_dropped(self) -> None:
        v = SkillVocabulary(terms=["Go", "  ", " Rust "])
        assert v.terms == ["Go", "Rust"]

    def test_duplicate_terms_rejected(self) -> None:
        with pytest.raises(ValidationError, match="duplicate"):
            SkillVocabulary(terms=["Python", "python"])


class TestExtractionConfig:
    def test_defaults(self) -> None:
        assert ExtractionConfig().max_skills == 8

    def test_bounds(self) -> None:
        with pytest.raises(ValidationError):
            ExtractionConfig(max_skills=0)
        with pytest.raises(ValidationError):
            ExtractionConfig(max_skills=9)


class TestExperienceConfig:
    def test_defaults(self) -> None:
        e = ExperienceConfig()
        assert e.days_per_year == 365.25
        assert e.year_range_floor == 1

    def test_days_per_year_positive(self) -> None:
        with pytest.raises(ValidationError):
            ExperienceConfig(days_per_year=0)


class TestScoringConfig:
    def test_defaults(self) -> None:
        s = ScoringConfig()
        assert s.query_name_bonus == 3
        assert s.query_title_bonus == 3
        assert s.query_summary_bonus == 2
        assert s.required_skill_bonus == 10
        assert s.preferred_skill_bonus == 3

    def test_negative_bonus_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ScoringConfig(required_skill_bonus=-5)


class TestSettings:
    def test_all_sections_default(self) -> None:
        s = Settings()
        assert s.scoring.required_skill_bonus == 10
        assert s.extraction.max_skills == 8

    def test_from_yaml(self, tmp_path: Path) -> None:
        yaml_content = dedent("""\
            skills:
              version: "2"
              terms: [Go, Rust, Python]
            extraction:
              max_skills: 2
            scoring:
              preferred_skill_bonus: 5
        """)
        path = tmp_path / "settings.yaml"
        path.write_text(yaml_content)

        s = Settings.from_yaml(path)
        assert s.skills.version == "2"
        assert s.skills.terms == ["Go", "Rust", "Python"]
        assert s.extraction.max_skills == 2
        assert s.scoring.preferred_skill_bonus == 5
        assert s.scoring.required_skill_bonus == 10

    def test_from_yaml_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("")
        assert Settings.from_yaml(path) == Settings()

    def test_from_yaml_file_not_found(self) -> None:
        with pytest.raises(FileNotFoundError):
            Settings.from_yaml("/nonexistent/settings.yaml")

    def test_from_yaml_invalid_value(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("extraction:\n  max_skills: 20\n")
        with pytest.raises(ValidationError):
            Settings.from_yaml(path)

    def test_shipped_settings_file_loads(self) -> None:
        path = Path(__file__).resolve().parents[2] / "config" / "settings.yaml"
        s = Settings.from_yaml(path)
        assert s.skills.terms == list(DEFAULT_SKILL_TERMS)
