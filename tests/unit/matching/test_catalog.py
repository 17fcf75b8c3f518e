"""Tests for career catalog loading."""

import json

import pytest
import yaml


class TestCareerCatalog:
    """Test CareerCatalog."""

    def test_loads_yaml_with_alias_field_names(self, tmp_path):
        """key_skills and career_name should be accepted as aliases."""
        from career_match.matching.catalog import CareerCatalog

        path = tmp_path / "careers.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "careers": [
                        {
                            "id": 1,
                            "career_name": "Data Analyst",
                            "key_skills": ["Python", "SQL"],
                            "average_salary": "$70k",
                        }
                    ]
                }
            ),
            "utf-8",
        )

        [career] = CareerCatalog.load(path).careers

        assert career.name == "Data Analyst"
        assert career.required_skills == ["Python", "SQL"]
        assert career.salary_range == "$70k"

    def test_loads_json_list(self, tmp_path, sample_careers):
        """A JSON list of careers should load."""
        from career_match.matching.catalog import CareerCatalog

        path = tmp_path / "careers.json"
        path.write_text(json.dumps(sample_careers), "utf-8")

        assert len(CareerCatalog.load(path)) == 4

    def test_matchable_skips_careers_without_skills(self, sample_careers):
        """Careers without required skills are not matchable."""
        from career_match.matching.catalog import CareerCatalog

        catalog = CareerCatalog(sample_careers)

        assert [c.name for c in catalog.matchable()] == [
            "Data Analyst",
            "Backend Developer",
            "Graphic Designer",
        ]

    def test_null_skills_are_treated_as_empty(self):
        """A null skill list should load as an empty list."""
        from career_match.matching.catalog import CareerCatalog

        catalog = CareerCatalog([{"id": 1, "name": "X", "required_skills": None}])

        assert catalog.careers[0].required_skills == []

    def test_duplicate_ids_are_rejected(self):
        """Career ids must be unique."""
        from career_match.matching.catalog import CareerCatalog

        with pytest.raises(ValueError):
            CareerCatalog(
                [{"id": 1, "name": "A"}, {"id": 1, "name": "B"}],
            )
