"""Tests for settings and YAML loading."""

import pytest
import yaml

from plate_planner.config.loader import load_design, load_settings_from_yaml, load_yaml_config
from plate_planner.config.settings import PlannerSettings
from plate_planner.errors import InvalidInputError


class TestSettings:
    def test_defaults(self):
        s = PlannerSettings()
        assert s.default_plate_format == 96
        assert s.random_seed is None
        assert s.default_well_volume_ul == 200.0
        assert s.log_level == "INFO"

    def test_load_from_env(self, monkeypatch):
        monkeypatch.setenv("PLATE_PLANNER_DEFAULT_PLATE_FORMAT", "384")
        monkeypatch.setenv("PLATE_PLANNER_RANDOM_SEED", "17")
        monkeypatch.setenv("PLATE_PLANNER_DEFAULT_WELL_VOLUME_UL", "50")
        monkeypatch.setenv("PLATE_PLANNER_LOG_LEVEL", "debug")

        s = PlannerSettings.load_from_env()

        assert s.default_plate_format == 384
        assert s.random_seed == 17
        assert s.default_well_volume_ul == 50.0
        assert s.log_level == "DEBUG"

    def test_empty_seed_is_none(self, monkeypatch):
        monkeypatch.setenv("PLATE_PLANNER_RANDOM_SEED", "")
        assert PlannerSettings.load_from_env().random_seed is None


class TestLoader:
    def test_missing_file_gives_empty_config(self, tmp_path):
        assert load_yaml_config(str(tmp_path / "nope.yaml")) == {}

    def test_settings_from_yaml_ignores_unknown_keys(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.safe_dump({"random_seed": 3, "colour_scheme": "dark"}))

        s = load_settings_from_yaml(str(path))

        assert s.random_seed == 3
        assert s.default_plate_format == 96

    def test_load_design(self, tmp_path):
        path = tmp_path / "design.yaml"
        path.write_text(yaml.safe_dump({
            "groups": ["Drug", "Vehicle"],
            "timepoints": [0, 24],
            "bio_replicates": 2,
            "tech_replicates": 1,
            "include_controls": True,
        }))

        design = load_design(str(path), defaults=PlannerSettings(default_plate_format=48))

        assert design == {
            "groups": ["Drug", "Vehicle"],
            "timepoints": ["0", "24"],
            "bio_replicates": 2,
            "tech_replicates": 1,
            "plate_format": 48,
            "include_controls": True,
            "include_blanks": False,
        }

    def test_design_requires_groups(self, tmp_path):
        path = tmp_path / "design.yaml"
        path.write_text(yaml.safe_dump({"timepoints": ["0h"]}))
        with pytest.raises(InvalidInputError, match="groups"):
            load_design(str(path))

    @pytest.mark.parametrize("overrides", [
        {"groups": "Drug"},
        {"timepoints": "0h"},
        {"bio_replicates": "abc"},
        {"tech_replicates": 2.5},
        {"bio_replicates": True},
    ])
    def test_malformed_design_values(self, tmp_path, overrides):
        design = {"groups": ["Drug"], "timepoints": ["0h"]}
        design.update(overrides)
        path = tmp_path / "design.yaml"
        path.write_text(yaml.safe_dump(design))
        with pytest.raises(InvalidInputError):
            load_design(str(path))

    def test_design_not_a_mapping(self, tmp_path):
        path = tmp_path / "design.yaml"
        path.write_text("- Drug\n- Vehicle\n")
        with pytest.raises(InvalidInputError):
            load_design(str(path))

    def test_design_invalid_yaml(self, tmp_path):
        path = tmp_path / "design.yaml"
        path.write_text("groups: [Drug\n")
        with pytest.raises(InvalidInputError):
            load_design(str(path))

    def test_design_file_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_design(str(tmp_path / "missing.yaml"))
