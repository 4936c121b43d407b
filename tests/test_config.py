"""
Rules configuration loader tests.
"""

import pytest
from pydantic import ValidationError

from talentbridge.models import RulesSettings
from talentbridge.utils.config import (
    RULES_FILE_ENV,
    get_default_rules_path,
    load_rules,
)


@pytest.fixture(autouse=True)
def no_rules_override(monkeypatch):
    monkeypatch.delenv(RULES_FILE_ENV, raising=False)


class TestLoadRules:

    def test_bundled_file_matches_code_defaults(self):
        assert get_default_rules_path().exists()
        assert load_rules() == RulesSettings()

    def test_partial_override(self, tmp_path):
        rules_file = tmp_path / "rules.yaml"
        rules_file.write_text("job_health:\n  excellent: 90\n", encoding="utf-8")

        settings = load_rules(rules_file)

        assert settings.job_health.excellent == 90
        assert settings.job_health.good == 45
        assert settings.recruiting_health == RulesSettings().recruiting_health

    def test_empty_file_uses_defaults(self, tmp_path):
        rules_file = tmp_path / "rules.yaml"
        rules_file.write_text("", encoding="utf-8")
        assert load_rules(rules_file) == RulesSettings()

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ValueError):
            load_rules(tmp_path / "missing.yaml")

    def test_missing_file_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv(RULES_FILE_ENV, str(tmp_path / "missing.yaml"))
        with pytest.raises(ValueError):
            load_rules()

    def test_environment_override(self, tmp_path, monkeypatch):
        rules_file = tmp_path / "rules.yaml"
        rules_file.write_text("fraud:\n  max_profile_changes: 9\n", encoding="utf-8")
        monkeypatch.setenv(RULES_FILE_ENV, str(rules_file))

        assert load_rules().fraud.max_profile_changes == 9

    def test_non_mapping_content(self, tmp_path):
        rules_file = tmp_path / "rules.yaml"
        rules_file.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_rules(rules_file)

    def test_unknown_key_rejected(self, tmp_path):
        rules_file = tmp_path / "rules.yaml"
        rules_file.write_text("job_health:\n  excelent: 90\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_rules(rules_file)

    def test_rules_are_frozen(self):
        settings = load_rules()
        with pytest.raises(ValidationError):
            settings.job_health.excellent = 1
