"""Unit tests for application settings configuration."""

from pathlib import Path

from glassact_data.config import Settings


def test_settings_uses_project_env_file_independent_of_cwd():
    """Settings should always include the project-level .env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_project_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_project_env in normalized
    assert str(Path(".env")) in normalized


def test_entity_file_defaults_to_builtin_catalog(monkeypatch):
    monkeypatch.delenv("ENTITY_FILE", raising=False)
    settings = Settings(_env_file=None)
    assert settings.entity_file == ""
    assert settings.output_dir == "generated/shapes"


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("ENTITY_FILE", "defs/entities.yaml")
    monkeypatch.setenv("LOG_LEVEL_PROJECTION", "DEBUG")
    settings = Settings(_env_file=None)
    assert settings.entity_file == "defs/entities.yaml"
    assert settings.log_level_projection == "DEBUG"


def test_log_levels_cover_only_used_categories():
    levels = {name for name in Settings.model_fields if name.startswith("log_level")}
    assert levels == {"log_level", "log_level_uvicorn", "log_level_projection"}
