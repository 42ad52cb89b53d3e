"""Tests for learnlog.core.config_schema and Config.validated()."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from learnlog.core.config import Config
from learnlog.core.config_schema import LearnlogConfig
from learnlog.core.exceptions import ConfigurationError
from learnlog.journal.config import DiaryConfig, ValidationConfig


@pytest.mark.smoke
class TestConfigSchema:
    def test_defaults_populate(self):
        cfg = LearnlogConfig()
        assert cfg.diary.storage_key == "learningEntries"
        assert cfg.diary.undo_timeout == 5.0
        assert cfg.search.max_cache_size == 50
        assert cfg.validation.content_max_length == 10000
        assert cfg.logging.level == "WARNING"

    def test_path_expansion(self):
        cfg = LearnlogConfig.model_validate({"paths": {"data_dir": "~/.learnlog-data"}})
        assert cfg.paths.data_dir.is_absolute()
        assert "~" not in str(cfg.paths.data_dir)

    def test_env_strings_are_coerced(self):
        cfg = LearnlogConfig.model_validate(
            {
                "paths": {"data_dir": "/tmp/d"},
                "diary": {"undo_timeout": "10"},
                "search": {"max_cache_size": "7"},
            }
        )
        assert cfg.diary.undo_timeout == 10.0
        assert cfg.search.max_cache_size == 7

    @pytest.mark.parametrize(
        "section",
        [
            {"search": {"max_cache_size": 0}},
            {"diary": {"undo_timeout": -1}},
            {"diary": {"storage_key": ""}},
            {"validation": {"topic_min_length": 300}},
            {"validation": {"content_min_length": 50, "content_max_length": 20}},
            {"logging": {"level": "LOUD"}},
        ],
    )
    def test_invalid_values_rejected(self, section):
        with pytest.raises(ValidationError):
            LearnlogConfig.model_validate({"paths": {"data_dir": "/tmp/d"}, **section})

    def test_quota_can_be_disabled(self):
        cfg = LearnlogConfig.model_validate({"paths": {"data_dir": "/tmp/d"}, "diary": {"quota_bytes": None}})
        assert cfg.diary.quota_bytes is None

    def test_extra_keys_allowed_at_root(self):
        cfg = LearnlogConfig.model_validate(
            {
                "paths": {"data_dir": "/tmp/d"},
                "custom_section": {"key": "value"},
            }
        )
        assert cfg.model_extra["custom_section"] == {"key": "value"}


class TestValidatedConfig:
    def test_config_validated_integration(self, tmp_config_file, tmp_dir):
        config = Config(config_file=tmp_config_file, data_dir=tmp_dir)
        validated = config.validated()
        assert isinstance(validated, LearnlogConfig)
        assert validated.paths.data_dir == Path(tmp_dir) / "data"
        assert validated.diary.undo_timeout == 2.5

    def test_invalid_config_raises_configuration_error(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        config.set("search.max_cache_size", -3)
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            config.validated()

    def test_env_override_validates(self, monkeypatch, tmp_dir):
        monkeypatch.setenv("LEARNLOG_DIARY__UNDO_TIMEOUT", "1.5")
        config = Config(data_dir=tmp_dir)
        assert config.validated().diary.undo_timeout == 1.5

    def test_dataclasses_from_config(self, tmp_config_file, tmp_dir):
        config = Config(config_file=tmp_config_file, data_dir=tmp_dir)
        diary_cfg = DiaryConfig.from_config(config)
        assert diary_cfg.undo_timeout == 2.5
        assert diary_cfg.max_cache_size == 10
        assert diary_cfg.storage_key == "learningEntries"

        config.set("validation.topic_min_length", 5)
        assert ValidationConfig.from_config(config).topic_min_length == 5
