"""
Tests for application settings.
"""

import pytest
from pydantic import ValidationError

from app.core.config import EnvironmentMode, Settings


class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.is_development
        assert not settings.use_real_services
        assert settings.max_keyterms == 100
        assert settings.auto_confirm_threshold == pytest.approx(0.8)
        assert settings.entity_detection_list == ["cardinal", "ordinal", "money"]

    def test_env_mode_case_insensitive(self):
        settings = Settings(_env_file=None, env_mode="STAGING")
        assert settings.env_mode == EnvironmentMode.STAGING
        assert settings.use_real_services

    def test_invalid_env_mode(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, env_mode="qa")

    def test_production_requires_key(self):
        settings = Settings(_env_file=None, env_mode="production", elevenlabs_api_key=None)
        assert settings.validate_production_config() == ["ELEVENLABS_API_KEY"]

        settings = Settings(_env_file=None, env_mode="production", elevenlabs_api_key="xi-test")
        assert settings.validate_production_config() == []

    def test_entity_detection_parsing(self):
        settings = Settings(_env_file=None, entity_detection=" cardinal , ,money")
        assert settings.entity_detection_list == ["cardinal", "money"]
