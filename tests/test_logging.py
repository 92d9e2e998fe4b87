"""
Tests for structured logging helpers and CORS origins.
"""

import json
import logging

from rest_api.core.cors import DEFAULT_CORS_ORIGINS, get_cors_origins
from shared.config.logging import DevelopmentFormatter, StructuredFormatter, get_logger, mask_email
from shared.config.settings import settings


def _record(logger_name="rest_api.test", **context):
    logger = get_logger(logger_name)
    return logger.makeRecord(
        logger_name, logging.INFO, __file__, 1, "Moved to recycle bin", (), None,
        extra={"extra_data": context or None},
    )


class TestFormatters:

    def test_json_line_carries_context(self):
        line = StructuredFormatter().format(_record(entity_type="job", entity_id=42))

        data = json.loads(line)
        assert data["message"] == "Moved to recycle bin"
        assert data["level"] == "INFO"
        assert data["data"] == {"entity_type": "job", "entity_id": 42}
        assert "source" not in data

    def test_json_line_without_context(self):
        data = json.loads(StructuredFormatter().format(_record()))
        assert "data" not in data

    def test_development_line_appends_context(self):
        line = DevelopmentFormatter().format(_record(entity_id=42))
        assert line.endswith("rest_api.test: Moved to recycle bin (entity_id=42)")


class TestMaskEmail:

    def test_keeps_domain(self):
        assert mask_email("ops@example.com") == "op***@example.com"

    def test_short_local_part(self):
        assert mask_email("a@example.com") == "a***@example.com"

    def test_missing_or_malformed(self):
        assert mask_email(None) == "<no-email>"
        assert mask_email("not-an-address") == "***@invalid"


class TestCorsOrigins:

    def test_defaults_when_unset(self, monkeypatch):
        monkeypatch.setattr(settings, "allowed_origins", "")
        assert get_cors_origins() == DEFAULT_CORS_ORIGINS

    def test_comma_separated_setting(self, monkeypatch):
        monkeypatch.setattr(settings, "allowed_origins", "https://admin.example.com, ,https://ops.example.com")
        assert get_cors_origins() == ["https://admin.example.com", "https://ops.example.com"]
