"""
Settings and logging tests
"""

import json
import logging

import pytest
from pydantic import ValidationError

from seathold.config import Settings
from seathold.core.logging import JSONFormatter


@pytest.mark.unit
class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("SEAT_LOCK_DURATION_SECONDS", raising=False)
        config = Settings(_env_file=None)

        assert config.SEAT_LOCK_DURATION_SECONDS == 600
        assert config.USER_LOCK_GRACE_SECONDS == 60
        assert config.MAX_TICKETS_PER_ORDER == 4

    def test_lock_duration_from_environment(self, monkeypatch):
        monkeypatch.setenv("SEAT_LOCK_DURATION_SECONDS", "120")
        assert Settings(_env_file=None).SEAT_LOCK_DURATION_SECONDS == 120

    def test_lock_duration_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, SEAT_LOCK_DURATION_SECONDS=0)

    def test_database_url_uses_async_driver(self):
        config = Settings(_env_file=None, DATABASE_URL="postgresql://db:5432/tickets")
        assert config.DATABASE_URL == "postgresql+asyncpg://db:5432/tickets"

    def test_log_level_is_upper_cased(self):
        assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"


@pytest.mark.unit
class TestJSONFormatter:

    def test_structured_output(self):
        record = logging.LogRecord(
            name="seathold.services.seat_lock_service",
            level=logging.WARNING,
            pathname=__file__,
            lineno=10,
            msg="Seat %s is locked",
            args=(3,),
            exc_info=None,
        )
        record.seat_id = 3

        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "WARNING"
        assert data["logger"] == "seathold.services.seat_lock_service"
        assert data["message"] == "Seat 3 is locked"
        assert data["seat_id"] == 3
        assert "timestamp" in data
