"""
Tests for environment-driven settings and service wiring.
"""

from datetime import date
from pathlib import Path

from account_opening.event_bus import EventBus
from account_opening.factory import create_account_opening_service
from shared.config import Settings, _split_csv, get_settings
from shared.models import AccountOpeningStatus


class TestSettings:
    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_split_csv(self):
        assert _split_csv(" 999BAD1, ,888BAD2 ") == frozenset({"999BAD1", "888BAD2"})
        assert _split_csv("") == frozenset()

    def test_env_is_read_when_settings_are_created(self, monkeypatch, tmp_path: Path):
        """Test that every field picks up variables set after import."""
        monkeypatch.setenv("ACCOUNTS_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("ACCOUNTS_PERSIST", "true")
        monkeypatch.setenv("HTTP_PORT", "9001")
        monkeypatch.setenv("BACKGROUND_CHECK_FAIL_RATE", "0.5")
        monkeypatch.setenv("BACKGROUND_CHECK_WATCHLIST", "111BAD1")

        settings = Settings()

        assert settings.data_dir == tmp_path
        assert settings.persist_accounts is True
        assert settings.http_port == 9001
        assert settings.background_check_fail_rate == 0.5
        assert settings.background_check_watchlist == frozenset({"111BAD1"})


class TestFactory:
    """Tests for create_account_opening_service."""

    def test_uses_settings_lists(self, tmp_path: Path):
        settings = Settings(
            data_dir=tmp_path,
            persist_accounts=False,
            background_check_watchlist=frozenset({"111BAD1"}),
            background_check_unknown=frozenset({"222UNK2"}),
            background_check_fail_rate=0.0,
        )
        bus = EventBus()
        service = create_account_opening_service(settings=settings, event_bus=bus)

        dob = date(1970, 1, 1)
        assert service.open_account("A", "B", "111BAD1", dob) == AccountOpeningStatus.DECLINED
        assert service.open_account("A", "B", "222UNK2", dob) == AccountOpeningStatus.DECLINED
        assert service.open_account("A", "B", "333OK33", dob) == AccountOpeningStatus.OPENED

        assert len(service.account_repository.get_accounts()) == 1
        assert len(bus.get_event_log()) == 1
