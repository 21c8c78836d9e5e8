"""Tests for Settings defaults and environment overrides."""

from finarrow.config import Settings


class TestSettings:
    def test_defaults(self):
        s = Settings(_env_file=None)
        assert s.max_rows == 1000
        assert s.max_upload_bytes == 10 * 1024 * 1024
        assert s.numeric_bound == 1e12
        assert s.date_max_length == 50
        assert s.runway_sentinel_months == 999.0
        assert s.days_per_month == 30
        assert s.ltv_lifetime_years == 3
        assert s.session_cookie_name == "finarrow_session"
        assert s.max_sessions == 1000

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("FINARROW_MAX_ROWS", "50")
        monkeypatch.setenv("FINARROW_RUNWAY_SENTINEL_MONTHS", "120")
        s = Settings(_env_file=None)
        assert s.max_rows == 50
        assert s.runway_sentinel_months == 120.0

    def test_list_from_env_json(self, monkeypatch):
        monkeypatch.setenv("FINARROW_ALLOWED_ORIGINS", '["https://app.example.com"]')
        assert Settings(_env_file=None).allowed_origins == ["https://app.example.com"]
