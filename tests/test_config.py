"""Tests for configuration and the env factory."""

import pytest

from divtracker import create_dashboard_from_env
from divtracker.config import DashboardConfig, FeedProviderType, ReconciliationPolicy
from divtracker.providers.mock import MockProvider
from divtracker.store import MemoryHistoryStore


class TestReconciliationPolicy:
    def test_defaults(self):
        policy = ReconciliationPolicy()
        assert policy.ex_day == 7
        assert policy.due_day == 10
        assert (policy.announcement_window_min, policy.announcement_window_max) == (3, 12)
        assert policy.announcement_probability == 0.3
        assert policy.weights == (6, 5, 4, 3, 2, 1)
        assert not policy.deterministic

    @pytest.mark.parametrize("kwargs", [
        {"ex_day": 0},
        {"due_day": 32},
        {"announcement_window_min": 5, "announcement_window_max": 4},
        {"announcement_probability": 1.5},
        {"jitter_low": 0.0},
        {"jitter_low": 1.3, "jitter_high": 1.2},
        {"weights": ()},
        {"weights": (3, 0)},
        {"default_amount": -1.0},
        {"last_week_days": 0},
    ])
    def test_rejects_invalid(self, kwargs):
        with pytest.raises(ValueError):
            ReconciliationPolicy(**kwargs)


class TestDashboardConfig:
    def test_defaults(self):
        config = DashboardConfig()
        assert config.symbol == "WNTR"
        assert config.providers == [FeedProviderType.FINNHUB, FeedProviderType.POLYGON]
        assert config.fallback_quote == (36.79, 36.66, 37.05, 36.55)


class TestCreateFromEnv:
    def test_mock_memory(self, monkeypatch):
        monkeypatch.setenv("DIVTRACKER_PROVIDERS", "mock")
        monkeypatch.setenv("DIVTRACKER_STORE", "memory")
        monkeypatch.setenv("DIVTRACKER_SYMBOL", "wntr")
        monkeypatch.setenv("DIVTRACKER_DETERMINISTIC", "true")

        dash = create_dashboard_from_env()
        assert dash.symbol == "WNTR"
        assert len(dash.providers) == 1
        assert isinstance(dash.providers[0], MockProvider)
        assert isinstance(dash.store, MemoryHistoryStore)
        assert dash.config.policy.deterministic

    def test_unknown_provider(self, monkeypatch):
        monkeypatch.setenv("DIVTRACKER_PROVIDERS", "mock,bloomberg")
        monkeypatch.setenv("DIVTRACKER_STORE", "none")
        with pytest.raises(ValueError):
            create_dashboard_from_env()
