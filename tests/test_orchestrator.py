"""Tests for the MoneyPouch facade, the factory and run_and_report."""

import logging
from datetime import date

import pytest

from moneypouch.activity import ActivityLogger
from moneypouch.config import AppSettings, Settings, get_settings, validate_all_settings
from moneypouch.models.activity import ActivityEventBuilder, ActivityEventType
from moneypouch.orchestrator import MoneyPouch, create_app_components
from moneypouch.services.storage import InMemoryStorage


@pytest.fixture
def pouch(repository, activity_logger, clock):
    return MoneyPouch(
        repository,
        settings=Settings(),
        activity_logger=activity_logger,
        today=clock,
        now=clock.now,
    )


class TestMoneyPouch:
    """Whole-ledger operations."""

    def test_components_share_one_repository(self, pouch):
        pouch.expenses.add_expense(1000, "food", "2024-06-21")
        pouch.budget.save_budget(50000)

        summary = pouch.budget.calculate_balance()
        assert summary.spent == 1000
        assert summary.spent_today == 1000

    def test_load_sample_data(self, pouch):
        pouch.load_sample_data()

        assert len(pouch.expenses.get_expenses()) == 4
        assert pouch.expenses.get_total_by_date(date(2024, 6, 20)) == 4450
        assert pouch.goals.get_total_savings() == 35000

        summary = pouch.budget.calculate_balance()
        assert summary.budget == 50000
        assert summary.spent == 5870
        assert summary.start_budget == 4533
        assert summary.daily_budget == 3333

    def test_clear_all_data(self, pouch, storage, activity_logger):
        pouch.load_sample_data()
        pouch.pool.add_to_savings_pool(100)

        cleared = pouch.clear_all_data()

        assert "expenses" in cleared
        assert storage.keys() == []
        assert pouch.expenses.get_expenses() == []
        assert pouch.goals.get_goals() == []
        assert pouch.pool.get_balance() == 0
        assert pouch.budget.get_current_budget() is None
        assert activity_logger.of_type(ActivityEventType.DATA_CLEARED)


class TestCreateAppComponents:
    """Factory wiring."""

    def test_with_explicit_storage(self):
        storage = InMemoryStorage()
        pouch = create_app_components(storage=storage)

        pouch.goals.add_goal("Trip", 1000)
        assert storage.keys() == ["moneypouch_goals"]

    def test_defaults_to_json_files_in_data_dir(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MONEYPOUCH_STORAGE_DATA_DIR", str(tmp_path))
        pouch = create_app_components(settings=Settings())

        pouch.pool.add_to_savings_pool(100)
        assert (tmp_path / "moneypouch_savings_pool.json").exists()

    def test_applies_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        create_app_components(settings=Settings(), storage=InMemoryStorage())
        assert logging.getLogger("moneypouch").level == logging.DEBUG

    def test_storage_keys_follow_settings(self, monkeypatch):
        monkeypatch.setenv("MONEYPOUCH_STORAGE_GOALS_KEY", "custom_goals")
        storage = InMemoryStorage()
        pouch = create_app_components(settings=Settings(), storage=storage)

        pouch.goals.add_goal("Trip", 1000)
        assert storage.keys() == ["custom_goals"]


class TestSettings:
    """Configuration loading."""

    def test_defaults(self):
        settings = Settings()
        assert settings.ledger.snapshot_retention_days == 30
        assert settings.ledger.default_calculation == "dynamic"
        assert settings.storage.budget_key == "moneypouch_budget"

    def test_app_settings_only_carry_log_level(self):
        assert set(AppSettings.model_fields) == {"log_level"}
        assert AppSettings().log_level == "INFO"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("MONEYPOUCH_LEDGER_SNAPSHOT_RETENTION_DAYS", "7")
        assert Settings().ledger.snapshot_retention_days == 7

    def test_validate_all_settings(self, monkeypatch):
        get_settings.cache_clear()
        monkeypatch.setenv("MONEYPOUCH_LEDGER_DEFAULT_CALCULATION", "weekly")
        try:
            results = validate_all_settings()
        finally:
            get_settings.cache_clear()
        assert results["storage"] is True
        assert results["ledger"] is False
        assert "ledger_error" in results


class TestRunAndReport:
    """ActivityLogger.run_and_report."""

    def test_returns_result(self, activity_logger):
        assert activity_logger.run_and_report(lambda: 42, "Could not compute") == 42
        assert activity_logger.events == []

    def test_logs_and_reraises(self, activity_logger, expense_book):
        with pytest.raises(ValueError):
            activity_logger.run_and_report(
                lambda: expense_book.add_expense(-1, "food", "2024-06-21"),
                "Could not add the expense",
                context="add_expense",
            )

        event = activity_logger.of_type(ActivityEventType.OPERATION_FAILED)[0]
        assert event.description == "Could not add the expense"
        assert event.details["context"] == "add_expense"
        assert event.error_message


class _BrokenLogger:
    """structlog stand-in that fails on everything below error level."""

    def __init__(self):
        self.errors = []

    def info(self, event, **kwargs):
        raise RuntimeError("log sink unavailable")

    warning = debug = info

    def error(self, event, **kwargs):
        self.errors.append((event, kwargs))


class TestActivityLogger:
    """Failure handling inside ActivityLogger.log."""

    def test_failing_log_call_does_not_raise(self):
        logger = ActivityLogger()
        broken = _BrokenLogger()
        logger._logger = broken

        logger.log(ActivityEventBuilder.expense_added("exp_1", 100, "food"))

        assert broken.errors[0][0] == "activity_log_failed"
        assert broken.errors[0][1]["error"] == "log sink unavailable"

    def test_failing_log_call_does_not_abort_the_operation(self, repository, clock):
        logger = ActivityLogger()
        broken = _BrokenLogger()
        logger._logger = broken
        pouch = MoneyPouch(
            repository,
            settings=Settings(),
            activity_logger=logger,
            today=clock,
            now=clock.now,
        )

        pouch.pool.add_to_savings_pool(500)

        assert pouch.pool.get_balance() == 500
        assert broken.errors
