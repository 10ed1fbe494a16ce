"""Tests for spending_dashboard.models -- dataclass construction and defaults."""

import dataclasses
from datetime import date
from decimal import Decimal

import pytest

from spending_dashboard.models import (
    DEFAULT_INSIGHTS_MODEL,
    AggregateResult,
    AppConfig,
    BankFormat,
    PipelineResult,
    StageResult,
    Transaction,
)


class TestTransaction:
    def test_is_spending_by_sign(self):
        spend = Transaction(date(2026, 1, 1), "X", "", Decimal("-1.00"))
        income = Transaction(date(2026, 1, 1), "Y", "", Decimal("1.00"))
        assert spend.is_spending is True
        assert income.is_spending is False

    def test_is_immutable(self):
        txn = Transaction(date(2026, 1, 1), "X", "", Decimal("-1.00"))
        with pytest.raises(dataclasses.FrozenInstanceError):
            txn.amount = Decimal("5")

    def test_source_file_defaults_empty(self):
        assert Transaction(date(2026, 1, 1), "X", "", Decimal("-1")).source_file == ""


class TestAggregateResult:
    def test_empty_is_immutable(self):
        result = AggregateResult.empty()
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.total_spent = Decimal("1")

    def test_empty_defaults(self):
        result = AggregateResult.empty()
        assert [p.period for p in result.yearly_spending][:3] == ["Jan", "Feb", "Mar"]
        assert all(p.amount == 0 for p in result.yearly_spending)
        assert [d.day for d in result.avg_spending_by_day_of_week][0] == "Sun"
        assert result.recurring_payments == ()

    def test_empty_results_are_equal(self):
        assert AggregateResult.empty() == AggregateResult.empty()


class TestContainers:
    def test_stage_result_defaults_are_independent(self):
        a = StageResult()
        b = StageResult()
        a.warnings.append("x")
        assert b.warnings == []

    def test_pipeline_result_defaults(self):
        result = PipelineResult()
        assert result.transactions == []
        assert result.aggregate == AggregateResult.empty()

    def test_app_config_defaults(self):
        config = AppConfig()
        assert config.top_categories == 5
        assert config.recurring_min_months == 3
        assert config.insights_provider == "none"
        assert config.insights_model == DEFAULT_INSIGHTS_MODEL


class TestBankFormat:
    def test_values(self):
        assert {f.value for f in BankFormat} == {
            "amex", "chase", "capital_one", "generic", "unknown",
        }
