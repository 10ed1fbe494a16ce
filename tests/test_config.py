"""Tests for spending_dashboard.config -- TOML loading, dumping and init."""

from __future__ import annotations

import pytest

from spending_dashboard.config import dump_config, initialize, load_config, load_config_file
from spending_dashboard.models import DEFAULT_INSIGHTS_MODEL, AppConfig


class TestLoadConfig:
    def test_full_file(self, tmp_path):
        (tmp_path / "config.toml").write_text(
            "[aggregation]\n"
            "top_categories = 4\n"
            "recurring_min_months = 2\n"
            "\n"
            "[insights]\n"
            'provider = "anthropic"\n'
            'model = "claude-test"\n'
            'api_key_env = "MY_KEY"\n',
            encoding="utf-8",
        )

        config = load_config(tmp_path)

        assert config == AppConfig(
            top_categories=4,
            recurring_min_months=2,
            insights_provider="anthropic",
            insights_model="claude-test",
            insights_api_key_env="MY_KEY",
        )

    def test_missing_keys_use_defaults(self, tmp_path):
        (tmp_path / "config.toml").write_text("[aggregation]\ntop_categories = 3\n")

        config = load_config(tmp_path)

        assert config.top_categories == 3
        assert config.recurring_min_months == 3
        assert config.insights_provider == "none"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path)

    @pytest.mark.parametrize("value", ["0", "-1", '"five"', "true"])
    def test_invalid_top_categories(self, tmp_path, value):
        path = tmp_path / "custom.toml"
        path.write_text(f"[aggregation]\ntop_categories = {value}\n")

        with pytest.raises(ValueError, match="top_categories"):
            load_config_file(path)


class TestDumpConfig:
    def test_round_trips_through_loader(self, tmp_path):
        original = AppConfig(top_categories=7, insights_provider="anthropic")
        path = tmp_path / "config.toml"
        path.write_text(dump_config(original), encoding="utf-8")

        assert load_config_file(path) == original

    def test_default_model_written_and_read_back(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(dump_config(AppConfig()), encoding="utf-8")

        assert f'model = "{DEFAULT_INSIGHTS_MODEL}"' in path.read_text(encoding="utf-8")
        assert load_config_file(path).insights_model == DEFAULT_INSIGHTS_MODEL


class TestInitialize:
    def test_writes_default_config(self, tmp_path):
        target = tmp_path / "project"

        path = initialize(target)

        assert path == target / "config.toml"
        assert path.exists()
        assert load_config(target) == AppConfig()

    def test_does_not_overwrite(self, tmp_path):
        existing = tmp_path / "config.toml"
        existing.write_text("[aggregation]\ntop_categories = 2\n")

        initialize(tmp_path)

        assert load_config(tmp_path).top_categories == 2
