"""Configuration loading, writing, and project initialization.

Reads TOML config files using stdlib ``tomllib`` and writes them using
``tomli_w``.  Depends only on ``models.py``.
"""

from __future__ import annotations

import sys
from dataclasses import asdict
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

from spending_dashboard.models import AppConfig

CONFIG_FILENAME = "config.toml"

_HEADER_COMMENT = """\
# Spending Dashboard configuration
#
# [aggregation]
#   top_categories       categories shown individually before "Other"
#   recurring_min_months distinct months a charge needs to count as recurring
# [insights]
#   provider             "anthropic" or "none"
#   api_key_env          name of the env var holding the API key

"""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(root: Path) -> AppConfig:
    """Load ``config.toml`` from *root* and return an :class:`AppConfig`.

    Missing keys fall back to the :class:`AppConfig` defaults.

    Args:
        root: Directory containing ``config.toml``.

    Returns:
        A fully-populated :class:`AppConfig` instance.

    Raises:
        FileNotFoundError: If ``config.toml`` does not exist.
        ValueError: If a numeric setting is not a positive integer.
    """
    return load_config_file(Path(root) / CONFIG_FILENAME)


def load_config_file(path: Path) -> AppConfig:
    """Load an explicit config file path. See :func:`load_config`."""
    data = _read_toml(path)
    defaults = AppConfig()

    aggregation = data.get("aggregation", {})
    insights = data.get("insights", {})

    config = AppConfig(
        top_categories=aggregation.get("top_categories", defaults.top_categories),
        recurring_min_months=aggregation.get(
            "recurring_min_months", defaults.recurring_min_months
        ),
        insights_provider=insights.get("provider", defaults.insights_provider),
        insights_model=insights.get("model", defaults.insights_model),
        insights_api_key_env=insights.get("api_key_env", defaults.insights_api_key_env),
    )

    for name in ("top_categories", "recurring_min_months"):
        value = getattr(config, name)
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            raise ValueError(f"{path}: {name} must be a positive integer, got {value!r}")

    return config


def dump_config(config: AppConfig) -> str:
    """Serialize *config* to TOML text in the ``config.toml`` layout."""
    values = asdict(config)
    return tomli_w.dumps(
        {
            "aggregation": {
                "top_categories": values["top_categories"],
                "recurring_min_months": values["recurring_min_months"],
            },
            "insights": {
                "provider": values["insights_provider"],
                "model": values["insights_model"],
                "api_key_env": values["insights_api_key_env"],
            },
        }
    )


def initialize(target_dir: Path) -> Path:
    """Write a default ``config.toml`` into *target_dir*.

    Idempotent: the directory is created if needed and an existing
    config file is **not** overwritten.

    Args:
        target_dir: The directory in which to create the config file.

    Returns:
        Path to the config file.
    """
    target_dir = Path(target_dir)
    target_dir.mkdir(parents=True, exist_ok=True)

    path = target_dir / CONFIG_FILENAME
    _write_if_missing(path, _HEADER_COMMENT + dump_config(AppConfig()))
    return path


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _read_toml(path: Path) -> dict:
    """Read and parse a TOML file."""
    with open(path, "rb") as f:
        return tomllib.load(f)


def _write_if_missing(path: Path, content: str) -> None:
    """Write *content* to *path* only if the file does not already exist."""
    if not path.exists():
        path.write_text(content, encoding="utf-8")
