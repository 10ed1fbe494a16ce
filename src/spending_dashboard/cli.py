"""Click CLI entry point for the spending command.

Handles argument parsing, config loading, and error display. All business
logic is delegated to ``pipeline``, ``config``, ``export`` and ``insights``
modules.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from spending_dashboard import __version__


def _configure_logging(verbose: bool, debug: bool) -> None:
    """Set up logging based on verbosity flags."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        force=True,
    )


def _load_app_config(config_path: str | None):
    """Load the config from ``--config`` or ``./config.toml``, else defaults."""
    from spending_dashboard.config import CONFIG_FILENAME, load_config_file
    from spending_dashboard.models import AppConfig

    if config_path is not None:
        return load_config_file(Path(config_path))

    default_path = Path.cwd() / CONFIG_FILENAME
    if default_path.is_file():
        return load_config_file(default_path)
    return AppConfig()


@click.group()
@click.version_option(version=__version__, prog_name="spending-dashboard")
def cli() -> None:
    """Normalize bank CSV exports and summarize spending."""


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option(
    "--json", "json_path", type=click.Path(dir_okay=False), help="Write metrics to a JSON file."
)
@click.option(
    "--include-transactions",
    is_flag=True,
    default=False,
    help="Include the canonical transactions in the JSON output.",
)
@click.option(
    "--top-categories",
    type=click.IntRange(min=1),
    default=None,
    help="Categories listed before 'Other' (overrides config).",
)
@click.option(
    "--insights/--no-insights",
    default=False,
    help="Request free-text insights from the configured provider.",
)
@click.option(
    "--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="Config file."
)
@click.option("--verbose", is_flag=True, default=False, help="Detailed progress output.")
@click.option("--debug", is_flag=True, default=False, help="Developer-level diagnostics.")
def analyze(
    files: tuple[str, ...],
    json_path: str | None,
    include_transactions: bool,
    top_categories: int | None,
    insights: bool,
    config_path: str | None,
    verbose: bool,
    debug: bool,
) -> None:
    """Analyze one or more bank CSV exports."""
    _configure_logging(verbose, debug)

    # Load configuration
    try:
        config = _load_app_config(config_path)
    except Exception as exc:
        click.echo(f"Error loading configuration: {exc}", err=True)
        sys.exit(1)

    if top_categories is not None:
        config.top_categories = top_categories

    # Run the pipeline (load, detect, normalize, aggregate)
    from spending_dashboard.pipeline import run

    try:
        pipeline_result = run([Path(f) for f in files], config)
    except Exception as exc:
        click.echo(f"Error running pipeline: {exc}", err=True)
        sys.exit(1)

    from spending_dashboard.export import print_summary, transaction_to_dict, write_json

    print_summary(pipeline_result)

    if not pipeline_result.transactions:
        click.echo("Error: no valid transactions found in the given files.", err=True)
        sys.exit(1)

    if json_path is not None:
        try:
            output_path = write_json(
                pipeline_result.aggregate,
                json_path,
                transactions=pipeline_result.transactions if include_transactions else None,
            )
        except Exception as exc:
            click.echo(f"Error writing output: {exc}", err=True)
            sys.exit(1)
        if verbose:
            click.echo(f"Wrote metrics to {output_path}")

    if insights:
        from spending_dashboard.insights import get_adapter

        adapter = get_adapter(
            provider=config.insights_provider,
            model=config.insights_model,
            api_key_env=config.insights_api_key_env,
        )
        text = adapter.generate([transaction_to_dict(t) for t in pipeline_result.transactions])
        if text:
            click.echo("== Insights ==")
            click.echo(text)
            click.echo()
        else:
            click.echo("Warning: no insights available.", err=True)


@cli.command()
@click.option(
    "--dir", "target_dir", default=".", type=click.Path(), help="Directory to initialize."
)
def init(target_dir: str) -> None:
    """Write a default config.toml."""
    from spending_dashboard.config import initialize

    target = Path(target_dir).resolve()

    try:
        path = initialize(target)
    except Exception as exc:
        click.echo(f"Error initializing project: {exc}", err=True)
        sys.exit(1)

    click.echo(f"Wrote default configuration to {path}")
