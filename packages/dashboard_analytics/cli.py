# ruff: noqa: I001
"""CLI for the ``dashboard_analytics`` package.

This module exposes callable command handlers (``cmd_snapshot``,
``cmd_monthly_table``) and a Typer-based console interface. Environment
variables (``DA_*`` analyzer settings, ``DASHBOARD_ANALYTICS_LOG_LEVEL``) are
loaded from a local ``.env`` using ``python-dotenv`` before delegating to
command logic. Analytics live in ``dashboard_analytics.api``; this module only
reads exports and prints results.
"""

from __future__ import annotations

import csv
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from pydantic import TypeAdapter
from typer.models import OptionInfo

from .logging_setup import configure_logging, get_logger
from .models import AnalyticsSnapshot, PeriodKind, PeriodSelector

_logger = get_logger("dashboard_analytics.cli")


def _parse_date(value: str | None, flag: str) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError as e:
        raise ValueError(f"{flag} must be YYYY-MM-DD, got {value!r}") from e


def _parse_now(value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError as e:
        raise ValueError(f"--now must be an ISO timestamp, got {value!r}") from e


def _load_inputs(transactions_path: str, categories_path: str | None):
    """Load exports, reporting failures on stderr. Returns ``None`` on error."""

    from .ingest.utils import load_categories, load_transactions

    try:
        transactions = load_transactions(transactions_path)
        categories = load_categories(categories_path) if categories_path else []
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        return None
    except PermissionError as e:
        print(f"Error: Permission denied: {e.filename}", file=sys.stderr)
        return None
    except csv.Error as e:
        print(f"Error: Failed to parse CSV: {e}", file=sys.stderr)
        return None
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return None
    return transactions, categories


def cmd_snapshot(
    transactions_path: str,
    *,
    categories_path: str | None = None,
    period: str = "month",
    start: str | None = None,
    end: str | None = None,
    now: str | None = None,
) -> int:
    """Compute a snapshot and print it to stdout as JSON.

    Errors are written to stderr and the function returns a non-zero exit
    status. On success, returns ``0``.
    """

    from .api import build_snapshot
    from .settings import AnalyticsSettings

    try:
        settings = AnalyticsSettings.from_env()
        selector = PeriodSelector(
            PeriodKind(period),
            start_date=_parse_date(start, "--start"),
            end_date=_parse_date(end, "--end"),
        )
        ref_now = _parse_now(now)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    loaded = _load_inputs(transactions_path, categories_path)
    if loaded is None:
        return 1
    transactions, categories = loaded

    snapshot = build_snapshot(
        transactions, categories, selector, now=ref_now, settings=settings
    )
    payload = TypeAdapter(AnalyticsSnapshot).dump_json(snapshot, indent=2)
    print(payload.decode("utf-8"))
    return 0


def cmd_monthly_table(
    transactions_path: str,
    *,
    categories_path: str | None = None,
    months: int = 6,
    now: str | None = None,
) -> int:
    """Print the category by month table as tab-separated lines.

    Columns: category, one amount per month (oldest first), total.
    """

    from .api import build_monthly_category_table

    try:
        ref_now = _parse_now(now)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    loaded = _load_inputs(transactions_path, categories_path)
    if loaded is None:
        return 1
    transactions, categories = loaded

    try:
        table = build_monthly_category_table(transactions, categories, months=months, now=ref_now)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("\t".join(["category", *(m.label for m in table.months), "total"]))
    for row in table.rows:
        amounts = [f"{c.amount:.2f}" for c in row.cells]
        print("\t".join([row.category, *amounts, f"{row.total:.2f}"]))
    print(f"# total={table.grand_total:.2f}\tper_month={table.average_per_month:.2f}")
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Compute personal finance dashboard analytics from transaction exports.",
)

# Module-level option object to satisfy ruff B008 (no calls in parameter
# defaults).
TRANSACTIONS_OPTION: OptionInfo = typer.Option(
    ...,
    "--transactions",
    help="Path to a transaction export (.csv or .json)",
    dir_okay=False,
    file_okay=True,
    exists=False,  # the handler reports missing files itself
)


@app.command("snapshot")
def snapshot_cmd(
    transactions: Annotated[Path, TRANSACTIONS_OPTION],
    *,
    categories: Path | None = typer.Option(
        None, "--categories", help="Path to a category export (.csv or .json)", dir_okay=False
    ),
    period: str = typer.Option("month", help="day, week, month, quarter or custom."),
    start: str | None = typer.Option(None, help="Custom range start (YYYY-MM-DD)."),
    end: str | None = typer.Option(None, help="Custom range end (YYYY-MM-DD)."),
    now: str | None = typer.Option(None, help="Reference instant (ISO); defaults to now."),
) -> None:
    """Print the analytics snapshot for a period as JSON."""

    code = cmd_snapshot(
        str(transactions),
        categories_path=str(categories) if categories else None,
        period=period,
        start=start,
        end=end,
        now=now,
    )
    raise typer.Exit(code)


@app.command("monthly-table")
def monthly_table_cmd(
    transactions: Annotated[Path, TRANSACTIONS_OPTION],
    *,
    categories: Path | None = typer.Option(
        None, "--categories", help="Path to a category export (.csv or .json)", dir_okay=False
    ),
    months: int = typer.Option(6, help="Months to show: 3, 6 or 12."),
    now: str | None = typer.Option(None, help="Reference instant (ISO); defaults to now."),
) -> None:
    """Print expense totals per category and month."""

    code = cmd_monthly_table(
        str(transactions),
        categories_path=str(categories) if categories else None,
        months=months,
        now=now,
    )
    raise typer.Exit(code)


@app.callback()
def _root() -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding
    already-set environment variables) and configures package logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()
    _logger.debug("environment loaded")


def main() -> None:  # pragma: no cover - console script shim
    app()


if __name__ == "__main__":  # pragma: no cover
    app()
