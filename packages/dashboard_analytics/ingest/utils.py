"""Ingest utilities shared by the CLI and host applications.

Loads transactions and categories from the dashboard's exports. ``.csv``
files go through the CSV adapter; ``.json`` files hold a list of objects
keyed like the CSV columns.
"""

from __future__ import annotations

import csv
from os import PathLike
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from ..models import CustomCategory, Transaction
from .adapters.transactions_csv import REQUIRED_HEADERS, to_transactions

_TRANSACTIONS = TypeAdapter(list[Transaction])
_CATEGORIES = TypeAdapter(list[CustomCategory])


def load_transactions(path: str | PathLike[str]) -> list[Transaction]:
    """Read a transaction export (``.csv`` or ``.json``)."""

    p = Path(path)
    if p.suffix.lower() == ".json":
        try:
            return _TRANSACTIONS.validate_json(p.read_bytes())
        except ValidationError as e:
            raise ValueError(f"invalid transactions JSON in {p}: {e}") from e

    with p.open(encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        headers_set = set(reader.fieldnames or [])
        if not headers_set:
            raise csv.Error(f"CSV appears to have no header row: {p}")
        missing = sorted(REQUIRED_HEADERS - headers_set)
        if missing:
            raise csv.Error(
                "CSV header mismatch for transaction export. Missing columns: "
                + ", ".join(missing)
            )
        return list(to_transactions(reader))


def load_categories(path: str | PathLike[str]) -> list[CustomCategory]:
    """Read a category export (``.csv`` with ``id,name,parent_id`` or ``.json``)."""

    p = Path(path)
    try:
        if p.suffix.lower() == ".json":
            return _CATEGORIES.validate_json(p.read_bytes())
        with p.open(encoding="utf-8", newline="") as f:
            reader = csv.DictReader(f)
            if "id" not in (reader.fieldnames or []):
                raise csv.Error(f"CSV header mismatch for category export: {p}")
            return _CATEGORIES.validate_python(list(reader))
    except ValidationError as e:
        raise ValueError(f"invalid categories in {p}: {e}") from e


__all__ = ["load_transactions", "load_categories"]
