"""Adapter for the dashboard's transaction CSV export.

CSV header (exact keys expected; extra columns are ignored):
id, amount, description, transaction_date, type, transaction_type,
category_id, reported, banco, comment

Only ``id``, ``amount``, ``transaction_date`` and ``type`` are required;
blank optional cells become ``None``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from pydantic import ValidationError

from ...models import Transaction

REQUIRED_HEADERS: frozenset[str] = frozenset({"id", "amount", "transaction_date", "type"})


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    s = value.strip()
    return s if s else None


def to_transactions(rows: Iterable[Mapping[str, str | None]]) -> Iterator[Transaction]:
    """Convert export rows to validated :class:`Transaction` models.

    Raises ``ValueError`` naming the 1-based data row when a row fails
    validation.
    """

    for idx, row in enumerate(rows, start=1):
        data = {k: _clean(v) for k, v in row.items() if k is not None}
        # Let model defaults apply to omitted optional cells.
        data = {k: v for k, v in data.items() if v is not None}
        try:
            yield Transaction.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"invalid transaction at row {idx}: {e}") from e
