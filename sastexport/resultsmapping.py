"""CSV mapping between SAST and AST similarity ids."""

from __future__ import annotations

from collections.abc import Iterable

from .metadata import Record

_HEADERS = ["result_id", "cxone_similarity_id", "sast_similarity_id"]


def generate_csv(records: Iterable[Record] | None) -> list[list[str]]:
    """Return a header row followed by one row for every path of every record."""
    items = [list(_HEADERS)]
    if records is None:
        return items
    items.extend(
        [path.result_id, path.similarity_id, path.sast_similarity_id]
        for record in records
        for query in record.queries
        for result in query.results
        for path in result.paths
    )
    return items


def _sanitize(cell: str) -> str:
    escaped = cell.replace('"', '""')
    return f"\"'{escaped}\""


def write_all_to_sanitized_csv(records: Iterable[Iterable[str]]) -> bytes:
    """Encode rows as CSV with every cell quoted and guarded against formulas."""
    return "".join(
        ",".join(_sanitize(cell) for cell in row) + "\n" for row in records
    ).encode("utf-8")