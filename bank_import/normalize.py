from __future__ import annotations

from typing import Sequence

from bank_import.errors import FieldCountMismatch, NoFields, NoRecords


def _check_field_counts(records: Sequence[list[str]]) -> None:
    for i in range(1, len(records)):
        if len(records[i - 1]) != len(records[i]):
            raise FieldCountMismatch(i + 1, records[i - 1], records[i])


def normalize_records(
    records: Sequence[list[str]],
    *,
    strict: bool = False,
) -> tuple[list[list[str]], list[str]]:
    """
    Make every record the same width.

    Strict mode rejects the first pair of adjacent records whose field counts
    differ. Lenient mode drops zero-field records and right-pads the rest with
    empty strings up to the widest record.

    Returns (records, warnings).
    """
    if not records:
        raise NoRecords()

    warnings: list[str] = []

    if strict:
        _check_field_counts(records)
        width = len(records[0])
        if width == 0:
            raise NoFields()
        return [list(record) for record in records], warnings

    width = max(len(record) for record in records)
    kept = [record for record in records if len(record) > 0]
    if width == 0 or not kept:
        raise NoFields()

    dropped = len(records) - len(kept)
    if dropped:
        warnings.append(f"Dropped {dropped} record(s) with no fields")

    padded: list[list[str]] = []
    short_rows = 0
    for record in kept:
        if len(record) < width:
            short_rows += 1
            record = list(record) + [""] * (width - len(record))
        padded.append(list(record))
    if short_rows:
        warnings.append(f"Padded {short_rows} short record(s) to {width} fields")

    return padded, warnings
