from __future__ import annotations

from typing import Sequence

from bank_import.model import TypedRecord


def has_header(typed_rows: Sequence[TypedRecord]) -> bool:
    """
    Decide whether row 0 is a header rather than data.

    Row 0 is a header when, in at least one column, the second row holds a
    date or number where the first row does not. A single row is always data.
    """
    if len(typed_rows) < 2:
        return False

    first, second = typed_rows[0], typed_rows[1]
    for first_value, second_value in zip(first, second):
        if not first_value.is_date and second_value.is_date:
            return True
        if not first_value.is_number and second_value.is_number:
            return True
    return False
