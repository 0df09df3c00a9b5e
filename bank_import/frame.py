"""pandas export of a ParseResult."""

from __future__ import annotations

import pandas as pd

from bank_import.model import ParseResult, ValueType


def column_labels(result: ParseResult, *, roles: bool = False) -> list[str]:
    if result.header is not None:
        labels = [label or f"column_{i + 1}" for i, label in enumerate(result.header)]
    else:
        labels = [f"column_{i + 1}" for i in range(result.num_columns)]

    if roles:
        guesses = result.column_guesses
        for i in range(len(labels)):
            role = guesses.role_for(i)
            if role is not None:
                labels[i] = role

    # Duplicate header labels would collapse DataFrame columns.
    seen: dict[str, int] = {}
    unique: list[str] = []
    for label in labels:
        count = seen.get(label, 0)
        seen[label] = count + 1
        unique.append(label if count == 0 else f"{label}_{count + 1}")
    return unique


def to_dataframe(result: ParseResult, *, roles: bool = False) -> pd.DataFrame:
    """
    Build a DataFrame of typed values.

    Number cells become floats, date cells Timestamps, empty cells None and
    text cells strings. Columns whose cells share a single type get a matching
    dtype; mixed columns stay ``object``.
    """
    labels = column_labels(result, roles=roles)
    rows = [
        [None if value.is_empty else value.value for value in record]
        for record in result.typed_records
    ]
    df = pd.DataFrame(rows, columns=labels)

    for label, column_type in zip(labels, result.column_types):
        if column_type is ValueType.NUMBER:
            df[label] = pd.to_numeric(df[label])
        elif column_type is ValueType.DATE:
            df[label] = pd.to_datetime(df[label])
    return df
