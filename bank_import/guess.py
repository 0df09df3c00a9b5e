"""
Column role guessing: which columns hold the date, amount, balance and
description of each transaction.

Every guess is best-effort. A role that cannot be placed confidently is left
as None rather than raising.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Sequence

from bank_import.model import ColumnGuess, TypedRecord, ValueType
from bank_import.options import DEFAULT_OPTIONS, ParseOptions

ALPHA_RE = re.compile(r"[A-Za-z]")


@dataclass
class Candidate:
    index: int
    values: list[float]

    @property
    def all_integer(self) -> bool:
        return all(float(value).is_integer() for value in self.values)

    @property
    def has_zero(self) -> bool:
        return any(value == 0 for value in self.values)


def _column_count(typed_rows: Sequence[TypedRecord]) -> int:
    return len(typed_rows[0]) if typed_rows else 0


def column_types(typed_rows: Sequence[TypedRecord]) -> list[Optional[ValueType]]:
    """Per column, the type shared by every cell, or None when it is mixed."""
    types: list[Optional[ValueType]] = []
    for i in range(_column_count(typed_rows)):
        first_type = typed_rows[0][i].type
        if all(row[i].type is first_type for row in typed_rows):
            types.append(first_type)
        else:
            types.append(None)
    return types


def guess_date_column(typed_rows: Sequence[TypedRecord]) -> Optional[int]:
    for i in range(_column_count(typed_rows)):
        if all(row[i].is_date for row in typed_rows):
            return i
    return None


def numeric_candidates(typed_rows: Sequence[TypedRecord]) -> list[Candidate]:
    candidates: list[Candidate] = []
    for i in range(_column_count(typed_rows)):
        if all(row[i].is_number for row in typed_rows):
            candidates.append(Candidate(i, [row[i].value for row in typed_rows]))
    return candidates


def find_header_match_index(header: Sequence[str], keywords: Sequence[str]) -> Optional[int]:
    """Exact keyword match over every header cell first, then substring match."""
    labels = [label.lower() for label in header]

    for i, label in enumerate(labels):
        if any(label == keyword for keyword in keywords):
            return i

    for i, label in enumerate(labels):
        if any(keyword in label for keyword in keywords):
            return i

    return None


def _remove(pool: list[Candidate], index: int) -> None:
    pool[:] = [candidate for candidate in pool if candidate.index != index]


def guess_amount_and_balance(
    header: Optional[Sequence[str]],
    typed_rows: Sequence[TypedRecord],
    options: ParseOptions = DEFAULT_OPTIONS,
) -> tuple[Optional[int], Optional[int]]:
    pool = numeric_candidates(typed_rows)

    if not pool:
        return None, None
    if len(pool) == 1:
        # Lone numeric column is the amount.
        return pool[0].index, None

    amount: Optional[int] = None
    balance: Optional[int] = None

    if options.header_keyword_matching and header is not None:
        # A hit outside the pool still claims the role.
        amount = find_header_match_index(header, options.amount_keywords)
        balance = find_header_match_index(header, options.balance_keywords)
        if amount is not None and amount == balance:
            # "Balance amount" is a balance, not an amount.
            amount = None
        if amount is not None:
            _remove(pool, amount)
        if balance is not None:
            _remove(pool, balance)

    if amount is None or balance is None:
        pool = [candidate for candidate in pool if not candidate.all_integer]

        if amount is None and pool:
            chosen = next((c for c in pool if not c.has_zero), pool[0])
            amount = chosen.index
            _remove(pool, amount)

        if balance is None and pool:
            balance = pool[0].index
            _remove(pool, balance)

    return amount, balance


def alpha_count(typed_rows: Sequence[TypedRecord], index: int) -> int:
    total = 0
    for row in typed_rows:
        value = row[index]
        if value.is_text:
            total += len(ALPHA_RE.findall(value.value))
    return total


def guess_description_column(typed_rows: Sequence[TypedRecord]) -> Optional[int]:
    counts = [(i, alpha_count(typed_rows, i)) for i in range(_column_count(typed_rows))]
    if not counts:
        return None
    counts.sort(key=lambda item: item[1], reverse=True)
    return counts[0][0]


def guess_columns(
    header: Optional[Sequence[str]],
    typed_rows: Sequence[TypedRecord],
    options: ParseOptions = DEFAULT_OPTIONS,
) -> ColumnGuess:
    if not typed_rows:
        return ColumnGuess()

    amount, balance = guess_amount_and_balance(header, typed_rows, options)
    return ColumnGuess(
        date=guess_date_column(typed_rows),
        amount=amount,
        balance=balance,
        description=guess_description_column(typed_rows),
    )
