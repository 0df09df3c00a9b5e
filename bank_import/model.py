"""
Result types shared by every pipeline stage.

TypedValue is a tagged value: exactly one of empty / number / date / text.
Consumers branch on ``value.type`` and raise on a tag they do not handle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union

ROLES = ("date", "amount", "balance", "description")


class ValueType(str, Enum):
    EMPTY = "empty"
    NUMBER = "number"
    DATE = "date"
    TEXT = "text"


@dataclass(frozen=True)
class TypedValue:
    type: ValueType
    value: Union[None, float, datetime, str] = None

    @classmethod
    def empty(cls) -> "TypedValue":
        return cls(ValueType.EMPTY, None)

    @classmethod
    def number(cls, value: float) -> "TypedValue":
        return cls(ValueType.NUMBER, float(value))

    @classmethod
    def date(cls, value: datetime) -> "TypedValue":
        return cls(ValueType.DATE, value)

    @classmethod
    def text(cls, value: str) -> "TypedValue":
        return cls(ValueType.TEXT, value)

    @property
    def is_empty(self) -> bool:
        return self.type is ValueType.EMPTY

    @property
    def is_number(self) -> bool:
        return self.type is ValueType.NUMBER

    @property
    def is_date(self) -> bool:
        return self.type is ValueType.DATE

    @property
    def is_text(self) -> bool:
        return self.type is ValueType.TEXT

    def to_json(self) -> Any:
        if self.type is ValueType.EMPTY:
            return ""
        if self.type is ValueType.NUMBER:
            return self.value
        if self.type is ValueType.DATE:
            return self.value.isoformat()
        if self.type is ValueType.TEXT:
            return self.value
        raise TypeError(f"Unhandled value type: {self.type!r}")


Record = list[str]
TypedRecord = list[TypedValue]


@dataclass
class ColumnGuess:
    date: Optional[int] = None
    amount: Optional[int] = None
    balance: Optional[int] = None
    description: Optional[int] = None

    def to_dict(self) -> dict[str, Optional[int]]:
        return {role: getattr(self, role) for role in ROLES}

    def role_for(self, index: int) -> Optional[str]:
        """Return the first role guessed for ``index``, if any."""
        for role in ROLES:
            if getattr(self, role) == index:
                return role
        return None


@dataclass
class ParseResult:
    header: Optional[Record]
    records: list[Record]
    typed_records: list[TypedRecord]
    num_columns: int
    column_types: list[Optional[ValueType]]
    column_guesses: ColumnGuess
    separator: str = ","
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "header": list(self.header) if self.header is not None else None,
            "records": [list(record) for record in self.records],
            "typed_records": [
                [value.to_json() for value in record]
                for record in self.typed_records
            ],
            "num_columns": self.num_columns,
            "column_types": [
                column_type.value if column_type is not None else None
                for column_type in self.column_types
            ],
            "column_guesses": self.column_guesses.to_dict(),
        }
