"""Typed parsing of bank statement exports of unknown CSV dialect."""

__version__ = "0.1.0"

from bank_import.errors import (  # noqa: E402
    BankImportError,
    ConfigError,
    FieldCountMismatch,
    NoFields,
    NoLines,
    NoRecords,
)
from bank_import.model import ColumnGuess, ParseResult, TypedValue, ValueType  # noqa: E402
from bank_import.options import ParseOptions, load_options  # noqa: E402
from bank_import.pipeline import parse  # noqa: E402

__all__ = [
    "BankImportError",
    "ColumnGuess",
    "ConfigError",
    "FieldCountMismatch",
    "NoFields",
    "NoLines",
    "NoRecords",
    "ParseOptions",
    "ParseResult",
    "TypedValue",
    "ValueType",
    "__version__",
    "load_options",
    "parse",
]
