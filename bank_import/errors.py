"""Errors raised by the bank-import parsing pipeline."""

from __future__ import annotations


class BankImportError(ValueError):
    """Base class for every fatal parse error. ``name`` is a stable identifier."""

    name = "BankImportError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NoLines(BankImportError):
    name = "NoLines"

    def __init__(self, message: str = "No lines found in data") -> None:
        super().__init__(message)


class NoRecords(BankImportError):
    name = "NoRecords"

    def __init__(self, message: str = "No records found in data") -> None:
        super().__init__(message)


class NoFields(BankImportError):
    name = "NoFields"

    def __init__(self, message: str = "No fields found in data") -> None:
        super().__init__(message)


class FieldCountMismatch(BankImportError):
    name = "FieldCountMismatch"

    def __init__(
        self,
        line_number: int,
        previous: list[str],
        current: list[str],
    ) -> None:
        self.line_number = line_number
        self.expected = len(previous)
        self.found = len(current)
        super().__init__(
            "Not all records have the same number of fields: "
            f"record {line_number - 1} has {self.expected} "
            f"and record {line_number} has {self.found}\n"
            f"{','.join(previous)}\n"
            f"{','.join(current)}"
        )


class ConfigError(BankImportError):
    name = "ConfigError"
