from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from bank_import import __version__ as TOOL_VERSION
from bank_import.contracts import build_contract, build_run_summary
from bank_import.loader import load_text
from bank_import.model import ParseResult
from bank_import.options import ParseOptions
from bank_import.pipeline import parse


def parse_file(file_path: "str | Path", options: Optional[ParseOptions] = None) -> tuple[dict, ParseResult]:
    loaded = load_text(file_path)
    return loaded, parse(loaded["text"], options)


def assemble_report(file_path: Path, loaded: dict, result: ParseResult) -> dict[str, Any]:
    warnings = loaded["warnings"] + result.warnings
    contract = build_contract("bank_import.parse")
    return {
        "contract": contract,
        "schema_version": contract["version"],
        "tool_version": TOOL_VERSION,
        "file": file_path.name,
        "detected_format": loaded["detected_format"],
        "detected_encoding": loaded["detected_encoding"],
        "delimiter": result.separator,
        "warnings": warnings,
        "run_summary": build_run_summary(
            input_path=file_path,
            metrics={
                "rows": len(result.records),
                "columns": result.num_columns,
                "header_detected": result.header is not None,
            },
            warnings=warnings,
        ),
        **result.to_dict(),
    }


def build_report(file_path: "str | Path", options: Optional[ParseOptions] = None) -> dict[str, Any]:
    file_path = Path(file_path)
    loaded, result = parse_file(file_path, options)
    return assemble_report(file_path, loaded, result)
