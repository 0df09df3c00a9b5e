from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from pathlib import Path
from typing import Any

from bank_import import __version__ as TOOL_VERSION
from bank_import.errors import BankImportError, ConfigError
from bank_import.frame import to_dataframe
from bank_import.options import DEFAULT_OPTIONS, ParseOptions, load_options, starter_config
from bank_import.report import assemble_report, parse_file

EXIT_SUCCESS = 0
EXIT_COMMAND_ERROR = 1
EXIT_PARSE_FAILED = 2

# Display names for separators a config may list; anything else prints as repr.
SEPARATOR_NAMES = {",": "comma", ";": "semicolon", "\t": "tab", "|": "pipe"}


class CliError(Exception):
    def __init__(self, message: str, code: int = EXIT_COMMAND_ERROR) -> None:
        super().__init__(message)
        self.code = code


class BankImportArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        raise CliError(message, EXIT_COMMAND_ERROR)


def eprint(message: str) -> None:
    print(message, file=sys.stderr)


def emit_human(message: str, *, quiet: bool = False) -> None:
    if not quiet:
        eprint(message)


def json_dumps(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False, sort_keys=True)


def ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def write_text(path: Path, payload: str) -> None:
    ensure_parent(path)
    path.write_text(payload, encoding="utf-8")


def remove_generated_at(value: Any) -> Any:
    if isinstance(value, dict):
        result = {}
        for key, item in value.items():
            if key == "generated_at":
                result[key] = "1970-01-01T00:00:00Z"
            else:
                result[key] = remove_generated_at(item)
        return result
    if isinstance(value, list):
        return [remove_generated_at(item) for item in value]
    return value


def classify_exception(exc: Exception) -> int:
    if isinstance(exc, CliError):
        return exc.code
    if isinstance(exc, ConfigError):
        return EXIT_COMMAND_ERROR
    if isinstance(exc, FileNotFoundError):
        return EXIT_COMMAND_ERROR
    if isinstance(exc, (BankImportError, UnicodeDecodeError, ValueError)):
        return EXIT_PARSE_FAILED
    return EXIT_COMMAND_ERROR


def resolve_options(args: argparse.Namespace) -> ParseOptions:
    options = load_options(Path(args.config)) if args.config else DEFAULT_OPTIONS
    overrides: dict[str, Any] = {}
    if args.strict:
        overrides["strict"] = True
    if args.no_keywords:
        overrides["header_keyword_matching"] = False
    return dataclasses.replace(options, **overrides) if overrides else options


def render_parse_text(report: dict[str, Any]) -> str:
    guesses = report["column_guesses"]
    header = report["header"]
    delimiter = report["delimiter"]
    lines = [
        "bank-import parse",
        f"File: {report['file']}",
        f"Encoding: {report['detected_encoding']}",
        f"Separator: {SEPARATOR_NAMES.get(delimiter, repr(delimiter))}",
        f"Header: {', '.join(header) if header is not None else '[none]'}",
        f"Rows: {len(report['records'])}",
        f"Columns: {report['num_columns']}",
    ]
    for role in ("date", "amount", "balance", "description"):
        index = guesses[role]
        if index is None:
            lines.append(f"{role.capitalize()}: [not found]")
            continue
        label = header[index] if header is not None else f"column {index + 1}"
        lines.append(f"{role.capitalize()}: {label} (index {index})")
    return "\n".join(lines) + "\n"


def render_verbose_text(report: dict[str, Any]) -> str:
    lines = ["Column types:"]
    for i, column_type in enumerate(report["column_types"]):
        lines.append(f"- column {i + 1}: {column_type or 'mixed'}")
    if report["warnings"]:
        lines.append("Warnings:")
        lines.extend(f"- {warning}" for warning in report["warnings"])
    return "\n".join(lines) + "\n"


def build_parser() -> argparse.ArgumentParser:
    parser = BankImportArgumentParser(prog="bank-import", description="Typed parsing of bank statement exports.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_cmd = subparsers.add_parser("parse", help="Parse a statement export and guess its columns.")
    parse_cmd.add_argument("input", help="Input file path")
    parse_cmd.add_argument("--output", help="Write the JSON report to this path")
    parse_cmd.add_argument("--csv", dest="csv_path", help="Write role-labelled typed rows as CSV to this path")
    parse_cmd.add_argument("--config", help="JSON options file")
    parse_cmd.add_argument("--strict", action="store_true", help="Reject rows whose field count differs")
    parse_cmd.add_argument("--no-keywords", dest="no_keywords", action="store_true", help="Ignore header labels when guessing amount/balance")
    parse_cmd.add_argument("--json", action="store_true", help="Write machine JSON to stdout")
    parse_cmd.add_argument("-q", "--quiet", action="store_true", help="Minimal human logs")
    parse_cmd.add_argument("-v", "--verbose", action="store_true", help="More human logs")

    config = subparsers.add_parser("config", help="Generate configuration.")
    config_subparsers = config.add_subparsers(dest="config_command", required=True)
    config_init = config_subparsers.add_parser("init", help="Write a starter config file.")
    config_init.add_argument("--path", default="bank-import.json", help="Config output path")

    subparsers.add_parser("version", help="Print version")
    return parser


def refuse_existing(path: Path) -> Path:
    if path.exists():
        raise CliError(f"Refusing to overwrite existing output: {path}", EXIT_COMMAND_ERROR)
    return path


def run_parse(args: argparse.Namespace) -> int:
    input_path = Path(args.input)
    if not input_path.exists():
        eprint(f"File not found: {input_path}")
        return EXIT_COMMAND_ERROR

    try:
        options = resolve_options(args)
        report_path = refuse_existing(Path(args.output)) if args.output else None
        csv_path = refuse_existing(Path(args.csv_path)) if args.csv_path else None

        loaded, result = parse_file(input_path, options)
        report = remove_generated_at(assemble_report(input_path, loaded, result))
        if report_path is not None:
            write_text(report_path, json_dumps(report))
        if csv_path is not None:
            ensure_parent(csv_path)
            to_dataframe(result, roles=True).to_csv(csv_path, index=False)

        if args.json:
            print(json_dumps(report))
        else:
            emit_human(render_parse_text(report).rstrip(), quiet=args.quiet)
            if args.verbose:
                emit_human(render_verbose_text(report).rstrip(), quiet=args.quiet)
            if report_path is not None:
                emit_human(f"Report written: {report_path}", quiet=args.quiet)
            if csv_path is not None:
                emit_human(f"CSV written: {csv_path}", quiet=args.quiet)
        return EXIT_SUCCESS
    except Exception as exc:
        eprint(f"{exc.name}: {exc}" if isinstance(exc, BankImportError) else str(exc))
        return classify_exception(exc)


def run_config_init(args: argparse.Namespace) -> int:
    config_path = Path(args.path)
    if config_path.exists():
        eprint(f"Refusing to overwrite existing config: {config_path}")
        return EXIT_COMMAND_ERROR
    write_text(config_path, starter_config())
    emit_human(f"Config written: {config_path}")
    return EXIT_SUCCESS


def run_version() -> int:
    print(TOOL_VERSION)
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    try:
        parser = build_parser()
        args = parser.parse_args(argv)
        if args.command == "parse":
            return run_parse(args)
        if args.command == "config":
            if args.config_command == "init":
                return run_config_init(args)
        if args.command == "version":
            return run_version()
        raise CliError(f"Unknown command: {args.command}", EXIT_COMMAND_ERROR)
    except CliError as exc:
        eprint(str(exc))
        return exc.code


if __name__ == "__main__":
    raise SystemExit(main())
