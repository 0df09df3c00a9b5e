"""
loader.py — read a statement export from disk into text.

Supports: .csv .tsv .txt

Public API:
    loaded = load_text("path/to/statement.csv")
    text   = loaded["text"]

Result dict keys:
    text              — decoded text (null bytes and BOM removed)
    detected_format   — "csv", "tsv" or "txt"
    detected_encoding — encoding used as the fallback for non-UTF-8 lines
    encoding_info     — full dict: detected, confidence, is_utf8, suspicious_chars
    warnings          — list of warning strings
"""

from __future__ import annotations

from pathlib import Path

import chardet

TEXT_FORMATS = {".csv", ".tsv", ".txt"}


# ══════════════════════════════════════════════════════════════════════════════
# ENCODING DETECTION
# ══════════════════════════════════════════════════════════════════════════════

UTF8_ALIASES = {"UTF8", "UTF8SIG", "ASCII"}
SCANNED_LINES = 100
REPORTED_BYTES = 10


def _is_utf8_name(encoding: str) -> bool:
    return encoding.upper().replace("-", "") in UTF8_ALIASES


def _undecodable_bytes(raw: bytes) -> list[str]:
    """Describe the first bad byte of each statement line that is not UTF-8."""
    found: list[str] = []
    for line_number, raw_line in enumerate(raw.split(b"\n")[:SCANNED_LINES], start=1):
        try:
            raw_line.decode("utf-8")
        except UnicodeDecodeError as exc:
            found.append(f"row {line_number}: byte {raw_line[exc.start:exc.end]!r} at position {exc.start}")
            if len(found) == REPORTED_BYTES:
                break
    return found


def detect_encoding_info(raw: bytes) -> dict:
    """
    Ask chardet for the file encoding.

    Returns dict with: detected, confidence, is_utf8, suspicious_chars.
    """
    guess = chardet.detect(raw)
    detected = guess.get("encoding") or "unknown"
    is_utf8 = _is_utf8_name(detected)
    return {
        "detected":         detected,
        "confidence":       round(guess.get("confidence") or 0.0, 2),
        "is_utf8":          is_utf8,
        "suspicious_chars": [] if is_utf8 else _undecodable_bytes(raw),
    }


# ══════════════════════════════════════════════════════════════════════════════
# SAFE TEXT READING (mixed-encoding tolerant)
# ══════════════════════════════════════════════════════════════════════════════

def decode_line(raw_line: bytes, preferred_encoding: str) -> str:
    """
    UTF-8 first, then the detected encoding, then latin-1.

    latin-1 maps every byte, so a line always decodes.
    """
    for encoding in ("utf-8", preferred_encoding):
        if not encoding or encoding == "unknown":
            continue
        try:
            return raw_line.decode(encoding)
        except (LookupError, UnicodeDecodeError):
            continue
    return raw_line.decode("latin-1")


def read_text_safely(raw: bytes, preferred_encoding: str) -> str:
    """Decode line by line, dropping null bytes and a leading BOM."""
    text = "\n".join(
        decode_line(raw_line, preferred_encoding).replace("\x00", "")
        for raw_line in raw.split(b"\n")
    )
    return text.lstrip("\ufeff")


# ══════════════════════════════════════════════════════════════════════════════
# PUBLIC API
# ══════════════════════════════════════════════════════════════════════════════

def load_text(path: "str | Path") -> dict:
    """
    Read a delimited text export.

    Raises:
        FileNotFoundError  if the file does not exist.
        ValueError         if the format is unsupported.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    if suffix not in TEXT_FORMATS:
        supported = ", ".join(sorted(TEXT_FORMATS))
        raise ValueError(f"Unsupported format '{suffix}'. Supported: {supported}")

    raw = path.read_bytes()
    enc_info = detect_encoding_info(raw)
    enc = enc_info["detected"] if enc_info["detected"] != "unknown" else "utf-8"
    text = read_text_safely(raw, enc)

    warnings: list[str] = []
    if not enc_info["is_utf8"] and enc_info["suspicious_chars"]:
        warnings.append(
            f"File is not UTF-8 (detected {enc}); "
            f"{len(enc_info['suspicious_chars'])} line(s) decoded with a fallback encoding"
        )

    return {
        "text":              text,
        "detected_format":   suffix.lstrip("."),
        "detected_encoding": enc,
        "encoding_info":     enc_info,
        "warnings":          warnings,
    }
