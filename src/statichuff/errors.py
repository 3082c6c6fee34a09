"""Typed errors for statichuff.

Single source of truth for exit codes lives here.

Policy:
- Errors are small and boring.
- The CLI maps errors to stable exit codes (see EXIT_* constants).
- docs/exit_codes.md is generated from this module (scripts/gen_exit_codes_md.py).
- An empty input is not an error: it compresses to a valid empty container.
"""

from __future__ import annotations

from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_FORMAT = 11
EXIT_UNMATCHED_CODE = 12
EXIT_MISMATCH = 13


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage error (invalid args, input too large for the container)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (unexpected error, I/O error)"),
    ExitCodeInfo(EXIT_FORMAT, "FORMAT", "Truncated or inconsistent container (header or payload)"),
    ExitCodeInfo(
        EXIT_UNMATCHED_CODE,
        "UNMATCHED_CODE",
        "Payload bits ran out in the middle of a code (corrupt payload)",
    ),
    ExitCodeInfo(EXIT_MISMATCH, "MISMATCH", "Round-trip output does not match the original input"),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE - do not edit manually.\n")
    lines.append("> Source of truth: `src/statichuff/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Internal errors extend `StaticHuffError` and carry an `exit_code`.\n")
    lines.append("- `UnmatchedCodeError` is a `FormatError`: catch the latter to handle both.\n")
    lines.append("- `--debug` (or `STATICHUFF_DEBUG=1`) re-raises errors to show full stack traces.\n")
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class StaticHuffError(Exception):
    """Base error for statichuff."""

    exit_code: int = EXIT_GENERIC


class UsageError(StaticHuffError):
    exit_code = EXIT_USAGE


class FormatError(StaticHuffError):
    """Truncated or inconsistent container."""

    exit_code = EXIT_FORMAT


class UnmatchedCodeError(FormatError):
    """Payload exhausted while the code accumulator was still non-empty."""

    exit_code = EXIT_UNMATCHED_CODE


class RoundTripMismatch(StaticHuffError):
    exit_code = EXIT_MISMATCH
