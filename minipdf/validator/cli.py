#!/usr/bin/env python3
"""PDF Validator CLI - Check the structure of PDF files from the command line.

Usage:
    python -m minipdf.validator file.pdf
    python -m minipdf.validator file.pdf --strict
    python -m minipdf.validator *.pdf --json
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .validator import PdfValidator, ValidationIssue, ValidationResult, ValidationSeverity

SEVERITY_MARKS = {
    ValidationSeverity.ERROR: "x",
    ValidationSeverity.WARNING: "!",
    ValidationSeverity.INFO: "i",
}


def describe_file(result: ValidationResult) -> str:
    """One-line summary of what the validator learned about the file."""
    stats = result.stats or {}
    parts = []
    if "version" in stats:
        parts.append(f"PDF {stats['version']}")
    if "objects" in stats:
        parts.append(f"{stats['objects']} objects")
    if "xref_offset" in stats:
        parts.append(f"xref at {stats['xref_offset']}")
    return ", ".join(parts)


def format_issue(issue: ValidationIssue, verbose: bool = False) -> List[str]:
    lines = [f"  [{SEVERITY_MARKS[issue.severity]}] {issue.code}: {issue.message}"]
    if verbose and issue.details:
        details = ", ".join(f"{k}={v}" for k, v in issue.details.items())
        lines.append(f"      Details: {details}")
    return lines


def format_result_text(result: ValidationResult, path: Path, verbose: bool = False) -> str:
    """Format a validation result for the terminal.

    Args:
        result: Outcome of :meth:`PdfValidator.validate`
        path: File the result belongs to
        verbose: Also print issue details, file statistics and the trailer

    Returns:
        Text block without a trailing newline
    """
    headline = f"[OK] {path.name}: VALID" if result.valid else f"[FAIL] {path.name}: INVALID"
    summary = describe_file(result)
    if summary:
        headline += f" ({summary})"

    lines = [headline]
    for issue in result.errors:
        lines.extend(format_issue(issue, verbose))
    if verbose:
        if result.stats:
            lines.append(f"  Stats: {result.stats}")
        if result.trailer:
            lines.append(f"  Trailer: {result.trailer}")
    return "\n".join(lines)


def format_result_json(result: ValidationResult, path: Path) -> Dict[str, Any]:
    """Format a validation result as a JSON-serializable dict."""
    issues = []
    for issue in result.errors:
        issues.append({
            "code": issue.code,
            "message": issue.message,
            "severity": issue.severity.value,
            "details": issue.details,
        })
    return {
        "file": str(path),
        "valid": result.valid,
        "errors": issues,
        "error_count": result.error_count,
        "warning_count": result.warning_count,
        "stats": result.stats,
        "trailer": result.trailer,
    }


def build_parser(parser: Optional[argparse.ArgumentParser] = None) -> argparse.ArgumentParser:
    """Create the argument parser, or add the validator arguments to parser."""
    if parser is None:
        parser = argparse.ArgumentParser(
            prog="python -m minipdf.validator",
            description="Check header, cross-reference table and trailer of PDF files",
        )
    parser.add_argument("files", nargs="+", type=Path, help="PDF file(s) to check")
    parser.add_argument("--strict", action="store_true", help="Treat warnings as errors")
    parser.add_argument("--json", action="store_true", dest="json_output", help="Print results as JSON")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Print issue details, statistics and the trailer")
    parser.add_argument("--quiet", "-q", action="store_true", help="Do not print valid files")
    return parser


def run(args: argparse.Namespace) -> int:
    """Validate the files named in parsed arguments and print the results.

    Returns:
        0 when every file is valid, 1 otherwise
    """
    validator = PdfValidator(strict=args.strict)
    results: List[Tuple[Path, ValidationResult]] = [(path, validator.validate(path)) for path in args.files]
    n_valid = sum(1 for _, result in results if result.valid)

    if args.json_output:
        print(json.dumps({
            "results": [format_result_json(result, path) for path, result in results],
            "summary": {"total": len(results), "valid": n_valid, "invalid": len(results) - n_valid},
        }, indent=2))
    else:
        shown = [(path, result) for path, result in results if not (args.quiet and result.valid)]
        if shown:
            print("\n\n".join(format_result_text(result, path, args.verbose) for path, result in shown))
        if len(results) > 1 and not args.quiet:
            print(f"\nSummary: {n_valid}/{len(results)} files valid")

    return 0 if n_valid == len(results) else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    return run(build_parser().parse_args(argv))


if __name__ == "__main__":
    sys.exit(main())
