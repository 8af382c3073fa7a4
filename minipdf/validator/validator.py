"""PDF Validator - Structural checks for files written by minipdf.

This module checks the parts of a PDF file that the writer is responsible for:
- File header (version line and binary marker comment)
- End-of-file marker and ``startxref`` pointer
- Cross-reference table layout and the free-list head entry
- Every in-use xref entry pointing at the matching ``N 0 obj`` line
- Trailer ``Size`` and ``Root`` entries

Object contents are not parsed.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class ValidationSeverity(Enum):
    """Severity level for validation issues."""
    ERROR = "error"      # File is invalid
    WARNING = "warning"  # File may have issues but is usable
    INFO = "info"        # Informational note


@dataclass
class ValidationIssue:
    """A single validation error or warning."""
    code: str
    message: str
    severity: ValidationSeverity
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        prefix = {
            ValidationSeverity.ERROR: "[ERROR]",
            ValidationSeverity.WARNING: "[WARNING]",
            ValidationSeverity.INFO: "[INFO]",
        }[self.severity]
        return f"{prefix} {self.code}: {self.message}"


@dataclass
class ValidationResult:
    """Result of validating a PDF file."""
    valid: bool
    errors: List[ValidationIssue] = field(default_factory=list)
    trailer: Optional[Dict[str, Any]] = None
    stats: Optional[Dict[str, Any]] = None

    @property
    def error_count(self) -> int:
        return sum(1 for e in self.errors if e.severity == ValidationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for e in self.errors if e.severity == ValidationSeverity.WARNING)

    def __str__(self) -> str:
        status = "VALID" if self.valid else "INVALID"
        lines = [f"Validation Result: {status}"]
        if self.errors:
            lines.append(f"  Errors: {self.error_count}, Warnings: {self.warning_count}")
            for error in self.errors:
                lines.append(f"  - {error}")
        if self.stats:
            lines.append(f"  Stats: {self.stats}")
        return "\n".join(lines)


class PdfValidator:
    """Validator for PDF file structure.

    Example:
        validator = PdfValidator()
        result = validator.validate("file.pdf")
        if result.valid:
            print("File is valid!")
        else:
            for error in result.errors:
                print(error)
    """

    SUPPORTED_EXTENSIONS = [".pdf"]

    HEADER_RE = re.compile(rb"%PDF-(\d+\.\d+)\r?\n")
    STARTXREF_RE = re.compile(rb"startxref\s+(\d+)\s+%%EOF\s*$")
    SUBSECTION_RE = re.compile(rb"(\d+) (\d+)\r?\n")
    ENTRY_RE = re.compile(rb"(\d{10}) (\d{5}) ([nf])(?:\r\n| \n| \r)")
    SIZE_RE = re.compile(rb"/Size\s+(\d+)")
    REF_RE_TEMPLATE = rb"/%s\s+(\d+)\s+(\d+)\s+R"

    ENTRY_LENGTH = 20

    def __init__(self, strict: bool = False):
        """Initialize validator.

        Args:
            strict: If True, treat warnings as errors
        """
        self.strict = strict

    def validate(self, source: Union[str, Path, bytes]) -> ValidationResult:
        """Validate a PDF file.

        Args:
            source: Path to a .pdf file, or the file content itself

        Returns:
            ValidationResult with validation status and any errors
        """
        if isinstance(source, (bytes, bytearray)):
            return self.validate_bytes(bytes(source))

        path = Path(source)
        if not path.exists():
            return ValidationResult(valid=False, errors=[ValidationIssue(
                code="FILE_NOT_FOUND",
                message=f"File not found: {path}",
                severity=ValidationSeverity.ERROR
            )])

        result = self.validate_bytes(path.read_bytes())

        if path.suffix.lower() not in self.SUPPORTED_EXTENSIONS:
            result.errors.insert(0, ValidationIssue(
                code="UNUSUAL_EXTENSION",
                message=f"Unusual extension: {path.suffix}. Expected: {self.SUPPORTED_EXTENSIONS}",
                severity=ValidationSeverity.WARNING
            ))
            result.valid = self._is_valid(result.errors)
        return result

    def validate_bytes(self, data: bytes) -> ValidationResult:
        """Validate PDF content held in memory."""
        errors: List[ValidationIssue] = []
        stats: Dict[str, Any] = {"size": len(data)}

        header = self.HEADER_RE.match(data)
        if not header:
            errors.append(ValidationIssue(
                code="INVALID_HEADER",
                message="File does not start with a %PDF-x.y line",
                severity=ValidationSeverity.ERROR
            ))
            return ValidationResult(valid=False, errors=errors, stats=stats)
        stats["version"] = header.group(1).decode("ascii")

        marker_line = data[header.end():].split(b"\n", 1)[0]
        if not (marker_line.startswith(b"%") and any(b > 127 for b in marker_line)):
            errors.append(ValidationIssue(
                code="MISSING_BINARY_MARKER",
                message="Second line is not a comment with binary bytes",
                severity=ValidationSeverity.WARNING
            ))

        if not data.rstrip().endswith(b"%%EOF"):
            errors.append(ValidationIssue(
                code="MISSING_EOF",
                message="File does not end with %%EOF",
                severity=ValidationSeverity.ERROR
            ))
            return ValidationResult(valid=False, errors=errors, stats=stats)

        startxref = self.STARTXREF_RE.search(data)
        if not startxref:
            errors.append(ValidationIssue(
                code="MISSING_STARTXREF",
                message="No startxref offset before %%EOF",
                severity=ValidationSeverity.ERROR
            ))
            return ValidationResult(valid=False, errors=errors, stats=stats)

        xref_offset = int(startxref.group(1))
        stats["xref_offset"] = xref_offset
        if not data.startswith(b"xref", xref_offset):
            errors.append(ValidationIssue(
                code="INVALID_XREF_OFFSET",
                message=f"startxref points at {xref_offset}, where no xref table starts",
                severity=ValidationSeverity.ERROR,
                details={"offset": xref_offset},
            ))
            return ValidationResult(valid=False, errors=errors, stats=stats)

        pos = xref_offset + len(b"xref")
        while data[pos:pos + 1] in (b"\r", b"\n"):
            pos += 1
        subsection = self.SUBSECTION_RE.match(data, pos)
        if not subsection:
            errors.append(ValidationIssue(
                code="MALFORMED_XREF",
                message="Missing cross-reference subsection header",
                severity=ValidationSeverity.ERROR
            ))
            return ValidationResult(valid=False, errors=errors, stats=stats)

        first_number = int(subsection.group(1))
        count = int(subsection.group(2))
        pos = subsection.end()

        entries = []
        for i in range(count):
            entry = self.ENTRY_RE.match(data, pos)
            if not entry:
                errors.append(ValidationIssue(
                    code="MALFORMED_XREF_ENTRY",
                    message=f"Cross-reference entry {i} is not a 20-byte entry",
                    severity=ValidationSeverity.ERROR,
                    details={"position": pos},
                ))
                return ValidationResult(valid=False, errors=errors, stats=stats)
            entries.append((int(entry.group(1)), int(entry.group(2)), entry.group(3)))
            pos += self.ENTRY_LENGTH

        stats["xref_entries"] = count
        stats["objects"] = sum(1 for _, _, status in entries if status == b"n")

        if first_number == 0 and entries and entries[0] != (0, 65535, b"f"):
            errors.append(ValidationIssue(
                code="INVALID_FREE_HEAD",
                message="Entry 0 is not the free-list head (0000000000 65535 f)",
                severity=ValidationSeverity.WARNING
            ))

        for i, (offset, generation, status) in enumerate(entries):
            if status != b"n":
                continue
            number = first_number + i
            expected = b"%d %d obj" % (number, generation)
            if not data.startswith(expected, offset):
                errors.append(ValidationIssue(
                    code="OFFSET_MISMATCH",
                    message=f"Object {number} is not at offset {offset}",
                    severity=ValidationSeverity.ERROR,
                    details={"object": number, "offset": offset},
                ))
            elif data.find(b"endobj", offset, xref_offset) < 0:
                errors.append(ValidationIssue(
                    code="MISSING_ENDOBJ",
                    message=f"Object {number} has no endobj before the xref table",
                    severity=ValidationSeverity.ERROR,
                    details={"object": number},
                ))

        trailer = self._check_trailer(data, pos, startxref.start(), first_number + count, errors)

        return ValidationResult(
            valid=self._is_valid(errors),
            errors=errors,
            trailer=trailer,
            stats=stats,
        )

    def _check_trailer(
        self,
        data: bytes,
        start: int,
        end: int,
        table_size: int,
        errors: List[ValidationIssue],
    ) -> Optional[Dict[str, Any]]:
        section = data[start:end].lstrip()
        if not section.startswith(b"trailer"):
            errors.append(ValidationIssue(
                code="MISSING_TRAILER",
                message="No trailer after the cross-reference table",
                severity=ValidationSeverity.ERROR
            ))
            return None

        trailer: Dict[str, Any] = {}
        size = self.SIZE_RE.search(section)
        if not size:
            errors.append(ValidationIssue(
                code="MISSING_SIZE",
                message="Trailer has no /Size entry",
                severity=ValidationSeverity.ERROR
            ))
        else:
            trailer["Size"] = int(size.group(1))
            if trailer["Size"] != table_size:
                errors.append(ValidationIssue(
                    code="SIZE_MISMATCH",
                    message=f"Trailer /Size is {trailer['Size']}, xref table has {table_size} entries",
                    severity=ValidationSeverity.ERROR,
                    details={"size": trailer["Size"], "entries": table_size},
                ))

        for key, required in (("Root", True), ("Info", False)):
            ref = re.search(self.REF_RE_TEMPLATE % key.encode("ascii"), section)
            if ref:
                trailer[key] = f"{int(ref.group(1))} {int(ref.group(2))} R"
                if not 0 < int(ref.group(1)) < table_size:
                    errors.append(ValidationIssue(
                        code="DANGLING_REFERENCE",
                        message=f"Trailer /{key} points at object {int(ref.group(1))}, not in the xref table",
                        severity=ValidationSeverity.ERROR
                    ))
            elif required:
                errors.append(ValidationIssue(
                    code="MISSING_ROOT",
                    message="Trailer has no /Root reference",
                    severity=ValidationSeverity.ERROR
                ))
        return trailer

    def _is_valid(self, errors: List[ValidationIssue]) -> bool:
        if self.strict:
            return not any(
                e.severity in (ValidationSeverity.ERROR, ValidationSeverity.WARNING) for e in errors
            )
        return not any(e.severity == ValidationSeverity.ERROR for e in errors)
