"""PDF Validator - Structural checks for PDF files."""

from .validator import PdfValidator, ValidationResult, ValidationIssue, ValidationSeverity

__all__ = ["PdfValidator", "ValidationResult", "ValidationIssue", "ValidationSeverity"]
