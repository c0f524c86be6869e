"""Specture - spec document parsing, status inference and validation."""

from .errors import (
    InvalidNumberError,
    InvalidSpecReferenceError,
    SpecNotFoundError,
    SpectureError,
)
from .models import (
    Frontmatter,
    SpecDocument,
    SpecStatus,
    Task,
    ValidationIssue,
    ValidationResult,
)
from .parser import parse_content
from .status import infer_status
from .validator import check_duplicate_numbers, validate_spec, validate_specs

__all__ = [
    "Frontmatter",
    "InvalidNumberError",
    "InvalidSpecReferenceError",
    "SpecDocument",
    "SpecNotFoundError",
    "SpecStatus",
    "SpectureError",
    "Task",
    "ValidationIssue",
    "ValidationResult",
    "check_duplicate_numbers",
    "infer_status",
    "parse_content",
    "validate_spec",
    "validate_specs",
]
