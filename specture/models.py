"""Data models for Specture spec documents.

This module contains the core data structures used throughout the Specture
system, representing parsed spec documents, their tasks, and the results of
validating them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class SpecStatus(str, Enum):
    """Lifecycle status of a spec."""

    DRAFT = "draft"
    APPROVED = "approved"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    REJECTED = "rejected"
    # Declared in frontmatter but outside the closed set
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def valid_values(cls) -> Tuple[str, ...]:
        """Return the declarable status values in canonical order."""
        return tuple(status.value for status in cls if status is not cls.UNRECOGNIZED)

    @classmethod
    def from_declared(cls, value: str) -> "SpecStatus":
        """Map a declared status string onto the enumeration."""
        if value in cls.valid_values():
            return cls(value)
        return cls.UNRECOGNIZED

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Frontmatter:
    """Recognized keys of a spec's metadata block."""

    status: Optional[str] = None
    number: Optional[int] = None
    author: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "status": self.status,
            "number": self.number,
            "author": self.author,
        }


@dataclass(frozen=True, slots=True)
class Task:
    """Representation of a single Task List checklist entry."""

    text: str
    complete: bool
    section: str = ""
    line: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {"text": self.text, "section": self.section}


@dataclass(frozen=True, slots=True)
class SpecDocument:
    """A parsed spec file with all extracted metadata.

    Instances are produced fresh by each parse and never mutated. ``number``
    is ``None`` when the spec does not declare one; ``frontmatter`` is
    ``None`` when the metadata block is absent or could not be decoded.
    """

    path: str
    title: str = ""
    number: Optional[int] = None
    status: SpecStatus = SpecStatus.DRAFT
    declared_status: Optional[str] = None
    frontmatter: Optional[Frontmatter] = None
    has_checklist_section: bool = False
    complete_tasks: Tuple[Task, ...] = ()
    incomplete_tasks: Tuple[Task, ...] = ()
    current_task: str = ""
    current_task_section: str = ""

    @property
    def total_tasks(self) -> int:
        """Number of top-level tasks in the Task List."""
        return len(self.complete_tasks) + len(self.incomplete_tasks)

    @property
    def progress(self) -> Tuple[int, int]:
        """Return ``(complete, total)`` task counts."""
        return len(self.complete_tasks), self.total_tasks

    @property
    def status_label(self) -> str:
        """Status as shown to users; unrecognized values keep their declared text."""
        if self.status is SpecStatus.UNRECOGNIZED and self.declared_status:
            return self.declared_status
        return self.status.value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        complete, total = self.progress
        return {
            "path": self.path,
            "number": self.number,
            "name": self.title,
            "status": self.status_label,
            "current_task": self.current_task,
            "current_task_section": self.current_task_section,
            "complete_tasks": [task.to_dict() for task in self.complete_tasks],
            "incomplete_tasks": [task.to_dict() for task in self.incomplete_tasks],
            "progress": {"complete": complete, "total": total},
        }


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """A single validation finding, attributed to a field."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary representation."""
        return {"field": self.field, "message": self.message}


@dataclass(slots=True)
class ValidationResult:
    """Errors and warnings produced by validating one spec."""

    path: str
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    def is_valid(self) -> bool:
        """A spec is valid when it has no errors; warnings never count."""
        return not self.errors

    def add_error(self, field_name: str, message: str) -> None:
        """Append an error finding."""
        self.errors.append(ValidationIssue(field_name, message))

    def add_warning(self, field_name: str, message: str) -> None:
        """Append a warning finding."""
        self.warnings.append(ValidationIssue(field_name, message))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "path": self.path,
            "valid": self.is_valid(),
            "errors": [issue.to_dict() for issue in self.errors],
            "warnings": [issue.to_dict() for issue in self.warnings],
        }
