"""Text and JSON rendering of spec reports."""

from __future__ import annotations

import json
from pathlib import PurePath
from typing import Any, Dict, List, Sequence

from .models import SpecDocument, ValidationResult

TASK_INDENT = "     "
COMPLETE_MARK = "✓"
INCOMPLETE_MARK = "•"
INVALID_MARK = "✗"
WARNING_MARK = "⚠"


def format_number(number) -> str:
    """Zero-pad a spec number to three digits; ``---`` when undeclared."""
    if number is None:
        return "---"
    return f"{number:03d}"


def _progress_text(spec: SpecDocument) -> str:
    complete, total = spec.progress
    return f"{complete}/{total}"


# ------------------------------------------------------------------
# Listing
# ------------------------------------------------------------------


def format_list_text(
    specs: Sequence[SpecDocument],
    *,
    show_complete: bool = False,
    show_incomplete: bool = False,
) -> str:
    """Render specs as an aligned ``NUM STATUS PROGRESS NAME`` table."""
    if not specs:
        return "No specs found\n"

    status_width = max([len("STATUS")] + [len(spec.status_label) for spec in specs])
    progress_width = max([len("PROGRESS")] + [len(_progress_text(spec)) for spec in specs])
    show_tasks = show_complete or show_incomplete

    lines = [f"NUM  {'STATUS':<{status_width}}  {'PROGRESS':>{progress_width}}  NAME"]
    for idx, spec in enumerate(specs):
        lines.append(
            f"{format_number(spec.number)}  {spec.status_label:<{status_width}}  "
            f"{_progress_text(spec):>{progress_width}}  {spec.title}"
        )
        if not show_tasks:
            continue
        if show_complete:
            lines.extend(f"{TASK_INDENT}{COMPLETE_MARK} {task.text}" for task in spec.complete_tasks)
        if show_incomplete:
            lines.extend(f"{TASK_INDENT}{INCOMPLETE_MARK} {task.text}" for task in spec.incomplete_tasks)
        if idx < len(specs) - 1:
            lines.append("")

    return "\n".join(lines) + "\n"


# ------------------------------------------------------------------
# Status
# ------------------------------------------------------------------


def format_status_text(spec: SpecDocument) -> str:
    """Render the status of a single spec for humans."""
    complete, total = spec.progress
    lines = [
        f"Spec {format_number(spec.number)}: {spec.title}",
        f"Status: {spec.status_label}",
        f"Progress: {complete}/{total} tasks complete",
    ]

    if spec.current_task:
        lines.append("")
        if spec.current_task_section:
            lines.append(f"Current Task Section: {spec.current_task_section}")
        lines.append(f"Current Task: {spec.current_task}")

    if spec.complete_tasks:
        lines.append("")
        lines.append("Complete:")
        lines.extend(f"  {COMPLETE_MARK} {task.text}" for task in spec.complete_tasks)

    if spec.incomplete_tasks:
        lines.append("")
        lines.append("Remaining:")
        lines.extend(f"  {INCOMPLETE_MARK} {task.text}" for task in spec.incomplete_tasks)

    return "\n".join(lines) + "\n"


# ------------------------------------------------------------------
# Validation
# ------------------------------------------------------------------


def format_validation_result(result: ValidationResult) -> str:
    """Render one validation result with its errors and warnings."""
    filename = PurePath(result.path).name
    mark = COMPLETE_MARK if result.is_valid() else INVALID_MARK
    lines = [f"{mark} {filename}"]
    lines.extend(f"  - {issue.field}: {issue.message}" for issue in result.errors)
    lines.extend(f"  {WARNING_MARK} {issue.field}: {issue.message}" for issue in result.warnings)
    return "\n".join(lines) + "\n"


def format_validation_summary(valid_count: int, total: int) -> str:
    return f"\n{valid_count} of {total} specs valid\n"


# ------------------------------------------------------------------
# JSON
# ------------------------------------------------------------------


def spec_to_json_dict(spec: SpecDocument) -> Dict[str, Any]:
    """JSON-ready dict for one spec (the path is left out)."""
    data = spec.to_dict()
    data.pop("path", None)
    return data


def spec_to_json(spec: SpecDocument) -> str:
    return json.dumps(spec_to_json_dict(spec), indent=2, ensure_ascii=False)


def specs_to_json(specs: Sequence[SpecDocument]) -> str:
    items: List[Dict[str, Any]] = [spec_to_json_dict(spec) for spec in specs]
    return json.dumps(items, indent=2, ensure_ascii=False)
