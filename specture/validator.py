"""Spec validation.

Per-document checks produce errors (which make a spec invalid) and
warnings (which never do). Corpus checks run afterwards over the complete
list of parsed specs and append their findings to each affected result.
"""

from __future__ import annotations

import re
from collections import defaultdict
from pathlib import PurePath
from typing import Dict, List, Optional, Sequence

from .models import SpecDocument, SpecStatus, ValidationResult

_FILENAME_NUMBER_PATTERN = re.compile(r"^(\d+)-")


def _filename_number(path: str) -> Optional[int]:
    """Return the numeric prefix of a spec filename, if it has one."""
    match = _FILENAME_NUMBER_PATTERN.match(PurePath(path).name)
    if not match:
        return None
    return int(match.group(1))


def validate_spec(spec: SpecDocument) -> ValidationResult:
    """Validate a single spec and return its findings."""
    result = ValidationResult(path=spec.path)
    frontmatter = spec.frontmatter

    if frontmatter is None:
        result.add_error("frontmatter", "missing frontmatter")
    else:
        if frontmatter.number is None:
            result.add_error("number", "missing required field")
        elif frontmatter.number < 0:
            result.add_error(
                "number",
                f"invalid value {frontmatter.number} (must be a non-negative integer)",
            )
        else:
            file_number = _filename_number(spec.path)
            if file_number is not None and file_number != frontmatter.number:
                result.add_warning(
                    "number",
                    f"mismatch: frontmatter number {frontmatter.number} "
                    f"does not match filename prefix {file_number:03d}",
                )

        if not frontmatter.status:
            result.add_error("status", "missing required field")
        elif SpecStatus.from_declared(frontmatter.status) is SpecStatus.UNRECOGNIZED:
            allowed = ", ".join(SpecStatus.valid_values())
            result.add_error(
                "status",
                f'invalid value "{frontmatter.status}" (must be one of: {allowed})',
            )

    if not spec.title:
        result.add_error("title", "missing H1 heading")

    if not spec.has_checklist_section:
        result.add_error("task list", "missing '## Task List' heading")

    return result


def check_duplicate_numbers(
    specs: Sequence[SpecDocument], results: Sequence[ValidationResult]
) -> None:
    """Append a duplicate-number error to every spec sharing a number.

    ``results`` must be index-aligned with ``specs``. Specs without a
    declared number never collide.
    """
    if len(specs) != len(results):
        raise ValueError("specs and results must have the same length")

    by_number: Dict[int, List[int]] = defaultdict(list)
    for idx, spec in enumerate(specs):
        if spec.number is not None:
            by_number[spec.number].append(idx)

    for number in sorted(by_number):
        indices = by_number[number]
        if len(indices) < 2:
            continue
        for idx in indices:
            results[idx].add_error("number", f"duplicate number {number}")


def validate_specs(specs: Sequence[SpecDocument]) -> List[ValidationResult]:
    """Validate a corpus of specs, including cross-spec checks.

    Returns one result per spec, in the same order.
    """
    results = [validate_spec(spec) for spec in specs]
    check_duplicate_numbers(specs, results)
    return results
