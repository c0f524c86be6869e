"""Lifecycle status inference for spec documents."""

from __future__ import annotations

from typing import Optional

from .models import SpecStatus


def infer_status(
    declared: Optional[str],
    has_checklist_section: bool,
    complete_count: int,
    incomplete_count: int,
) -> SpecStatus:
    """Return the lifecycle status of a spec.

    Rules, first match wins:

    1. an explicitly declared status is used as is (an unknown value maps to
       ``SpecStatus.UNRECOGNIZED`` and is left for the validator to report);
    2. no ``## Task List`` section: draft;
    3. no tasks at all: draft;
    4. nothing complete yet: draft;
    5. nothing left to do: completed;
    6. otherwise: in-progress.

    ``approved`` and ``rejected`` are never inferred; an author has to
    declare them.
    """
    if declared:
        return SpecStatus.from_declared(declared)
    if not has_checklist_section:
        return SpecStatus.DRAFT
    if complete_count + incomplete_count == 0:
        return SpecStatus.DRAFT
    if complete_count == 0:
        return SpecStatus.DRAFT
    if incomplete_count == 0:
        return SpecStatus.COMPLETED
    return SpecStatus.IN_PROGRESS
