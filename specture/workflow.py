"""Report orchestration for Specture.

This module wires the workspace, parser and validator together into the
three read-only reports (list, status, validate) and returns them as plain
dict payloads ready for any front end.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import DEFAULT_SPECS_DIR
from .models import SpecDocument
from .rendering import (
    format_list_text,
    format_status_text,
    format_validation_result,
    format_validation_summary,
    spec_to_json_dict,
    specs_to_json,
    spec_to_json,
)
from .spec_logging import (
    log_error_with_context,
    log_performance,
    log_validation_completed,
)
from .validator import validate_specs
from .workspace import Workspace

logger = logging.getLogger("specture.workflow")

OUTPUT_FORMATS = ("text", "json")


def _check_format(format: str) -> None:
    if format not in OUTPUT_FORMATS:
        raise ValueError(f"invalid format: {format} (must be 'text' or 'json')")


class SpecManager:
    """Produce list, status and validation reports for a project."""

    def __init__(self, root: Path | str, specs_dir_name: str = DEFAULT_SPECS_DIR):
        """Initialize the manager with the project root."""
        self.workspace = Workspace(root, specs_dir_name=specs_dir_name)

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def list_specs(
        self,
        status: Optional[str] = None,
        format: str = "text",
        show_tasks: bool = False,
        show_complete: bool = False,
        show_incomplete: bool = False,
    ) -> Dict[str, Any]:
        """List specs, optionally filtered by a comma-separated status list."""
        _check_format(format)

        try:
            specs = self.workspace.parse_all()
        except (OSError, ValueError) as e:
            return self._error_payload(e, "list_specs", "Create a specs/ directory with NNN-name.md files")

        if status:
            specs = self.workspace.filter_by_status(specs, status)

        # --tasks shows everything; --complete/--incomplete narrow it down
        if show_tasks:
            show_complete = show_incomplete = True

        if format == "json":
            output = specs_to_json(specs)
        else:
            output = format_list_text(
                specs,
                show_complete=show_complete,
                show_incomplete=show_incomplete,
            )

        return {
            "specs": [spec_to_json_dict(spec) for spec in specs],
            "count": len(specs),
            "output": output,
            "message": f"Found {len(specs)} specs" if specs else "No specs found",
        }

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def spec_status(self, spec: Optional[str] = None, format: str = "text") -> Dict[str, Any]:
        """Report the status of a spec, or of the current in-progress spec."""
        _check_format(format)

        try:
            if spec:
                info: Optional[SpecDocument] = self.workspace.read_spec(self.workspace.resolve_path(spec))
            else:
                info = self.workspace.find_current(self.workspace.parse_all())
        except (OSError, ValueError) as e:
            return self._error_payload(e, "spec_status", "Check the spec number with list_specs")

        if info is None:
            return {
                "spec": None,
                "output": "No in-progress spec found\n",
                "message": "No in-progress spec found",
            }

        output = spec_to_json(info) if format == "json" else format_status_text(info)
        return {
            "spec": spec_to_json_dict(info),
            "path": info.path,
            "output": output,
            "message": f"Status: {info.status_label}",
        }

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @log_performance("validate_specs")
    def validate(self, spec: Optional[str] = None) -> Dict[str, Any]:
        """Validate all specs (with cross-spec checks) or a single spec.

        Files that cannot be read or parsed are listed under ``failures``
        and count as invalid.
        """
        try:
            if spec:
                paths = [self.workspace.resolve_path(spec)]
            else:
                paths = self.workspace.find_all()
        except (OSError, ValueError) as e:
            return self._error_payload(e, "validate", "Check that the specs directory and spec number exist")

        if not paths:
            return {
                "results": [],
                "failures": [],
                "valid_count": 0,
                "invalid_count": 0,
                "total": 0,
                "output": "No specs found to validate\n",
                "message": "No specs found to validate",
            }

        parsed: List[SpecDocument] = []
        failures: List[Dict[str, str]] = []
        for path in paths:
            try:
                parsed.append(self.workspace.read_spec(path))
            except (OSError, ValueError) as e:
                failures.append({"path": str(path), "error": str(e)})

        results = validate_specs(parsed)
        valid_count = sum(1 for result in results if result.is_valid())
        invalid_count = len(results) - valid_count + len(failures)
        total = valid_count + invalid_count

        report = [f"Error reading {Path(item['path']).name}: {item['error']}\n" for item in failures]
        report.extend(format_validation_result(result) for result in results)
        report.append(format_validation_summary(valid_count, total))

        log_validation_completed(valid_count, invalid_count, failures=len(failures))

        return {
            "results": [result.to_dict() for result in results],
            "failures": failures,
            "valid_count": valid_count,
            "invalid_count": invalid_count,
            "total": total,
            "output": "".join(report),
            "message": f"{valid_count} of {total} specs valid",
        }

    # ------------------------------------------------------------------
    # Numbering
    # ------------------------------------------------------------------

    def next_number(self, title: Optional[str] = None) -> Dict[str, Any]:
        """Return the next free spec number.

        With a ``title``, the payload also suggests the new spec's filename.
        """
        number = self.workspace.next_number()
        payload: Dict[str, Any] = {
            "number": number,
            "padded": f"{number:03d}",
            "message": f"Next spec number is {number:03d}",
        }
        if title:
            try:
                filename = self.workspace.spec_filename(number, title)
            except ValueError as e:
                return self._error_payload(e, "next_number", "Use a title with letters or digits")
            payload["filename"] = filename
            payload["path"] = str(self.workspace.specs_dir / filename)
            payload["message"] = f"Next spec is {filename}"
        return payload

    # ------------------------------------------------------------------
    # Private helper methods
    # ------------------------------------------------------------------

    def _error_payload(self, error: Exception, operation: str, suggestion: str) -> Dict[str, Any]:
        logger.warning(f"{operation} failed: {error}")
        log_error_with_context(error, {
            "operation": operation,
            "root": str(self.workspace.root),
        })
        return {
            "error": str(error),
            "suggestion": suggestion,
            "message": f"Error: {error}",
        }
