"""Unit tests for report rendering."""

import json

from specture.models import SpecDocument, SpecStatus, Task, ValidationResult
from specture.rendering import (
    format_list_text,
    format_number,
    format_status_text,
    format_validation_result,
    format_validation_summary,
    spec_to_json,
    specs_to_json,
)


def _document(**overrides):
    values = dict(
        path="specs/001-auth.md",
        title="Auth",
        number=1,
        status=SpecStatus.IN_PROGRESS,
        has_checklist_section=True,
        complete_tasks=(Task("Design", True, "Phase 1", 5),),
        incomplete_tasks=(Task("Build", False, "Phase 1", 6),),
        current_task="Build",
        current_task_section="Phase 1",
    )
    values.update(overrides)
    return SpecDocument(**values)


class TestFormatNumber:
    """Test cases for number formatting."""

    def test_padding(self):
        """Test numbers are zero-padded to three digits."""
        assert format_number(0) == "000"
        assert format_number(42) == "042"
        assert format_number(1234) == "1234"

    def test_missing_number(self):
        """Test undeclared numbers render as dashes."""
        assert format_number(None) == "---"


class TestListText:
    """Test cases for the list table."""

    def test_table(self):
        """Test columns are aligned to the widest value."""
        output = format_list_text([
            _document(),
            _document(number=2, title="Search", status=SpecStatus.DRAFT, complete_tasks=()),
        ])

        assert output == (
            "NUM  STATUS       PROGRESS  NAME\n"
            "001  in-progress       1/2  Auth\n"
            "002  draft             0/1  Search\n"
        )

    def test_tasks_between_specs(self):
        """Test task lines are indented and specs are separated."""
        output = format_list_text(
            [_document(), _document(number=2, title="Other")],
            show_complete=True,
            show_incomplete=True,
        )
        lines = output.splitlines()

        assert lines[2] == "     ✓ Design"
        assert lines[3] == "     • Build"
        assert lines[4] == ""
        assert not output.endswith("\n\n")

    def test_empty(self):
        """Test an empty listing."""
        assert format_list_text([]) == "No specs found\n"


class TestStatusText:
    """Test cases for the status report."""

    def test_full_report(self):
        """Test every block of the status report."""
        assert format_status_text(_document()) == (
            "Spec 001: Auth\n"
            "Status: in-progress\n"
            "Progress: 1/2 tasks complete\n"
            "\n"
            "Current Task Section: Phase 1\n"
            "Current Task: Build\n"
            "\n"
            "Complete:\n"
            "  ✓ Design\n"
            "\n"
            "Remaining:\n"
            "  • Build\n"
        )

    def test_without_tasks(self):
        """Test a spec without tasks only shows the header."""
        document = _document(
            status=SpecStatus.DRAFT,
            complete_tasks=(),
            incomplete_tasks=(),
            current_task="",
            current_task_section="",
        )

        assert format_status_text(document) == "Spec 001: Auth\nStatus: draft\nProgress: 0/0 tasks complete\n"


class TestValidationText:
    """Test cases for validation output."""

    def test_valid(self):
        """Test a valid result shows a check mark and the file name."""
        assert format_validation_result(ValidationResult(path="specs/001-auth.md")) == "✓ 001-auth.md\n"

    def test_errors_and_warnings(self):
        """Test findings are listed under the file name."""
        result = ValidationResult(path="specs/001-auth.md")
        result.add_error("title", "missing H1 heading")
        result.add_warning("number", "mismatch")

        assert format_validation_result(result) == (
            "✗ 001-auth.md\n"
            "  - title: missing H1 heading\n"
            "  ⚠ number: mismatch\n"
        )

    def test_summary(self):
        """Test the closing summary line."""
        assert format_validation_summary(2, 3) == "\n2 of 3 specs valid\n"


class TestJson:
    """Test cases for JSON rendering."""

    def test_spec_to_json(self):
        """Test a spec is rendered without its path."""
        data = json.loads(spec_to_json(_document()))

        assert data["number"] == 1
        assert data["status"] == "in-progress"
        assert data["incomplete_tasks"] == [{"text": "Build", "section": "Phase 1"}]
        assert "path" not in data

    def test_specs_to_json_keeps_unicode(self):
        """Test non-ASCII text is not escaped."""
        output = specs_to_json([_document(title="Café")])

        assert "Café" in output
        assert json.loads(output)[0]["name"] == "Café"

    def test_empty_list(self):
        """Test an empty list renders as a JSON array."""
        assert json.loads(specs_to_json([])) == []
