"""Unit tests for status inference."""

import pytest

from specture.models import SpecStatus
from specture.parser import parse_content
from specture.status import infer_status


class TestInferStatus:
    """Test cases for the inference rules."""

    @pytest.mark.parametrize(
        "has_checklist,complete,incomplete,expected",
        [
            (False, 0, 0, SpecStatus.DRAFT),
            (True, 0, 0, SpecStatus.DRAFT),
            (True, 0, 3, SpecStatus.DRAFT),
            (True, 2, 0, SpecStatus.COMPLETED),
            (True, 1, 1, SpecStatus.IN_PROGRESS),
        ],
    )
    def test_inferred_without_declaration(self, has_checklist, complete, incomplete, expected):
        """Test each inference rule when no status is declared."""
        assert infer_status(None, has_checklist, complete, incomplete) is expected

    def test_declared_status_wins(self):
        """Test a declared status overrides task progress."""
        assert infer_status("approved", True, 1, 1) is SpecStatus.APPROVED
        assert infer_status("draft", True, 5, 0) is SpecStatus.DRAFT
        assert infer_status("rejected", False, 0, 0) is SpecStatus.REJECTED

    def test_unknown_declared_status(self):
        """Test an unknown declaration is kept rather than inferred over."""
        assert infer_status("shipped", True, 1, 0) is SpecStatus.UNRECOGNIZED

    def test_empty_declaration_is_not_declared(self):
        """Test an empty string falls through to inference."""
        assert infer_status("", True, 1, 0) is SpecStatus.COMPLETED

    def test_approved_and_rejected_never_inferred(self):
        """Test inference only yields draft, in-progress or completed."""
        inferred = {
            infer_status(None, has_checklist, complete, incomplete)
            for has_checklist in (True, False)
            for complete in (0, 1, 2)
            for incomplete in (0, 1, 2)
        }

        assert inferred <= {SpecStatus.DRAFT, SpecStatus.IN_PROGRESS, SpecStatus.COMPLETED}


class TestParsedStatus:
    """Test cases for status as produced by the parser."""

    def test_no_tasks_is_draft(self, spec_builder):
        """Test a Task List without tasks infers draft."""
        spec = parse_content("001-test.md", spec_builder("number: 1", "Test", "Nothing yet."))

        assert spec.status is SpecStatus.DRAFT

    def test_all_complete_is_completed(self, spec_builder):
        """Test a fully checked list infers completed."""
        spec = parse_content("001-test.md", spec_builder("number: 1", "Test", "- [x] A\n- [x] B"))

        assert spec.status is SpecStatus.COMPLETED

    def test_partial_is_in_progress(self, spec_builder):
        """Test a partially checked list infers in-progress."""
        spec = parse_content("001-test.md", spec_builder("number: 1", "Test", "- [x] A\n- [ ] B"))

        assert spec.status is SpecStatus.IN_PROGRESS

    def test_no_task_list_is_draft(self, spec_builder):
        """Test a spec without a Task List infers draft."""
        spec = parse_content("001-test.md", spec_builder("number: 1", "Test"))

        assert spec.status is SpecStatus.DRAFT

    def test_explicit_status_overrides_tasks(self, spec_builder):
        """Test an explicit status is kept even when all tasks are done."""
        spec = parse_content("001-test.md", spec_builder("status: in-progress", "Test", "- [x] A"))

        assert spec.status is SpecStatus.IN_PROGRESS
        assert spec.declared_status == "in-progress"
