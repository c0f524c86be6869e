"""Shared fixtures for Specture tests."""

from __future__ import annotations

from pathlib import Path

import pytest


def build_spec(frontmatter: str = "", title: str = "", task_list_body: str = "") -> str:
    """Build a minimal spec with optional frontmatter, title and Task List."""
    content = ""
    if frontmatter:
        content += "---\n" + frontmatter + "\n---\n\n"
    if title:
        content += "# " + title + "\n\n"
    if task_list_body:
        content += "## Task List\n\n" + task_list_body + "\n"
    return content


@pytest.fixture
def spec_builder():
    """Expose :func:`build_spec` to tests."""
    return build_spec


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A project root with an empty specs/ directory."""
    (tmp_path / "specs").mkdir()
    return tmp_path


@pytest.fixture
def write_spec(project_root: Path):
    """Write a spec file into the project's specs/ directory."""

    def _write(name: str, content: str) -> Path:
        path = project_root / "specs" / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
