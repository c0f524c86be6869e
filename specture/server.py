"""MCP server exposing Specture's spec reports as tools."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.resources import TextResource

from .config import PROJECT_ROOT_ENV, load_settings
from .rendering import format_list_text
from .spec_logging import setup_logging
from .workflow import SpecManager

mcp = FastMCP("specture")


def _candidate_bases() -> List[Path]:
    cwd = Path.cwd().resolve()
    return [cwd, *cwd.parents]


def _locate_project_root(specs_dir_name: str) -> Optional[Path]:
    for base in _candidate_bases():
        if (base / specs_dir_name).is_dir():
            return base
    return None


def _resolve_root(root: Optional[str]) -> Path:
    settings = load_settings()

    if root:
        resolved = Path(root).expanduser().resolve()
        if not resolved.exists():
            raise ValueError(f"Provided root '{root}' does not exist.")
        return resolved

    if settings.project_root:
        env_path = settings.project_root.resolve()
        if not env_path.exists():
            raise ValueError(
                f"Environment variable {PROJECT_ROOT_ENV} points to '{os.environ.get(PROJECT_ROOT_ENV)}', "
                "which does not exist."
            )
        return env_path

    detected_root = _locate_project_root(settings.specs_dir_name)
    if detected_root:
        return detected_root

    raise ValueError(
        "Unable to determine project root automatically. Provide the 'root' argument when calling the tool "
        f"or set the {PROJECT_ROOT_ENV} environment variable."
    )


def _manager(root: Optional[str]) -> SpecManager:
    settings = load_settings()
    return SpecManager(_resolve_root(root), specs_dir_name=settings.specs_dir_name)


@mcp.tool()
def list_specs(
    status: Optional[str] = None,
    format: str = "text",
    show_tasks: bool = False,
    show_complete: bool = False,
    show_incomplete: bool = False,
    root: Optional[str] = None,
) -> Dict[str, Any]:
    """List specs with their number, status, task progress and name.

    `status` filters by one or more comma-separated statuses, e.g. "draft,approved".
    `format` is "text" or "json"."""

    return _manager(root).list_specs(
        status=status,
        format=format,
        show_tasks=show_tasks,
        show_complete=show_complete,
        show_incomplete=show_incomplete,
    )


@mcp.tool()
def spec_status(spec: Optional[str] = None, format: str = "text", root: Optional[str] = None) -> Dict[str, Any]:
    """Show the status of a spec by number (0, 00 or 000) or path.
    Without `spec`, reports the lowest-numbered in-progress spec."""

    return _manager(root).spec_status(spec=spec, format=format)


@mcp.tool()
def validate_specs(spec: Optional[str] = None, root: Optional[str] = None) -> Dict[str, Any]:
    """Validate frontmatter, title and Task List of every spec, or of one spec.
    Duplicate spec numbers are reported when the whole directory is validated."""

    return _manager(root).validate(spec=spec)


@mcp.tool()
def next_spec_number(title: Optional[str] = None, root: Optional[str] = None) -> Dict[str, Any]:
    """Return the next free spec number (highest declared number + 1).
    With `title`, also suggest the filename, e.g. "003-my-feature.md"."""

    return _manager(root).next_number(title=title)


@mcp.resource("specture://specs")
def resource_specs():
    """Resource view listing the project's specs."""

    try:
        manager = _manager(None)
    except ValueError:
        return TextResource(
            uri="specture://specs",
            text=f"No project root detected. Launch tools with a 'root' argument or set {PROJECT_ROOT_ENV}.",
        )

    try:
        specs = manager.workspace.parse_all()
    except FileNotFoundError as e:
        return TextResource(uri="specture://specs", text=str(e))

    return TextResource(uri="specture://specs", text=format_list_text(specs))


def main() -> None:
    """Run the server over stdio."""
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_file)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
