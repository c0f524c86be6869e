"""Workspace access for Specture.

This module locates spec files inside a project's specs directory, reads
them, and hands their content to the parser. It is the only part of the
package that touches the filesystem.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional, Sequence

from .config import DEFAULT_SPECS_DIR
from .errors import InvalidNumberError, InvalidSpecReferenceError, SpecNotFoundError
from .models import SpecDocument, SpecStatus
from .parser import parse_content
from .spec_logging import (
    log_error_with_context,
    log_operation,
    log_performance,
    log_specs_parsed,
)

logger = logging.getLogger("specture.workspace")


class Workspace:
    """Manage the spec files of a repository."""

    SPEC_FILE_PATTERN = re.compile(r"^\d{3}-.*\.md$")
    SPEC_REFERENCE_PATTERN = re.compile(r"^(\d{1,3})$")

    def __init__(self, root: Path | str, specs_dir_name: str = DEFAULT_SPECS_DIR):
        """Initialize workspace with given root directory."""
        self.root = Path(root).expanduser().resolve()
        self.specs_dir = self.root / specs_dir_name
        logger.debug(f"Workspace opened at {self.root} (specs: {self.specs_dir})")

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def find_all(self) -> List[Path]:
        """Return every spec file (``NNN-*.md``) in the specs directory, sorted by name."""
        if not self.specs_dir.is_dir():
            raise FileNotFoundError(f"specs directory not found: {self.specs_dir}")

        return sorted(
            path
            for path in self.specs_dir.iterdir()
            if path.is_file() and self.SPEC_FILE_PATTERN.match(path.name)
        )

    def resolve_path(self, reference: str) -> Path:
        """Resolve a spec reference to a file path.

        Accepts an existing file path, or a spec number with or without
        leading zeros (``7``, ``07``, ``007``).
        """
        reference = reference.strip()
        candidate = Path(reference).expanduser()
        if candidate.is_file():
            return candidate
        # Relative paths are also tried against the project root
        if not candidate.is_absolute() and (self.root / candidate).is_file():
            return self.root / candidate

        match = self.SPEC_REFERENCE_PATTERN.match(reference)
        if not match:
            raise InvalidSpecReferenceError(reference)

        if not self.specs_dir.is_dir():
            raise FileNotFoundError(f"specs directory not found: {self.specs_dir}")

        prefix = f"{int(match.group(1)):03d}-"
        for path in sorted(self.specs_dir.iterdir()):
            if path.is_file() and path.name.startswith(prefix) and path.suffix == ".md":
                return path

        raise SpecNotFoundError(reference)

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def read_spec(self, path: Path | str) -> SpecDocument:
        """Read and parse a single spec file."""
        path = Path(path)
        try:
            content = path.read_bytes()
            return parse_content(str(path), content)
        except (OSError, ValueError) as e:
            log_error_with_context(e, {"operation": "read_spec", "path": str(path)})
            raise

    @log_performance("parse_all")
    def parse_all(self) -> List[SpecDocument]:
        """Parse every spec in the specs directory, sorted by number.

        Specs without a declared number sort after numbered ones.
        """
        with log_operation("parse_all", specs_dir=str(self.specs_dir)):
            specs = [self.read_spec(path) for path in self.find_all()]
            specs.sort(key=_spec_sort_key)

        log_specs_parsed(str(self.specs_dir), len(specs))
        return specs

    def next_number(self) -> int:
        """Return the next free spec number, ``max(existing) + 1`` or 0.

        Every markdown file except ``README.md`` is considered; files that
        cannot be parsed are skipped.
        """
        if not self.specs_dir.is_dir():
            return 0

        numbers: List[int] = []
        for path in sorted(self.specs_dir.glob("*.md")):
            if not path.is_file() or path.name == "README.md":
                continue
            try:
                spec = parse_content(str(path), path.read_bytes())
            except (OSError, UnicodeDecodeError, InvalidNumberError) as e:
                logger.warning(f"Skipping unparseable spec {path.name}: {e}")
                continue
            if spec.number is not None:
                numbers.append(spec.number)

        return max(numbers) + 1 if numbers else 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @staticmethod
    def find_current(specs: Sequence[SpecDocument]) -> Optional[SpecDocument]:
        """Return the lowest-numbered in-progress spec, if any."""
        in_progress = [spec for spec in specs if spec.status is SpecStatus.IN_PROGRESS]
        if not in_progress:
            return None
        return min(in_progress, key=_spec_sort_key)

    @staticmethod
    def filter_by_status(specs: Sequence[SpecDocument], statuses: str) -> List[SpecDocument]:
        """Keep specs whose status is in a comma-separated list."""
        wanted = {item.strip() for item in statuses.split(",") if item.strip()}
        return [spec for spec in specs if spec.status_label in wanted]

    # ------------------------------------------------------------------
    # Text processing utilities
    # ------------------------------------------------------------------

    @staticmethod
    def slugify(value: str) -> str:
        """Convert a title to a kebab-case slug."""
        slug = value.lower().replace(" ", "-").replace("_", "-")
        slug = re.sub(r"[^a-z0-9-]+", "", slug)
        slug = re.sub(r"-+", "-", slug)
        return slug.strip("-")

    def spec_filename(self, number: int, title: str) -> str:
        """Return the ``NNN-slug.md`` filename for a new spec."""
        slug = self.slugify(title)
        if not slug:
            raise ValueError(f"title {title!r} does not produce a filename slug")
        return f"{number:03d}-{slug}.md"


def _spec_sort_key(spec: SpecDocument):
    return (spec.number is None, spec.number or 0, spec.path)
