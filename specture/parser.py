"""Spec document parsing.

Turns raw spec text into an immutable :class:`~specture.models.SpecDocument`.
The body is read in a single pass that tags every line with its heading
level, indentation and the running Task List / subsection context; the title,
the presence of the Task List section and the tasks themselves are all
derived from that annotated stream.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import yaml

from .errors import InvalidNumberError
from .models import Frontmatter, SpecDocument, Task
from .status import infer_status

FRONTMATTER_MARKER = "---"
TASK_LIST_HEADING = "Task List"

_HEADING_PATTERN = re.compile(r"^(?P<marks>#{1,6})\s+(?P<text>.+)$")
_CLOSING_HASHES_PATTERN = re.compile(r"\s+#+$")
_TASK_LINE_PATTERN = re.compile(r"^- \[(?P<mark>[ xX])\] (?P<text>.+)$")

# Markdown treats four or more leading spaces as an indented code block
_MAX_HEADING_INDENT = 3


@dataclass(frozen=True, slots=True)
class AnnotatedLine:
    """A body line together with the context the scanners need."""

    number: int
    text: str
    indented: bool
    heading_level: int = 0
    heading_text: str = ""
    in_task_list: bool = False
    section: str = ""


@dataclass(frozen=True, slots=True)
class TaskList:
    """Tasks extracted from the Task List section."""

    complete: Tuple[Task, ...] = ()
    incomplete: Tuple[Task, ...] = ()
    current_task: str = ""
    current_task_section: str = ""


class _UndecodableFrontmatter(Exception):
    """Raised internally when a recognized key has an unusable type."""


_DECIMAL_INT_PATTERN = re.compile(r"^[-+]?[0-9]+$")
_INT_TAG = "tag:yaml.org,2002:int"


class _FrontmatterLoader(yaml.SafeLoader):
    """SafeLoader that reads plain digit runs as base-10 integers.

    YAML 1.1 treats ``010`` as octal and leaves ``008`` as a string; spec
    numbers are zero-padded decimals, so both must decode to 10 and 8.
    """


_FrontmatterLoader.yaml_implicit_resolvers = {
    first: list(resolvers)
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
for _first in "-+0123456789":
    _FrontmatterLoader.yaml_implicit_resolvers.setdefault(_first, []).insert(
        0, (_INT_TAG, _DECIMAL_INT_PATTERN)
    )


def _construct_int(loader: yaml.SafeLoader, node: yaml.ScalarNode) -> int:
    value = loader.construct_scalar(node)
    if _DECIMAL_INT_PATTERN.match(value):
        return int(value, 10)
    return loader.construct_yaml_int(node)


_FrontmatterLoader.add_constructor(_INT_TAG, _construct_int)


# ------------------------------------------------------------------
# Frontmatter
# ------------------------------------------------------------------


def split_frontmatter(lines: Sequence[str]) -> Tuple[Optional[List[str]], int]:
    """Split off the metadata block.

    Returns the lines between the markers (``None`` when the block is
    absent) and the index of the first body line.
    """
    if not lines or lines[0].rstrip() != FRONTMATTER_MARKER:
        return None, 0
    for idx in range(1, len(lines)):
        if lines[idx].rstrip() == FRONTMATTER_MARKER:
            return list(lines[1:idx]), idx + 1
    # Never closed: treat the whole document as body
    return None, 0


def _scalar_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (list, dict)):
        raise _UndecodableFrontmatter(f"expected a scalar, got {type(value).__name__}")
    return str(value)


def _number_value(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise _UndecodableFrontmatter(f"number must be an integer, got {value!r}")
    return value


def decode_frontmatter(block: Iterable[str], path: str = "") -> Optional[Frontmatter]:
    """Decode the metadata block lines into a :class:`Frontmatter`.

    Undecodable blocks are reported as absent. A negative ``number`` is the
    one hard failure and raises :class:`InvalidNumberError`.
    """
    try:
        data = yaml.load("\n".join(block), Loader=_FrontmatterLoader)
    except yaml.YAMLError:
        return None
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return None

    try:
        number = _number_value(data.get("number"))
        status = _scalar_text(data.get("status"))
        author = _scalar_text(data.get("author"))
    except _UndecodableFrontmatter:
        return None

    if number is not None and number < 0:
        raise InvalidNumberError(number, path or None)

    return Frontmatter(status=status, number=number, author=author)


# ------------------------------------------------------------------
# Line annotation
# ------------------------------------------------------------------


def _heading(line: str) -> Tuple[int, str]:
    """Return ``(level, text)`` for a heading line, ``(0, "")`` otherwise."""
    if line.startswith("\t"):
        return 0, ""
    stripped = line.lstrip(" ")
    if len(line) - len(stripped) > _MAX_HEADING_INDENT:
        return 0, ""
    match = _HEADING_PATTERN.match(stripped.rstrip())
    if not match:
        return 0, ""
    text = _CLOSING_HASHES_PATTERN.sub("", match.group("text")).strip()
    return len(match.group("marks")), text


def annotate_lines(lines: Sequence[str], start: int = 0) -> Iterator[AnnotatedLine]:
    """Tag each body line with heading and Task List context.

    The Task List section opens at the first ``## Task List`` heading and
    closes at the next level-2 heading. Inside it, level-3 headings set the
    running subsection label.
    """
    in_task_list = False
    seen_task_list = False
    section = ""

    for idx in range(start, len(lines)):
        raw = lines[idx]
        level, heading_text = _heading(raw)

        if level == 2:
            if in_task_list:
                in_task_list = False
                section = ""
            elif not seen_task_list and heading_text == TASK_LIST_HEADING:
                seen_task_list = True
                in_task_list = True
                yield AnnotatedLine(
                    number=idx + 1,
                    text=raw,
                    indented=False,
                    heading_level=level,
                    heading_text=heading_text,
                )
                continue
        elif level == 3 and in_task_list:
            section = heading_text

        yield AnnotatedLine(
            number=idx + 1,
            text=raw,
            indented=raw[:1] in (" ", "\t"),
            heading_level=level,
            heading_text=heading_text,
            in_task_list=in_task_list,
            section=section if in_task_list else "",
        )


# ------------------------------------------------------------------
# Scanners
# ------------------------------------------------------------------


def scan_structure(lines: Iterable[AnnotatedLine]) -> Tuple[str, bool]:
    """Return the title (first H1) and whether a Task List heading exists."""
    title: Optional[str] = None
    has_task_list = False
    for line in lines:
        if line.heading_level == 1 and title is None:
            title = line.heading_text
        elif line.heading_level == 2 and line.heading_text == TASK_LIST_HEADING:
            has_task_list = True
        if title is not None and has_task_list:
            break
    return title or "", has_task_list


def extract_tasks(lines: Iterable[AnnotatedLine]) -> TaskList:
    """Collect checklist items from the Task List section.

    Any line with leading whitespace is treated as a sub-item and skipped,
    whatever its bullet markup, so only top-level items are counted.
    """
    complete: List[Task] = []
    incomplete: List[Task] = []
    current_task: Optional[Task] = None

    for line in lines:
        if not line.in_task_list or line.indented or line.heading_level:
            continue
        match = _TASK_LINE_PATTERN.match(line.text.rstrip())
        if not match:
            continue
        text = match.group("text").strip()
        if not text:
            continue
        done = match.group("mark") in ("x", "X")
        task = Task(text=text, complete=done, section=line.section, line=line.number)
        if done:
            complete.append(task)
        else:
            incomplete.append(task)
            if current_task is None:
                current_task = task

    return TaskList(
        complete=tuple(complete),
        incomplete=tuple(incomplete),
        current_task=current_task.text if current_task else "",
        current_task_section=current_task.section if current_task else "",
    )


# ------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------


def parse_content(path: str, content: Union[str, bytes]) -> SpecDocument:
    """Parse spec content into a :class:`SpecDocument`.

    ``path`` is only carried through for later filename checks. Missing
    frontmatter, title or Task List never fail the parse; they surface as
    absent fields for the validator to report.

    Raises:
        InvalidNumberError: the frontmatter declares a negative number.
    """
    text = content.decode("utf-8-sig") if isinstance(content, bytes) else content
    lines = text.splitlines()

    block, body_start = split_frontmatter(lines)
    frontmatter = decode_frontmatter(block, path) if block is not None else None

    annotated = list(annotate_lines(lines, body_start))
    title, has_task_list = scan_structure(annotated)
    tasks = extract_tasks(annotated)

    declared = frontmatter.status if frontmatter else None
    status = infer_status(
        declared,
        has_task_list,
        len(tasks.complete),
        len(tasks.incomplete),
    )

    return SpecDocument(
        path=str(path),
        title=title,
        number=frontmatter.number if frontmatter else None,
        status=status,
        declared_status=declared,
        frontmatter=frontmatter,
        has_checklist_section=has_task_list,
        complete_tasks=tasks.complete,
        incomplete_tasks=tasks.incomplete,
        current_task=tasks.current_task,
        current_task_section=tasks.current_task_section,
    )
