"""Heading-based section lookup within day files."""

from __future__ import annotations

import logging
from typing import Optional

from frontmatter import YAMLHandler

from journal_vault.core.entry_format import HEADING_PATTERN
from journal_vault.data_models import Section

logger = logging.getLogger(__name__)

_FRONTMATTER_HANDLER = YAMLHandler()


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def body_start_index(text: str) -> int:
    """Return the index of the first line after a leading YAML frontmatter block.

    Args:
        text: Full markdown document contents.

    Returns:
        ``0`` when the document has no frontmatter, otherwise the line index
        immediately following the closing ``---`` delimiter.
    """
    if not _FRONTMATTER_HANDLER.detect(text):
        return 0
    try:
        _, content = _FRONTMATTER_HANDLER.split(text)
    except ValueError:
        # Opening delimiter without a closing one; treat as plain markdown.
        return 0

    prefix = text[: len(text) - len(content)]
    return prefix.count("\n") + (0 if prefix.endswith("\n") else 1)


def is_heading(line: str) -> bool:
    return HEADING_PATTERN.match(line) is not None


def _section_end(lines: list[str], heading_index: int) -> int:
    """Index of the next heading after ``heading_index`` or the line count."""
    for index in range(heading_index + 1, len(lines)):
        if is_heading(lines[index]):
            return index
    return len(lines)


def _content_end(lines: list[str], heading_index: int, end: int) -> int:
    """One past the last non-blank body line, or right after the heading."""
    content_end = heading_index + 1
    for index in range(heading_index + 1, end):
        if lines[index].strip():
            content_end = index + 1
    return content_end


# ==============================================================================
# SECTION LOOKUP
# ==============================================================================


def find_section(lines: list[str], header: str, start: int = 0) -> Optional[Section]:
    """Locate the first heading whose text contains ``header``.

    Matching is a plain substring test, so ``"Notes"`` finds
    ``"## 📝 Notes for today"``.

    Args:
        lines: Document split into lines (no line terminators).
        header: Configured section header text.
        start: First line index to scan, typically past the frontmatter.

    Returns:
        The located :class:`Section`, or ``None`` when no heading matches.
    """
    for index in range(start, len(lines)):
        match = HEADING_PATTERN.match(lines[index])
        if match is None or header not in lines[index]:
            continue
        end = _section_end(lines, index)
        section = Section(
            heading=index,
            end=end,
            content_end=_content_end(lines, index, end),
            title=match.group("title"),
        )
        logger.debug("Found section '%s' at lines %d-%d", section.title, section.heading, section.end)
        return section
    return None


def locate_section(text: str, header: str) -> Optional[Section]:
    """Locate ``header`` in raw document text, skipping any frontmatter."""
    return find_section(text.splitlines(), header, body_start_index(text))


def append_section(lines: list[str], header: str, body: list[str]) -> list[str]:
    """Return ``lines`` with a new ``# header`` section holding ``body`` at the end.

    One blank line separates the new heading from existing content and
    another separates it from ``body``.
    """
    updated = list(lines)
    while updated and not updated[-1].strip():
        updated.pop()
    if updated:
        updated.append("")
    updated.extend([f"# {header}", ""])
    updated.extend(body)
    return updated
