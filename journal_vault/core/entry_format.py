"""Rendering, detection and conversion of Bullet and Table note entries.

A day file stores entries either as bullet rows::

    - 14:30:00 Walked the dog

or as a two-column markdown table::

    | Time | Note |
    |------|----------|
    | 14:30:00 | Walked the dog |

Every line is classified once into a :class:`LineKind`; detection,
conversion, gap cleanup and listing all work on that classification.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Iterable, Optional

from journal_vault.constants import DEFAULT_TABLE_HEADERS, LOCALE_TABLE_HEADERS, TABLE_SEPARATOR, TIME_FORMAT
from journal_vault.data_models import LineKind, RenderedLine, Representation, VaultConfiguration

logger = logging.getLogger(__name__)

_TIME = r"\d{1,2}:\d{2}(?::\d{2})?"

# "- 14:30:00 text" and the legacy "- [14:30:00] text"
BULLET_ROW_PATTERN = re.compile(
    r"^-\s+(?:\[(?P<bracketed>" + _TIME + r")\]|(?P<plain>" + _TIME + r"))(?:\s+(?P<content>.*?))?\s*$"
)
TABLE_ROW_PATTERN = re.compile(r"^\|\s*(?P<time>" + _TIME + r")\s*\|(?P<content>.*)\|\s*$")
TABLE_SEPARATOR_PATTERN = re.compile(r"^\|(?:\s*:?-+:?\s*\|)+\s*$")
TABLE_HEADER_PATTERN = re.compile(r"^\|(?P<time>[^|]*)\|(?P<content>[^|]*)\|\s*$")
HEADING_PATTERN = re.compile(r"^(?P<hashes>#{1,6})\s+(?P<title>.+?)\s*$")


# ==============================================================================
# HEADER LABELS
# ==============================================================================


def locale_table_headers(locale: str) -> tuple[str, str]:
    """Return the (time, content) labels for a locale tag such as ``nb-NO``."""
    primary = re.split(r"[-_.@]", locale.strip(), maxsplit=1)[0].lower()
    return LOCALE_TABLE_HEADERS.get(primary, DEFAULT_TABLE_HEADERS)


def table_headers_for(vault: VaultConfiguration) -> tuple[str, str]:
    """Return the table labels for a vault, preferring explicit configuration."""
    if vault.table_headers is not None:
        return vault.table_headers.time, vault.table_headers.content
    return locale_table_headers(vault.locale)


def known_header_labels(vault: Optional[VaultConfiguration] = None) -> frozenset[str]:
    """Every header label we could have written, lower-cased."""
    labels = {label.lower() for pair in LOCALE_TABLE_HEADERS.values() for label in pair}
    if vault is not None:
        labels.update(label.lower() for label in table_headers_for(vault))
    return frozenset(labels)


# ==============================================================================
# RENDERING
# ==============================================================================


def render_bullet_row(time_text: str, content: str) -> str:
    return f"- {time_text} {content}"


def render_table_row(time_text: str, content: str) -> str:
    return f"| {time_text} | {content} |"


def render_table_header(labels: tuple[str, str]) -> list[str]:
    """Return the header row and separator row of the entry table."""
    return [f"| {labels[0]} | {labels[1]} |", TABLE_SEPARATOR]


def render_row(representation: Representation, time_text: str, content: str) -> str:
    if representation is Representation.TABLE:
        return render_table_row(time_text, content)
    return render_bullet_row(time_text, content)


def render_entry(vault: VaultConfiguration, timestamp: datetime, content: str) -> str:
    """Render one note as a single line in the vault's representation."""
    return render_row(vault.representation, timestamp.strftime(TIME_FORMAT), content)


def render_entry_block(vault: VaultConfiguration, timestamp: datetime, content: str) -> list[str]:
    """Render a note as it appears in a fresh document.

    Table vaults get the header and separator rows before the entry.
    """
    row = render_entry(vault, timestamp, content)
    if vault.representation is Representation.TABLE:
        return render_table_header(table_headers_for(vault)) + [row]
    return [row]


# ==============================================================================
# CLASSIFICATION
# ==============================================================================


def _classify_single(text: str) -> RenderedLine:
    if not text.strip():
        return RenderedLine(text, LineKind.BLANK)

    match = BULLET_ROW_PATTERN.match(text)
    if match:
        time_text = match.group("bracketed") or match.group("plain")
        return RenderedLine(text, LineKind.BULLET_ROW, time_text, match.group("content") or "")

    match = TABLE_ROW_PATTERN.match(text)
    if match:
        return RenderedLine(text, LineKind.TABLE_ROW, match.group("time"), match.group("content").strip())

    if TABLE_SEPARATOR_PATTERN.match(text):
        return RenderedLine(text, LineKind.TABLE_SEPARATOR)

    if HEADING_PATTERN.match(text):
        return RenderedLine(text, LineKind.HEADING)

    return RenderedLine(text, LineKind.OTHER)


def _next_non_blank(classified: list[RenderedLine], start: int) -> Optional[RenderedLine]:
    for line in classified[start:]:
        if line.kind is not LineKind.BLANK:
            return line
    return None


def _opens_entry_rows(classified: list[RenderedLine], start: int) -> bool:
    following = _next_non_blank(classified, start)
    return following is not None and following.kind is LineKind.TABLE_ROW


def classify_lines(lines: Iterable[str], labels: Optional[frozenset[str]] = None) -> list[RenderedLine]:
    """Tag every line with its shape.

    Header and separator kinds are reserved for the entry table. A two-cell
    pipe row is its header when both cells are known header labels, or when
    a separator follows it and entry rows follow the separator. A separator
    belongs to the entry table when it sits under such a header or directly
    above entry rows. Pipe rows of any other table stay ``OTHER``.
    """
    labels = labels if labels is not None else known_header_labels()
    classified = [_classify_single(text) for text in lines]

    for index, line in enumerate(classified):
        if line.kind is not LineKind.OTHER:
            continue
        match = TABLE_HEADER_PATTERN.match(line.text)
        if not match:
            continue
        above_entry_rows = (
            index + 1 < len(classified)
            and classified[index + 1].kind is LineKind.TABLE_SEPARATOR
            and _opens_entry_rows(classified, index + 2)
        )
        cells = {match.group("time").strip().lower(), match.group("content").strip().lower()}
        if above_entry_rows or cells <= labels:
            classified[index] = RenderedLine(line.text, LineKind.TABLE_HEADER)

    for index, line in enumerate(classified):
        if line.kind is not LineKind.TABLE_SEPARATOR:
            continue
        under_header = index > 0 and classified[index - 1].kind is LineKind.TABLE_HEADER
        if not (under_header or _opens_entry_rows(classified, index + 1)):
            classified[index] = RenderedLine(line.text, LineKind.OTHER)

    return classified


def detect_representation(lines: list[RenderedLine]) -> Optional[Representation]:
    """Classify the entry style of a document.

    Returns:
        ``BULLET`` or ``TABLE`` when only one kind of data row is present,
        otherwise ``None`` (undetermined: mixed, or no rows at all).
    """
    has_bullets = any(line.kind is LineKind.BULLET_ROW for line in lines)
    has_table_rows = any(line.kind is LineKind.TABLE_ROW for line in lines)
    if has_bullets and not has_table_rows:
        return Representation.BULLET
    if has_table_rows and not has_bullets:
        return Representation.TABLE
    return None


# ==============================================================================
# CONVERSION
# ==============================================================================


def convert_lines(
    lines: list[RenderedLine],
    target: Representation,
    labels: tuple[str, str],
) -> list[str]:
    """Re-render every data row of ``lines`` in ``target`` representation.

    Header and separator rows are dropped when converting to Bullet and
    synthesized before the first row of each run when converting to Table.
    Blank lines between two converted rows are removed; every other line is
    kept verbatim.
    """
    output: list[str] = []
    pending_blanks: list[str] = []
    in_run = False

    for line in lines:
        if line.kind is LineKind.BLANK:
            if in_run:
                pending_blanks.append(line.text)
            else:
                output.append(line.text)
            continue

        if line.is_data_row:
            pending_blanks.clear()
            if target is Representation.TABLE and not in_run:
                output.extend(render_table_header(labels))
            output.append(render_row(target, line.time or "", line.content or ""))
            in_run = True
            continue

        if line.kind in (LineKind.TABLE_HEADER, LineKind.TABLE_SEPARATOR):
            if target is Representation.BULLET:
                continue
            output.extend(pending_blanks)
            pending_blanks.clear()
            output.append(line.text)
            in_run = True
            continue

        output.extend(pending_blanks)
        pending_blanks.clear()
        output.append(line.text)
        in_run = False

    output.extend(pending_blanks)
    return output


def remove_table_gaps(lines: list[str], labels: Optional[frozenset[str]] = None) -> list[str]:
    """Delete blank lines sitting strictly between two entry-table lines.

    Blank lines before the first or after the last table line are kept.
    """
    classified = classify_lines(lines, labels)
    keep = [True] * len(classified)
    previous_table_line = False
    run: list[int] = []

    for index, line in enumerate(classified):
        if line.kind is LineKind.BLANK:
            run.append(index)
            continue
        if line.is_table_line and previous_table_line:
            for blank_index in run:
                keep[blank_index] = False
        run = []
        previous_table_line = line.is_table_line

    return [line.text for line, kept in zip(classified, keep) if kept]


def convert_if_needed(lines: list[str], vault: VaultConfiguration) -> list[str]:
    """Bring existing document lines into the vault's configured representation.

    Undetermined documents are passed through untouched apart from the table
    gap cleanup that precedes every Table-bound write.
    """
    labels = known_header_labels(vault)
    classified = classify_lines(lines, labels)
    current = detect_representation(classified)
    target = vault.representation

    if current is None:
        if any(line.is_data_row for line in classified):
            logger.warning("Mixed bullet and table entries found; leaving representation unchanged")
        result = list(lines)
    elif current is target:
        result = list(lines)
    else:
        logger.debug("Converting entries from %s to %s", current.value, target.value)
        result = convert_lines(classified, target, table_headers_for(vault))

    if target is Representation.TABLE:
        result = remove_table_gaps(result, labels)
    return result


def is_header_like(line: RenderedLine, labels: frozenset[str]) -> bool:
    """True when a table row's content cell is really a header label."""
    if line.kind is not LineKind.TABLE_ROW:
        return False
    return (line.content or "").strip().lower() in labels
