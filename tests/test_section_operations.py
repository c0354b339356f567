"""Tests for heading-based section lookup."""

from journal_vault.core.section_operations import (
    append_section,
    body_start_index,
    find_section,
    locate_section,
)

DOCUMENT = """---
date: 2025-03-05
---

# Notes

- 09:00:00 a
- 10:00:00 b

# Work Log

- 11:00:00 c
"""


def test_body_start_skips_frontmatter():
    assert body_start_index(DOCUMENT) == 3


def test_body_start_without_frontmatter():
    assert body_start_index("# Notes\n- 09:00:00 a\n") == 0


def test_body_start_with_unclosed_frontmatter():
    assert body_start_index("---\njust a rule\n") == 0


def test_section_bounds_and_content_end():
    section = locate_section(DOCUMENT, "Notes")
    assert section is not None
    assert (section.heading, section.end, section.content_end) == (4, 9, 8)
    assert section.title == "Notes"


def test_last_section_runs_to_end_of_file():
    section = locate_section(DOCUMENT, "Work Log")
    assert section is not None
    assert (section.heading, section.end, section.content_end) == (9, 12, 12)


def test_header_matches_as_substring():
    section = locate_section(DOCUMENT, "Log")
    assert section is not None
    assert section.title == "Work Log"


def test_first_matching_heading_wins():
    lines = ["## Notes from meeting", "x", "# Notes", "y"]
    section = find_section(lines, "Notes")
    assert section is not None
    assert section.heading == 0
    assert section.end == 2


def test_missing_section_returns_none():
    assert locate_section(DOCUMENT, "Personal") is None


def test_blank_section_body_content_end_follows_heading():
    lines = ["# A", "", "", "# B"]
    section = find_section(lines, "A")
    assert section is not None
    assert section.content_end == 1
    assert section.end == 3


def test_frontmatter_comments_are_not_headings():
    text = "---\n# Notes in yaml\ndate: 2025-03-05\n---\n\n# Notes\n"
    section = locate_section(text, "Notes")
    assert section is not None
    assert section.heading == 5


def test_append_section_separates_with_one_blank_line():
    lines = ["---", "date: 2025-03-05", "---", "", "- 09:00:00 a", ""]
    assert append_section(lines, "Work", ["- 10:00:00 b"]) == [
        "---",
        "date: 2025-03-05",
        "---",
        "",
        "- 09:00:00 a",
        "",
        "# Work",
        "",
        "- 10:00:00 b",
    ]


def test_append_section_to_empty_document():
    assert append_section([], "Work", ["- 10:00:00 b"]) == ["# Work", "", "- 10:00:00 b"]
