"""Shorthand phrase expansion for note content."""

from __future__ import annotations

from collections.abc import Mapping


def expand_phrases(content: str, phrases: Mapping[str, str]) -> str:
    """Expand configured shorthand phrases in ``content``.

    Phrases are applied longest first so a phrase that is a substring of a
    longer one (``@work`` inside ``@workout``) never pre-empts it.

    Examples:
        >>> expand_phrases("Did @workout today", {"@work": "Working", "@workout": "Gym"})
        'Did Gym today'
    """
    result = content
    for phrase, expansion in sorted(phrases.items(), key=lambda item: len(item[0]), reverse=True):
        if phrase:
            result = result.replace(phrase, expansion)
    return result
