"""Single-pass substitution of ``{token}`` and ``{{token}}`` placeholders."""

from __future__ import annotations

import re
from collections.abc import Mapping


def build_token_pattern(names: list[str] | tuple[str, ...]) -> re.Pattern[str]:
    """Compile a pattern matching any of ``names`` in single or doubled braces.

    Doubled braces are tried before single ones at each position and longer
    names before shorter ones, so one left-to-right scan replaces every
    token without the result depending on replacement order.
    """
    ordered = sorted(names, key=len, reverse=True)
    alternation = "|".join(re.escape(name) for name in ordered)
    return re.compile(r"\{\{(?P<double>" + alternation + r")\}\}|\{(?P<single>" + alternation + r")\}")


def substitute_tokens(text: str, values: Mapping[str, str], pattern: re.Pattern[str] | None = None) -> str:
    """Replace known tokens in ``text``; unknown tokens are left verbatim.

    Args:
        text: Template text containing placeholders.
        values: Mapping of bare token name to replacement text.
        pattern: Optional precompiled pattern from :func:`build_token_pattern`.

    Returns:
        The substituted text.
    """
    if not values:
        return text
    compiled = pattern or build_token_pattern(tuple(values))

    def _replace(match: re.Match[str]) -> str:
        name = match.group("double") or match.group("single")
        return values[name]

    return compiled.sub(_replace, text)


def contains_token(text: str, name: str) -> bool:
    """Return True when ``text`` holds ``{name}`` or ``{{name}}``."""
    return build_token_pattern((name,)).search(text) is not None
