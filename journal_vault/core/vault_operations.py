"""Core vault operations: readiness checks and day-file path resolution."""

from __future__ import annotations

from datetime import date
from pathlib import Path

from journal_vault.constants import ISO_DATE_FORMAT
from journal_vault.core.tokens import build_token_pattern, substitute_tokens
from journal_vault.data_models import VaultConfiguration
from journal_vault.errors import ConfigurationError

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

PATH_TOKENS = (
    "date:MM",
    "date:y",
    "day:02",
    "date:02",
    "day",
    "date",
    "year",
    "month:02",
    "month",
    "Weekday",
    "weekday",
    "Weekday_short",
    "weekday_short",
    "Month",
    "month_name",
    "Month_short",
    "month_short",
)

_PATH_TOKEN_PATTERN = build_token_pattern(PATH_TOKENS)


def ensure_vault_ready(vault: VaultConfiguration) -> None:
    """Ensure the vault root exists before writing, creating it when missing.

    Raises:
        ConfigurationError: If the vault path exists but is not a directory.
    """
    if vault.path.exists() and not vault.path.is_dir():
        raise ConfigurationError(f"Vault '{vault.name}' path {vault.path} is not a directory")
    vault.path.mkdir(parents=True, exist_ok=True)


def path_token_values(day: date) -> dict[str, str]:
    """Return the replacement text of every path token for ``day``."""
    weekday = WEEKDAY_NAMES[day.weekday()]
    month = MONTH_NAMES[day.month - 1]
    return {
        "date:MM": f"{day.month:02d}",
        "date:y": f"{day.year % 100:02d}",
        "day:02": f"{day.day:02d}",
        "date:02": f"{day.day:02d}",
        "day": str(day.day),
        "date": str(day.day),
        "year": str(day.year),
        "month:02": f"{day.month:02d}",
        "month": str(day.month),
        "Weekday": weekday,
        "weekday": weekday.lower(),
        "Weekday_short": weekday[:3],
        "weekday_short": weekday[:3].lower(),
        "Month": month,
        "month_name": month.lower(),
        "Month_short": month[:3],
        "month_short": month[:3].lower(),
    }


def format_custom_path(path_format: str, day: date) -> str:
    """Substitute date tokens into a custom path format.

    Examples:
        >>> format_custom_path("{year}/{month:02}/{day:02}", date(2025, 3, 5))
        '2025/03/05'
        >>> format_custom_path("{Weekday_short}", date(2025, 10, 24))
        'Fri'
    """
    return substitute_tokens(path_format, path_token_values(day), _PATH_TOKEN_PATTERN)


def get_note_path(vault: VaultConfiguration, day: date) -> Path:
    """Resolve the day file for ``day`` inside ``vault``.

    Without a custom format the file is ``<vault>/<YYYY-MM-DD>.md``. Custom
    formats get a ``.md`` suffix when they do not already carry one.

    Raises:
        ConfigurationError: If the formatted path escapes the vault root.
    """
    if not vault.file_path_format:
        return vault.path / f"{day.strftime(ISO_DATE_FORMAT)}.md"

    relative = format_custom_path(vault.file_path_format, day).lstrip("/\\")
    if not relative.lower().endswith(".md"):
        relative = f"{relative}.md"

    candidate = (vault.path / relative).resolve(strict=False)
    vault_root = vault.path.resolve(strict=False)

    if not candidate.is_relative_to(vault_root):
        raise ConfigurationError(
            f"File path format '{vault.file_path_format}' escapes the vault '{vault.name}'."
        )
    return vault.path / relative


def note_display_name(vault: VaultConfiguration, path: Path) -> str:
    """Convert a note path into a forward-slash display name without extension."""
    relative = path.relative_to(vault.path)
    return str(relative.with_suffix("")).replace("\\", "/")
