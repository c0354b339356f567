"""Locale-aware date and time parsing for journal entries."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, time, timedelta
from typing import Optional

from journal_vault.constants import (
    ENGLISH_LOCALE_PREFIXES,
    ISO_DATE_FORMAT,
    NORDIC_LOCALE_PREFIXES,
    TIME_FORMAT,
)
from journal_vault.errors import ConfigurationError, ParseError

logger = logging.getLogger(__name__)

# Named date overrides accepted in vault configuration; anything else is
# treated as a raw strptime format.
DATE_FORMAT_ALIASES = {
    "YYYY-MM-DD": "%Y-%m-%d",
    "MM/DD/YYYY": "%m/%d/%Y",
    "DD.MM.YYYY": "%d.%m.%Y",
    "DD/MM/YYYY": "%d/%m/%Y",
    "MM-DD-YYYY": "%m-%d-%Y",
    "DD-MM-YYYY": "%d-%m-%Y",
}

ENGLISH_DATE_FORMATS = (
    "%Y-%m-%d",  # 2025-10-24
    "%m/%d/%Y",  # 10/24/2025
    "%m-%d-%Y",  # 10-24-2025
    "%B %d, %Y",  # October 24, 2025
    "%b %d, %Y",  # Oct 24, 2025
)

NORDIC_DATE_FORMATS = (
    "%Y-%m-%d",  # 2025-10-24
    "%d.%m.%Y",  # 24.10.2025
    "%d/%m/%Y",  # 24/10/2025
    "%d-%m-%Y",  # 24-10-2025
    "%d. %B %Y",  # 24. oktober 2025
    "%d. %b %Y",  # 24. okt 2025
)

DEFAULT_DATE_FORMATS = (
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%d/%m/%Y",
)

TIME_FORMATS_24H = (
    "%H:%M",  # 14:30
    "%H:%M:%S",  # 14:30:45
)

TIME_FORMATS_12H = (
    "%I:%M %p",  # 2:30 PM
    "%I:%M:%S %p",  # 2:30:45 PM
    "%I:%M%p",  # 2:30PM
    "%I:%M:%S%p",  # 2:30:45PM
)

TIME_FORMAT_OVERRIDES = {
    "12h": TIME_FORMATS_12H,
    "24h": TIME_FORMATS_24H,
}

# Norwegian month names that differ from the English ones strptime knows.
NORWEGIAN_MONTHS = {
    "januar": "January",
    "februar": "February",
    "mars": "March",
    "mai": "May",
    "juni": "June",
    "juli": "July",
    "oktober": "October",
    "desember": "December",
    "okt": "Oct",
    "des": "Dec",
}

_WORD_PATTERN = re.compile(r"[^\W\d_]+")


def _matches_prefix(locale: str, prefixes: tuple[str, ...]) -> bool:
    lowered = locale.lower()
    return any(lowered.startswith(prefix) for prefix in prefixes)


def _translate_month_names(text: str) -> str:
    """Replace Norwegian month words with their English equivalents."""
    return _WORD_PATTERN.sub(lambda match: NORWEGIAN_MONTHS.get(match.group(0).lower(), match.group(0)), text)


def _try_formats(text: str, formats: tuple[str, ...]) -> Optional[datetime]:
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


class DateTimeResolver:
    """Parse and format dates and times for one vault locale.

    Candidate patterns are tried in order and the first structural match
    wins. An explicit override disables the locale lists entirely.
    """

    def __init__(self, locale: str = "en-US") -> None:
        self.locale = locale

    @property
    def is_english(self) -> bool:
        return _matches_prefix(self.locale, ENGLISH_LOCALE_PREFIXES)

    @property
    def is_nordic(self) -> bool:
        return _matches_prefix(self.locale, NORDIC_LOCALE_PREFIXES)

    def date_formats(self) -> tuple[str, ...]:
        """Return the ordered candidate date patterns for this locale."""
        if self.is_english:
            return ENGLISH_DATE_FORMATS
        if self.is_nordic:
            return NORDIC_DATE_FORMATS
        return DEFAULT_DATE_FORMATS

    def time_formats(self) -> tuple[str, ...]:
        """Return the ordered candidate time patterns for this locale."""
        return TIME_FORMATS_24H + TIME_FORMATS_12H

    def parse_date(self, text: str, format_override: Optional[str] = None) -> date:
        """Parse a user supplied date string.

        Args:
            text: Raw date input, e.g. ``"10/24/2025"`` or ``"24.10.2025"``.
            format_override: Optional alias such as ``"DD.MM.YYYY"`` or a raw
                strptime format. When given, only that format is tried.

        Returns:
            The parsed :class:`datetime.date`.

        Raises:
            ParseError: If no candidate pattern matches.
        """
        candidate = text.strip()
        if format_override:
            fmt = DATE_FORMAT_ALIASES.get(format_override, format_override)
            parsed = _try_formats(candidate, (fmt,))
            if parsed is None:
                raise ParseError("date", text, f"format override: {format_override}")
            return parsed.date()

        if self.is_nordic:
            candidate = _translate_month_names(candidate)

        parsed = _try_formats(candidate, self.date_formats())
        if parsed is None:
            raise ParseError("date", text, f"locale: {self.locale}")
        return parsed.date()

    def parse_time(self, text: str, format_override: Optional[str] = None) -> time:
        """Parse a user supplied time of day.

        Args:
            text: Raw time input, e.g. ``"14:30"`` or ``"2:30 PM"``.
            format_override: ``"12h"`` or ``"24h"`` to restrict the candidates.

        Raises:
            ConfigurationError: If ``format_override`` is not ``12h``/``24h``.
            ParseError: If no candidate pattern matches.
        """
        candidate = text.strip()
        if format_override:
            formats = TIME_FORMAT_OVERRIDES.get(format_override)
            if formats is None:
                raise ConfigurationError(
                    f"Invalid time format override: {format_override}. Use '12h' or '24h'."
                )
            parsed = _try_formats(candidate, formats)
            if parsed is None:
                raise ParseError("time", text, f"format override: {format_override}")
            return parsed.time()

        parsed = _try_formats(candidate, self.time_formats())
        if parsed is None:
            raise ParseError("time", text, f"locale: {self.locale}")
        return parsed.time()

    def resolve_relative_date(self, offset: int, today: Optional[date] = None) -> date:
        """Resolve a day offset: positive is the past, negative the future."""
        anchor = today or date.today()
        return anchor - timedelta(days=offset)

    @staticmethod
    def format_date(value: date) -> str:
        return value.strftime(ISO_DATE_FORMAT)

    @staticmethod
    def format_time(value: datetime | time) -> str:
        return value.strftime(TIME_FORMAT)

    @staticmethod
    def now() -> datetime:
        return datetime.now().replace(microsecond=0)

    @staticmethod
    def combine(day: date, moment: time) -> datetime:
        return datetime.combine(day, moment.replace(microsecond=0))

    def resolve_timestamp(
        self,
        date_text: Optional[str] = None,
        relative_days: Optional[int] = None,
        time_text: Optional[str] = None,
        time_format: Optional[str] = None,
        date_format: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> datetime:
        """Build the effective timestamp of a note from caller inputs.

        The day comes from ``date_text`` (parsed with ``date_format`` when
        given), else ``relative_days``, else today. The time of day comes from
        ``time_text``, else the current time.

        Raises:
            ConfigurationError: If both ``date_text`` and ``relative_days`` are given.
            ParseError: If the date or time cannot be parsed.
        """
        current = now or self.now()
        if date_text is not None and relative_days is not None:
            raise ConfigurationError("Specify either an explicit date or a relative day offset, not both.")

        if date_text is not None:
            day = self.parse_date(date_text, date_format)
        elif relative_days is not None:
            day = self.resolve_relative_date(relative_days, current.date())
        else:
            day = current.date()

        moment = self.parse_time(time_text, time_format) if time_text is not None else current.time()
        timestamp = self.combine(day, moment)
        logger.debug("Resolved note timestamp %s (locale %s)", timestamp.isoformat(), self.locale)
        return timestamp
