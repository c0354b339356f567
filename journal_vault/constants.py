"""Module-level constants for the journal vault server."""

import os
from pathlib import Path

# Configuration
CONFIG_ENV_VAR = "JOURNAL_VAULT_CONFIG"
CONFIG_PATH = Path(os.environ.get(CONFIG_ENV_VAR, Path(__file__).parent.parent / "vaults.yaml"))

# Table representation
TABLE_SEPARATOR = "|------|----------|"
DEFAULT_TABLE_HEADERS = ("Time", "Note")

# Locale prefix -> (time label, content label). Unmatched locales use English.
LOCALE_TABLE_HEADERS = {
    "en": ("Time", "Note"),
    "no": ("Tid", "Notat"),
    "nb": ("Tid", "Notat"),
    "nn": ("Tid", "Notat"),
    "sv": ("Tid", "Anteckning"),
    "da": ("Tid", "Note"),
    "fi": ("Aika", "Muistiinpano"),
    "de": ("Zeit", "Notiz"),
    "fr": ("Heure", "Note"),
    "es": ("Hora", "Nota"),
    "it": ("Ora", "Nota"),
    "nl": ("Tijd", "Notitie"),
    "pt": ("Hora", "Nota"),
    "ru": ("Время", "Заметка"),
    "ja": ("時間", "メモ"),
    "zh": ("时间", "笔记"),
}

# Date handling
ISO_DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"
ENGLISH_LOCALE_PREFIXES = ("en",)
NORDIC_LOCALE_PREFIXES = ("no", "nb", "nn", "da", "sv", "fi")

# Logging
LOG_LEVEL = "INFO"
