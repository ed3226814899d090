"""Translations for RetinaScan.

Strings live in flat ``<lang>.json`` files keyed like ``"screening.title"``.
Usage: from i18n import t; t("export.success", path=path)
"""

import json
import logging
import os
import sys
from collections import OrderedDict
from pathlib import Path
from typing import Dict, Optional

from core.settings import get_settings

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"
ENV_LANGUAGE = "RETINASCAN_LANGUAGE"
SETTINGS_KEY = "language"

LANGUAGES = OrderedDict([
    ("en", {"name": "English", "native_name": "English"}),
    ("es", {"name": "Spanish", "native_name": "Español"}),
])

_strings: Dict[str, str] = {}
_english: Dict[str, str] = {}
_language = DEFAULT_LANGUAGE


def _catalog_path(code: str) -> Path:
    base = Path(sys._MEIPASS) / "i18n" if getattr(sys, "frozen", False) else Path(__file__).parent
    return base / f"{code}.json"


def _load_catalog(code: str) -> Dict[str, str]:
    path = _catalog_path(code)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.warning("No translation catalog for %r", code)
        return {}
    except json.JSONDecodeError:
        logger.exception("Translation catalog %s is not valid JSON", path)
        return {}
    return {k: v for k, v in data.items() if isinstance(v, str)}


def stored_language() -> str:
    """The language to start in: RETINASCAN_LANGUAGE, then the saved choice."""
    code = os.environ.get(ENV_LANGUAGE) or get_settings().value(SETTINGS_KEY, DEFAULT_LANGUAGE)
    return code if code in LANGUAGES else DEFAULT_LANGUAGE


def init(language: Optional[str] = None):
    """Load catalogs. Without an explicit language the stored preference is used."""
    global _strings, _english, _language
    code = language if language is not None else stored_language()
    _language = code if code in LANGUAGES else DEFAULT_LANGUAGE

    _english = _load_catalog(DEFAULT_LANGUAGE)
    _strings = _english if _language == DEFAULT_LANGUAGE else _load_catalog(_language)
    logger.debug("Translations loaded for %s (%d strings)", _language, len(_strings))


def t(key: str, **kwargs) -> str:
    """Look up a string, falling back to English and then to the key itself."""
    text = _strings.get(key) or _english.get(key) or key
    if not kwargs:
        return text
    try:
        return text.format(**kwargs)
    except (KeyError, IndexError, ValueError):
        logger.warning("Bad placeholders in translation %r", key)
        return text


def language_label(code: str) -> str:
    info = LANGUAGES[code]
    return f"{info['native_name']} ({info['name']})"


def get_current_language() -> str:
    return _language


def set_language(code: str):
    """Save the preferred language. It applies from the next start."""
    if code not in LANGUAGES:
        raise ValueError(f"Unsupported language: {code}")
    get_settings().setValue(SETTINGS_KEY, code)
