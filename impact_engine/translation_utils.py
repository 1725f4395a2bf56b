"""
Localized strings for display sentences and threshold labels.

Catalogs live in impact_engine/translations/<language>.json and are read the
first time a language is used. Keys use dot notation ('display.fireball.size').
A key missing from the requested language falls back to English, then to the
fallback text supplied by the caller.

set_language changes a process-wide default shared by every caller. Hosts that
serve several users at once should pass language= on each call instead; the
engine threads that argument through every display and label lookup.
"""

import json
import logging
import os

logger = logging.getLogger(__name__)

TRANSLATIONS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'translations')
DEFAULT_LANGUAGE = 'en'

available_languages = ['en', 'el']
current_language = DEFAULT_LANGUAGE

# language -> parsed catalog
translations = {}


def load_translations(language=DEFAULT_LANGUAGE):
    """
    Read (or re-read) the catalog for one language.

    Args:
        language (str): Language code; unsupported codes load English

    Returns:
        dict: The parsed catalog, empty when the file is missing or malformed
    """
    if language not in available_languages:
        logger.warning("Language %s not supported, loading %s instead", language, DEFAULT_LANGUAGE)
        language = DEFAULT_LANGUAGE

    path = os.path.join(TRANSLATIONS_DIR, f'{language}.json')
    try:
        with open(path, 'r', encoding='utf-8') as f:
            catalog = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.warning("Could not load translations for %s: %s", language, e)
        catalog = {}

    translations[language] = catalog
    return catalog


def _catalog(language):
    if language not in translations:
        return load_translations(language)
    return translations[language]


def _lookup(catalog, keys):
    node = catalog
    for key in keys:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node if isinstance(node, str) else None


def set_language(language):
    """
    Switch the process-wide default language; False when it is not supported.

    Affects every later call that omits language=, in every thread. Prefer the
    per-call argument when requests in different languages can overlap.
    """
    global current_language

    if language not in available_languages:
        logger.warning("Language %s not supported", language)
        return False

    _catalog(language)
    current_language = language
    return True


def get_translation(key_path, fallback='', language=None):
    """
    Look up a dotted key.

    Args:
        key_path (str): e.g. 'display.fireball.size'
        fallback (str): Returned when neither the language nor English has the key
        language (str): Per-call language; the process default when None

    Returns:
        str: Translated text or fallback
    """
    language = language or current_language
    if language not in available_languages:
        language = DEFAULT_LANGUAGE

    keys = key_path.split('.')
    for candidate in dict.fromkeys((language, DEFAULT_LANGUAGE)):
        text = _lookup(_catalog(candidate), keys)
        if text is not None:
            return text
    return fallback


def format_translation(key_path, fallback='', language=None, **values):
    """Translate a template and fill its {placeholders} from keyword arguments."""
    return get_translation(key_path, fallback, language).format(**values)


def get_available_languages():
    return list(available_languages)


def get_current_language():
    return current_language


_catalog(DEFAULT_LANGUAGE)
