"""
Message catalogs for validation errors.

Catalogs are JSON files named `<lang>.json`. The bundled ones live in
`fast_rules/lang/`; a directory given by `FAST_RULES_LANG_PATH` (or
`set_lang_path()`) is read on top of them, so applications can override
single messages or ship extra languages.

Usage:
    from fast_rules.core.localization import get_messages, set_messages, make_messages

    get_messages('en')['required']                 # 'The :attribute field is required.'
    set_rule_message('en', 'phone', 'The :attribute phone number is not valid.')
    messages = make_messages('es')                 # renderer bound to the Spanish catalog
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Dict, Any, Optional

from fast_rules.core.messages import Messages

# Module state
_translations: Dict[str, Dict[str, Any]] = {}
_BUNDLED_LANG_PATH = Path(__file__).resolve().parent.parent / 'lang'
_LANG_PATH: Optional[str] = os.getenv('FAST_RULES_LANG_PATH')
_LANG_FALLBACK = 'en'


def _read_catalog(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open(encoding='utf-8') as f:
            return json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logging.warning(f"[LANG] Could not read message catalog {path}: {e}")
        return {}


def _load_locale(lang: str) -> Dict[str, Any]:
    """Load and cache the catalog of a language. Idempotent."""
    if lang in _translations:
        return _translations[lang]

    translations = _read_catalog(_BUNDLED_LANG_PATH / f"{lang}.json")
    if _LANG_PATH:
        translations.update(_read_catalog(Path(_LANG_PATH) / f"{lang}.json"))

    if lang != _LANG_FALLBACK:
        translations = {**_load_locale(_LANG_FALLBACK), **translations} if translations else {}

    _translations[lang] = translations
    return translations


def get_messages(lang: str) -> Dict[str, Any]:
    """The catalog for `lang`, falling back to English when the language is unknown."""
    translations = _load_locale(lang)
    if not translations and lang != _LANG_FALLBACK:
        logging.debug(f"[LANG] No catalog for `{lang}`, using `{_LANG_FALLBACK}`")
        return _load_locale(_LANG_FALLBACK)
    return translations


def set_messages(lang: str, messages: Dict[str, Any]) -> None:
    """Set messages of `lang`. Keys missing from `messages` keep their current template."""
    _translations[lang] = {**get_messages(lang), **messages}


def set_rule_message(lang: str, rule_name: str, message: Optional[str] = None) -> None:
    """Register the template of a custom rule. Without a message the catalog's `def` is used."""
    translations = get_messages(lang)
    if translations is not _translations.get(lang):
        translations = dict(translations)
        _translations[lang] = translations
    translations[rule_name] = message if message is not None else translations.get('def')


def make_messages(lang: str) -> Messages:
    """Create a renderer bound to a private copy of the catalog of `lang`."""
    return Messages(lang, copy.deepcopy(get_messages(lang)))


def clear_cache() -> None:
    """Clear catalog cache, dropping messages registered at runtime."""
    _translations.clear()


def set_lang_path(path: Optional[str]) -> None:
    """Override the directory of application catalogs at runtime."""
    global _LANG_PATH
    _LANG_PATH = path
    clear_cache()
