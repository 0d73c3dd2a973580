from __future__ import annotations

"""
Internationalization (i18n) utility module for user-facing messages.

This module provides functionality for:
- Loading message catalogues for every supported language
- Translating message keys (error codes, SMS bodies, confirmations)
- Determining the user language from request headers or query parameters
- Falling back to the default language, then to the key itself

Compiled ``.mo`` files are used when present; the ``.po`` sources are always parsed
with Babel as a secondary lookup so freshly added keys work without a compile step.
"""

import os
from typing import Dict

from babel.messages.pofile import read_po
from babel.support import NullTranslations, Translations
from fastapi import Request

from src.core.config.settings import settings
from src.core.logging import logger

LOCALES_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "../..", "locales"))

_translations: Dict[str, NullTranslations] = {}
_fallback_catalogs: Dict[str, Dict[str, str]] = {}


def setup_i18n(locales_path: str = LOCALES_PATH) -> None:
    """
    Initialize the internationalization system by loading translations.

    Args:
        locales_path: Directory holding ``<lang>/LC_MESSAGES/messages.po`` files.

    Raises:
        FileNotFoundError: If the locales directory is not found.
    """
    if not os.path.exists(locales_path):
        raise FileNotFoundError(f"Locales directory not found: {locales_path}")

    for lang in settings.SUPPORTED_LANGUAGES:
        _translations[lang] = Translations.load(locales_path, [lang], domain="messages")

        catalog: Dict[str, str] = {}
        po_path = os.path.join(locales_path, lang, "LC_MESSAGES", "messages.po")
        if os.path.exists(po_path):
            with open(po_path, "rb") as po_file:
                for message in read_po(po_file, locale=lang):
                    if message.id and isinstance(message.id, str):
                        catalog[message.id] = message.string or message.id

        _fallback_catalogs[lang] = catalog
        logger.info("i18n_initialized", language=lang, entries=len(catalog))

    logger.info("i18n_setup_complete", default_locale=settings.DEFAULT_LANGUAGE)


def get_translated_message(key: str, locale: str = settings.DEFAULT_LANGUAGE, **params) -> str:
    """
    Retrieve a translated message for the given key and locale.

    Args:
        key: The message key to translate.
        locale: The target language code (defaults to DEFAULT_LANGUAGE).
        **params: Values interpolated into the message with ``str.format``.

    Returns:
        The translated message or the original key if no translation exists.
    """
    if locale not in _translations:
        locale = settings.DEFAULT_LANGUAGE

    translation = _translations.get(locale)
    if translation is None:
        return key.format(**params) if params else key

    translated = translation.gettext(key)
    if translated == key:
        translated = _fallback_catalogs.get(locale, {}).get(key, key)
        if translated == key:
            logger.warning("translation_key_not_found", key=key, locale=locale)

    return translated.format(**params) if params else translated


def get_request_language(request: Request) -> str:
    """
    Determine the preferred language from a request.

    Checks language preference in order: query parameter 'lang',
    Accept-Language header, then default language from settings.
    """
    lang = request.query_params.get("lang")
    if lang and lang in settings.SUPPORTED_LANGUAGES:
        return lang

    accept_language = request.headers.get("Accept-Language", settings.DEFAULT_LANGUAGE)
    for lang in accept_language.split(","):
        lang = lang.split(";")[0].strip().split("-")[0]
        if lang in settings.SUPPORTED_LANGUAGES:
            return lang

    return settings.DEFAULT_LANGUAGE
