"""Language selection and translation lookup."""

from typing import Mapping, Optional

from .paths import LANGUAGES

DEFAULT_LANGUAGE = "en"


def negotiate_language(path_lang: Optional[str], accept_languages=None) -> str:
    """Path prefix > Accept-Language > English.

    accept_languages is werkzeug's LanguageAccept (request.accept_languages).
    """
    if path_lang in LANGUAGES:
        return path_lang
    if accept_languages is not None:
        best = accept_languages.best_match(LANGUAGES)
        if best:
            return best
    return DEFAULT_LANGUAGE


def translate(translations: Mapping[str, object], key: str, lang: str) -> str:
    """Dotted-key lookup; a missing or empty entry renders as the key itself."""
    value = translations.get(lang)
    for part in key.split("."):
        if not isinstance(value, dict):
            return key
        value = value.get(part)
    if not value or isinstance(value, (dict, list)):
        return key
    return str(value)
