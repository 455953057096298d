"""Locale tag helpers."""

import re
from typing import Optional

_SEPARATOR = re.compile(r'[-_]')

# languages written without spaces between words
_ASIAN_LANGUAGES = frozenset(['zh', 'ja', 'th'])


def get_language(spec: Optional[str]) -> Optional[str]:
    """Return the lower-cased language subtag of a locale spec."""
    if not spec:
        return None
    language = _SEPARATOR.split(spec)[0]
    return language.lower() if language.isalpha() else None


def get_script(spec: Optional[str]) -> Optional[str]:
    """Return the title-cased script subtag (``Hans``) if the spec has one."""
    if not spec:
        return None
    for part in _SEPARATOR.split(spec)[1:]:
        if len(part) == 4 and part.isalpha():
            return part.title()
    return None


def get_lang_spec(spec: Optional[str]) -> Optional[str]:
    """
    Return the language-script part of a locale.

    ``zh-Hans-CN`` becomes ``zh-Hans``, ``de-DE`` becomes ``de``.
    """
    language = get_language(spec)
    if not language:
        return None
    script = get_script(spec)
    return f'{language}-{script}' if script else language


def is_asian_locale(spec: Optional[str]) -> bool:
    """True for locales whose script does not separate words with spaces."""
    return get_language(spec) in _ASIAN_LANGUAGES
