"""Built-in rule definitions and the rule manager."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from .declarative import DeclarativeResourceRule, RuleDefinitionError, create_rule

logger = logging.getLogger('localization_toolkit.rules')

DOCS_URL = 'https://github.com/iLib-js/ilib-mono/blob/main/packages/ilib-lint/docs/'
JS_DOCS_URL = 'https://github.com/iLib-js/ilib-mono/blob/main/packages/ilib-lint-javascript/docs/'

# characters in the Japanese scripts and in Latin-1 used by the spacing rules
_CJK = r'[\u3040-\u309F\u30A0-\u30FF\u4E00-\u9FAF]'
_SINGLE_BYTE = r'[\x00-\x20\x30-\x39\x41-\x5A\x61-\x7A\x8A\x8C\x8E\x9A\x9C\x9E\x9F\xC0-\xD6\xD8-\xF6\xF8-\xFF]'
_FULLWIDTH_PUNCT = r'[\u3001\u3002\u3008-\u3011\u3014-\u301B]'

_DATE_PATTERNS = [
    r'\{years?\}[/\-\. ]\{months?\}[/\-\. ]\{days?\}',
    r'\{[Yy][Yy]([Yy][Yy])?\}[/\-\. ]\{[Mm]{2,4}\}[/\-\. ]\{[Dd][Dd]?\}',
    r'\{months?\}[/\-\. ]\{days?\}[/\-\. ]\{years?\}',
    r'\{months?\} \{days?\}, \{years?\}',
    r'\{[Mm]{2,4}\}[/\-\.]\{[Dd][Dd]?\}[/\-\.]\{[Yy][Yy]([Yy][Yy])?\}',
    r'\{[Mm]{2,4}\} \{[Dd][Dd]?\}, \{[Yy][Yy]([Yy][Yy])?\}',
    r'\{days?\}[/\-\. ]\{months?\}[/\-\. ]\{years?\}',
    r'\{days?\} \{months?\}, \{years?\}',
    r'\{[Dd][Dd]?\}[/\-\.]\{[Mm]{2,4}\}[/\-\.]\{[Yy][Yy]([Yy][Yy])?\}',
    r'\{[Dd][Dd]?\} \{[Mm]{2,4}\}, \{[Yy][Yy]([Yy][Yy])?\}',
    r'\{years?\}[/\-\. ]\{months?\}',
    r'\{[Yy][Yy]([Yy][Yy])?\}[/\-\. ]\{[Mm]{2,4}\}',
    r'\{months?\}[/\-\. ]\{years?\}',
    r'\{months?\}, \{years?\}',
    r'\{[Mm]{2,4}\}[/\-\. ]\{[Yy][Yy]([Yy][Yy])?\}',
    r'\{[Mm]{2,4}\}, \{[Yy][Yy]([Yy][Yy])?\}',
    r'\{months?\}[/\-\. ]\{days?\}',
    r'\{[Mm]{2,4}\}[/\-\. ]\{[Dd][Dd]?\}',
    r'\{days?\}[/\-\. ]\{months?\}',
    r'\{[Dd][Dd]?\}[/\-\. ]\{[Mm]{2,4}\}',
    r'\{hours?\}:\{min(utes?)?\}:\{sec(onds?)?\}',
    r'\{hours?\}:\{min(utes?)?\}',
    r'\{[Hh][Hh]?\}:\{[Mm][Mm]?\}:\{[Ss][Ss]?\}',
    r'\{[Hh][Hh]?\}:\{[Mm][Mm]?\}',
]

BUILTIN_RULES: List[Dict[str, Any]] = [
    {
        'type': 'resource-matcher',
        'name': 'resource-url-match',
        'description': 'Ensure that URLs that appear in the source string are also used in the translated string',
        'note': "URL '{matchString}' from the source string does not appear in the target string",
        'regexps': [r'((https?|github|ftps?|mailto|file|data|irc):\/\/)([\da-zA-Z\.-]+)\.([a-zA-Z\.]{2,6})([\/#\?=%&A-Za-z0-9_\.-]*)*[\/#\?=%&A-Za-z0-9_-]'],
        'link': DOCS_URL + 'resource-url-match.md',
    },
    {
        'type': 'resource-matcher',
        'name': 'resource-named-params',
        'description': 'Ensure that named parameters that appear in the source string are also used in the translated string',
        'note': "The named parameter '{matchString}' from the source string does not appear in the target string",
        'regexps': [r'\{\w+\}'],
        'link': DOCS_URL + 'resource-named-params.md',
    },
    {
        'type': 'resource-matcher',
        'name': 'resource-angular-named-params',
        'description': 'Ensure that named parameters in Angular that appear in the source string are also used in the translated string',
        'note': "The named parameter '{{{matchString}}}' from the source string does not appear in the target string",
        'regexps': [r'\{\{\s*(?P<match>[^}]+?)\s*\}\}'],
        'link': JS_DOCS_URL + 'resource-angular-named-params.md',
    },
    {
        'type': 'resource-matcher',
        'name': 'resource-csharp-numbered-params',
        'description': 'Ensure that numbered parameters in C# that appear in the source string are also used in the translated string',
        'note': "The numbered parameter '{{matchString}}' from the source string does not appear in the target string",
        'regexps': [r'\{\s*(?P<match>\d[^}]*?)\s*\}'],
        'link': JS_DOCS_URL + 'resource-csharp-numbered-params.md',
    },
    {
        'type': 'resource-matcher',
        'name': 'resource-tap-named-params',
        'description': 'Ensure that named parameters in Tap I18n that appear in the source string are also used in the translated string',
        'note': "The named parameter '__{matchString}__' from the source string does not appear in the target string",
        'regexps': [r'__(?P<match>[a-zA-Z_][a-zA-Z0-9_.]*?)__'],
        'link': DOCS_URL + 'resource-tap-named-params.md',
    },
    {
        'type': 'resource-target',
        'name': 'resource-no-fullwidth-latin',
        'description': 'Ensure that the target does not contain any full-width Latin characters.',
        'note': "The full-width characters '{matchString}' are not allowed in the target string. Use ASCII letters instead.",
        'regexps': [r'[\uFF21-\uFF3A\uFF41-\uFF5A]+'],
        'link': DOCS_URL + 'resource-no-fullwidth-latin.md',
    },
    {
        'type': 'resource-target',
        'name': 'resource-no-fullwidth-digits',
        'description': 'Ensure that the target does not contain any full-width digits.',
        'note': "The full-width characters '{matchString}' are not allowed in the target string. Use ASCII digits instead.",
        'regexps': [r'[\uFF10-\uFF19]+'],
        'link': DOCS_URL + 'resource-no-fullwidth-digits.md',
    },
    {
        'type': 'resource-target',
        'name': 'resource-no-fullwidth-punctuation-subset',
        'description': 'Ensure that the target does not contain specific full-width punctuation: percent sign, question mark, or exclamation mark.',
        'note': "The full-width characters '{matchString}' are not allowed in the target string. Use ASCII symbols instead.",
        'regexps': [r'[\uFF01\uFF05\uFF1F]+'],
        'link': DOCS_URL + 'resource-no-fullwidth-punctuation-subset.md',
        'locales': 'ja',
    },
    {
        'type': 'resource-target',
        'name': 'resource-no-space-between-double-and-single-byte-character',
        'description': 'Ensure that the target does not contain a space character between a double-byte and single-byte character.',
        'note': 'The space character is not allowed in the target string between a double- and single-byte character. Remove the space character.',
        'regexps': [_CJK + r'\s+' + _SINGLE_BYTE + '|' + _SINGLE_BYTE + r'\s+' + _CJK],
        'link': DOCS_URL + 'resource-no-space-between-double-and-single-byte-character.md',
        'severity': 'warning',
        'locales': 'ja',
    },
    {
        'type': 'resource-target',
        'name': 'resource-apostrophe',
        'description': 'Ensure that the target uses proper Unicode apostrophes instead of ASCII straight quotes.',
        'note': 'The word "{matchString}" contains an ASCII straight quote used as an apostrophe. Use the Unicode apostrophe character instead.',
        'regexps': [r"([^\W\d_]+('[^\W\d_]+)+)"],
        'link': DOCS_URL + 'resource-apostrophe.md',
    },
    {
        'type': 'resource-target',
        'name': 'resource-no-halfwidth-kana-characters',
        'description': 'Ensure that the target does not contain half-width kana characters.',
        'note': 'The half-width kana characters are not allowed in the target string. Use full-width characters.',
        'regexps': [r'[\uFF67-\uFF9D\uFF9E\uFF9F]+'],
        'link': DOCS_URL + 'resource-no-halfwidth-kana-characters.md',
        'severity': 'warning',
    },
    {
        'type': 'resource-target',
        'name': 'resource-no-double-byte-space',
        'description': 'Ensure that the target does not contain double-byte space characters.',
        'note': 'Double-byte space characters should not be used in the target string. Use ASCII symbols instead.',
        'regexps': [r'[\u1680\u2000-\u200A\u2028\u2029\u202F\u205F\u3000]+'],
        'link': DOCS_URL + 'resource-no-double-byte-space.md',
        'severity': 'warning',
        'locales': 'ja',
    },
    {
        'type': 'resource-target',
        'name': 'resource-no-space-with-fullwidth-punctuation',
        'description': 'Ensure that there is no whitespace adjacent to the fullwidth punctuation characters.',
        'note': "There should be no space adjacent to fullwidth punctuation characters '{matchString}'. Remove it.",
        'regexps': [r'(\s+' + _FULLWIDTH_PUNCT + '|' + _FULLWIDTH_PUNCT + r'\s+)'],
        'link': DOCS_URL + 'resource-no-space-with-fullwidth-punctuation.md',
        'severity': 'warning',
        'locales': 'ja',
    },
    {
        'type': 'resource-target',
        'name': 'resource-no-escaped-curly-braces',
        'description': 'Ensure that there are no replacement variables surrounded by single quotes which escape them in the target strings.',
        'note': 'There should be no escaped replacement parameters in the translation. Use quotes that are native for the target language or use tripled single-quotes instead.',
        'regexps': [r"(?:^|[^'])(?P<match>''?\{.*?\}''?)"],
        'link': DOCS_URL + 'resource-no-escaped-curly-braces.md',
        'use_stripped': False,
    },
    {
        'type': 'resource-source',
        'name': 'source-no-escaped-curly-braces',
        'description': 'Ensure that there are no replacement variables surrounded by single quotes which escape them in the source strings.',
        'note': 'There should be no escaped replacement parameters. Use Unicode quotes ‘like this’ (U+2018 and U+2019) or double quotes instead.',
        'regexps': [r"(?:^|[^'])(?P<match>''?\{.*?\}''?)"],
        'link': DOCS_URL + 'source-no-escaped-curly-braces.md',
        'use_stripped': False,
    },
    {
        'type': 'resource-source',
        'name': 'source-no-dashes-in-replacement-params',
        'description': 'Ensure that source strings do not contain dashes in the replacement parameters.',
        'note': 'Dashes are not allowed in replacement parameters. Use a different character such as underscore.',
        'regexps': [r"(?:^|[^'])(?P<match>\{[^}]*?-[^}]*\})"],
        'link': DOCS_URL + 'source-no-dashes-in-replacement-params.md',
    },
    {
        'type': 'resource-source',
        'name': 'source-no-lazy-plurals',
        'description': 'Ensure that source strings do not contain the (s) construct to indicate a possible plural. That is not translatable to many languages.',
        'note': 'The (s) construct is not allowed in source strings. Use real plural syntax instead.',
        'regexps': [r'(?P<match>\w+\(s\))(?:\s|[^\w\s]|$)'],
        'link': DOCS_URL + 'source-no-lazy-plurals.md',
        'severity': 'warning',
    },
    {
        'type': 'resource-source',
        'name': 'source-no-manual-percentage-formatting',
        'description': 'Ensure that source strings do not contain percentage formatting. Percentages should be formatted using a locale-sensitive number formatter instead.',
        'note': 'Do not format percentages in English strings. Use a locale-sensitive number formatter and substitute the result of that into this string.',
        'regexps': [r'(?P<match>\{[\w_.$0-9]+\}\s*%)(\s|$)'],
        'link': DOCS_URL + 'source-no-manual-percentage-formatting.md',
        'severity': 'warning',
    },
    {
        'type': 'resource-source',
        'name': 'source-no-noun-replacement-params',
        'description': 'Ensure that source strings do not contain replacement parameters that are nouns or adjectives.',
        'note': 'Do not substitute nouns into UI strings. Use separate strings for each noun instead.',
        'regexps': [r'\b(?P<match>([Aa][Nn]?|[Tt][Hh][Ee])\s+\{.*?\})'],
        'link': DOCS_URL + 'source-no-noun-replacement-params.md',
        'use_stripped': False,
    },
    {
        'type': 'resource-source',
        'name': 'source-no-manual-currency-formatting',
        'description': 'Ensure that source strings do not contain currency formatting. Currencies should be formatted using a locale-sensitive number formatter instead.',
        'note': 'Do not format currencies in English strings. Use a locale-sensitive number formatter and substitute the result of that into this string.',
        'regexps': [r'(?P<match>\$\s*\{[\w_.$0-9]+\})'],
        'link': DOCS_URL + 'source-no-manual-currency-formatting.md',
    },
    {
        'type': 'resource-source',
        'name': 'source-no-manual-date-formatting',
        'description': 'Ensure that source strings do not contain manually formatted dates or times. Dates and times should be formatted using a locale-sensitive date formatter instead.',
        'note': 'Do not format dates or times in English strings. Use a locale-sensitive date formatter and substitute the result of that into this string.',
        'regexps': _DATE_PATTERNS,
        'link': DOCS_URL + 'source-no-manual-date-formatting.md',
    },
]


def get_builtin_definition(name: str) -> Optional[Dict[str, Any]]:
    """Return the built-in definition with the given name."""
    for definition in BUILTIN_RULES:
        if definition['name'] == name:
            return definition
    return None


class RuleManager:
    """
    Registry of rule definitions.

    Holds the built-in definitions plus any custom ones from the config
    file. A custom definition with a built-in name replaces the built-in.
    """

    def __init__(self, custom_rules: Optional[Iterable[Dict[str, Any]]] = None):
        self._definitions: Dict[str, Dict[str, Any]] = {
            definition['name']: definition for definition in BUILTIN_RULES
        }
        for definition in custom_rules or []:
            self.add_definition(definition)

    def add_definition(self, definition: Dict[str, Any]) -> None:
        """
        Register a rule definition.

        Raises:
            RuleDefinitionError: If the definition has no name
        """
        name = definition.get('name') if isinstance(definition, dict) else None
        if not name:
            raise RuleDefinitionError("Rule definition has no name")
        if name in self._definitions:
            logger.debug("Rule %s overrides an existing definition", name)
        self._definitions[name] = definition

    def get_names(self) -> List[str]:
        return list(self._definitions)

    def get_definition(self, name: str) -> Optional[Dict[str, Any]]:
        return self._definitions.get(name)

    def get_rule(self, name: str) -> DeclarativeResourceRule:
        """
        Create a rule instance by name.

        Raises:
            KeyError: If no rule with that name is registered
            RuleDefinitionError: If the definition is invalid
        """
        definition = self._definitions.get(name)
        if definition is None:
            raise KeyError(f"Unknown rule: {name}")
        return create_rule(definition)

    def get_rules(self, names: Optional[Iterable[str]] = None) -> List[DeclarativeResourceRule]:
        """Create the named rules, or all registered rules when no names are given."""
        names = list(names) if names else self.get_names()
        return [self.get_rule(name) for name in names]
