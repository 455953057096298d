"""Declarative regular-expression rules.

A declarative rule is built from a plain mapping (usually from the config
file or the built-in table) instead of code:

    {
        'name': 'resource-named-params',
        'description': 'Ensure that named parameters ...',
        'note': "The named parameter '{matchString}' ...",
        'regexps': [r'\\{\\w+\\}'],
        'severity': 'error',
        'link': 'https://...',
        'locales': ['ja'],
    }

``note`` is the per-result message; ``{matchString}`` in it is replaced by
the offending text. A pattern may define a named group ``match`` to report
only part of what it matched.
"""

import logging
import re
from typing import Any, Dict, Iterator, List, Optional, Pattern, Tuple

from .plurals import strip_plurals
from .result import Result
from ..core.locale import get_lang_spec, get_language
from ..core.resource import AnyResource
from ..utils.validators import REQUIRED_RULE_FIELDS

logger = logging.getLogger('localization_toolkit.rules')

MATCH_PLACEHOLDER = '{matchString}'


class RuleDefinitionError(ValueError):
    """Raised for a rule definition that is incomplete or has a bad pattern."""


def scan(pattern: Pattern, text: Optional[str]) -> Iterator[Tuple[str, int, int]]:
    """
    Yield every non-overlapping match of a pattern.

    Args:
        pattern: Compiled pattern, optionally with a ``match`` group
        text: Text to scan

    Yields:
        (matched text, start, end) using the ``match`` group when it took part
    """
    if not text:
        return
    has_group = 'match' in pattern.groupindex
    for found in pattern.finditer(text):
        if has_group and found.group('match') is not None:
            yield found.group('match'), found.start('match'), found.end('match')
        else:
            yield found.group(0), found.start(), found.end()


def _locale_set(value) -> Optional[frozenset]:
    if not value:
        return None
    if isinstance(value, str):
        value = [value]
    return frozenset(get_lang_spec(spec) for spec in value)


def _label(side: str, index: Optional[int], category: Optional[str]) -> str:
    if index is not None:
        return f'{side}[{index}]'
    if category is not None:
        return f'{side}({category})'
    return side


class DeclarativeResourceRule:
    """Base class for rules configured by a definition mapping."""

    rule_type: Optional[str] = None

    def __init__(self, definition: Dict[str, Any]):
        """
        Build a rule from its definition.

        Args:
            definition: Rule definition mapping

        Raises:
            RuleDefinitionError: If a required field is missing or a pattern does not compile
        """
        if not isinstance(definition, dict):
            raise RuleDefinitionError("Rule definition must be a mapping")

        missing = [name for name in REQUIRED_RULE_FIELDS if not definition.get(name)]
        if missing:
            raise RuleDefinitionError(
                f"Missing required fields for rule {definition.get('name', '<unnamed>')!r}: "
                f"{', '.join(missing)}"
            )

        self.name: str = definition['name']
        self.description: str = definition['description']
        self.note: str = definition['note']
        self.link: Optional[str] = definition.get('link')
        self.source_locale: str = definition.get('source_locale') or definition.get('sourceLocale') or 'en-US'
        self.severity: str = definition.get('severity') or 'error'

        use_stripped = definition.get('use_stripped', definition.get('useStripped'))
        self.use_stripped: bool = use_stripped if isinstance(use_stripped, bool) else True

        regexps = definition['regexps']
        if isinstance(regexps, str):
            regexps = [regexps]
        try:
            self.patterns: List[Pattern] = [re.compile(regexp) for regexp in regexps]
        except re.error as e:
            raise RuleDefinitionError(f"Rule {self.name!r} has an invalid regular expression: {e}") from e

        # locales wins when both are given
        self.locales = _locale_set(definition.get('locales'))
        self.skip_locales = None if self.locales else _locale_set(definition.get('skip_locales') or definition.get('skipLocales'))

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.name!r})'

    def get_rule_type(self) -> Optional[str]:
        return self.rule_type

    def applies_to_locale(self, locale: Optional[str]) -> bool:
        """Check the rule's locale filters against a target locale."""
        if not self.locales and not self.skip_locales:
            return True
        candidates = {get_lang_spec(locale), get_language(locale)}
        if self.locales:
            return bool(candidates & self.locales)
        return not candidates & self.skip_locales

    def _text(self, text: Optional[str]) -> Optional[str]:
        return strip_plurals(text) if self.use_stripped else text

    def _description(self, match: str) -> str:
        return self.note.replace(MATCH_PLACEHOLDER, match)

    def _result(self, resource: AnyResource, file: Optional[str], source, highlight: str,
                match: str, locale: Optional[str]) -> Result:
        return Result(
            severity=self.severity,
            id=resource.key,
            source=source,
            rule=self,
            path_name=file or resource.path_name,
            highlight=highlight,
            description=self._description(match),
            locale=locale,
            line_number=resource.line_number,
        )

    def check_string(self, pattern: Pattern, source: Optional[str], target: Optional[str],
                     file: Optional[str], resource: AnyResource,
                     index: Optional[int] = None, category: Optional[str] = None) -> List[Result]:
        raise NotImplementedError

    def match_string(self, source: Optional[str], target: Optional[str], file: Optional[str],
                     resource: AnyResource, index: Optional[int] = None,
                     category: Optional[str] = None) -> Optional[List[Result]]:
        """
        Check one source/target pair.

        Patterns are tried in order; the first one producing results wins.

        Returns:
            List of results, or None when nothing was found
        """
        if not self.applies_to_locale(resource.target_locale):
            return None

        for pattern in self.patterns:
            results = self.check_string(pattern, source, target, file, resource, index, category)
            if results:
                return results
        return None

    def match(self, locale: Optional[str], resource: AnyResource, file: Optional[str] = None) -> Optional[List[Result]]:
        """
        Check every string of a resource.

        Args:
            locale: Target locale being checked (defaults to the resource's)
            resource: ResourceString, ResourceArray or ResourcePlural
            file: Path reported in results (defaults to the resource's path)

        Returns:
            List of results, or None when nothing was found
        """
        if locale and not self.applies_to_locale(locale):
            return None

        results: List[Result] = []
        res_type = resource.get_type()

        if res_type == 'array':
            length = max(len(resource.source), len(resource.target))
            for index in range(length):
                source = resource.source[index] if index < len(resource.source) else None
                target = resource.target[index] if index < len(resource.target) else None
                results.extend(self.match_string(source, target, file, resource, index=index) or [])
        elif res_type == 'plural':
            categories = resource.target or resource.source
            for category in categories:
                source = resource.source.get(category) or resource.source.get('other')
                target = resource.target.get(category)
                results.extend(self.match_string(source, target, file, resource, category=category) or [])
        else:
            results.extend(self.match_string(resource.source, resource.target, file, resource) or [])

        return results or None


class ResourceMatcher(DeclarativeResourceRule):
    """
    Report source matches that are missing from the target.

    Only presence counts: parameters may be reordered in the target, and a
    value found once in the target satisfies every occurrence in the source.
    """

    rule_type = 'resource-matcher'

    def check_string(self, pattern, source, target, file, resource, index=None, category=None):
        if not source or not target:
            return []

        source_matches = [value for value, _, _ in scan(pattern, self._text(source))]
        if not source_matches:
            return []

        target_matches = {value for value, _, _ in scan(pattern, self._text(target))}
        missing = [value for value in source_matches if value not in target_matches]

        label = _label('Target', index, category)
        return [
            self._result(resource, file, source, f'{label}: {target}<e0></e0>', value, resource.target_locale)
            for value in missing
        ]


class ResourceTargetChecker(DeclarativeResourceRule):
    """Report every occurrence of the pattern in the target."""

    rule_type = 'resource-target'

    def check_string(self, pattern, source, target, file, resource, index=None, category=None):
        text = self._text(target)
        label = _label('Target', index, category)
        return [
            self._result(
                resource, file, source,
                f'{label}: {text[:start]}<e0>{value}</e0>{text[end:]}',
                value, resource.target_locale,
            )
            for value, start, end in scan(pattern, text)
        ]


class ResourceSourceChecker(DeclarativeResourceRule):
    """Report every occurrence of the pattern in the source."""

    rule_type = 'resource-source'

    def check_string(self, pattern, source, target, file, resource, index=None, category=None):
        text = self._text(source)
        label = _label('Source', index, category)
        return [
            self._result(
                resource, file, source,
                f'{label}: {text[:start]}<e0>{value}</e0>{text[end:]}',
                value, resource.source_locale,
            )
            for value, start, end in scan(pattern, text)
        ]


RULE_CLASSES = {
    ResourceMatcher.rule_type: ResourceMatcher,
    ResourceSourceChecker.rule_type: ResourceSourceChecker,
    ResourceTargetChecker.rule_type: ResourceTargetChecker,
}


def create_rule(definition: Dict[str, Any]) -> DeclarativeResourceRule:
    """
    Instantiate the rule class named by a definition's ``type``.

    Definitions without a type are resource matchers.

    Raises:
        RuleDefinitionError: For an unknown type or an invalid definition
    """
    rule_type = definition.get('type', ResourceMatcher.rule_type) if isinstance(definition, dict) else None
    rule_class = RULE_CLASSES.get(rule_type)
    if rule_class is None:
        raise RuleDefinitionError(f"Unknown rule type {rule_type!r}")
    logger.debug("Creating %s rule %s", rule_type, definition.get('name'))
    return rule_class(definition)
