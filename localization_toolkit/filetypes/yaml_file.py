"""YAML resource file adapter.

Nested mappings are flattened to dotted keys (``menu.file.open``); a
literal dot inside a key is escaped as ``\\.``. Only values that look like
human-readable text are extracted.
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .base import FileTypeAdapter
from ..core.locale import get_language
from ..core.translation_unit import TranslationUnit

logger = logging.getLogger('localization_toolkit.yaml')

# languages where a single "word" may be a whole sentence
_NO_SPACE_LANGUAGES = frozenset(['zh', 'ja', 'ko', 'th'])

BAD_START_PUNCT = frozenset('~!@#$^*_=+|:;.?/<>,')
BAD_MIDDLE_PUNCT = frozenset('~!@#$%^*_=+|:;.?/<>,"')
BAD_END_PUNCT = frozenset('~@#$^*_=+|/<>,')

_LATIN_LETTER = re.compile(r'[a-zA-Z]')
_DIGIT = re.compile(r'[0-9]')
_CAMEL_CASE = re.compile(r'[A-Z].*[a-z].*[A-Z]')
_WHITESPACE = re.compile(r'\s+')

CHANGED_SOURCE_NOTE = (
    'The source string has changed. Please update the translation to match '
    'if necessary. Previous source: "{previous}"'
)


def normalize_key(prefix: Optional[str], key: Any) -> str:
    """Append a key segment to a dotted prefix, escaping dots in the segment."""
    segment = str(key).replace('.', '\\.')
    return f'{prefix}.{segment}' if prefix else segment


def clean_string(text: Optional[str]) -> str:
    """Normalize text for comparing a source string with a stored one."""
    if text is None:
        return ''
    return _WHITESPACE.sub(' ', str(text)).strip().lower()


class YamlFile(FileTypeAdapter):
    """
    Adapter for YAML resource files (Rails style ``en-US.yml`` and similar).

    Usage:
        source = YamlFile('config/locales/en-US.yml', project='webapp')
        units = source.extract()

        translations = {unit.key: unit for unit in xliff.get_translation_units()}
        text = source.localize_text(translations, 'de-DE')
    """

    datatype = 'x-yaml'

    def __init__(
        self,
        path_name: str,
        project: Optional[str] = None,
        source_locale: str = 'en-US',
        locale: Optional[str] = None,
        flavor: Optional[str] = None,
        datatype: Optional[str] = None,
        excluded_keys: Sequence[str] = (),
        comment_prefix: Optional[str] = None,
        check_translatability: bool = True,
    ):
        """
        Create an adapter for one file.

        Args:
            path_name: Path of the YAML file
            project: Project name stored on extracted units
            source_locale: Locale of the source strings
            locale: Locale of this file, defaults to the source locale
            flavor: Flavor stored on extracted units
            datatype: Datatype stored on extracted units
            excluded_keys: Keys whose values (and children) are never extracted
            comment_prefix: Only comments starting with this prefix become
                translator notes; the prefix is removed
            check_translatability: Skip values that do not look like text
        """
        super().__init__(path_name, project, source_locale, locale, flavor)
        if datatype:
            self.datatype = datatype
        self.excluded_keys = set(excluded_keys or ())
        self.comment_prefix = comment_prefix
        self.check_translatability = check_translatability

        self.content: Any = None
        self.comments: Dict[str, str] = {}
        self._resource_index = 0

    def get_extensions(self) -> List[str]:
        return ['.yml', '.yaml']

    def is_translatable(self, value: Any) -> bool:
        """
        Guess whether a scalar is user-visible text.

        Anything with a space is text. A single word must be 4-20
        characters, free of code-like punctuation and digits, contain a
        Latin letter and not be CamelCase.
        """
        if not self.check_translatability:
            return True
        if not value or not isinstance(value, str):
            return False
        if get_language(self.locale) in _NO_SPACE_LANGUAGES or ' ' in value:
            return True

        if len(value) < 4 or len(value) > 20:
            return False

        if value[0] in BAD_START_PUNCT or value[-1] in BAD_END_PUNCT:
            return False
        if any(char in BAD_MIDDLE_PUNCT for char in value[1:-1]):
            return False

        if not _LATIN_LETTER.search(value) or _DIGIT.search(value):
            return False

        return not _CAMEL_CASE.search(value)

    # ------------------------------------------------------------------
    # comments

    def _collect_comments(self, text: str) -> None:
        self.comments = {}
        root = yaml.compose(text, Loader=yaml.SafeLoader)
        if root is None:
            return
        lines = text.splitlines()
        self._walk_comments(None, root, lines)

    def _comment_above(self, lines: List[str], line_number: int) -> Optional[str]:
        comment_lines = []
        index = line_number - 1
        while index >= 0 and lines[index].strip().startswith('#'):
            comment_lines.insert(0, lines[index].strip()[1:].strip())
            index -= 1
        return '\n'.join(comment_lines) if comment_lines else None

    def _walk_comments(self, prefix: Optional[str], node, lines: List[str]) -> None:
        if isinstance(node, yaml.MappingNode):
            for key_node, value_node in node.value:
                key = normalize_key(prefix, key_node.value)
                comment = self._comment_above(lines, key_node.start_mark.line)
                if comment:
                    self.comments[key] = comment
                self._walk_comments(key, value_node, lines)
        elif isinstance(node, yaml.SequenceNode):
            for index, item in enumerate(node.value):
                key = normalize_key(prefix, index)
                comment = self._comment_above(lines, item.start_mark.line)
                if comment:
                    self.comments[key] = comment
                self._walk_comments(key, item, lines)

    def _comment_for(self, key: str) -> Optional[str]:
        comment = self.comments.get(key)
        if comment is None:
            return None
        comment = comment.strip()
        if self.comment_prefix:
            if not comment.startswith(self.comment_prefix):
                return None
            return comment[len(self.comment_prefix):].strip()
        return comment

    # ------------------------------------------------------------------
    # extraction

    def parse(self, text: str, source_units: Optional[Dict[str, TranslationUnit]] = None) -> List[TranslationUnit]:
        """
        Parse YAML text into translation units.

        Files in the source locale produce source-only units. Localized
        files produce units carrying a target; each string is paired with
        the source unit of the same key and strings without one are skipped.

        Raises:
            yaml.YAMLError: If the text is not valid YAML
        """
        self.units = []
        self._resource_index = 0
        self.content = yaml.safe_load(text)
        self._collect_comments(text)
        if isinstance(self.content, (dict, list)):
            self._parse_node(None, self.content, True, source_units or {})
        logger.debug("Extracted %d strings from %s", len(self.units), self.path_name)
        return self.get_units()

    def _items(self, node):
        if isinstance(node, dict):
            return node.items()
        return enumerate(node)

    def _parse_node(self, prefix: Optional[str], node: Any, localize: bool,
                    source_units: Dict[str, TranslationUnit]) -> None:
        for name, value in self._items(node):
            key = normalize_key(prefix, name)
            excluded = str(name) in self.excluded_keys

            if isinstance(value, (dict, list)):
                self._parse_node(key, value, localize and not excluded, source_units)
                continue
            if not localize or excluded or not self.is_translatable(value):
                continue

            unit = self._make_unit(key, value, source_units)
            if unit is not None:
                self.units.append(unit)

    def _make_unit(self, key: str, value: str,
                   source_units: Dict[str, TranslationUnit]) -> Optional[TranslationUnit]:
        fields = {
            'key': key,
            'file': self.path_name,
            'project': self.project,
            'res_type': 'string',
            'datatype': self.datatype,
            'comment': self._comment_for(key),
            'index': self._resource_index,
        }
        self._resource_index += 1

        if self.is_source_locale() or self.flavor:
            return TranslationUnit(
                source=value,
                source_locale=self.locale,
                flavor=self.flavor,
                **fields
            )

        source_unit = source_units.get(key)
        if source_unit is None:
            logger.debug("No source string for %s in %s, skipping", key, self.path_name)
            return None
        return TranslationUnit(
            source=source_unit.source,
            source_locale=self.source_locale,
            target=value,
            target_locale=self.locale,
            **fields
        )

    # ------------------------------------------------------------------
    # localization

    def localize_text(self, translations: Dict[str, TranslationUnit], locale: str) -> str:
        """
        Rebuild the parsed document with translated strings.

        Strings without a usable translation keep their source text and are
        recorded in ``new_units`` so they can be sent for translation.

        Args:
            translations: Translated units by key
            locale: Target locale

        Returns:
            YAML text with keys sorted
        """
        if not isinstance(self.content, (dict, list)):
            return ''
        self._resource_index = 0
        localized = self._localize_node(None, self.content, translations, locale, True)
        return yaml.safe_dump(localized, sort_keys=True, allow_unicode=True, default_flow_style=False)

    def _localize_node(self, prefix, node, translations, locale, localize):
        if isinstance(node, dict):
            result = {}
        else:
            result = [None] * len(node)

        for name, value in self._items(node):
            key = normalize_key(prefix, name)
            excluded = str(name) in self.excluded_keys

            if isinstance(value, (dict, list)):
                result[name] = self._localize_node(key, value, translations, locale, localize and not excluded)
            elif localize and not excluded and self.is_translatable(value):
                result[name] = self._translate(key, value, translations, locale)
            else:
                result[name] = value

        return result

    def _translate(self, key: str, value: str, translations: Dict[str, TranslationUnit], locale: str) -> str:
        translated = translations.get(key)
        if translated and translated.target and clean_string(translated.source) == clean_string(value):
            return translated.target

        note = CHANGED_SOURCE_NOTE.format(previous=translated.source) if translated else None
        self.new_units.append(TranslationUnit(
            source=value,
            key=key,
            file=self.path_name,
            project=self.project,
            source_locale=self.source_locale,
            target=(translated.target if translated else None) or value,
            target_locale=locale,
            res_type='string',
            datatype=self.datatype,
            flavor=self.flavor,
            state='new',
            comment=note,
            index=self._resource_index,
        ))
        self._resource_index += 1
        logger.debug("Missing translation for %s (%s)", key, locale)
        return value

    def get_localized_path(self, locale: str) -> str:
        """
        Map the source path to the path of a localized copy.

        ``a/b/en-US.yml`` becomes ``a/b/de-DE.yml``; any other file name is
        placed in a locale directory next to the source (``a/b/de-DE/strings.yml``).
        """
        path = Path(self.path_name)
        if path.stem == self.source_locale:
            return str(path.with_name(locale + path.suffix))
        return str(path.parent / locale / path.name)
