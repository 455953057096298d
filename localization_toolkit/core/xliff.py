"""XLIFF document engine.

Holds an ordered list of translation units with a dedup index and reads and
writes them as XLIFF 1.2, XLIFF 2.0 or the project-grouped custom 2.0
dialect. Serialization is built by hand so the output is byte-stable.
"""

import enum
import logging
from bisect import bisect_right
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Set, Tuple, Union

from .locale import is_asian_locale
from .translation_unit import Location, TranslationUnit, merge_units
from ..utils.xml_util import (
    XmlElement,
    XmlText,
    get_attribute,
    get_children_by_name,
    get_child_elements,
    get_text,
    parse_xml,
)

logger = logging.getLogger('localization_toolkit.xliff')

DEFAULT_SOURCE_LOCALE = 'en-US'
DEFAULT_VERSION = 1.2
LOCTOOL_NAMESPACE = 'http://ilib-js.com/loctool'
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'
INDENT = '  '

# l: attributes on a 2.0 unit that map to dedicated fields
RESERVED_EXTENSIONS = ('l:datatype', 'l:index', 'l:category', 'l:context')

TOOL_FIELDS = ('tool-id', 'tool-name', 'tool-version', 'tool-company', 'copyright')


class MismatchedTargetLocaleError(ValueError):
    """Raised when a 2.0 document would end up with two target locales."""


class Dialect(enum.Enum):
    """Serialization dialect of a document."""
    V1 = '1.2'
    V2 = '2.0'
    CUSTOM = 'custom'

    @classmethod
    def for_document(cls, version: float, style: str) -> 'Dialect':
        if version < 2:
            return cls.V1
        return cls.CUSTOM if style == 'custom' else cls.V2


@dataclass(frozen=True)
class UnitKey:
    """Identity of a translation unit inside a document."""
    project: str
    context: str
    source_locale: str
    target_locale: str
    key: str
    res_type: str
    file: str
    ordinal: Union[int, str]
    quantity: str
    flavor: str


def escape_attr(value: Optional[str]) -> Optional[str]:
    """
    Escape a value for use inside a double-quoted XML attribute.

    ``>`` is deliberately left alone; existing XLIFF files written by the
    loctool family contain it unescaped and round-trip that way.
    """
    if not value:
        return value
    return (value
            .replace('&', '&amp;')
            .replace('"', '&quot;')
            .replace("'", '&apos;')
            .replace('<', '&lt;'))


def unescape_attr(value: Optional[str]) -> Optional[str]:
    """Reverse escape_attr."""
    if not value:
        return value
    return (value
            .replace('&lt;', '<')
            .replace('&quot;', '"')
            .replace('&apos;', "'")
            .replace('&amp;', '&'))


def escape_text(value: str) -> str:
    """Escape element text content."""
    return value.replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')


def version_string(version: float) -> str:
    """Render a version number the way it appears in the xliff element (2 -> "2.0")."""
    return str(float(version))


def _attribute_value(value: Any) -> str:
    if isinstance(value, bool):
        value = 'true' if value else 'false'
    return escape_attr(str(value))


def _to_int(value: Optional[str]) -> Optional[int]:
    if value is None or value == '':
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _first(elements: Optional[List[XmlElement]]) -> Optional[XmlElement]:
    return elements[0] if elements else None


def _file_key(unit: TranslationUnit) -> Tuple[str, ...]:
    return (
        unit.file or '',
        unit.source_locale or '',
        unit.target_locale or '',
        unit.project or '',
        unit.flavor or '',
    )


def _file_sort_key(key: Tuple[str, ...]) -> Tuple[str, str]:
    """Order <file> blocks by the joined file_source_target_project string."""
    return '_'.join(key[:4]), key[4]


def _numeric_id(unit_id: Any) -> Optional[int]:
    if isinstance(unit_id, bool):
        return None
    try:
        return int(unit_id)
    except (TypeError, ValueError):
        return None


def _explicit_ids(units: List[TranslationUnit]) -> Set[int]:
    """Numeric ids already claimed by units, which auto-numbering must skip."""
    return {numeric for numeric in (_numeric_id(tu.id) for tu in units) if numeric is not None}


def _next_index(unit_id: Any, index: int) -> int:
    """Move the auto-id counter past an explicit numeric id."""
    numeric = _numeric_id(unit_id)
    if numeric is None:
        return index
    return numeric + 1 if numeric >= index else index


class _XmlWriter:
    """Line-oriented writer producing 2-space indented XML."""

    def __init__(self):
        self.lines: List[str] = []

    @staticmethod
    def _tag(name: str, attributes: Optional[Dict[str, Any]]) -> str:
        parts = [name]
        for attr, value in (attributes or {}).items():
            if value is None:
                continue
            parts.append(f'{attr}="{_attribute_value(value)}"')
        return ' '.join(parts)

    def open(self, depth: int, name: str, attributes: Optional[Dict[str, Any]] = None) -> None:
        self.lines.append(f'{INDENT * depth}<{self._tag(name, attributes)}>')

    def close(self, depth: int, name: str) -> None:
        self.lines.append(f'{INDENT * depth}</{name}>')

    def empty(self, depth: int, name: str, attributes: Optional[Dict[str, Any]] = None) -> None:
        self.lines.append(f'{INDENT * depth}<{self._tag(name, attributes)}/>')

    def text(self, depth: int, name: str, text: str, attributes: Optional[Dict[str, Any]] = None) -> None:
        self.lines.append(
            f'{INDENT * depth}<{self._tag(name, attributes)}>{escape_text(text)}</{name}>'
        )

    def getvalue(self) -> str:
        return XML_DECLARATION + '\n'.join(self.lines)


class Xliff:
    """
    An XLIFF document.

    Usage:
        xliff = Xliff(version=2.0, source_locale='en-US')
        xliff.add_translation_unit(TranslationUnit(source='Hello', key='hello',
                                                   target='Hallo', target_locale='de-DE'))
        text = xliff.serialize()

        other = Xliff()
        units = other.deserialize(text)
    """

    def __init__(
        self,
        tool_id: Optional[str] = None,
        tool_name: Optional[str] = None,
        tool_version: Optional[str] = None,
        tool_company: Optional[str] = None,
        copyright: Optional[str] = None,
        path: Optional[str] = None,
        source_locale: Optional[str] = None,
        project: Optional[str] = None,
        allow_dups: bool = False,
        style: Optional[str] = None,
        version: Optional[Union[float, str]] = None,
    ):
        """
        Create an empty document.

        Args:
            tool_id: Tool metadata written to the file header
            tool_name: Tool metadata written to the file header
            tool_version: Tool metadata written to the file header
            tool_company: Tool metadata written to the file header
            copyright: Copyright notice written to the file header
            path: Path of the xliff file this document represents
            source_locale: Default source locale used for unit identity
            project: Default project name
            allow_dups: Keep units with identical identity instead of merging them
            style: "standard" or "custom" (project-grouped 2.0 dialect)
            version: XLIFF version, 1.2 by default

        Raises:
            ValueError: If version is not a number
        """
        self.tool_id = tool_id
        self.tool_name = tool_name
        self.tool_version = tool_version
        self.tool_company = tool_company
        self.copyright = copyright
        self.path = path
        self.source_locale = source_locale or DEFAULT_SOURCE_LOCALE
        self.project = project
        self.allow_dups = bool(allow_dups)
        self.style = style or 'standard'
        self.version = float(version) if version is not None else DEFAULT_VERSION

        self._units: List[TranslationUnit] = []
        self._index: Dict[UnitKey, int] = {}
        self._lines = 0
        self._file_length = 0
        self._line_index: List[int] = []

    # ------------------------------------------------------------------
    # collection

    def _hash_key(self, unit: TranslationUnit, target_locale: Optional[str]) -> UnitKey:
        return UnitKey(
            project=unit.project or '',
            context=unit.context or '',
            source_locale=unit.source_locale or self.source_locale,
            target_locale=target_locale or '',
            key=unit.key or '',
            res_type=unit.res_type or 'string',
            file=unit.file or '',
            ordinal='' if unit.ordinal is None else unit.ordinal,
            quantity=unit.quantity or '',
            flavor=unit.flavor or '',
        )

    def get_version(self) -> float:
        return self.version

    def get_translation_units(self) -> List[TranslationUnit]:
        return list(self._units)

    def size(self) -> int:
        return len(self._units)

    def clear(self) -> None:
        """Remove all units. Configuration is kept."""
        self._units = []
        self._index = {}

    def add_translation_unit(self, unit: TranslationUnit) -> None:
        """
        Add a unit, merging it with an existing unit of the same identity.

        A unit with a target replaces a source-only unit with the same
        identity. A unit whose full identity already exists is merged into
        it unless the document allows duplicates.

        Raises:
            MismatchedTargetLocaleError: For 2.0 documents, when the unit's
                target locale differs from the locale of the first unit
        """
        source_key = self._hash_key(unit, None)
        target_key = self._hash_key(unit, unit.target_locale)

        if unit.target_locale:
            position = self._index.pop(source_key, None)
            if position is not None:
                self._units[position] = merge_units(self._units[position], unit)
                self._index[target_key] = position
                return

        position = self._index.get(target_key)
        if position is not None and not self.allow_dups:
            self._units[position] = merge_units(self._units[position], unit)
            return

        if self.version >= 2 and self._units:
            expected = self._units[0].target_locale
            if expected != unit.target_locale:
                raise MismatchedTargetLocaleError(
                    f"Mismatched target locale: document uses {expected!r}, "
                    f"unit {unit.key!r} has {unit.target_locale!r}"
                )

        self._units.append(unit)
        self._index[target_key] = len(self._units) - 1

    def add_translation_units(self, units) -> None:
        for unit in units:
            self.add_translation_unit(unit)

    def _append_parsed(self, unit: TranslationUnit) -> None:
        # parsed units are kept as found, duplicates included
        self._units.append(unit)
        self._index.setdefault(self._hash_key(unit, unit.target_locale), len(self._units) - 1)

    # ------------------------------------------------------------------
    # serialization

    def _has_tool_info(self) -> bool:
        return any([self.tool_id, self.tool_name, self.tool_version, self.tool_company])

    def _tool_attributes(self) -> Dict[str, Optional[str]]:
        return dict(zip(TOOL_FIELDS, (
            self.tool_id, self.tool_name, self.tool_version, self.tool_company, self.copyright,
        )))

    def _write_header(self, writer: _XmlWriter, depth: int) -> None:
        if self._has_tool_info():
            writer.open(depth, 'header')
            writer.empty(depth + 1, 'tool', self._tool_attributes())
            writer.close(depth, 'header')

    def serialize(self, untranslated: bool = False) -> str:
        """
        Serialize the document in the dialect selected by version and style.

        Args:
            untranslated: Filter the output down to the units that have no
                target yet. Translated units are left out entirely, which
                yields an extraction file for translators. False writes
                every unit.

        Returns:
            The XLIFF text. Line and character counts are updated as a side effect.
        """
        units = self._units
        if untranslated:
            units = [unit for unit in units if not unit.target]

        serializers: Dict[Dialect, Callable[[List[TranslationUnit]], str]] = {
            Dialect.V1: self._serialize_v1,
            Dialect.V2: self._serialize_v2,
            Dialect.CUSTOM: self._serialize_custom,
        }
        xml = serializers[Dialect.for_document(self.version, self.style)](units)
        self._count_lines(xml)
        return xml

    def _serialize_v1(self, units: List[TranslationUnit]) -> str:
        files: Dict[Tuple[str, ...], Dict[str, Any]] = {}
        index = 1
        explicit = _explicit_ids(units)

        for tu in units:
            file_key = _file_key(tu)
            if file_key not in files:
                files[file_key] = {
                    'attributes': {
                        'original': tu.file,
                        'source-language': tu.source_locale,
                        'target-language': tu.target_locale,
                        'product-name': tu.project,
                        'x-flavor': tu.flavor,
                    },
                    'units': [],
                }

            unit_id = tu.id
            if not unit_id:
                while index in explicit:
                    index += 1
                unit_id = index
                index += 1

            attributes = {
                'id': unit_id,
                'resname': tu.key,
                'restype': tu.res_type or 'string',
                'datatype': tu.datatype,
            }
            for name, value in (tu.extended or {}).items():
                attributes['x-' + name] = value
            if tu.translate is False:
                attributes['translate'] = False

            index = _next_index(tu.id, index)

            if tu.res_type == 'plural':
                attributes['extype'] = tu.quantity or 'other'
            if tu.res_type == 'array':
                attributes['extype'] = tu.ordinal
            if tu.context:
                attributes['x-context'] = tu.context

            files[file_key]['units'].append((attributes, tu))

        writer = _XmlWriter()
        if not files:
            writer.empty(0, 'xliff', {'version': version_string(self.version)})
            return writer.getvalue()

        writer.open(0, 'xliff', {'version': version_string(self.version)})
        for file_key in sorted(files, key=_file_sort_key):
            entry = files[file_key]
            writer.open(1, 'file', entry['attributes'])
            self._write_header(writer, 2)
            writer.open(2, 'body')
            for attributes, tu in entry['units']:
                writer.open(3, 'trans-unit', attributes)
                writer.text(4, 'source', tu.source)
                if tu.target:
                    writer.text(4, 'target', tu.target, {'state': tu.state})
                if tu.comment:
                    writer.text(4, 'note', tu.comment)
                writer.close(3, 'trans-unit')
            writer.close(2, 'body')
            writer.close(1, 'file')
        writer.close(0, 'xliff')

        return writer.getvalue()

    def _single_locale_units(self, units: List[TranslationUnit]) -> Tuple[Optional[str], Optional[str], List[TranslationUnit]]:
        """Pick the units sharing the first unit's locale pair (2.0 allows only one pair per file)."""
        if not units:
            return self.source_locale, None, []
        source_locale = units[0].source_locale
        target_locale = units[0].target_locale
        selected = [
            unit for unit in units
            if unit.source_locale == source_locale
            and (not target_locale or unit.target_locale == target_locale)
        ]
        return source_locale, target_locale, selected

    def _root_attributes_v2(self, source_locale: Optional[str], target_locale: Optional[str]) -> Dict[str, Any]:
        return {
            'version': version_string(self.version),
            'srcLang': source_locale,
            'trgLang': target_locale or None,
            'xmlns:l': LOCTOOL_NAMESPACE,
        }

    @staticmethod
    def _write_unit_v2(writer: _XmlWriter, depth: int, attributes: Dict[str, Any], tu: TranslationUnit) -> None:
        writer.open(depth, 'unit', attributes)
        if tu.comment:
            writer.open(depth + 1, 'notes')
            writer.text(depth + 2, 'note', tu.comment, {'appliesTo': 'source'})
            writer.close(depth + 1, 'notes')
        writer.open(depth + 1, 'segment')
        writer.text(depth + 2, 'source', tu.source)
        if tu.target:
            writer.text(depth + 2, 'target', tu.target, {'state': tu.state})
        writer.close(depth + 1, 'segment')
        writer.close(depth, 'unit')

    @staticmethod
    def _add_to_group(groups: List[Dict[str, Any]], name: str, group_id: Callable[[], str], entry) -> None:
        for group in groups:
            if group['name'] == name:
                group['units'].append(entry)
                return
        groups.append({'id': group_id(), 'name': name, 'units': [entry]})

    def _write_groups(self, writer: _XmlWriter, groups: List[Dict[str, Any]]) -> None:
        for group in groups:
            writer.open(2, 'group', {'id': group['id'], 'name': group['name']})
            for attributes, tu in group['units']:
                self._write_unit_v2(writer, 3, attributes, tu)
            writer.close(2, 'group')

    def _serialize_v2(self, units: List[TranslationUnit]) -> str:
        source_locale, target_locale, units = self._single_locale_units(units)

        files: Dict[Tuple[str, ...], Dict[str, Any]] = {}
        index = 1
        explicit = _explicit_ids(units)
        group_counter = [0]

        def next_group_id() -> str:
            group_counter[0] += 1
            return f'group_{group_counter[0]}'

        for tu in units:
            file_key = _file_key(tu)
            if file_key not in files:
                files[file_key] = {
                    'attributes': {
                        'original': tu.file,
                        'l:project': tu.project,
                        'l:flavor': tu.flavor,
                    },
                    'groups': [{'id': next_group_id(), 'name': tu.datatype or 'plaintext', 'units': []}],
                }

            unit_id = tu.id
            if not unit_id:
                while index in explicit:
                    index += 1
                unit_id = index
                index += 1

            attributes = {
                'id': unit_id,
                'name': tu.key if tu.source != tu.key else None,
                'type': 'res:' + (tu.res_type or 'string'),
                'l:datatype': tu.datatype,
            }
            for name, value in (tu.extended or {}).items():
                attributes['l:' + name] = value
            if tu.translate is False:
                attributes['translate'] = False

            index = _next_index(tu.id, index)

            if tu.res_type == 'plural':
                attributes['l:category'] = tu.quantity or 'other'
            if tu.res_type == 'array':
                attributes['l:index'] = tu.ordinal
            if tu.context:
                attributes['l:context'] = tu.context

            self._add_to_group(
                files[file_key]['groups'],
                tu.datatype or 'plaintext',
                next_group_id,
                (attributes, tu),
            )

        writer = _XmlWriter()
        root = self._root_attributes_v2(source_locale, target_locale)
        if not files:
            writer.empty(0, 'xliff', root)
            return writer.getvalue()

        writer.open(0, 'xliff', root)
        for file_key in sorted(files, key=_file_sort_key):
            entry = files[file_key]
            writer.open(1, 'file', entry['attributes'])
            self._write_header(writer, 2)
            self._write_groups(writer, entry['groups'])
            writer.close(1, 'file')
        writer.close(0, 'xliff')

        return writer.getvalue()

    def _serialize_custom(self, units: List[TranslationUnit]) -> str:
        source_locale, target_locale, units = self._single_locale_units(units)

        files: Dict[str, Dict[str, Any]] = {}
        index = 1
        explicit = _explicit_ids(units)
        file_counter = 0
        group_counter = [0]

        for tu in units:
            project = tu.project or ''

            def next_group_id(project=project) -> str:
                group_counter[0] += 1
                return f'{project}_g{group_counter[0]}'

            if project not in files:
                file_counter += 1
                files[project] = {
                    'attributes': {
                        'id': f'{project}_f{file_counter}',
                        'original': tu.project,
                    },
                    'groups': [{'id': next_group_id(), 'name': tu.datatype or 'javascript', 'units': []}],
                }

            unit_id = tu.id
            if not unit_id:
                while index in explicit:
                    index += 1
                unit_id = index
                index += 1

            attributes = {
                'id': unit_id,
                'name': tu.key if tu.source != tu.key else None,
            }
            for name, value in (tu.extended or {}).items():
                attributes['x-' + name] = value
            if tu.translate is False:
                attributes['translate'] = False

            index = _next_index(tu.id, index)

            self._add_to_group(
                files[project]['groups'],
                tu.datatype or 'javascript',
                next_group_id,
                (attributes, tu),
            )

        writer = _XmlWriter()
        root = self._root_attributes_v2(source_locale, target_locale)
        if not files:
            writer.empty(0, 'xliff', root)
            return writer.getvalue()

        writer.open(0, 'xliff', root)
        for project in sorted(files):
            entry = files[project]
            writer.open(1, 'file', entry['attributes'])
            self._write_groups(writer, entry['groups'])
            writer.close(1, 'file')
        writer.close(0, 'xliff')

        return writer.getvalue()

    # ------------------------------------------------------------------
    # position indexing

    def _count_lines(self, text: str) -> None:
        self._lines = 1
        self._file_length = len(text)
        self._line_index = [0]

        start = text.find('\n')
        while start != -1:
            self._lines += 1
            self._line_index.append(start + 1)
            start = text.find('\n', start + 1)

    def get_lines(self) -> int:
        """Number of lines in the last serialized or deserialized text (0 before either)."""
        return self._lines

    def get_bytes(self) -> int:
        """Number of characters in the last serialized or deserialized text (0 before either)."""
        return self._file_length

    def char_position_to_location(self, pos: int) -> Location:
        """
        Convert a character offset into a zero-based line and column.

        Args:
            pos: Offset into the last serialized or deserialized text

        Returns:
            Location of the offset
        """
        if not self._line_index:
            return Location(line=0, char=pos)
        line = max(bisect_right(self._line_index, pos) - 1, 0)
        return Location(line=line, char=pos - self._line_index[line])

    # ------------------------------------------------------------------
    # parsing

    @staticmethod
    def get_text_with_content_markup(element: Optional[XmlElement]) -> str:
        """
        Extract the text of a source or target element including inline markup.

        Text and CDATA contribute their content. Nested elements contribute
        their own text; an element without any content falls back to its
        ``equiv-text`` attribute, so ``<x id="1" equiv-text="&lt;"/>`` yields ``<``.
        """
        def visit(node) -> Optional[str]:
            if isinstance(node, XmlText):
                return node.text
            if node.children:
                return ''.join(
                    text for text in (visit(child) for child in node.children)
                    if text is not None
                )
            return node.attributes.get('equiv-text')

        if element is None:
            return ''
        return visit(element) or ''

    def deserialize(self, xml: str, resfile: Optional[str] = None) -> List[TranslationUnit]:
        """
        Parse XLIFF text and append its units to this document.

        Documents without a recognizable 1.x or 2.x version yield no units.

        Args:
            xml: The XLIFF text
            resfile: Path of the file the text came from, stored on each unit

        Returns:
            All units of the document

        Raises:
            lxml.etree.XMLSyntaxError: If the text is not well-formed XML
        """
        self._count_lines(xml)
        root = parse_xml(xml)

        version = get_attribute(root, 'version') if root.name == 'xliff' else None
        if not version or not version.startswith(('1', '2')):
            logger.debug("Unknown xliff version %r, nothing to import", version)
            return self.get_translation_units()

        dialect = Dialect.V1 if version.startswith('1') else Dialect.V2
        parsers = {
            Dialect.V1: self._parse_v1,
            Dialect.V2: self._parse_v2,
        }
        parsers[dialect](root, resfile)
        return self.get_translation_units()

    def _location(self, element: XmlElement) -> Optional[Location]:
        if element.position is None:
            return None
        return self.char_position_to_location(element.position)

    def _add_parsed_unit(self, fields: Dict[str, Any]) -> None:
        try:
            self._append_parsed(TranslationUnit(**fields))
        except ValueError as e:
            logger.warning("Skipping invalid translation unit found in xliff file: %s", e)

    def _parse_v1(self, root: XmlElement, resfile: Optional[str]) -> None:
        for file in get_children_by_name(root, 'file') or []:
            path_name = get_attribute(file, 'original')
            source_locale = get_attribute(file, 'source-language')
            project = get_attribute(file, 'product-name') or path_name
            target_locale = get_attribute(file, 'target-language')
            flavor = get_attribute(file, 'x-flavor')

            body = _first(get_children_by_name(file, 'body'))
            for tu in get_children_by_name(body, 'trans-unit') or []:
                translate = get_attribute(tu, 'translate')
                res_type = get_attribute(tu, 'restype')

                extended = {
                    name[2:]: value for name, value in tu.attributes.items()
                    if name.startswith('x-')
                }

                source = _first(get_children_by_name(tu, 'source'))
                source_string = self.get_text_with_content_markup(source) if source is not None else None
                if not source_string or not source_string.strip():
                    logger.debug("Skipping trans-unit with empty source in %s", path_name)
                    continue

                resname = get_attribute(tu, 'resname') or get_attribute(source, 'x-key') or source_string

                target = _first(get_children_by_name(tu, 'target'))
                target_string = self.get_text_with_content_markup(target) if target is not None else None

                self._add_parsed_unit({
                    'file': path_name,
                    'source_locale': source_locale,
                    'project': project,
                    'id': get_attribute(tu, 'id'),
                    'key': unescape_attr(resname),
                    'source': source_string,
                    'context': get_attribute(tu, 'x-context'),
                    'target_locale': target_locale,
                    'comment': get_text(_first(get_children_by_name(tu, 'note'))),
                    'target': target_string or None,
                    'res_type': res_type,
                    'state': get_attribute(target, 'state'),
                    'datatype': get_attribute(tu, 'datatype'),
                    'flavor': flavor,
                    'translate': False if (translate or '').lower() in ('no', 'false') else None,
                    'location': self._location(tu),
                    'ordinal': _to_int(get_attribute(tu, 'extype')) if res_type == 'array' else None,
                    'quantity': get_attribute(tu, 'extype') if res_type == 'plural' else None,
                    'extended': extended or None,
                    'resfile': resfile,
                })

    def _iter_units_v2(self, container: XmlElement, group_name: Optional[str] = None):
        """Yield (unit, enclosing group name) for units directly in a file or nested in groups."""
        for child in get_child_elements(container):
            if child.name == 'unit':
                yield child, group_name
            elif child.name == 'group':
                yield from self._iter_units_v2(child, get_attribute(child, 'name') or group_name)

    def _parse_v2(self, root: XmlElement, resfile: Optional[str]) -> None:
        source_locale = get_attribute(root, 'srcLang') or DEFAULT_SOURCE_LOCALE
        target_locale = get_attribute(root, 'trgLang')
        separator = '' if is_asian_locale(target_locale) else ' '

        for file in get_children_by_name(root, 'file') or []:
            path_name = get_attribute(file, 'original')
            project = get_attribute(file, 'l:project') or path_name
            flavor = get_attribute(file, 'l:flavor')

            for tu, group_name in self._iter_units_v2(file):
                notes = _first(get_children_by_name(tu, 'notes'))
                unit_type = get_attribute(tu, 'type')
                res_type = unit_type[4:] if unit_type and unit_type.startswith('res:') else 'string'

                extended = {
                    name[2:]: value for name, value in tu.attributes.items()
                    if name.startswith('l:') and name not in RESERVED_EXTENSIONS
                }

                source_string = ''
                target_string = ''
                state = None
                for segment in get_children_by_name(tu, 'segment'):
                    segment_source = self.get_text_with_content_markup(
                        _first(get_children_by_name(segment, 'source'))
                    )
                    if not segment_source:
                        continue
                    source_string += segment_source

                    target = _first(get_children_by_name(segment, 'target'))
                    if target is None:
                        continue
                    marks = get_children_by_name(target, 'mrk')
                    if marks:
                        target_string += separator.join(
                            self.get_text_with_content_markup(mark) for mark in marks
                        )
                    else:
                        target_string += self.get_text_with_content_markup(target)
                    state = get_attribute(target, 'state') or state

                if not source_string.strip():
                    logger.debug("Skipping unit with empty source in %s", path_name)
                    continue

                translate = get_attribute(tu, 'translate')
                index = get_attribute(tu, 'l:index')

                self._add_parsed_unit({
                    'file': path_name,
                    'source_locale': source_locale,
                    'project': project,
                    'id': get_attribute(tu, 'id'),
                    'key': unescape_attr(get_attribute(tu, 'name') or source_string),
                    'source': source_string,
                    'context': get_attribute(tu, 'l:context'),
                    'comment': get_text(_first(get_children_by_name(notes, 'note'))),
                    'target_locale': target_locale,
                    'target': target_string or None,
                    'res_type': res_type,
                    'state': state,
                    'datatype': get_attribute(tu, 'l:datatype') or group_name,
                    'flavor': flavor,
                    'translate': False if (translate or '').lower() in ('no', 'false') else None,
                    'location': self._location(tu),
                    'ordinal': _to_int(index) if res_type == 'array' else None,
                    'quantity': get_attribute(tu, 'l:category') if res_type == 'plural' else None,
                    'extended': extended or None,
                    'resfile': resfile,
                })

    # ------------------------------------------------------------------
    # files

    def load(self, path: Union[str, Path]) -> List[TranslationUnit]:
        """Read and deserialize an XLIFF file."""
        path = Path(path)
        self.path = str(path)
        return self.deserialize(path.read_text(encoding='utf-8'), resfile=str(path))

    def save(self, path: Optional[Union[str, Path]] = None) -> Path:
        """
        Serialize the document and write it to disk.

        Args:
            path: Output path, defaults to the document's own path

        Returns:
            Path written

        Raises:
            ValueError: If neither a path argument nor a document path is set
        """
        target = path or self.path
        if not target:
            raise ValueError("No output path given for xliff document")
        target = Path(target)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.serialize(), encoding='utf-8')
        return target
