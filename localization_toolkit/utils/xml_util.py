"""XML element accessors.

The XLIFF engine never touches lxml objects directly. Documents are parsed
once into a small tree of ``XmlText`` and ``XmlElement`` nodes which keeps
everything the engine needs: element names, prefixed attribute names, text
with whitespace intact, and the character offset of every start tag.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from lxml import etree

XML_NAMESPACE = 'http://www.w3.org/XML/1998/namespace'


@dataclass
class XmlText:
    """A run of character data (plain text or CDATA)."""
    text: str


@dataclass
class XmlElement:
    """An element with its attributes and child nodes in document order."""
    name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List['XmlNode'] = field(default_factory=list)
    # offset just after the '<' of the start tag
    position: Optional[int] = None


XmlNode = Union[XmlText, XmlElement]


def get_attribute(element: Optional[XmlElement], name: str) -> Optional[str]:
    """
    Return the named attribute of an element.

    Args:
        element: Element to read, may be None
        name: Attribute name, prefixed form for namespaced attributes (``l:project``)

    Returns:
        Attribute value, or None if the element or the attribute is absent
    """
    if element is None:
        return None
    return element.attributes.get(name)


def get_text(element: Optional[XmlElement]) -> Optional[str]:
    """
    Return the first direct text child of an element.

    Returns:
        The text (possibly empty), or None when the element has no text child
    """
    if element is None:
        return None
    for child in element.children:
        if isinstance(child, XmlText):
            return child.text
    return None


def get_children_by_name(element: Optional[XmlElement], name: str) -> Optional[List[XmlElement]]:
    """
    Return the direct child elements with the given name.

    Returns:
        List of matching elements (possibly empty), or None for a missing element
    """
    if element is None:
        return None
    return [
        child for child in element.children
        if isinstance(child, XmlElement) and child.name == name
    ]


def get_child_elements(element: Optional[XmlElement]) -> List[XmlElement]:
    """Return all direct child elements."""
    if element is None:
        return []
    return [child for child in element.children if isinstance(child, XmlElement)]


_OPAQUE_SECTIONS = re.compile(r'<!--.*?-->|<!\[CDATA\[.*?\]\]>|<\?.*?\?>', re.DOTALL)


def _mask_opaque_sections(text: str) -> str:
    """Blank out comments, CDATA sections and processing instructions, keeping offsets."""
    return _OPAQUE_SECTIONS.sub(lambda match: ' ' * len(match.group(0)), text)


class _StartTagLocator:
    """Finds start tags in the raw text, in document order."""

    def __init__(self, text: str):
        self.text = _mask_opaque_sections(text)
        self.cursor = 0
        self._patterns: Dict[str, 're.Pattern'] = {}

    def find(self, tag: str) -> Optional[int]:
        pattern = self._patterns.get(tag)
        if pattern is None:
            pattern = re.compile('<' + re.escape(tag) + r'[\s/>]')
            self._patterns[tag] = pattern

        match = pattern.search(self.text, self.cursor)
        if not match:
            return None
        self.cursor = match.start() + 1
        return match.start() + 1


def _attribute_name(node, key: str) -> str:
    """Map an lxml attribute key (``{uri}local``) back to ``prefix:local``."""
    if not key.startswith('{'):
        return key

    qname = etree.QName(key)
    if qname.namespace == XML_NAMESPACE:
        return f'xml:{qname.localname}'
    for prefix, uri in node.nsmap.items():
        if prefix and uri == qname.namespace:
            return f'{prefix}:{qname.localname}'
    return qname.localname


def _append_text(children: List[XmlNode], text: Optional[str]) -> None:
    if text is None:
        return
    if children and isinstance(children[-1], XmlText):
        children[-1].text += text
    else:
        children.append(XmlText(text))


def _convert(node, locator: _StartTagLocator) -> XmlElement:
    local_name = etree.QName(node).localname
    source_tag = f'{node.prefix}:{local_name}' if node.prefix else local_name

    element = XmlElement(
        name=local_name,
        attributes={_attribute_name(node, key): value for key, value in node.attrib.items()},
        position=locator.find(source_tag),
    )

    _append_text(element.children, node.text)
    for child in node:
        # comments, processing instructions and entities have non-string tags
        if isinstance(child.tag, str):
            element.children.append(_convert(child, locator))
        _append_text(element.children, child.tail)

    return element


def parse_xml(text: str) -> XmlElement:
    """
    Parse XML text into an ``XmlElement`` tree.

    Whitespace is preserved and CDATA sections become ordinary text.

    Args:
        text: Complete XML document

    Returns:
        The root element

    Raises:
        lxml.etree.XMLSyntaxError: If the text is not well-formed XML
    """
    parser = etree.XMLParser(
        remove_blank_text=False,
        strip_cdata=False,
        resolve_entities=False,
        no_network=True,
    )
    # lxml refuses str input carrying an encoding declaration
    root = etree.fromstring(text.encode('utf-8'), parser)
    return _convert(root, _StartTagLocator(text))
