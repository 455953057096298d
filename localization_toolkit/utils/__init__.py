"""Utility modules."""

from .colors import Colors
from .validators import is_valid_locale, validate_rule_definition
from .xml_util import parse_xml, get_attribute, get_text, get_children_by_name

__all__ = [
    'Colors',
    'is_valid_locale',
    'validate_rule_definition',
    'parse_xml',
    'get_attribute',
    'get_text',
    'get_children_by_name',
]
