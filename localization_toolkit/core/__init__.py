"""Core modules: translation units, resources and XLIFF documents."""

from .translation_unit import TranslationUnit, Location, InvalidUnitError
from .xliff import Xliff, MismatchedTargetLocaleError
from .resource import Resource, ResourceString, ResourceArray, ResourcePlural, units_to_resources

__all__ = [
    'TranslationUnit',
    'Location',
    'InvalidUnitError',
    'Xliff',
    'MismatchedTargetLocaleError',
    'Resource',
    'ResourceString',
    'ResourceArray',
    'ResourcePlural',
    'units_to_resources',
]
