"""Resource model used by the rule engine.

Translation units carry one string each. Rules work on resources, where an
array or a plural groups several units under a single key.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .translation_unit import TranslationUnit


@dataclass
class Resource:
    """Fields shared by all resource types."""
    key: str
    source_locale: Optional[str] = None
    target_locale: Optional[str] = None
    path_name: Optional[str] = None
    project: Optional[str] = None
    datatype: Optional[str] = None
    context: Optional[str] = None
    state: Optional[str] = None
    comment: Optional[str] = None
    line_number: Optional[int] = None

    def get_type(self) -> str:
        raise NotImplementedError


@dataclass
class ResourceString(Resource):
    source: Optional[str] = None
    target: Optional[str] = None

    def get_type(self) -> str:
        return 'string'


@dataclass
class ResourceArray(Resource):
    source: List[Optional[str]] = field(default_factory=list)
    target: List[Optional[str]] = field(default_factory=list)

    def get_type(self) -> str:
        return 'array'


@dataclass
class ResourcePlural(Resource):
    """Plural strings keyed by CLDR category (one, few, other, ...)."""
    source: Dict[str, str] = field(default_factory=dict)
    target: Dict[str, str] = field(default_factory=dict)

    def get_type(self) -> str:
        return 'plural'


AnyResource = Union[ResourceString, ResourceArray, ResourcePlural]

_RESOURCE_CLASSES = {
    'string': ResourceString,
    'array': ResourceArray,
    'plural': ResourcePlural,
}


def _set_at(values: List[Optional[str]], index: int, value: Optional[str]) -> None:
    while len(values) <= index:
        values.append(None)
    values[index] = value


def units_to_resources(units: Iterable[TranslationUnit]) -> List[AnyResource]:
    """
    Group translation units into resources.

    Units of type ``array`` are collected by ordinal and units of type
    ``plural`` by quantity. Everything else becomes a ResourceString.

    Args:
        units: Translation units, typically from one XLIFF document

    Returns:
        Resources in order of first appearance
    """
    resources: Dict[Tuple, AnyResource] = {}

    for unit in units:
        res_type = unit.res_type if unit.res_type in _RESOURCE_CLASSES else 'string'
        group_key = (
            unit.file, unit.project, unit.key or unit.source, unit.source_locale,
            unit.target_locale, res_type, unit.context,
        )

        resource = resources.get(group_key)
        if resource is None:
            resource = _RESOURCE_CLASSES[res_type](
                key=unit.key or unit.source,
                source_locale=unit.source_locale,
                target_locale=unit.target_locale,
                path_name=unit.file,
                project=unit.project,
                datatype=unit.datatype,
                context=unit.context,
                state=unit.state,
                comment=unit.comment,
                line_number=unit.location.line + 1 if unit.location else None,
            )
            resources[group_key] = resource

        if res_type == 'array':
            ordinal = unit.ordinal or 0
            _set_at(resource.source, ordinal, unit.source)
            _set_at(resource.target, ordinal, unit.target)
        elif res_type == 'plural':
            quantity = unit.quantity or 'other'
            resource.source[quantity] = unit.source
            if unit.target is not None:
                resource.target[quantity] = unit.target
        else:
            resource.source = unit.source
            resource.target = unit.target

    return list(resources.values())
