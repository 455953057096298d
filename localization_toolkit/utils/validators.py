"""Validation utilities."""

import re
from typing import Any, Dict, List

LOCALE_PATTERN = re.compile(
    r'^[a-zA-Z]{2,3}'            # language
    r'(-[A-Za-z]{4})?'           # script (Hans, Latn)
    r'(-([A-Za-z]{2}|\d{3}))?'   # region
    r'(-[a-zA-Z0-9]{4,8})*$'     # variants
)

REQUIRED_RULE_FIELDS = ('name', 'description', 'note', 'regexps')

VALID_SEVERITIES = ('error', 'warning', 'suggestion')

VALID_RULE_TYPES = ('resource-matcher', 'resource-source', 'resource-target')


def is_valid_locale(spec: str) -> bool:
    """
    Validate a BCP-47 style locale tag.

    Examples: en, de-DE, zh-Hans-CN, es-419
    """
    if not spec or not isinstance(spec, str):
        return False
    return bool(LOCALE_PATTERN.match(spec))


def validate_rule_definition(definition: Dict[str, Any]) -> List[str]:
    """
    Check a declarative rule definition.

    Args:
        definition: Rule definition mapping as written in the config file

    Returns:
        List of problems, empty when the definition is usable
    """
    if not isinstance(definition, dict):
        return ['Rule definition must be a mapping']

    errors = []
    name = definition.get('name', '<unnamed>')

    for required in REQUIRED_RULE_FIELDS:
        if not definition.get(required):
            errors.append(f"Rule '{name}' is missing required field '{required}'")

    regexps = definition.get('regexps')
    if regexps and not isinstance(regexps, (list, tuple)):
        errors.append(f"Rule '{name}': regexps must be a list of patterns")
    elif regexps:
        for pattern in regexps:
            try:
                re.compile(pattern)
            except (re.error, TypeError) as e:
                errors.append(f"Rule '{name}': invalid regular expression {pattern!r}: {e}")

    severity = definition.get('severity')
    if severity is not None and severity not in VALID_SEVERITIES:
        errors.append(
            f"Rule '{name}': invalid severity '{severity}'. "
            f"Valid options: {', '.join(VALID_SEVERITIES)}"
        )

    rule_type = definition.get('type')
    if rule_type is not None and rule_type not in VALID_RULE_TYPES:
        errors.append(
            f"Rule '{name}': invalid type '{rule_type}'. "
            f"Valid options: {', '.join(VALID_RULE_TYPES)}"
        )

    return errors
