"""Diagnostic record produced by rules."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from ..utils.validators import VALID_SEVERITIES


@dataclass
class Result:
    """
    One problem found by a rule.

    ``highlight`` repeats the offending text with ``<e0>...</e0>`` around
    the problem region; formatters turn those markers into colours.
    """
    severity: str
    description: str
    path_name: str
    rule: Any
    id: Optional[str] = None
    source: Optional[Union[str, list, dict]] = None
    highlight: Optional[str] = None
    locale: Optional[str] = None
    line_number: Optional[int] = None

    def __post_init__(self):
        missing = [
            name for name in ('severity', 'description', 'path_name', 'rule')
            if not getattr(self, name)
        ]
        if missing:
            raise ValueError(f"Result is missing required fields: {', '.join(missing)}")
        if self.severity not in VALID_SEVERITIES:
            self.severity = 'warning'

    @property
    def rule_name(self) -> str:
        return getattr(self.rule, 'name', str(self.rule))

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form using the camelCase diagnostic field names."""
        result = {
            'severity': self.severity,
            'id': self.id,
            'source': self.source,
            'rule': self.rule_name,
            'pathName': self.path_name,
            'highlight': self.highlight,
            'description': self.description,
            'locale': self.locale,
        }
        if self.line_number is not None:
            result['lineNumber'] = self.line_number
        return result
