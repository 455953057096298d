"""Translation unit value object."""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional, Union


class InvalidUnitError(ValueError):
    """Raised when a translation unit is constructed without a usable source."""


@dataclass
class Location:
    """Zero-based line and character of a unit inside its XLIFF text."""
    line: int
    char: int


@dataclass
class TranslationUnit:
    """
    One translatable string and its interchange metadata.

    ``source`` is required and must contain non-whitespace text. Every
    other field is optional and stays None when not supplied.

    ``translate`` is False only when the unit was explicitly marked as
    not translatable; None means the default (translate).
    """
    source: str
    key: Optional[str] = None
    file: Optional[str] = None
    project: Optional[str] = None
    source_locale: Optional[str] = None
    target_locale: Optional[str] = None
    target: Optional[str] = None
    res_type: Optional[str] = None
    ordinal: Optional[int] = None
    quantity: Optional[str] = None
    datatype: Optional[str] = None
    flavor: Optional[str] = None
    context: Optional[str] = None
    comment: Optional[str] = None
    state: Optional[str] = None
    id: Optional[Union[int, str]] = None
    translate: Optional[bool] = None
    extended: Optional[Dict[str, str]] = None
    location: Optional[Location] = None
    resfile: Optional[str] = None
    origin: Optional[str] = None
    # set by extraction tools that track the position of a string in its file
    index: Optional[int] = field(default=None, compare=False)

    def __post_init__(self):
        if not isinstance(self.source, str) or not self.source.strip():
            raise InvalidUnitError(
                f"Translation unit source must be a non-empty string (key: {self.key!r})"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Return the fields that are set."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, Location):
                value = {'line': value.line, 'char': value.char}
            result[f.name] = value
        return result


def merge_units(old: TranslationUnit, new: TranslationUnit) -> TranslationUnit:
    """
    Merge two units with the same identity.

    Fields set on ``new`` win; fields that ``new`` leaves as None keep the
    value from ``old``.

    Returns:
        A new TranslationUnit; neither argument is modified
    """
    changes = {
        f.name: getattr(new, f.name)
        for f in fields(new)
        if getattr(new, f.name) is not None
    }
    return replace(old, **changes)
