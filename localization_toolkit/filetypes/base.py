"""Base adapter interface for resource file types."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from ..core.translation_unit import TranslationUnit


class FileTypeAdapter(ABC):
    """
    Base adapter for a resource file format.

    An adapter extracts translation units from a source file and writes
    localized copies of it from a set of translated units.
    """

    #: Value written to the datatype attribute of extracted units
    datatype: str = 'plaintext'

    def __init__(
        self,
        path_name: str,
        project: Optional[str] = None,
        source_locale: str = 'en-US',
        locale: Optional[str] = None,
        flavor: Optional[str] = None,
    ):
        self.path_name = path_name
        self.project = project
        self.source_locale = source_locale
        self.locale = locale or source_locale
        self.flavor = flavor
        self.units: List[TranslationUnit] = []
        self.new_units: List[TranslationUnit] = []

    @abstractmethod
    def get_extensions(self) -> List[str]:
        """Return the file extensions handled by this adapter (e.g., ['.yml'])."""
        pass

    @abstractmethod
    def parse(self, text: str, source_units: Optional[Dict[str, TranslationUnit]] = None) -> List[TranslationUnit]:
        """
        Parse file content into translation units.

        Args:
            text: File content
            source_units: Source units by key, used to pair strings of a localized file

        Returns:
            Extracted units
        """
        pass

    @abstractmethod
    def localize_text(self, translations: Dict[str, TranslationUnit], locale: str) -> str:
        """
        Produce the localized content of the parsed file.

        Args:
            translations: Translated units by key
            locale: Target locale

        Returns:
            Localized file content
        """
        pass

    @abstractmethod
    def get_localized_path(self, locale: str) -> str:
        """Return where the localized copy for a locale belongs."""
        pass

    def is_source_locale(self) -> bool:
        return self.locale == self.source_locale

    def extract(self) -> List[TranslationUnit]:
        """
        Read the file from disk and parse it.

        Raises:
            OSError: If the file cannot be read
        """
        return self.parse(Path(self.path_name).read_text(encoding='utf-8'))

    def get_units(self) -> List[TranslationUnit]:
        return list(self.units)

    def localize(self, translations: Dict[str, TranslationUnit], locale: str,
                 output_path: Optional[Path] = None) -> Path:
        """
        Write the localized copy of the file.

        Args:
            translations: Translated units by key
            locale: Target locale
            output_path: Destination, defaults to get_localized_path(locale)

        Returns:
            Path written
        """
        path = Path(output_path or self.get_localized_path(locale))
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.localize_text(translations, locale), encoding='utf-8')
        return path
