"""Resource file type adapters."""

from .base import FileTypeAdapter
from .yaml_file import YamlFile

__all__ = [
    'FileTypeAdapter',
    'YamlFile',
]
