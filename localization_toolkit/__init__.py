"""
Localization Toolkit
====================

XLIFF reading and writing, resource extraction and translation linting.

Usage:
    from localization_toolkit import Xliff, XliffLinter, RuleManager

    xliff = Xliff(version=2.0)
    units = xliff.load('strings.xliff')

    linter = XliffLinter(RuleManager().get_rules())
    result = linter.lint_files(['de-DE.xliff'])
    print(f"{result.errors} errors, {result.warnings} warnings")

CLI:
    localization-toolkit extract config/locales/en-US.yml -o strings.xliff
    localization-toolkit lint de-DE.xliff --format json
    localization-toolkit convert strings.xliff --xliff-version 2.0 -o strings-2.xliff
"""

from .__version__ import __version__, __author__, __description__

# Core exports
from .core.translation_unit import TranslationUnit, Location
from .core.xliff import Xliff, MismatchedTargetLocaleError
from .core.resource import ResourceString, ResourceArray, ResourcePlural

# Rules
from .rules.builtin import RuleManager
from .rules.result import Result

# File types
from .filetypes.base import FileTypeAdapter
from .filetypes.yaml_file import YamlFile

# Features
from .features.linter import XliffLinter, LintResult

__all__ = [
    '__version__',
    '__author__',
    '__description__',
    'TranslationUnit',
    'Location',
    'Xliff',
    'MismatchedTargetLocaleError',
    'ResourceString',
    'ResourceArray',
    'ResourcePlural',
    'RuleManager',
    'Result',
    'FileTypeAdapter',
    'YamlFile',
    'XliffLinter',
    'LintResult',
]
