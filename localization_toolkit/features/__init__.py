"""Feature modules."""

from .linter import XliffLinter, LintResult

__all__ = [
    'XliffLinter',
    'LintResult',
]
