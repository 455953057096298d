"""XLIFF linter."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from ..core.resource import units_to_resources
from ..core.xliff import Xliff
from ..rules.declarative import DeclarativeResourceRule
from ..rules.result import Result

logger = logging.getLogger('localization_toolkit.lint')


@dataclass
class LintResult:
    """Results and statistics of a lint run."""
    results: List[Result] = field(default_factory=list)
    files: int = 0
    lines: int = 0
    bytes: int = 0
    errors: int = 0
    warnings: int = 0
    suggestions: int = 0

    @property
    def total_issues(self) -> int:
        return self.errors + self.warnings + self.suggestions

    @property
    def file_stats(self) -> Dict[str, int]:
        return {'files': self.files, 'lines': self.lines, 'bytes': self.bytes}

    @property
    def result_stats(self) -> Dict[str, int]:
        return {'errors': self.errors, 'warnings': self.warnings, 'suggestions': self.suggestions}

    def add_result(self, result: Result):
        """Add a result and count it by severity."""
        self.results.append(result)
        if result.severity == 'error':
            self.errors += 1
        elif result.severity == 'warning':
            self.warnings += 1
        else:
            self.suggestions += 1

    def merge(self, other: 'LintResult'):
        """Fold another run into this one."""
        for result in other.results:
            self.add_result(result)
        self.files += other.files
        self.lines += other.lines
        self.bytes += other.bytes


class XliffLinter:
    """
    Run resource rules over XLIFF files.

    Usage:
        rules = RuleManager().get_rules()
        linter = XliffLinter(rules)
        result = linter.lint_files(['de-DE.xliff', 'ja-JP.xliff'])
    """

    def __init__(self, rules: Iterable[DeclarativeResourceRule]):
        self.rules = list(rules)

    def lint_text(self, text: str, path: Optional[str] = None) -> LintResult:
        """
        Lint XLIFF text.

        Args:
            text: XLIFF content
            path: File path used in results

        Returns:
            LintResult for this text

        Raises:
            lxml.etree.XMLSyntaxError: If the text is not well-formed XML
        """
        xliff = Xliff(path=path)
        units = xliff.deserialize(text, resfile=path)

        lint_result = LintResult(files=1, lines=xliff.get_lines(), bytes=xliff.get_bytes())

        for resource in units_to_resources(units):
            # results point at the xliff file, not the original resource file
            file = path or resource.path_name
            for rule in self.rules:
                for result in rule.match(resource.target_locale, resource, file) or []:
                    lint_result.add_result(result)

        logger.debug("%s: %d units, %d problems", path, len(units), lint_result.total_issues)
        return lint_result

    def lint_file(self, path: Union[str, Path]) -> LintResult:
        """
        Lint one XLIFF file.

        Raises:
            OSError: If the file cannot be read
            lxml.etree.XMLSyntaxError: If the file is not well-formed XML
        """
        path = Path(path)
        return self.lint_text(path.read_text(encoding='utf-8'), str(path))

    def lint_files(self, paths: Iterable[Union[str, Path]]) -> LintResult:
        """Lint several files and combine the results."""
        combined = LintResult()
        for path in paths:
            combined.merge(self.lint_file(path))
        return combined
