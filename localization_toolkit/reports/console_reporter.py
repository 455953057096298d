"""Console report generator."""

from typing import Dict, Iterable, Optional

from ..rules.result import Result
from ..utils.colors import Colors


class ConsoleReporter:
    """Render lint results for the terminal."""

    @staticmethod
    def format(result: Result, use_colors: bool = True) -> str:
        """
        Format a single result.

        Args:
            result: Result to render
            use_colors: Use ANSI colours; when False the highlight markers are removed

        Returns:
            Multi-line text block ending with a newline
        """
        location = result.path_name
        if result.line_number is not None:
            location += f':{result.line_number}'

        severity = result.severity
        label = Colors.severity(severity, severity) if use_colors else severity

        lines = [
            location,
            f'  {label}: {result.description}',
        ]
        if result.id:
            lines.append(f'  Key: {result.id}')
        if result.source:
            lines.append(f'  Source: {result.source}')
        if result.highlight:
            lines.append(f'  {Colors.highlight(result.highlight, use_colors)}')

        rule = result.rule
        lines.append(f'  Rule ({result.rule_name}): {getattr(rule, "description", "")}')
        link = getattr(rule, 'link', None)
        if link:
            lines.append(f'  More info: {link}')

        return '\n'.join(lines) + '\n'

    @staticmethod
    def print_results(results: Iterable[Result], use_colors: bool = True):
        """Print every result, errors first."""
        order = {'error': 0, 'warning': 1, 'suggestion': 2}
        for result in sorted(results, key=lambda r: order.get(r.severity, 3)):
            print(ConsoleReporter.format(result, use_colors))

    @staticmethod
    def print_summary(result_stats: Dict[str, int], file_stats: Optional[Dict[str, int]] = None):
        """Print the totals line."""
        print("=" * 70)
        if file_stats:
            print(
                f"Files: {file_stats.get('files', 0)}  "
                f"Lines: {file_stats.get('lines', 0)}  "
                f"Bytes: {file_stats.get('bytes', 0)}"
            )

        errors = result_stats.get('errors', 0)
        warnings = result_stats.get('warnings', 0)
        suggestions = result_stats.get('suggestions', 0)

        if not errors and not warnings and not suggestions:
            print(Colors.success("✓ No problems found"))
            return

        print(
            f"{Colors.error(f'Errors: {errors}')}  "
            f"{Colors.warning(f'Warnings: {warnings}')}  "
            f"{Colors.info(f'Suggestions: {suggestions}')}"
        )
