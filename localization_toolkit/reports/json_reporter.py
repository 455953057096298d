"""JSON report generator."""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from ..rules.result import Result


class JSONReporter:
    """Generate JSON reports for lint results."""

    @staticmethod
    def format(
        name: str,
        results: Iterable[Result],
        result_stats: Optional[Dict[str, Any]] = None,
        file_stats: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Format lint results as compact JSON.

        Args:
            name: Project name used as the top-level key
            results: Results to report
            result_stats: Error/warning/suggestion counts
            file_stats: File/line/byte counts

        Returns:
            JSON text terminated by a newline
        """
        stats: Dict[str, Any] = {}
        stats.update(file_stats or {})
        stats.update(result_stats or {})

        report = {
            name: {
                'stats': stats,
                'results': [
                    {
                        'pathName': result.path_name,
                        'rule': result.rule_name,
                        'severity': result.severity,
                    }
                    for result in results
                ],
            }
        }
        return json.dumps(report, ensure_ascii=False, separators=(',', ':')) + '\n'

    @staticmethod
    def generate(
        name: str,
        results: Iterable[Result],
        output_path: Path,
        result_stats: Optional[Dict[str, Any]] = None,
        file_stats: Optional[Dict[str, Any]] = None
    ) -> Path:
        """
        Write the JSON report to a file.

        Returns:
            Path to generated report
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            JSONReporter.format(name, results, result_stats, file_stats),
            encoding='utf-8'
        )
        return output_path
