"""
Export manager for CBOM statistics and dependency graph reports.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional
from datetime import datetime, timezone

import yaml

from ..config import AppConfig, get_config
from ..error_handling import ExportError
from ..session import AnalysisSnapshot

logger = logging.getLogger(__name__)

EXPORT_FORMATS = {
    "json": ".json",
    "yaml": ".yaml",
}


class ExportManager:
    """
    Writes statistics and graph reports for an analysis snapshot.

    Each export produces ``<basename>-statistics.<ext>`` and
    ``<basename>-graph.<ext>`` in the output directory.
    """

    def __init__(self, config: Optional[AppConfig] = None):
        """
        Initialize export manager.

        Args:
            config: Application configuration (defaults to the global config)
        """
        self.config = config or get_config()

    def export(
        self,
        snapshot: AnalysisSnapshot,
        output_dir: Optional[Path] = None,
        fmt: Optional[str] = None,
        include_timestamp: Optional[bool] = None
    ) -> Dict[str, Any]:
        """
        Export statistics and graph reports.

        Args:
            snapshot: AnalysisSnapshot to export
            output_dir: Output directory (defaults to config)
            fmt: ``json`` or ``yaml``; defaults to the configured output
                format, falling back to ``json`` when that is ``table``
            include_timestamp: Whether to add a timestamp to file names

        Returns:
            Dictionary with export results and file paths

        Raises:
            ExportError: If the format is unknown or a file cannot be written
        """
        output_dir = Path(output_dir or self.config.output.directory)
        fmt = (fmt or self._default_format()).lower()
        if include_timestamp is None:
            include_timestamp = self.config.output.include_timestamp

        if fmt not in EXPORT_FORMATS:
            raise ExportError(
                f"Unsupported export format: {fmt}. Valid formats: {', '.join(EXPORT_FORMATS)}",
                export_format=fmt
            )

        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExportError("Cannot create output directory", output_path=str(output_dir), cause=e)

        base_filename = self._generate_filename(include_timestamp)
        logger.info(f"Exporting CBOM reports as {fmt} to {output_dir}")

        reports = {
            "statistics": self._statistics_report(snapshot),
            "graph": self._graph_report(snapshot),
        }

        results: Dict[str, Any] = {
            "export_timestamp": datetime.now(timezone.utc).isoformat(),
            "output_directory": str(output_dir),
            "format": fmt,
            "files": {}
        }

        for name, report in reports.items():
            file_path = output_dir / f"{base_filename}-{name}{EXPORT_FORMATS[fmt]}"
            self._write(report, file_path, fmt)
            results["files"][name] = {
                "file_path": str(file_path),
                "file_size": file_path.stat().st_size
            }

        logger.info(f"Export completed: {len(results['files'])} files written")
        return results

    def _default_format(self) -> str:
        configured = self.config.output.format
        return configured if configured in EXPORT_FORMATS else "json"

    def _generate_filename(self, include_timestamp: bool) -> str:
        base = self.config.output.report_basename
        if include_timestamp:
            base += f"-{datetime.now(timezone.utc).strftime('%Y%m%d-%H%M%S')}"
        return base

    def _statistics_report(self, snapshot: AnalysisSnapshot) -> Dict[str, Any]:
        statistics = snapshot.statistics
        report = {
            "source": snapshot.source,
            "document_timestamp": snapshot.document.timestamp,
            "summary": {
                "crypto_assets": statistics.total,
                "quantum_vulnerable": statistics.quantum_vulnerable,
                "symmetric_safe": statistics.symmetric_safe,
                "weaknesses": len(statistics.weaknesses),
                "files": len(snapshot.document.file_entries)
            }
        }
        report.update(statistics.to_dict())
        return report

    def _graph_report(self, snapshot: AnalysisSnapshot) -> Dict[str, Any]:
        report = {"source": snapshot.source}
        report.update(snapshot.graph.to_dict())
        return report

    def _write(self, report: Dict[str, Any], file_path: Path, fmt: str) -> None:
        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                if fmt == "yaml":
                    yaml.safe_dump(report, f, default_flow_style=False, sort_keys=False)
                else:
                    json.dump(report, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ExportError(
                f"Failed to write {file_path.name}",
                export_format=fmt,
                output_path=str(file_path),
                cause=e
            )
