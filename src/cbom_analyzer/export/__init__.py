"""
Report export for analysis snapshots.
"""

from .export_manager import ExportManager, EXPORT_FORMATS

__all__ = ["ExportManager", "EXPORT_FORMATS"]
