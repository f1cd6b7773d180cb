"""
CBOM document loading.
"""

from .document_loader import load, load_file

__all__ = ["load", "load_file"]
