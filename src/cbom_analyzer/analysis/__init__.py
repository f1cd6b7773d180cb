"""
Classification, aggregation and graph construction for CBOM documents.
"""

from .classifier import classify, classify_all, risk_tier, DEFAULT_VULNERABILITY_KEY
from .aggregator import aggregate
from .graph_builder import build
from .query import ALL, filter_by_primitive, lookup, primitive_categories, file_impacts

__all__ = [
    "classify",
    "classify_all",
    "risk_tier",
    "DEFAULT_VULNERABILITY_KEY",
    "aggregate",
    "build",
    "ALL",
    "filter_by_primitive",
    "lookup",
    "primitive_categories",
    "file_impacts"
]
