"""
CBOM Analyzer

A Python library and command-line tool that ingests Cryptography Bill of
Materials (CBOM) documents and derives inventory statistics, risk
classifications and a file-to-asset dependency graph.
"""

__version__ = "0.1.0"
__author__ = "CBOM Analyzer Team"
__description__ = "Statistics and dependency graphs for Cryptography Bills of Materials"
