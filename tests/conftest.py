"""
Pytest configuration and fixtures for CBOM Analyzer tests.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from cbom_analyzer.config import reset_config_manager
from cbom_analyzer.logging import close_logging
from cbom_analyzer.models import CBOMDocument


@pytest.fixture(autouse=True)
def isolate_globals(monkeypatch):
    """Fresh configuration and logging state for every test."""
    for var in (
        "CBOM_VULNERABILITY_NAMESPACE", "CBOM_OUTPUT_FORMAT", "CBOM_OUTPUT_DIR",
        "CBOM_REPORT_BASENAME", "CBOM_INCLUDE_TIMESTAMP", "LOG_LEVEL", "LOG_FILE",
        "LOG_FORMAT", "LOG_MAX_SIZE", "LOG_BACKUP_COUNT", "LOG_STRUCTURED",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_config_manager()
    root_level = logging.getLogger().level
    yield
    close_logging()
    logging.getLogger().setLevel(root_level)
    reset_config_manager()


# Sample data fixtures


@pytest.fixture
def minimal_cbom() -> dict[str, Any]:
    """One file using one symmetric cipher."""
    return {
        "components": [
            {"bom-ref": "f1", "type": "file", "name": "a.go"},
            {
                "bom-ref": "c1",
                "type": "data",
                "name": "AES",
                "properties": [
                    {"name": "primitive", "value": "cipher"},
                    {"name": "pqm.vulnerability", "value": "symmetric-safe"},
                ],
            },
        ],
        "dependencies": [{"ref": "f1", "dependsOn": ["c1"]}],
    }


@pytest.fixture
def sample_cbom() -> dict[str, Any]:
    """A small but varied CBOM with files, assets, weaknesses and a dangling edge."""
    return {
        "metadata": {"timestamp": "2025-01-15T10:00:00Z"},
        "components": [
            {
                "bom-ref": "file:main.go",
                "type": "file",
                "name": "main.go",
                "properties": [{"name": "impact.outbound.count", "value": "3"}],
            },
            {"bom-ref": "file:util.go", "type": "file", "name": "util.go"},
            {
                "bom-ref": "crypto:rsa",
                "type": "data",
                "name": "RSA-2048",
                "properties": [
                    {"name": "primitive", "value": "signature"},
                    {"name": "provider", "value": "crypto/rsa"},
                    {"name": "pqm.vulnerability", "value": "quantum-vulnerable"},
                    {"name": "operation", "value": "sign"},
                    {"name": "keySize", "value": "2048"},
                ],
                "hashes": [{"alg": "SHA-256", "content": "abc123"}],
                "evidence": {
                    "occurrences": [
                        {"file": "main.go", "line": 12, "snippet": "rsa.SignPKCS1v15(...)"},
                        {"file": "util.go", "line": 40},
                    ]
                },
            },
            {
                "bom-ref": "crypto:md5",
                "type": "data",
                "name": "MD5",
                "properties": [
                    {"name": "primitive", "value": "hash"},
                    {"name": "provider", "value": "crypto/md5"},
                    {"name": "pqm.vulnerability", "value": "unknown"},
                    {"name": "operation", "value": "digest"},
                    {"name": "weaknesses", "value": "collision attacks"},
                ],
                "evidence": {"occurrences": [{"file": "util.go", "line": 7}]},
            },
            {
                "bom-ref": "crypto:aes",
                "type": "data",
                "name": "AES-256-GCM",
                "properties": [
                    {"name": "primitive", "value": "aead"},
                    {"name": "provider", "value": "crypto/aes"},
                    {"name": "pqm.vulnerability", "value": "symmetric-safe"},
                    {"name": "operation", "value": "encrypt"},
                    {"name": "weaknesses", "value": "   "},
                ],
            },
            {"bom-ref": "crypto:mystery", "type": "data", "name": "Mystery"},
            {"bom-ref": "lib:openssl", "type": "library", "name": "openssl"},
        ],
        "dependencies": [
            {"ref": "file:main.go", "dependsOn": ["crypto:rsa", "crypto:aes", "crypto:missing"]},
            {"ref": "file:util.go", "dependsOn": ["crypto:md5", "crypto:rsa"]},
            {"ref": "file:ghost.go", "dependsOn": ["crypto:md5"]},
            {"ref": "crypto:rsa"},
        ],
    }


@pytest.fixture
def sample_document(sample_cbom) -> CBOMDocument:
    return CBOMDocument.from_dict(sample_cbom)


@pytest.fixture
def cbom_file(tmp_path: Path, sample_cbom) -> Path:
    """Write the sample CBOM to a temporary file."""
    path = tmp_path / "sample.cbom.json"
    path.write_text(json.dumps(sample_cbom), encoding="utf-8")
    return path


@pytest.fixture
def malformed_file(tmp_path: Path) -> Path:
    path = tmp_path / "broken.json"
    path.write_text('{"components": [', encoding="utf-8")
    return path
