"""
Tests for the command-line interface.
"""

from __future__ import annotations

import json

import pytest
import yaml
from click.testing import CliRunner

from cbom_analyzer import __version__
from cbom_analyzer.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestCLI:
    """Tests for the top-level group."""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for command in ("stats", "graph", "crypto", "files", "show", "export", "config"):
            assert command in result.output

    def test_invalid_configuration_exits_1(self, runner, monkeypatch):
        monkeypatch.setenv("CBOM_OUTPUT_FORMAT", "xml")

        result = runner.invoke(cli, ["config"])

        assert result.exit_code == 1


class TestStatsCommand:
    """Tests for the stats command."""

    def test_table(self, runner, cbom_file):
        result = runner.invoke(cli, ["stats", str(cbom_file)])

        assert result.exit_code == 0
        assert "Crypto assets: 4" in result.output
        assert "Quantum vulnerable: 1" in result.output
        assert "Timestamp: 2025-01-15T10:00:00Z" in result.output
        assert "By Primitive Type" in result.output
        assert "(25.0%)" in result.output
        assert "MD5: collision attacks (util.go)" in result.output

    def test_json(self, runner, cbom_file):
        result = runner.invoke(cli, ["stats", str(cbom_file), "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["total"] == 4
        assert data["by_vulnerability"] == {"quantum-vulnerable": 1, "unknown": 2, "symmetric-safe": 1}

    def test_yaml(self, runner, cbom_file):
        result = runner.invoke(cli, ["stats", str(cbom_file), "-f", "yaml"])

        assert result.exit_code == 0
        assert yaml.safe_load(result.stdout)["total"] == 4

    def test_missing_timestamp(self, runner, tmp_path, minimal_cbom):
        path = tmp_path / "minimal.json"
        path.write_text(json.dumps(minimal_cbom))

        result = runner.invoke(cli, ["stats", str(path)])

        assert "Timestamp: No timestamp" in result.output

    def test_malformed_file_exits_1(self, runner, malformed_file):
        result = runner.invoke(cli, ["stats", str(malformed_file)])

        assert result.exit_code == 1
        assert "not valid JSON" in result.output

    def test_missing_file_exits_1(self, runner, tmp_path):
        result = runner.invoke(cli, ["stats", str(tmp_path / "absent.json")])

        assert result.exit_code == 1
        assert "Cannot read CBOM file" in result.output


class TestGraphCommand:
    """Tests for the graph command."""

    def test_table(self, runner, cbom_file):
        result = runner.invoke(cli, ["graph", str(cbom_file)])

        assert result.exit_code == 0
        assert "Nodes: 7" in result.output
        assert "Links: 4" in result.output
        assert "file:main.go -> crypto:rsa" in result.output
        assert "Dropped links with unknown endpoints: 2" in result.output

    def test_json(self, runner, cbom_file):
        result = runner.invoke(cli, ["graph", str(cbom_file), "-f", "json"])

        data = json.loads(result.stdout)
        assert {n["id"]: n["tier"] for n in data["nodes"]}["crypto:rsa"] == "red"


class TestCryptoCommand:
    """Tests for the crypto command."""

    def test_all(self, runner, cbom_file):
        result = runner.invoke(cli, ["crypto", str(cbom_file)])

        assert result.exit_code == 0
        assert "Showing 4 of 4 crypto assets" in result.output
        assert "Categories: all, signature, hash, aead, unknown" in result.output
        assert "keySize: 2048" in result.output
        assert "operation=sign" in result.output
        assert "operation: sign" in result.output

    def test_filtered_with_evidence(self, runner, cbom_file):
        result = runner.invoke(cli, ["crypto", str(cbom_file), "-p", "signature", "--evidence"])

        assert "Showing 1 of 4 crypto assets" in result.output
        assert "RSA-2048 [signature]" in result.output
        assert "MD5" not in result.output
        assert "main.go:12  rsa.SignPKCS1v15(...)" in result.output

    def test_json(self, runner, cbom_file):
        result = runner.invoke(cli, ["crypto", str(cbom_file), "-p", "hash", "-f", "json"])

        assert result.exit_code == 0
        assets = json.loads(result.stdout)["assets"]
        assert [a["id"] for a in assets] == ["crypto:md5"]
        assert assets[0]["operation"] == "digest"
        assert assets[0]["weakness"] == "collision attacks"


class TestFilesCommand:
    """Tests for the files command."""

    def test_lists_impacts(self, runner, cbom_file):
        result = runner.invoke(cli, ["files", str(cbom_file)])

        assert result.exit_code == 0
        assert "Source files: 2" in result.output
        assert "main.go  3 outbound calls" in result.output
        assert "util.go  0 outbound calls" in result.output


class TestShowCommand:
    """Tests for the show command."""

    def test_details(self, runner, cbom_file):
        result = runner.invoke(cli, ["show", str(cbom_file), "crypto:rsa"])

        assert result.exit_code == 0
        assert "Name: RSA-2048" in result.output
        assert "Tier: red" in result.output
        assert "Hash: abc123" in result.output
        assert "Evidence (2 occurrences):" in result.output
        assert "Links: 0 outgoing, 2 incoming" in result.output

    def test_json(self, runner, cbom_file):
        result = runner.invoke(cli, ["show", str(cbom_file), "file:main.go", "-f", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["node"]["tier"] == "blue"
        assert data["component"]["bom-ref"] == "file:main.go"
        assert data["component"]["properties"] == [{"name": "impact.outbound.count", "value": "3"}]
        assert data["outgoing"] == ["crypto:rsa", "crypto:aes"]
        assert data["incoming"] == []

    def test_not_found_is_not_an_error(self, runner, cbom_file):
        result = runner.invoke(cli, ["show", str(cbom_file), "crypto:missing"])

        assert result.exit_code == 0
        assert "No component selected" in result.output


class TestExportCommand:
    """Tests for the export command."""

    def test_writes_reports(self, runner, cbom_file, tmp_path):
        out_dir = tmp_path / "out"

        result = runner.invoke(cli, [
            "export", str(cbom_file), "-o", str(out_dir), "-f", "yaml", "--no-include-timestamp"
        ])

        assert result.exit_code == 0
        assert (out_dir / "cbom-report-statistics.yaml").exists()
        assert (out_dir / "cbom-report-graph.yaml").exists()


class TestConfigCommand:
    """Tests for the config command."""

    def test_table(self, runner):
        result = runner.invoke(cli, ["config"])

        assert result.exit_code == 0
        assert "[analysis]" in result.output
        assert "vulnerability_namespace: pqm" in result.output

    def test_json_with_config_file(self, runner, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump({"analysis": {"vulnerability_namespace": "acme"}}))

        result = runner.invoke(cli, ["--config", str(config_file), "config", "-f", "json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["analysis"]["vulnerability_namespace"] == "acme"

    def test_namespace_changes_classification(self, runner, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump({"analysis": {"vulnerability_namespace": "acme"}}))
        cbom = tmp_path / "cbom.json"
        cbom.write_text(json.dumps({"components": [{
            "bom-ref": "c", "type": "data", "name": "ECDH",
            "properties": [{"name": "acme.vulnerability", "value": "quantum-vulnerable"}],
        }]}))

        result = runner.invoke(cli, ["-c", str(config_file), "stats", str(cbom)])

        assert "Quantum vulnerable: 1" in result.output
