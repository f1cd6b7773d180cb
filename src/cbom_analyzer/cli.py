"""
Command-line interface for the CBOM Analyzer.
"""

import click
import json
import sys
from typing import Optional, Dict, Any
from pathlib import Path

import yaml

from . import __version__
from .analysis import ALL, primitive_categories
from .config import get_config_manager, AppConfig
from .error_handling import CBOMAnalyzerError
from .export import ExportManager, EXPORT_FORMATS
from .logging import setup_logging, LoggerConfig
from .session import AnalysisSession, AnalysisSnapshot

GROUPING_TITLES = (
    ("primitive", "By Primitive Type"),
    ("provider", "By Provider"),
    ("vulnerability", "By Vulnerability"),
    ("operation", "By Operation"),
)

CBOM_FILE = click.argument(
    'cbom_file',
    type=click.Path(dir_okay=False, path_type=Path)
)


@click.group()
@click.version_option(version=__version__)
@click.option(
    '--config', '-c',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to configuration file'
)
@click.option(
    '--verbose', '-v',
    count=True,
    help='Increase verbosity (use -v or -vv)'
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], verbose: int) -> None:
    """
    CBOM Analyzer - Inspect Cryptography Bills of Materials.

    Loads a CycloneDX-style CBOM and reports crypto inventory statistics,
    quantum-vulnerability classifications and the file/asset dependency graph.
    """
    ctx.ensure_object(dict)

    try:
        app_config = get_config_manager(config).get_config()
    except CBOMAnalyzerError as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)

    configure_logging(app_config, verbose)

    ctx.obj['config'] = app_config
    ctx.obj['verbose'] = verbose


@cli.command()
@CBOM_FILE
@click.option(
    '--format', '-f', 'output_format',
    type=click.Choice(['table', 'json', 'yaml'], case_sensitive=False),
    help='Output format (defaults to configuration)'
)
@click.pass_context
def stats(ctx: click.Context, cbom_file: Path, output_format: Optional[str]) -> None:
    """
    Show crypto inventory statistics.

    Counts crypto assets by primitive, provider, vulnerability and operation
    and lists every asset flagged with a weakness.
    """
    snapshot = load_snapshot(ctx, cbom_file)
    output_format = resolve_format(ctx, output_format)

    if output_format == 'table':
        display_statistics(snapshot)
    else:
        echo_structured(snapshot.statistics.to_dict(), output_format)


@cli.command()
@CBOM_FILE
@click.option(
    '--format', '-f', 'output_format',
    type=click.Choice(['table', 'json', 'yaml'], case_sensitive=False),
    help='Output format (defaults to configuration)'
)
@click.pass_context
def graph(ctx: click.Context, cbom_file: Path, output_format: Optional[str]) -> None:
    """Show the dependency graph as node and link lists."""
    snapshot = load_snapshot(ctx, cbom_file)
    output_format = resolve_format(ctx, output_format)

    if output_format != 'table':
        echo_structured(snapshot.graph.to_dict(), output_format)
        return

    graph_data = snapshot.graph
    click.echo(f"Nodes: {len(graph_data.nodes)}")
    for node in graph_data.nodes:
        click.echo(f"  [{node.tier.value:5}] {node.id} ({node.kind.value}) {node.name}")

    click.echo(f"\nLinks: {len(graph_data.links)}")
    for link in graph_data.links:
        click.echo(f"  {link.source} -> {link.target}")

    if graph_data.dropped_links:
        click.echo(f"\nDropped links with unknown endpoints: {graph_data.dropped_links}")


@cli.command()
@CBOM_FILE
@click.option(
    '--primitive', '-p',
    default=ALL,
    show_default=True,
    help='Only show assets with this primitive (exact match)'
)
@click.option(
    '--evidence/--no-evidence',
    default=False,
    help='Show evidence occurrences for each asset'
)
@click.option(
    '--format', '-f', 'output_format',
    type=click.Choice(['table', 'json', 'yaml'], case_sensitive=False),
    help='Output format (defaults to configuration)'
)
@click.pass_context
def crypto(
    ctx: click.Context,
    cbom_file: Path,
    primitive: str,
    evidence: bool,
    output_format: Optional[str]
) -> None:
    """List cryptographic assets, optionally filtered by primitive."""
    snapshot = load_snapshot(ctx, cbom_file)
    assets = snapshot.filter_crypto(primitive)
    output_format = resolve_format(ctx, output_format)

    if output_format != 'table':
        echo_structured({"assets": [asset.to_dict() for asset in assets]}, output_format)
        return

    categories = ", ".join(primitive_categories(snapshot.statistics))
    click.echo(f"Categories: {categories}")
    click.echo(f"Showing {len(assets)} of {snapshot.statistics.total} crypto assets\n")

    for asset in assets:
        click.echo(f"{asset.name} [{asset.primitive}] provider={asset.provider} "
                   f"vulnerability={asset.vulnerability} operation={asset.operation}")
        for key, value in asset.detail_properties().items():
            click.echo(f"    {key}: {value or 'N/A'}")
        if evidence and asset.entry.occurrences:
            click.echo(f"    evidence ({len(asset.entry.occurrences)} occurrences):")
            for occurrence in asset.entry.occurrences:
                click.echo(f"      {occurrence.location}  {occurrence.snippet or ''}".rstrip())


@cli.command()
@CBOM_FILE
@click.pass_context
def files(ctx: click.Context, cbom_file: Path) -> None:
    """List source files with their outbound call counts."""
    snapshot = load_snapshot(ctx, cbom_file)
    impacts = snapshot.file_impacts()

    click.echo(f"Source files: {len(impacts)}")
    for entry, impact in impacts:
        click.echo(f"  {entry.name}  {impact} outbound calls")


@cli.command()
@CBOM_FILE
@click.argument('node_id')
@click.option(
    '--format', '-f', 'output_format',
    type=click.Choice(['table', 'json', 'yaml'], case_sensitive=False),
    help='Output format (defaults to configuration)'
)
@click.pass_context
def show(ctx: click.Context, cbom_file: Path, node_id: str, output_format: Optional[str]) -> None:
    """Show details for the component with bom-ref NODE_ID."""
    snapshot = load_snapshot(ctx, cbom_file)
    node = snapshot.lookup(node_id)
    output_format = resolve_format(ctx, output_format)

    if node is None:
        click.echo(f"No component selected: '{node_id}' is not in this CBOM")
        return

    entry = node.entry
    outgoing = snapshot.graph.outgoing(node.id)
    incoming = snapshot.graph.incoming(node.id)

    if output_format != 'table':
        echo_structured({
            "node": node.to_dict(),
            "component": entry.to_dict(),
            "outgoing": [link.target for link in outgoing],
            "incoming": [link.source for link in incoming]
        }, output_format)
        return

    click.echo(f"Type: {entry.raw_type or node.kind.value}")
    click.echo(f"Name: {node.name}")
    click.echo(f"Tier: {node.tier.value}")

    if entry.primary_hash:
        click.echo(f"Hash: {entry.primary_hash}")

    if entry.properties:
        click.echo("Properties:")
        for key, value in entry.property_map().items():
            click.echo(f"  {key}: {value}")

    if entry.occurrences:
        click.echo(f"Evidence ({len(entry.occurrences)} occurrences):")
        for occurrence in entry.occurrences:
            click.echo(f"  {occurrence.location}  {occurrence.snippet or ''}".rstrip())

    click.echo(f"Links: {len(outgoing)} outgoing, {len(incoming)} incoming")


@cli.command()
@CBOM_FILE
@click.option(
    '--output', '-o',
    type=click.Path(file_okay=False, path_type=Path),
    help='Output directory for reports'
)
@click.option(
    '--format', '-f', 'export_format',
    type=click.Choice(sorted(EXPORT_FORMATS), case_sensitive=False),
    help='Report format'
)
@click.option(
    '--include-timestamp/--no-include-timestamp',
    default=None,
    help='Include timestamp in report filenames'
)
@click.pass_context
def export(
    ctx: click.Context,
    cbom_file: Path,
    output: Optional[Path],
    export_format: Optional[str],
    include_timestamp: Optional[bool]
) -> None:
    """Write statistics and graph reports to disk."""
    snapshot = load_snapshot(ctx, cbom_file)

    try:
        results = ExportManager(ctx.obj['config']).export(
            snapshot,
            output_dir=output,
            fmt=export_format,
            include_timestamp=include_timestamp
        )
    except CBOMAnalyzerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Reports written to {results['output_directory']}:")
    for report in results['files'].values():
        click.echo(f"  - {report['file_path']} ({report['file_size']} bytes)")


@cli.command()
@click.option(
    '--format', '-f', 'output_format',
    type=click.Choice(['table', 'json', 'yaml'], case_sensitive=False),
    default='table',
    help='Output format for configuration display'
)
@click.pass_context
def config(ctx: click.Context, output_format: str) -> None:
    """
    Display current configuration settings.

    Shows the effective configuration after defaults, the config file
    and environment variable overrides have been applied.
    """
    app_config: AppConfig = ctx.obj['config']

    if output_format == 'table':
        display_config_table(app_config)
    else:
        echo_structured(app_config.to_dict(), output_format)


def configure_logging(app_config: AppConfig, verbose: int) -> None:
    """Set up logging from configuration; -v and -vv raise verbosity."""
    if verbose == 1:
        level = "INFO"
    elif verbose >= 2:
        level = "DEBUG"
    else:
        level = app_config.logging.level

    setup_logging(LoggerConfig(
        level=level,
        file_path=app_config.logging.file,
        format_string=app_config.logging.format,
        max_file_size=app_config.logging.max_file_size,
        backup_count=app_config.logging.backup_count,
        enable_structured=app_config.logging.structured
    ))


def load_snapshot(ctx: click.Context, cbom_file: Path) -> AnalysisSnapshot:
    """Load and analyze a CBOM file, exiting with status 1 on failure."""
    app_config: AppConfig = ctx.obj['config']
    session = AnalysisSession(app_config.analysis.vulnerability_key)

    try:
        return session.load_file(cbom_file)
    except CBOMAnalyzerError as e:
        click.echo(f"Error: {e.message}", err=True)
        if ctx.obj.get('verbose', 0) > 0:
            click.echo(str(e), err=True)
        sys.exit(1)


def resolve_format(ctx: click.Context, output_format: Optional[str]) -> str:
    return (output_format or ctx.obj['config'].output.format).lower()


def echo_structured(data: Dict[str, Any], output_format: str) -> None:
    if output_format == 'yaml':
        click.echo(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
    else:
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def display_statistics(snapshot: AnalysisSnapshot) -> None:
    """Display statistics in table format."""
    statistics = snapshot.statistics

    click.echo("=" * 60)
    click.echo("CBOM ANALYSIS")
    click.echo("=" * 60)
    click.echo(f"Source: {snapshot.source}")
    click.echo(f"Timestamp: {snapshot.document.timestamp or 'No timestamp'}")
    click.echo(f"Crypto assets: {statistics.total}")
    click.echo(f"Quantum vulnerable: {statistics.quantum_vulnerable}")
    click.echo(f"Symmetric safe: {statistics.symmetric_safe}")
    click.echo(f"Weaknesses: {len(statistics.weaknesses)}")

    for grouping, title in GROUPING_TITLES:
        counts = statistics.grouping(grouping)
        if not counts:
            continue
        click.echo(f"\n{title}:")
        for key, value in counts.items():
            click.echo(f"  {key:<30} {value:>5}  ({statistics.share(grouping, key):.1f}%)")

    if statistics.weaknesses:
        click.echo("\nIdentified Weaknesses:")
        for finding in statistics.weaknesses:
            click.echo(f"  - {finding.name}: {finding.weakness} ({finding.file})")

    click.echo("=" * 60)


def display_config_table(app_config: AppConfig) -> None:
    """Display configuration in table format."""
    click.echo("\nCurrent Configuration:")
    click.echo("-" * 50)

    for section_name, section in app_config.to_dict().items():
        click.echo(f"\n[{section_name}]")
        for key, value in section.items():
            click.echo(f"  {key}: {value}")


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
