#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for TriAlign.

This module provides the main CLI entry point and all subcommands for
edit-graph alignment of three sequences.
"""

import logging
import sys
import click
from pathlib import Path
import yaml

from .version import __version__
from .config.parser import ConfigParser, ConfigValidationError
from .config.schema import TEMPLATES, load_config, save_config_template, validate_config
from .io_utils.result_export import REPORT_FORMATS, export_report, render_report


def _log_level(verbose: bool, quiet: bool) -> str:
    if verbose:
        return 'DEBUG'
    if quiet:
        return 'ERROR'
    return 'WARNING'


def _configure_logging(ctx):
    logging.basicConfig(
        level=getattr(logging, _log_level(ctx.obj['VERBOSE'], ctx.obj['QUIET'])),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


def _fail(message: str):
    click.echo(f"✗ Error: {message}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, verbose, quiet):
    """
    TriAlign: three-sequence alignment on a weighted edit graph

    Builds the BLOSUM62-weighted edit graph of three protein sequences and
    reports its highest-weight path as the optimal sum-of-pairs alignment.
    """
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet


# ============================================================================
# Configuration Management Commands
# ============================================================================

@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command('init')
@click.option('--output', '-o', type=click.Path(), default='trialign_config.yaml',
              help='Output configuration file path')
@click.option('--template', '-t', type=click.Choice(TEMPLATES), default='default',
              help='Configuration template type')
def config_init(output, template):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating {template} configuration template: {output}")

    try:
        save_config_template(Path(output), template=template)
    except OSError as e:
        _fail(f"creating configuration: {e}")

    click.echo(f"✓ Configuration file created: {output}")


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")

    try:
        config = load_config(Path(config_file))
    except (yaml.YAMLError, ValueError) as e:
        _fail(f"invalid configuration: {e}")

    errors = validate_config(config)
    if errors:
        click.echo("\n✗ Configuration validation failed:")
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    click.echo("✓ Configuration is valid")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--format', '-f', type=click.Choice(['yaml', 'summary']), default='summary',
              help='Output format')
def config_show(config_file, format):
    """Display configuration settings."""
    try:
        config = load_config(Path(config_file))
    except (yaml.YAMLError, ValueError) as e:
        _fail(f"reading configuration: {e}")

    if format == 'yaml':
        click.echo(yaml.dump(config, default_flow_style=False, sort_keys=False))
        return

    errors = validate_config(config)
    if errors:
        _fail("; ".join(errors))

    click.echo(f"Configuration from: {config_file}")
    click.echo("=" * 60)
    click.echo("\nEdit graph:")
    click.echo(f"  Anchored endpoints: {config['graph']['constrain_endpoints']}")
    click.echo(f"  Keep graph file: {config['graph']['keep_graph_file']}")
    click.echo(f"  Graph file: {config['graph']['graph_file'] or '<derived from inputs>'}")
    click.echo("\nOutput:")
    click.echo(f"  Report format: {config['output']['format']}")
    click.echo(f"  Log level: {config['output']['logging']['level']}")


# ============================================================================
# Alignment Commands
# ============================================================================

@main.command()
@click.argument('fasta_files', nargs=3, type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', type=click.Path(file_okay=False), default='trialign_output',
              help='Output directory (graph file, report, log)')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True),
              help='YAML configuration file')
@click.option('--format', '-f', 'fmt', type=click.Choice(REPORT_FORMATS), default=None,
              help='Report format (default: from config, xml)')
@click.option('--anchored/--free', default=None,
              help='Pin the path to the first and last vertex (global alignment)')
@click.option('--keep-graph/--discard-graph', default=None,
              help='Keep the serialized edit graph after the run')
@click.pass_context
def align(ctx, fasta_files, output, config_file, fmt, anchored, keep_graph):
    """
    Align three FASTA sequences.

    Examples:
        trialign align seq1.fa seq2.fa seq3.fa -o run1

        trialign align seq1.fa seq2.fa seq3.fa --anchored -f text
    """
    from .utils.pipeline import AlignmentPipeline

    try:
        parser = ConfigParser(config_file)
        parser.merge_cli_overrides({
            'graph.constrain_endpoints': anchored,
            'graph.keep_graph_file': keep_graph,
            'output.format': fmt,
            'output.logging.level': 'DEBUG' if ctx.obj['VERBOSE'] else ('ERROR' if ctx.obj['QUIET'] else None),
        })
        parser.validate()
    except (ConfigValidationError, OSError) as e:
        _fail(str(e))

    config = parser.pipeline_config(output, fasta_files)

    try:
        pipeline = AlignmentPipeline(config)
        summary = pipeline.run()
    except (ValueError, OSError) as e:
        _fail(str(e))

    click.echo(render_report(pipeline.result, config['output']['format'], pipeline.state['sequences']))

    if not ctx.obj['QUIET']:
        click.echo(f"✓ Report saved: {summary['report_file']}", err=True)


@main.command('build-graph')
@click.argument('fasta_files', nargs=3, type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', required=True, type=click.Path(dir_okay=False),
              help='Output graph description file')
@click.option('--anchored', is_flag=True,
              help='Mark the first vertex START and the last vertex END')
@click.pass_context
def build_graph(ctx, fasta_files, output, anchored):
    """Write the edit graph of three FASTA sequences."""
    from .graph_core.edit_graph_builder import EditGraphBuilder
    from .io.io_core_module import read_sequence

    _configure_logging(ctx)

    try:
        seq1, seq2, seq3 = (read_sequence(f).sequence for f in fasta_files)
        stats = EditGraphBuilder(constrain_endpoints=anchored).build_graph_file(seq1, seq2, seq3, output)
    except (ValueError, OSError) as e:
        _fail(str(e))

    if not ctx.obj['QUIET']:
        click.echo(f"✓ Graph file built: {output} "
                   f"({stats.vertex_count:,} vertices, {stats.edge_count:,} edges)")


@main.command('path')
@click.argument('graph_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--format', '-f', 'fmt', type=click.Choice(REPORT_FORMATS), default='xml',
              help='Report format')
@click.option('--start', 'start_label', default=None,
              help='Vertex label the path must start at (overrides START marker)')
@click.option('--end', 'end_label', default=None,
              help='Vertex label the path must end at (overrides END marker)')
@click.option('--output', '-o', type=click.Path(dir_okay=False), default=None,
              help='Write the report to a file instead of stdout')
@click.pass_context
def path(ctx, graph_file, fmt, start_label, end_label, output):
    """Find the highest-weight path of a graph description file."""
    from .graph_core.wda_graph import WDAGraph

    _configure_logging(ctx)

    try:
        graph = WDAGraph.from_file(graph_file)
        if start_label is not None:
            graph.set_start(start_label)
        if end_label is not None:
            graph.set_end(end_label)
        graph.find_highest_weight_path()
    except (ValueError, OSError) as e:
        _fail(str(e))

    result = graph.result()
    if output:
        export_report(result, output, fmt=fmt)
        if not ctx.obj['QUIET']:
            click.echo(f"✓ Report saved: {output}")
    else:
        click.echo(render_report(result, fmt), nl=False)


@main.command()
@click.argument('residues', nargs=-1, required=True)
def score(residues):
    """
    Score an alignment column of two or three residues ('-' for a gap).

    Examples:
        trialign score W W

        trialign score A - C
    """
    from .scoring.blosum62 import score as pair_score, sum_of_pairs_weight

    residues = [r.upper() for r in residues]
    if len(residues) not in (2, 3) or any(len(r) != 1 for r in residues):
        _fail("expected two or three single-character residues")

    try:
        if len(residues) == 2:
            value = pair_score(*residues)
        else:
            value = sum_of_pairs_weight(*residues)
    except ValueError as e:
        _fail(str(e))

    click.echo(f"{''.join(residues)}\t{value}")


if __name__ == '__main__':
    sys.exit(main())
