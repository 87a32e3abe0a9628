#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for GapWeaver.

This module provides the main CLI entry point and subcommands for
estimating gap distances between contigs from linked-read barcodes.
"""

import sys
import click
from pathlib import Path
import yaml

from .version import __version__
from .config.schema import (
    ConfigValidationError,
    apply_overrides,
    load_config,
    save_config_template,
    validate_config,
)
from .distance_core.data_structures import PreconditionError, SimilarityDomainError
from .utils.pipeline import DistanceEstimationPipeline


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, verbose, quiet):
    """
    GapWeaver: barcode-based contig gap distance estimation

    Calibrates barcode sharing against the known head/tail distances of
    long contigs, then estimates min/max gap distances for contig pairs
    that share linked-read barcodes.
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
@click.option('--output', '-o', type=click.Path(), default='gapweaver_config.yaml',
              help='Output configuration file path')
@click.option('--template', '-t',
              type=click.Choice(['default', 'sensitive', 'fragmented']),
              default='default', help='Configuration template type')
def config_init(output, template):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating {template} configuration template: {output}")

    try:
        save_config_template(Path(output), template=template)
    except OSError as e:
        click.echo(f"✗ Error creating configuration: {e}", err=True)
        sys.exit(1)
    click.echo(f"✓ Configuration file created: {output}")


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")

    try:
        config = load_config(Path(config_file))
    except ConfigValidationError as e:
        click.echo(f"✗ Error validating configuration: {e}", err=True)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        click.echo("\n✗ Configuration validation failed:")
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    click.echo("✓ Configuration is valid")
    click.echo("\nThresholds:")
    for key, value in config['thresholds'].items():
        click.echo(f"  {key}: {value}")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True), required=False)
def config_show(config_file):
    """Display configuration settings (defaults if no file is given)."""
    try:
        config = load_config(Path(config_file) if config_file else None)
    except ConfigValidationError as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)
    click.echo(yaml.dump(config, default_flow_style=False, sort_keys=False))


# ============================================================================
# Pipeline Commands
# ============================================================================

@main.command()
@click.option('--evidence', '-e', required=True, type=click.Path(exists=True),
              help='Barcode evidence TSV: barcode, contig_id, end (H/T), read_pairs')
@click.option('--lengths', '-l', required=True, type=click.Path(exists=True),
              help='Contig lengths TSV or FASTA index (.fai)')
@click.option('--multiplicity', '-m', type=click.Path(exists=True),
              help='Barcode multiplicity TSV (default: contig ends per barcode)')
@click.option('--output', '-o', required=True, type=click.Path(),
              help='Output directory')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True),
              help='Configuration file (YAML)')
@click.option('--prefix', '-p', help='Output file prefix')
@click.option('--min-mult', type=int, help='Minimum barcode multiplicity')
@click.option('--max-mult', type=int, help='Maximum barcode multiplicity')
@click.option('--min-reads', type=int, help='Minimum read pairs per barcode/contig end')
@click.option('--end-length', type=int, help='Head/tail region length (bp)')
@click.option('--dist-bin-size', type=float, help='Jaccard half-window for distance estimation')
@click.option('--no-distance-est', is_flag=True, help='Skip distance estimation')
@click.option('--threads', '-t', type=int, help='Worker threads')
@click.pass_context
def estimate(ctx, evidence, lengths, multiplicity, output, config_file, prefix,
             min_mult, max_mult, min_reads, end_length, dist_bin_size,
             no_distance_est, threads):
    """Estimate gap distances between contig pairs sharing barcodes."""
    overrides = {
        'thresholds.min_mult': min_mult,
        'thresholds.max_mult': max_mult,
        'thresholds.min_reads': min_reads,
        'thresholds.end_length': end_length,
        'thresholds.dist_bin_size': dist_bin_size,
        'runtime.threads': threads,
        'output.prefix': prefix,
        'estimation.enabled': False if no_distance_est else None,
    }
    if ctx.obj.get('VERBOSE'):
        overrides['output.logging.level'] = 'DEBUG'
    elif ctx.obj.get('QUIET'):
        overrides['output.logging.level'] = 'WARNING'

    try:
        config = apply_overrides(load_config(Path(config_file) if config_file else None), overrides)
    except ConfigValidationError as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        click.echo("✗ Invalid parameters:", err=True)
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    try:
        pipeline = DistanceEstimationPipeline(config, output_dir=Path(output))
        result = pipeline.run(
            Path(evidence),
            Path(lengths),
            Path(multiplicity) if multiplicity else None,
        )
    except (PreconditionError, SimilarityDomainError, ValueError) as e:
        click.echo(f"✗ Distance estimation failed: {e}", err=True)
        sys.exit(1)

    if not ctx.obj.get('QUIET'):
        click.echo(f"✓ Calibration samples: {len(result.dist_samples)}")
        click.echo(f"✓ Candidate contig pairs: {len(result.pair_stats)}")
        click.echo(f"✓ Distances estimated: {result.num_estimated}/{len(result.pair_distances)}")
        for name, path in result.output_files.items():
            click.echo(f"  {name}: {path}")


if __name__ == '__main__':
    sys.exit(main())
