#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for KmerScan.

This module provides the main CLI entry point and all subcommands for
per-record k-mer counting of FASTA/FASTQ files.
"""

import logging
import sys
from importlib.metadata import PackageNotFoundError, version as dist_version
from pathlib import Path

import click
import yaml

from .config import (
    CONFIG_TEMPLATES,
    ConfigParser,
    save_config_template,
    validate_config,
)
from .config.schema import log_level
from .counting import process
from .errors import KmerScanError
from .io import SUPPORTED_FORMATS, read_records
from .version import __version__

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool, quiet: bool, config: dict):
    """Configure root logging on stderr; the report itself goes to stdout."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = log_level(config)

    log_config = config.get('logging', {})
    logging.basicConfig(
        level=level,
        format=log_config.get('format', '%(asctime)s [%(levelname)s] %(message)s'),
        datefmt=log_config.get('datefmt', '%H:%M:%S'),
        stream=sys.stderr,
    )
    logging.getLogger('kmerscan').setLevel(level)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose (debug) logging')
@click.option('--quiet', '-q', is_flag=True, help='Only log warnings and errors')
@click.pass_context
def main(ctx, verbose, quiet):
    """
    KmerScan: per-record k-mer counting for FASTA/FASTQ files

    Counts every k-mer of each record in a (optionally gzip/bzip2
    compressed) FASTA or FASTQ file and reports those seen at least
    THRESHOLD times.
    """
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet


# ============================================================================
# Counting
# ============================================================================

@main.command()
@click.option('--input', '-i', 'input_path', required=True,
              type=click.Path(exists=True, dir_okay=False),
              help='Input file path (FASTA or FASTQ, gzip or bzip2 supported)')
@click.option('--k', '-k', 'kmer_size', type=int, default=None,
              help='K-mer size  [default: 5]')
@click.option('--threshold', '-t', type=int, default=None,
              help='Minimum occurrence threshold for reporting  [default: 2]')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True, dir_okay=False),
              help='Configuration file (YAML); CLI options take precedence')
@click.option('--output', '-o', type=click.Path(dir_okay=False),
              help='Write the report to this file instead of stdout')
@click.option('--format', '-f', 'input_format', type=click.Choice(SUPPORTED_FORMATS),
              default=None, help='Input format  [default: auto]')
@click.option('--workers', '-w', type=int, default=None,
              help='Worker processes for counting  [default: 1]')
@click.pass_context
def count(ctx, input_path, kmer_size, threshold, config_file, output, input_format, workers):
    """
    Count k-mers per record and report the frequent ones.

    For every record at least K long, prints '>' followed by the record
    identifier, then one '<TAB> KMER COUNT' line per k-mer occurring at
    least THRESHOLD times. Sequences are upper-cased before counting.

    Examples:
        kmerscan count -i reads.fq.gz

        kmerscan count -i genome.fa -k 21 -t 3 -o genome.kmers
    """
    try:
        parser = ConfigParser(config_file)
        parser.merge_cli_overrides({
            'counting.k': kmer_size,
            'counting.threshold': threshold,
            'input.format': input_format,
            'output.path': output,
            'hardware.workers': workers,
        })
        config = parser.to_dict()
        _setup_logging(ctx.obj.get('VERBOSE', False), ctx.obj.get('QUIET', False), config)
        settings = parser.counting_config()
    except KmerScanError as e:
        click.echo(f"✗ Error: {e}", err=True)
        sys.exit(1)

    output_path = parser.get('output.path') or '-'

    logger.info(f"Input: {input_path}")
    logger.info(f"Output: {'stdout' if output_path == '-' else output_path}")
    logger.debug(f"Settings: {settings}")

    try:
        with click.open_file(output_path, 'w', encoding='utf-8') as sink:
            process(
                read_records(input_path, settings.input_format),
                settings.k,
                settings.threshold,
                sink,
                workers=settings.workers,
            )
            sink.flush()
    except KmerScanError as e:
        click.echo(f"✗ Error: {e}", err=True)
        sys.exit(1)
    except OSError as e:
        click.echo(f"✗ Error writing output: {e}", err=True)
        sys.exit(1)


# ============================================================================
# Configuration Management Commands
# ============================================================================

@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command('init')
@click.option('--output', '-o', type=click.Path(), default='kmerscan_config.yaml',
              help='Output configuration file path')
@click.option('--template', '-t', type=click.Choice(list(CONFIG_TEMPLATES)),
              default='default', help='Configuration template type')
def config_init(output, template):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating {template} configuration template: {output}")

    try:
        save_config_template(Path(output), template=template)
    except (KmerScanError, OSError) as e:
        click.echo(f"✗ Error creating configuration: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Configuration file created: {output}")


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True, dir_okay=False))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")

    try:
        config = ConfigParser(config_file).to_dict()
    except KmerScanError as e:
        click.echo(f"✗ Error validating configuration: {e}", err=True)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        click.echo("\n✗ Configuration validation failed:")
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    click.echo("✓ Configuration is valid")
    click.echo("\nKey Settings:")
    click.echo(f"  k: {config['counting']['k']}")
    click.echo(f"  Threshold: {config['counting']['threshold']}")
    click.echo(f"  Workers: {config['hardware']['workers']}")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True, dir_okay=False), required=False)
@click.option('--format', '-f', 'fmt', type=click.Choice(['yaml', 'summary']), default='summary',
              help='Output format')
def config_show(config_file, fmt):
    """Display configuration settings (defaults if no file is given)."""
    try:
        config = ConfigParser(config_file).to_dict()
    except KmerScanError as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)

    if fmt == 'yaml':
        click.echo(yaml.dump(config, default_flow_style=False, sort_keys=False))
        return

    click.echo(f"Configuration from: {config_file or 'defaults'}")
    click.echo("=" * 60)

    click.echo("\nCounting:")
    click.echo(f"  k: {config['counting']['k']}")
    click.echo(f"  Threshold: {config['counting']['threshold']}")

    click.echo("\nInput / Output:")
    click.echo(f"  Format: {config['input']['format']}")
    click.echo(f"  Output: {config['output']['path'] or 'stdout'}")

    click.echo("\nHardware:")
    click.echo(f"  Workers: {config['hardware']['workers']}")

    click.echo("\nLogging:")
    click.echo(f"  Level: {config['logging']['level']}")


# ============================================================================
# Utility Commands
# ============================================================================

@main.command()
def version():
    """Show version information."""
    click.echo(f"KmerScan v{__version__}")
    click.echo("\nDependencies:")

    import Bio
    click.echo(f"  BioPython: {Bio.__version__}")
    click.echo(f"  PyYAML: {yaml.__version__}")

    try:
        click.echo(f"  Click: {dist_version('click')}")
    except PackageNotFoundError:
        click.echo("  Click: unknown")


if __name__ == '__main__':
    sys.exit(main())
