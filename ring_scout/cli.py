#!/usr/bin/env python3
"""
Command-line entry point for RingScout.

Commands:
  crawl     Crawl the webring and print one record per line (or save a JSON report)
  precrawl  Walk the root URL's cluster graph and print '<url> <depth>' per site
  config    Show the validated configuration

Global options:
  --config PATH       Path to the YAML/JSON config (default: configs/default.yaml)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only when omitted)
  --log-format FORMAT Logging format string

crawl options:
  --json PATH          Save a JSON report instead of printing records
  --pretty             Indent the JSON report
  --crawl-timeout SEC  Upper bound for the whole crawl (seconds)

precrawl options:
  --output PATH       Write the site list to a file instead of stdout

Also:
  --version, -v       Show the RingScout version

Example:
  ring-scout --config configs/default.yaml precrawl --output data/webring.txt
  ring-scout --config configs/default.yaml crawl > records.txt
"""
import asyncio
import sys
from pathlib import Path

import click

from ring_scout import __version__
from ring_scout.aggregator import aggregate_results
from ring_scout.config import load_config
from ring_scout.engine import start_crawl, start_precrawl
from ring_scout.logger import init_logging
from ring_scout.precrawl import PrecrawlError
from ring_scout.registry import SeedListError
from ring_scout.report import record_lines, render_json, render_lines, site_lines

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='RingScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default='configs/default.yaml',
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Path to the YAML or JSON configuration file.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stderr only when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """RingScout: webring crawler and discovery tool."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save a JSON report to this file'
)
@click.option(
    '--pretty', is_flag=True,
    help='Indent the JSON report (2 spaces)'
)
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=float,
    default=None,
    help='Upper bound for the whole crawl (seconds)'
)
@click.pass_context
def crawl(ctx, json_output, pretty, crawl_timeout):
    """Crawl the webring and emit index records."""
    cfg = ctx.obj['config']
    try:
        if crawl_timeout:
            records = asyncio.run(
                asyncio.wait_for(start_crawl(cfg), timeout=crawl_timeout)
            )
        else:
            records = asyncio.run(start_crawl(cfg))
    except asyncio.TimeoutError:
        print_error(f'Crawl did not finish within {crawl_timeout} seconds')
    except SeedListError as e:
        print_error(f'Invalid webring seed list: {e}')
    except Exception as e:
        print_error(f'Crawl failed: {e}')

    if not json_output:
        for line in record_lines(records):
            click.echo(line)
        return

    try:
        saved_json = render_json(aggregate_results(records), json_output, pretty=pretty)
        click.echo(f'JSON report: {saved_json}', err=True)
    except Exception as e:
        print_error(f'Failed to save JSON report: {e}')


@cli.command('precrawl', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--output', '-o', 'output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Write the site list to this file'
)
@click.pass_context
def precrawl(ctx, output):
    """Expand the root URL into the list of sites to crawl."""
    cfg = ctx.obj['config']
    try:
        sites = asyncio.run(start_precrawl(cfg))
    except PrecrawlError as e:
        print_error(f'Precrawl aborted: {e}')
    except Exception as e:
        print_error(f'Precrawl failed: {e}')

    lines = site_lines(sites)
    if output:
        saved = render_lines(lines, output)
        click.echo(f'Site list: {saved}', err=True)
        return
    for line in lines:
        click.echo(line)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Print the current configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
