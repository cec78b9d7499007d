# === FILE: pen_harvest/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point of PenHarvest.

Commands:
  harvest   Download pens (from search or direct links) and rebuild the index
  config    Show the effective configuration

Global options:
  --config PATH       Path to a YAML/JSON config (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only when omitted)
  --log-format FORMAT Logging format string

harvest options:
  --query TEXT            Search query (overrides search_query)
  --start-page / --end-page INT
  --output-dir PATH       Where pens are written
  --debug / --no-debug    Before/after screenshots of every pen
  --link TITLE URL        Direct pen link, repeatable; skips search
  --json PATH             Save the run report as JSON
  --pretty                Indent the JSON report printed on stdout
  --harvest-timeout SEC   Timeout of the whole run (seconds)

Example:
  pen-harvest --config configs/default.yaml harvest --query flexbox --end-page 2
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from pen_harvest import __version__
from pen_harvest.config import HarvestConfig, load_config
from pen_harvest.engine import start_harvest
from pen_harvest.logger import DEFAULT_FORMAT, init_logging
from pen_harvest.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def apply_overrides(cfg: HarvestConfig, **overrides) -> HarvestConfig:
    """Return a re-validated copy of *cfg* with the non-None *overrides* applied."""
    updates = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return cfg
    return HarvestConfig.model_validate({**cfg.model_dump(), **updates})


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='PenHarvest, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON configuration file.'
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
    help='Log file (stdout when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Format string for log records'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """PenHarvest: archive CodePen pens as standalone pages."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('harvest', context_settings=CONTEXT_SETTINGS)
@click.option('--query', '-q', 'query', default=None, help='Search query')
@click.option('--start-page', 'start_page', type=click.IntRange(min=1), default=None,
              help='First search page')
@click.option('--end-page', 'end_page', type=click.IntRange(min=1), default=None,
              help='Last search page (inclusive)')
@click.option(
    '--output-dir', '-o', 'output_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Output directory for pens and index.html'
)
@click.option('--debug/--no-debug', 'debug', default=None,
              help='Take before/after screenshots of every pen')
@click.option(
    '--link', 'links',
    type=(str, str), multiple=True,
    metavar='TITLE URL',
    help='Download this pen directly instead of searching (repeatable)'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the run report as JSON'
)
@click.option('--pretty', is_flag=True, help='Indent the JSON report printed on stdout')
@click.option(
    '--harvest-timeout', 'harvest_timeout',
    type=float,
    default=None,
    help='Timeout of the whole run (seconds)'
)
@click.pass_context
def harvest(ctx, query, start_page, end_page, output_dir, debug, links, json_output, pretty,
            harvest_timeout):
    """Download pens and regenerate the index page."""
    try:
        cfg = apply_overrides(
            ctx.obj['config'],
            search_query=query,
            start_page=start_page,
            end_page=end_page,
            output_dir=output_dir,
            debug=debug,
            links=[{'title': title, 'url': url} for title, url in links] or None,
        )
    except (ValidationError, OSError) as e:
        print_error(f'Invalid configuration: {e}')

    if cfg.links:
        click.echo(f'Harvesting {len(cfg.links)} direct link(s) into {cfg.output_dir}')
    else:
        click.echo(
            f'Harvesting "{cfg.search_query}" pages {cfg.start_page}-{cfg.end_page} '
            f'into {cfg.output_dir}'
        )
    try:
        if harvest_timeout:
            report = asyncio.run(
                asyncio.wait_for(start_harvest(cfg), timeout=harvest_timeout)
            )
        else:
            report = asyncio.run(start_harvest(cfg))
    except asyncio.TimeoutError:
        print_error(f'Harvest did not finish within {harvest_timeout} seconds')
    except Exception as e:
        print_error(f'Harvest failed: {e}')

    if json_output:
        try:
            saved_json = render_json(report, json_output)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Failed to save JSON report: {e}')
    elif pretty:
        click.echo(report.json(pretty=True))

    click.echo(f'Done: {report.summary_line()}')
    for failure in report.failed:
        click.secho(f'  failed: {failure.title} ({failure.url}) at {failure.step}', fg='yellow')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


# expose these names at module level for test monkey-patching
cli.start_harvest = start_harvest
cli.render_json = render_json

if __name__ == "__main__":
    cli()
