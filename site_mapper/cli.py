# === FILE: site_mapper/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for the SiteMapper crawler.

Crawls one site from its root page and prints the resulting site map.

Site options:
  --hostname, -h HOST   Host to crawl, without subdomain (default: example.com)
  --subdomains, -s LIST Comma-separated valid subdomains; an empty item means the bare host
  --httponly            Use http instead of https
  --config, -c PATH     YAML/JSON config file (CLI options win over it)
  --timeout SEC         Per-request timeout
  --workers INT         Upper bound of concurrent fetches per page

Output options:
  --json                Pretty JSON of every crawled page
  --dot                 Graphviz dot graph of page -> anchors
  --output, -o PATH     Write the output to a file instead of stdout
  (neither --json nor --dot: per-page progress on stderr, then a summary with
   page count and elapsed time)

Logging:
  --log-level LEVEL     DEBUG, INFO, WARNING (default), ERROR, CRITICAL
  --log-file PATH       Also log to a rotating file
  --log-format FORMAT   logging.Formatter format string

Example:
  site-mapper -h example.com -s "www,blog" --dot -o sitemap.dot
"""
import asyncio
import sys
from pathlib import Path

import click

from site_mapper import __version__
from site_mapper.config import load_config
from site_mapper.engine import EntryPageError, start_crawl
from site_mapper.logger import init_logging
from site_mapper.report import echo_progress, render_dot, render_json, render_summary, write_report

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteMapper, version %(version)s')
@click.option('--hostname', '-h', 'hostname', default=None,
              help='Host to crawl, without subdomain.')
@click.option('--subdomains', '-s', 'subdomains', default=None,
              help='Comma-separated valid subdomains ("www," = www and bare host).')
@click.option('--httponly', 'http_only', is_flag=True,
              help='Crawl over http instead of https.')
@click.option('--json', 'as_json', is_flag=True, help='Print the crawled pages as pretty JSON.')
@click.option('--dot', 'as_dot', is_flag=True, help='Print a Graphviz dot graph of the site.')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML/JSON configuration file.'
)
@click.option('--timeout', 'timeout', type=float, default=None, help='Per-request timeout (seconds).')
@click.option('--workers', 'pool_size', type=int, default=None,
              help='Maximum concurrent fetches per page.')
@click.option(
    '--output', '-o', 'output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Write the output to a file instead of stdout.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stderr only if not given)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
    show_default=True,
    help='Format string for log records'
)
def cli(hostname, subdomains, http_only, as_json, as_dot, config_path, timeout, pool_size,
        output, log_level, log_file, log_format):
    """Crawl a single site breadth-first and print its site map."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
    )
    try:
        cfg = load_config(config_path).with_overrides(
            hostname=hostname,
            subdomains=subdomains,
            http_only=http_only or None,
            timeout=timeout,
            pool_size=pool_size,
        )
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')

    # machine-readable output keeps stderr quiet
    progress = None if as_json or as_dot else echo_progress
    try:
        session = asyncio.run(start_crawl(cfg, progress=progress))
    except EntryPageError as e:
        print_error(f'Crawl aborted: {e}')
    except Exception as e:
        print_error(f'Crawl failed: {e}')

    if as_json:
        text = render_json(session.results)
    elif as_dot:
        text = render_dot(session.results)
    else:
        text = render_summary(session)

    if output is None:
        click.echo(text)
        return
    try:
        saved = write_report(click.unstyle(text), output)
    except OSError as e:
        print_error(f'Failed to write {output}: {e}')
    click.echo(f'Report: {saved}', err=True)


if __name__ == "__main__":
    cli()
