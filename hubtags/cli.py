"""CLI entry point for hubtags."""

from __future__ import annotations

import json
import logging
import sys

import click

from hubtags.config import resolve_settings
from hubtags.registry.client import HubClient, HubError
from hubtags.registry.parser import parse_repository
from hubtags.report import ReportError, build_report, validate_report
from hubtags.summary.ordering import PlatformSummary, summarize

logger = logging.getLogger(__name__)


def _echo_text(summaries: list[PlatformSummary]) -> None:
    """Print ``<timestamp>\\t<tags>`` lines, one per image."""
    with_headers = len(summaries) > 1
    for summary in summaries:
        if with_headers:
            click.echo(f"# {summary.platform}")
        for last_updated, tag_names in summary.rows():
            click.echo(f"{last_updated.isoformat()}\t{tag_names}")


@click.group()
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Enable verbose (DEBUG) logging.",
)
def main(verbose: bool) -> None:
    """hubtags — summarize the tags of a Docker Hub repository."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@main.command()
@click.argument("repository")
@click.option(
    "-a",
    "--arch",
    "architecture",
    default="amd64",
    show_default=True,
    help="Architecture to report on. Use 'all' for every architecture.",
)
@click.option(
    "--os",
    "os_name",
    default=None,
    help="Only report platforms with this operating system (e.g. linux).",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print a JSON report instead of text lines.",
)
@click.option(
    "--pretty/--no-pretty",
    default=True,
    help="Pretty-print the JSON output (default: on).",
)
@click.option(
    "--page-size",
    type=int,
    default=None,
    help="Tags fetched per request (env: HUBTAGS_PAGE_SIZE, default: 100).",
)
@click.option(
    "--timeout",
    type=int,
    default=None,
    help="HTTP timeout in seconds (env: HUBTAGS_TIMEOUT, default: 30).",
)
@click.option(
    "--base-url",
    default=None,
    help="Docker Hub API base URL (env: HUBTAGS_BASE_URL).",
)
def tags(
    repository: str,
    architecture: str,
    os_name: str | None,
    as_json: bool,
    pretty: bool,
    page_size: int | None,
    timeout: int | None,
    base_url: str | None,
) -> None:
    """Summarize the tags of REPOSITORY, most relevant image first.

    REPOSITORY can be a bare name (nginx), a namespaced path
    (nginxinc/nginx-unprivileged) or a Docker Hub URL
    (https://hub.docker.com/_/nginx).

    Tags pointing at the same image digest are merged onto one line.
    """
    try:
        repo = parse_repository(repository)
        settings = resolve_settings(base_url=base_url, page_size=page_size, timeout=timeout)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Fetching tags for {repo}...", err=True)
    client = HubClient(repo, settings)
    try:
        hub_tags = client.list_tags()
    except HubError as exc:
        raise click.ClickException(str(exc)) from exc

    arch_filter = None if architecture == "all" else architecture
    summaries = summarize(hub_tags, architecture=arch_filter, os=os_name)
    if not summaries:
        click.echo(f"  No images found for architecture '{architecture}'.", err=True)

    if as_json:
        report = build_report(repo, summaries, architecture=arch_filter, os=os_name)
        try:
            validate_report(report)
        except ReportError as exc:
            raise click.ClickException(str(exc)) from exc
        indent = 2 if pretty else None
        click.echo(json.dumps(report, indent=indent, ensure_ascii=False))
    else:
        _echo_text(summaries)


@main.command()
def version() -> None:
    """Show the hubtags version."""
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as pkg_version

    try:
        current = pkg_version("hubtags")
    except PackageNotFoundError:
        current = "unknown"
    click.echo(f"hubtags version {current}")


if __name__ == "__main__":
    main()
