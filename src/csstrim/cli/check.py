"""CLI command: csstrim check -- report redundant CSS without changing it."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from csstrim.cli.options import analysis_options, build_config, configure_logging, echo_summary
from csstrim.config import Action
from csstrim.diagnostics import AnalysisError
from csstrim.engine import analyze
from csstrim.parser import ParseError, parse_stylesheet


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
@analysis_options
def check(cssfile: str, verbose: bool, **options) -> None:
    """Report dead and overridden CSS in CSSFILE.

    Every check defaults to the ``warn`` policy. Exits with code 1 if any
    finding was classified as an error.
    """
    configure_logging(verbose)
    config = build_config(Action.WARN, **options)

    try:
        stylesheet = parse_stylesheet(Path(cssfile).read_text(encoding="utf-8"))
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    try:
        report = analyze(stylesheet, config)
    except AnalysisError as exc:
        echo_summary(exc.report)
        sys.exit(1)

    echo_summary(report)
    if not (report.warn_count or report.remove_count):
        click.echo(f"OK: {Path(cssfile).name} has no redundant CSS", err=True)
