"""CLI command: csstrim prune -- remove provably redundant CSS."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from csstrim.cli.options import analysis_options, build_config, configure_logging, echo_summary
from csstrim.config import Action
from csstrim.diagnostics import AnalysisError
from csstrim.engine import analyze
from csstrim.parser import ParseError, parse_stylesheet, serialize_stylesheet


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-o", "--output", type=click.Path(dir_okay=False), help="Write the result here instead of stdout."
)
@click.option("--compress", is_flag=True, help="Emit compressed CSS.")
@analysis_options
def prune(
    cssfile: str,
    output: str | None,
    compress: bool,
    verbose: bool,
    **options,
) -> None:
    """Remove dead and overridden CSS from CSSFILE.

    Every check defaults to the ``remove`` policy. Findings go to stderr;
    the exit code is 1 if any finding was classified as an error, in which
    case no output is written.
    """
    configure_logging(verbose)
    config = build_config(Action.REMOVE, **options)

    try:
        stylesheet = parse_stylesheet(Path(cssfile).read_text(encoding="utf-8"))
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    try:
        report = analyze(stylesheet, config)
    except AnalysisError as exc:
        echo_summary(exc.report)
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    echo_summary(report)
    text = serialize_stylesheet(stylesheet, compress=compress)
    if output:
        Path(output).write_text(text, encoding="utf-8")
    else:
        click.echo(text, nl=False)
