"""Options shared by the analysis commands, and turning them into a Config."""

from __future__ import annotations

import logging
from typing import Callable

import click

from csstrim.config import Action, Config, ConfigError, config_from_mapping, load_config
from csstrim.diagnostics import Report

_ACTIONS = click.Choice([a.value for a in Action], case_sensitive=False)


def analysis_options(func: Callable) -> Callable:
    """Attach the assumption, policy and logging options to a command."""
    options = [
        click.option(
            "--config",
            "config_path",
            type=click.Path(exists=True, dir_okay=False),
            help="TOML file with settings (top level or [tool.csstrim]).",
        ),
        click.option(
            "-n", "--never", multiple=True, help="Selector assumed to never match (.x, #x or tag)."
        ),
        click.option(
            "-a", "--always", multiple=True, help="Selector assumed to always match (.x, #x or tag)."
        ),
        click.option("--on-dead-selector", type=_ACTIONS, help="Policy for never-used selectors."),
        click.option("--on-override", type=_ACTIONS, help="Policy for overridden selectors and properties."),
        click.option(
            "--on-invalid-body-position", type=_ACTIONS, help="Policy for misplaced html/body selectors."
        ),
        click.option("--max-reported", type=click.IntRange(min=0), help="Maximum findings to print."),
        click.option("-v", "--verbose", is_flag=True, help="Log analysis progress."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_config(
    default_action: Action,
    config_path: str | None,
    never: tuple[str, ...],
    always: tuple[str, ...],
    on_dead_selector: str | None,
    on_override: str | None,
    on_invalid_body_position: str | None,
    max_reported: int | None,
) -> Config:
    """Merge command defaults, the config file and command-line options, in that order."""
    try:
        config = Config(
            on_dead_selector=default_action,
            on_override=default_action,
            on_invalid_body_position=default_action,
        )
        if config_path:
            config = load_config(config_path, base=config)

        overrides: dict[str, object] = {}
        if never:
            overrides["never_matches"] = sorted(config.never_matches | set(never))
        if always:
            overrides["always_matches"] = sorted(config.always_matches | set(always))
        for name, value in (
            ("on_dead_selector", on_dead_selector),
            ("on_override", on_override),
            ("on_invalid_body_position", on_invalid_body_position),
            ("max_reported", max_reported),
        ):
            if value is not None:
                overrides[name] = value
        return config_from_mapping(overrides, base=config)
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc


class ClickHandler(logging.Handler):
    """Logging handler writing through click, so output follows the current stderr."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def configure_logging(verbose: bool) -> None:
    """Render findings (and, with --verbose, progress) on stderr."""
    handler = ClickHandler()
    handler.setFormatter(logging.Formatter("csstrim: [%(levelname)s] %(message)s"))
    log = logging.getLogger("csstrim")
    log.handlers = [handler]
    log.setLevel(logging.DEBUG if verbose else logging.INFO)


def echo_summary(report: Report) -> None:
    click.echo(
        f"Summary: {report.error_count} error(s), {report.warn_count} warning(s), "
        f"{report.remove_count} removal(s)",
        err=True,
    )
